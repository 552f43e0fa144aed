import json
import sqlite3
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from src.domain.entities import ContactRequest, Project, VisitEvent, VisitStats
from src.ports.repo import RepositoryError, VisitFilter


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def to_db_time(ts: datetime) -> str:
    """UTC ISO-8601, so that string comparison in SQL is time comparison."""
    return ts.astimezone(UTC).isoformat()


def parse_dt(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


class SQLiteRepoBase:
    """Base class for SQLite repositories. sqlite3 errors surface as RepositoryError."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            conn.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error as e:
            raise RepositoryError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = dict_factory
        return conn

    def _query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        conn = self._get_conn()
        try:
            return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RepositoryError(str(e)) from e
        finally:
            conn.close()

    def _write(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run one statement in its own transaction; returns the row count."""
        conn = self._get_conn()
        try:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor.rowcount
        except sqlite3.Error as e:
            conn.rollback()
            raise RepositoryError(str(e)) from e
        finally:
            conn.close()


class SQLiteProjectRepo(SQLiteRepoBase):
    def list_by_profile(self, profile_id: UUID) -> list[Project]:
        rows = self._query(
            """
            SELECT * FROM projects WHERE profile_id = ?
            ORDER BY display_order IS NULL, display_order, created_at
            """,
            (str(profile_id),),
        )
        return [self._map_row(r) for r in rows]

    def get_by_id(self, project_id: UUID) -> Project | None:
        rows = self._query("SELECT * FROM projects WHERE id = ?", (str(project_id),))
        return self._map_row(rows[0]) if rows else None

    def save(self, project: Project) -> Project:
        self._write(
            """
            INSERT INTO projects (
                id, profile_id, title, description, live_url, repo_url,
                thumbnail_url, technologies_json, features_json, display_order, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                profile_id=excluded.profile_id,
                title=excluded.title,
                description=excluded.description,
                live_url=excluded.live_url,
                repo_url=excluded.repo_url,
                thumbnail_url=excluded.thumbnail_url,
                technologies_json=excluded.technologies_json,
                features_json=excluded.features_json,
                display_order=excluded.display_order
            """,
            (
                str(project.id),
                str(project.profile_id),
                project.title,
                project.description,
                project.live_url,
                project.repo_url,
                project.thumbnail_url,
                json.dumps(project.technologies),
                json.dumps(project.features),
                project.display_order,
                project.created_at.isoformat(),
            ),
        )
        return project

    def delete(self, project_id: UUID) -> None:
        self._write("DELETE FROM projects WHERE id = ?", (str(project_id),))

    def update_item_order(self, item_id: UUID, display_order: int) -> bool:
        updated = self._write(
            "UPDATE projects SET display_order = ? WHERE id = ?",
            (display_order, str(item_id)),
        )
        return updated == 1

    def _map_row(self, row: dict[str, Any]) -> Project:
        return Project(
            id=UUID(row["id"]),
            profile_id=UUID(row["profile_id"]),
            title=row["title"],
            description=row["description"],
            live_url=row["live_url"],
            repo_url=row["repo_url"],
            thumbnail_url=row["thumbnail_url"],
            technologies=json.loads(row["technologies_json"]),
            features=json.loads(row["features_json"]),
            display_order=row["display_order"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


class SQLiteVisitRepo(SQLiteRepoBase):
    def insert(self, event: VisitEvent) -> None:
        self._write(
            """
            INSERT INTO page_visits (
                page_type, project_id, project_name, visitor_id, visit_date,
                user_agent, referrer, country, city
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                event.page_type,
                event.project_id,
                event.project_name,
                event.visitor_id,
                to_db_time(event.timestamp),
                event.user_agent,
                event.referrer,
                event.country,
                event.city,
            ),
        )

    def fetch_events(self, visit_filter: VisitFilter) -> list[VisitEvent]:
        clauses: list[str] = []
        params: list[Any] = []

        if visit_filter.page_type is not None:
            clauses.append("page_type = ?")
            params.append(visit_filter.page_type)
        if visit_filter.project_id is not None:
            clauses.append("project_id = ?")
            params.append(visit_filter.project_id)
        if visit_filter.since is not None:
            clauses.append("visit_date >= ?")
            params.append(to_db_time(visit_filter.since))
        if visit_filter.until is not None:
            clauses.append("visit_date <= ?")
            params.append(to_db_time(visit_filter.until))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._query(f"SELECT * FROM page_visits {where} ORDER BY visit_date, id", params)
        return [self._map_row(r) for r in rows]

    def delete_by_project(self, project_id: str) -> int:
        return self._write("DELETE FROM page_visits WHERE project_id = ?", (project_id,))

    def _map_row(self, row: dict[str, Any]) -> VisitEvent:
        return VisitEvent(
            page_type=row["page_type"],
            visitor_id=row["visitor_id"],
            timestamp=datetime.fromisoformat(row["visit_date"]),
            project_id=row["project_id"],
            project_name=row["project_name"],
            user_agent=row["user_agent"],
            referrer=row["referrer"],
            country=row["country"],
            city=row["city"],
        )


class SQLiteVisitStatsRepo(SQLiteRepoBase):
    """Single-row counter (id = 1), created on first increment."""

    def get(self) -> VisitStats | None:
        rows = self._query("SELECT * FROM visit_stats WHERE id = 1")
        return self._map_row(rows[0]) if rows else None

    def increment(self, at: datetime) -> VisitStats:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO visit_stats (id, total_visits, last_updated) VALUES (1, 1, ?)
                ON CONFLICT(id) DO UPDATE SET
                    total_visits = total_visits + 1,
                    last_updated = excluded.last_updated
                """,
                (to_db_time(at),),
            )
            row = conn.execute("SELECT * FROM visit_stats WHERE id = 1").fetchone()
            conn.commit()
            return self._map_row(row)
        except sqlite3.Error as e:
            conn.rollback()
            raise RepositoryError(str(e)) from e
        finally:
            conn.close()

    def _map_row(self, row: dict[str, Any]) -> VisitStats:
        return VisitStats(total_visits=row["total_visits"], last_updated=parse_dt(row["last_updated"]))


class SQLiteContactRepo(SQLiteRepoBase):
    def save(self, request: ContactRequest) -> ContactRequest:
        self._write(
            """
            INSERT INTO contact_requests (id, name, email, message, status, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name=excluded.name,
                email=excluded.email,
                message=excluded.message,
                status=excluded.status
            """,
            (
                str(request.id),
                request.name,
                request.email,
                request.message,
                request.status,
                to_db_time(request.created_at),
            ),
        )
        return request

    def list_all(self) -> list[ContactRequest]:
        rows = self._query("SELECT * FROM contact_requests ORDER BY created_at DESC")
        return [self._map_row(r) for r in rows]

    def get_by_id(self, request_id: UUID) -> ContactRequest | None:
        rows = self._query("SELECT * FROM contact_requests WHERE id = ?", (str(request_id),))
        return self._map_row(rows[0]) if rows else None

    def delete(self, request_id: UUID) -> None:
        self._write("DELETE FROM contact_requests WHERE id = ?", (str(request_id),))

    def _map_row(self, row: dict[str, Any]) -> ContactRequest:
        return ContactRequest(
            id=UUID(row["id"]),
            name=row["name"],
            email=row["email"],
            message=row["message"],
            status=row["status"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
