from datetime import datetime
from typing import Protocol
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import ContactRequest, PageType, Project, VisitEvent, VisitStats


class RepositoryError(Exception):
    """Raised by repository adapters when the backing store fails."""


class VisitFilter(BaseModel):
    """Criteria for fetching visit events. Unset fields do not filter."""

    page_type: PageType | None = None
    project_id: str | None = None
    since: datetime | None = None
    until: datetime | None = None


class ProjectRepoPort(Protocol):
    def list_by_profile(self, profile_id: UUID) -> list[Project]:
        """Projects of one profile ordered by display_order."""
        ...

    def get_by_id(self, project_id: UUID) -> Project | None:
        ...

    def save(self, project: Project) -> Project:
        ...

    def delete(self, project_id: UUID) -> None:
        ...

    def update_item_order(self, item_id: UUID, display_order: int) -> bool:
        ...


class VisitRepoPort(Protocol):
    def insert(self, event: VisitEvent) -> None:
        ...

    def fetch_events(self, visit_filter: VisitFilter) -> list[VisitEvent]:
        ...

    def delete_by_project(self, project_id: str) -> int:
        ...


class VisitStatsRepoPort(Protocol):
    """Repository for the site-wide visit counter (single row)."""

    def get(self) -> VisitStats | None:
        ...

    def increment(self, at: datetime) -> VisitStats:
        ...


class ContactRepoPort(Protocol):
    def save(self, request: ContactRequest) -> ContactRequest:
        ...

    def list_all(self) -> list[ContactRequest]:
        """Newest first."""
        ...

    def get_by_id(self, request_id: UUID) -> ContactRequest | None:
        ...

    def delete(self, request_id: UUID) -> None:
        ...
