"""
ProjectService - Portfolio project management.

Handles listing, reading, creating, editing, ordering and deleting the
projects of one profile.

Key behaviors:
- Owner listings normalize display_order and write positions back
- New projects go after the current last one
- Deleting a project removes the row first, then its visit log, then
  closes the gap in the siblings' positions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from src.components.ordering import OrderingService, next_display_order
from src.domain.entities import Project
from src.ports.repo import RepositoryError

from .models import ProjectValidationError
from .ports import ProjectRepoPort, VisitCleanupPort

logger = logging.getLogger(__name__)

URL_FIELDS = ("live_url", "repo_url", "thumbnail_url")


# --- Configuration ---


@dataclass(frozen=True)
class ProjectConfig:
    """Project configuration."""

    title_max: int = 200


DEFAULT_CONFIG = ProjectConfig()


# --- Validation Functions ---


def validate_project_data(
    title: str,
    urls: dict[str, str | None],
    title_max: int = DEFAULT_CONFIG.title_max,
) -> list[ProjectValidationError]:
    """Validate project data."""
    errors: list[ProjectValidationError] = []

    if not title or not title.strip():
        errors.append(
            ProjectValidationError(
                code="title_required",
                message="Title is required",
                field_name="title",
            )
        )
    elif len(title.strip()) > title_max:
        errors.append(
            ProjectValidationError(
                code="title_too_long",
                message=f"Title must be {title_max} characters or less",
                field_name="title",
            )
        )

    for name, url in urls.items():
        if url and not url.strip().startswith(("http://", "https://")):
            errors.append(
                ProjectValidationError(
                    code="url_invalid_scheme",
                    message="URL must start with http:// or https://",
                    field_name=name,
                )
            )

    return errors


def _clean_list(values: list[str]) -> list[str]:
    return [v.strip() for v in values if v and v.strip()]


# --- Project Service ---


class ProjectService:
    """
    Project service.

    Ordering goes through OrderingService; repository errors propagate.
    """

    def __init__(
        self,
        repo: ProjectRepoPort,
        visits: VisitCleanupPort,
        config: ProjectConfig | None = None,
    ) -> None:
        """Initialize service."""
        self._repo = repo
        self._visits = visits
        self._config = config or DEFAULT_CONFIG
        self._ordering = OrderingService(repo)

    def list_projects(self, profile_id: UUID, normalize: bool = True) -> tuple[list[Project], bool]:
        """
        Projects of a profile in display order.

        Returns:
            Tuple of (projects, persisted) where persisted reports whether
            the normalized order was written back. Without ``normalize`` the
            stored order is returned as is and nothing is written.
        """
        projects = self._repo.list_by_profile(profile_id)
        if not normalize:
            return projects, True
        return self._ordering.load(projects)

    def get_project(self, project_id: UUID) -> Project | None:
        return self._repo.get_by_id(project_id)

    def create_project(
        self,
        profile_id: UUID,
        title: str,
        description: str = "",
        live_url: str | None = None,
        repo_url: str | None = None,
        thumbnail_url: str | None = None,
        technologies: list[str] | None = None,
        features: list[str] | None = None,
    ) -> tuple[Project | None, list[ProjectValidationError]]:
        """
        Create a project at the end of the profile's list.

        Returns:
            Tuple of (project, errors). Project is None if validation fails.
        """
        urls = {"live_url": live_url, "repo_url": repo_url, "thumbnail_url": thumbnail_url}
        errors = validate_project_data(title, urls, self._config.title_max)
        if errors:
            return None, errors

        siblings = self._repo.list_by_profile(profile_id)
        project = Project(
            profile_id=profile_id,
            title=title.strip(),
            description=description.strip(),
            live_url=live_url.strip() if live_url else None,
            repo_url=repo_url.strip() if repo_url else None,
            thumbnail_url=thumbnail_url.strip() if thumbnail_url else None,
            technologies=_clean_list(technologies or []),
            features=_clean_list(features or []),
            display_order=next_display_order(siblings),
        )

        saved = self._repo.save(project)
        logger.info("Created project %s at position %s", saved.id, saved.display_order)
        return saved, []

    def update_project(
        self,
        project_id: UUID,
        title: str,
        description: str = "",
        live_url: str | None = None,
        repo_url: str | None = None,
        thumbnail_url: str | None = None,
        technologies: list[str] | None = None,
        features: list[str] | None = None,
    ) -> tuple[Project | None, list[ProjectValidationError]]:
        """
        Replace a project's content.

        profile_id, display_order and created_at are left as stored.

        Returns:
            Tuple of (project, errors). Project is None if the project does
            not exist or validation fails.
        """
        current = self._repo.get_by_id(project_id)
        if not current:
            return None, [project_not_found(project_id)]

        urls = {"live_url": live_url, "repo_url": repo_url, "thumbnail_url": thumbnail_url}
        errors = validate_project_data(title, urls, self._config.title_max)
        if errors:
            return None, errors

        updated = current.model_copy(
            update={
                "title": title.strip(),
                "description": description.strip(),
                "live_url": live_url.strip() if live_url else None,
                "repo_url": repo_url.strip() if repo_url else None,
                "thumbnail_url": thumbnail_url.strip() if thumbnail_url else None,
                "technologies": _clean_list(technologies or []),
                "features": _clean_list(features or []),
            }
        )

        saved = self._repo.save(updated)
        logger.info("Updated project %s", saved.id)
        return saved, []

    def reorder_projects(
        self, profile_id: UUID, from_index: int, to_index: int
    ) -> tuple[list[Project], bool]:
        """
        Move one project and persist the new order.

        Raises IndexError for out-of-range indices.
        """
        projects = self._repo.list_by_profile(profile_id)
        return self._ordering.move(projects, from_index, to_index)

    def delete_project(
        self, project_id: UUID
    ) -> tuple[list[Project] | None, bool, list[ProjectValidationError]]:
        """
        Delete a project, then its visits, then renumber the rest.

        Returns:
            Tuple of (remaining projects, persisted, errors). Remaining is
            None if the project does not exist.
        """
        project = self._repo.get_by_id(project_id)
        if not project:
            return None, False, [project_not_found(project_id)]

        self._repo.delete(project_id)

        errors: list[ProjectValidationError] = []
        try:
            removed = self._visits.delete_by_project(str(project_id))
        except RepositoryError as e:
            logger.error("Project %s deleted but its visits were not: %s", project_id, e)
            errors.append(
                ProjectValidationError(
                    code="visits_not_deleted",
                    message="Project visit history could not be removed",
                )
            )
        else:
            logger.info("Deleted project %s and %d visits", project_id, removed)

        siblings = self._repo.list_by_profile(project.profile_id)
        remaining, persisted = self._ordering.remove(siblings, project_id)
        return remaining, persisted, errors


def project_not_found(project_id: UUID) -> ProjectValidationError:
    return ProjectValidationError(
        code="project_not_found",
        message=f"Project with ID {project_id} not found",
    )
