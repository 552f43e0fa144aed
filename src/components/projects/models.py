"""
Projects component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.entities import Project

# --- Validation Error ---


@dataclass(frozen=True)
class ProjectValidationError:
    """Project validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ListProjectsInput:
    """Input for listing a profile's projects."""

    profile_id: UUID
    # Normalize positions and write them back (owner view). Public pages only read.
    normalize: bool = True


@dataclass(frozen=True)
class CreateProjectInput:
    """Input for creating a project."""

    profile_id: UUID
    title: str
    description: str = ""
    live_url: str | None = None
    repo_url: str | None = None
    thumbnail_url: str | None = None
    technologies: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GetProjectInput:
    """Input for reading one project."""

    project_id: UUID


@dataclass(frozen=True)
class UpdateProjectInput:
    """Input for editing a project; position and owner are kept."""

    project_id: UUID
    title: str
    description: str = ""
    live_url: str | None = None
    repo_url: str | None = None
    thumbnail_url: str | None = None
    technologies: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReorderProjectsInput:
    """Input for moving one project within its profile."""

    profile_id: UUID
    from_index: int
    to_index: int


@dataclass(frozen=True)
class DeleteProjectInput:
    """Input for deleting a project."""

    project_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class ProjectOutput:
    """Output for single-project operations."""

    project: Project | None
    errors: list[ProjectValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ProjectListOutput:
    """Output for operations that return the ordered collection."""

    projects: list[Project]
    persisted: bool = True
    errors: list[ProjectValidationError] = field(default_factory=list)
    success: bool = True
