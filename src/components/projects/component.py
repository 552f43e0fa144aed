"""
Projects component - Portfolio project management.

Invariants:
- I1: owner listings have display_order set and positions written back;
  public listings are read-only
- I2: a new project's display_order is max + 1 within its profile
- I3: after a delete the remaining projects are numbered 1..N-1
"""

from __future__ import annotations

import logging

from src.ports.repo import RepositoryError
from src.rules.models import ProjectRules

from ._impl import ProjectConfig, ProjectService, project_not_found
from .models import (
    CreateProjectInput,
    DeleteProjectInput,
    GetProjectInput,
    ListProjectsInput,
    ProjectListOutput,
    ProjectOutput,
    ProjectValidationError,
    ReorderProjectsInput,
    UpdateProjectInput,
)
from .ports import ProjectRepoPort, VisitCleanupPort

logger = logging.getLogger(__name__)

NOT_PERSISTED = ProjectValidationError(
    code="order_not_persisted",
    message="Project order could not be saved",
)


def _build_config(rules: ProjectRules | None) -> ProjectConfig:
    """Build project config from rules."""
    if rules is None:
        return ProjectConfig()
    return ProjectConfig(title_max=rules.title_max)


def _storage_error(e: RepositoryError) -> ProjectValidationError:
    return ProjectValidationError(code="storage_error", message=str(e))


# --- Component Entry Points ---


def run_list(
    inp: ListProjectsInput,
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectListOutput:
    """
    List a profile's projects in display order.

    A failed write-back of the normalized order is reported, not fatal.
    """
    service = ProjectService(repo, visits, _build_config(rules))
    try:
        projects, persisted = service.list_projects(inp.profile_id, normalize=inp.normalize)
    except RepositoryError as e:
        logger.error("Failed to list projects of %s: %s", inp.profile_id, e)
        return ProjectListOutput(projects=[], persisted=False, errors=[_storage_error(e)], success=False)

    return ProjectListOutput(
        projects=projects,
        persisted=persisted,
        errors=[] if persisted else [NOT_PERSISTED],
    )


def run_create(
    inp: CreateProjectInput,
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectOutput:
    """
    Create a project.

    Args:
        inp: Input with project fields.
        repo: Project repository port.
        visits: Visit cleanup port.
        rules: Optional project rules.

    Returns:
        ProjectOutput with the saved project or validation errors.
    """
    service = ProjectService(repo, visits, _build_config(rules))
    try:
        project, errors = service.create_project(
            profile_id=inp.profile_id,
            title=inp.title,
            description=inp.description,
            live_url=inp.live_url,
            repo_url=inp.repo_url,
            thumbnail_url=inp.thumbnail_url,
            technologies=inp.technologies,
            features=inp.features,
        )
    except RepositoryError as e:
        logger.error("Failed to create project: %s", e)
        return ProjectOutput(project=None, errors=[_storage_error(e)], success=False)

    return ProjectOutput(project=project, errors=errors, success=project is not None)


def run_get(
    inp: GetProjectInput,
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectOutput:
    """Read one project."""
    service = ProjectService(repo, visits, _build_config(rules))
    try:
        project = service.get_project(inp.project_id)
    except RepositoryError as e:
        logger.error("Failed to read project %s: %s", inp.project_id, e)
        return ProjectOutput(project=None, errors=[_storage_error(e)], success=False)

    if project is None:
        return ProjectOutput(project=None, errors=[project_not_found(inp.project_id)], success=False)
    return ProjectOutput(project=project)


def run_update(
    inp: UpdateProjectInput,
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectOutput:
    """Edit a project in place; its position is unchanged."""
    service = ProjectService(repo, visits, _build_config(rules))
    try:
        project, errors = service.update_project(
            inp.project_id,
            title=inp.title,
            description=inp.description,
            live_url=inp.live_url,
            repo_url=inp.repo_url,
            thumbnail_url=inp.thumbnail_url,
            technologies=inp.technologies,
            features=inp.features,
        )
    except RepositoryError as e:
        logger.error("Failed to update project %s: %s", inp.project_id, e)
        return ProjectOutput(project=None, errors=[_storage_error(e)], success=False)

    return ProjectOutput(project=project, errors=errors, success=project is not None)


def run_reorder(
    inp: ReorderProjectsInput,
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectListOutput:
    """Move one project; the new order is kept even if saving it fails."""
    service = ProjectService(repo, visits, _build_config(rules))
    try:
        projects, persisted = service.reorder_projects(inp.profile_id, inp.from_index, inp.to_index)
    except IndexError as e:
        return ProjectListOutput(
            projects=[],
            persisted=False,
            errors=[ProjectValidationError(code="index_out_of_range", message=str(e))],
            success=False,
        )
    except RepositoryError as e:
        logger.error("Failed to load projects for reorder: %s", e)
        return ProjectListOutput(projects=[], persisted=False, errors=[_storage_error(e)], success=False)

    return ProjectListOutput(
        projects=projects,
        persisted=persisted,
        errors=[] if persisted else [NOT_PERSISTED],
    )


def run_delete(
    inp: DeleteProjectInput,
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectListOutput:
    """Delete a project; returns the renumbered siblings."""
    service = ProjectService(repo, visits, _build_config(rules))
    try:
        remaining, persisted, errors = service.delete_project(inp.project_id)
    except RepositoryError as e:
        logger.error("Failed to delete project %s: %s", inp.project_id, e)
        return ProjectListOutput(projects=[], persisted=False, errors=[_storage_error(e)], success=False)

    if remaining is None:
        return ProjectListOutput(projects=[], persisted=False, errors=errors, success=False)

    if not persisted:
        errors = [*errors, NOT_PERSISTED]
    return ProjectListOutput(projects=remaining, persisted=persisted, errors=errors)


def run(
    inp: (
        ListProjectsInput
        | GetProjectInput
        | CreateProjectInput
        | UpdateProjectInput
        | ReorderProjectsInput
        | DeleteProjectInput
    ),
    *,
    repo: ProjectRepoPort,
    visits: VisitCleanupPort,
    rules: ProjectRules | None = None,
) -> ProjectOutput | ProjectListOutput:
    """
    Main entry point for the projects component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ListProjectsInput):
        return run_list(inp, repo=repo, visits=visits, rules=rules)
    elif isinstance(inp, GetProjectInput):
        return run_get(inp, repo=repo, visits=visits, rules=rules)
    elif isinstance(inp, CreateProjectInput):
        return run_create(inp, repo=repo, visits=visits, rules=rules)
    elif isinstance(inp, UpdateProjectInput):
        return run_update(inp, repo=repo, visits=visits, rules=rules)
    elif isinstance(inp, ReorderProjectsInput):
        return run_reorder(inp, repo=repo, visits=visits, rules=rules)
    elif isinstance(inp, DeleteProjectInput):
        return run_delete(inp, repo=repo, visits=visits, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
