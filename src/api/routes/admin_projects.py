"""Admin routes for managing portfolio projects."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.sqlite.repos import SQLiteProjectRepo, SQLiteVisitRepo
from src.api.deps import get_project_repo, get_rules, get_visit_repo
from src.api.schemas import (
    ErrorItem,
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectReorderRequest,
    ProjectResponse,
    ProjectUpdateRequest,
    error_detail,
)
from src.components.projects import (
    CreateProjectInput,
    DeleteProjectInput,
    GetProjectInput,
    ListProjectsInput,
    ProjectListOutput,
    ProjectOutput,
    ReorderProjectsInput,
    UpdateProjectInput,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_reorder,
    run_update,
)
from src.rules.models import Rules

router = APIRouter()


def _list_response(result: ProjectListOutput) -> ProjectListResponse:
    return ProjectListResponse(
        items=[ProjectResponse.model_validate(p) for p in result.projects],
        total=len(result.projects),
        persisted=result.persisted,
        warnings=[ErrorItem(**item) for item in error_detail(result.errors)],
    )


def _project_response(result: ProjectOutput) -> ProjectResponse:
    if not result.success:
        codes = {err.code for err in result.errors}
        if "project_not_found" in codes:
            raise HTTPException(status_code=404, detail="Project not found")
        if "storage_error" in codes:
            raise HTTPException(status_code=503, detail=error_detail(result.errors))
        raise HTTPException(status_code=400, detail=error_detail(result.errors))

    assert result.project is not None
    return ProjectResponse.model_validate(result.project)


# --- Routes ---


@router.get("", response_model=ProjectListResponse)
def list_projects(
    profile_id: UUID = Query(...),
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectListResponse:
    """List a profile's projects; positions are normalized and saved."""
    result = run_list(ListProjectsInput(profile_id=profile_id), repo=repo, visits=visits, rules=rules.projects)

    if not result.success:
        raise HTTPException(status_code=503, detail=error_detail(result.errors))

    return _list_response(result)


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    data: ProjectCreateRequest,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectResponse:
    """Create a project at the end of the list."""
    input_data = CreateProjectInput(
        profile_id=data.profile_id,
        title=data.title,
        description=data.description,
        live_url=data.live_url,
        repo_url=data.repo_url,
        thumbnail_url=data.thumbnail_url,
        technologies=data.technologies,
        features=data.features,
    )

    result = run_create(input_data, repo=repo, visits=visits, rules=rules.projects)
    return _project_response(result)


@router.post("/reorder", response_model=ProjectListResponse)
def reorder_projects(
    data: ProjectReorderRequest,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectListResponse:
    """
    Move one project from one index to another.

    The reordered list is returned even when saving it failed; ``persisted``
    and ``warnings`` say so.
    """
    input_data = ReorderProjectsInput(
        profile_id=data.profile_id,
        from_index=data.from_index,
        to_index=data.to_index,
    )

    result = run_reorder(input_data, repo=repo, visits=visits, rules=rules.projects)

    if not result.success:
        if any(err.code == "index_out_of_range" for err in result.errors):
            raise HTTPException(status_code=400, detail=error_detail(result.errors))
        raise HTTPException(status_code=503, detail=error_detail(result.errors))

    return _list_response(result)


@router.delete("/{project_id}", response_model=ProjectListResponse)
def delete_project(
    project_id: UUID,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectListResponse:
    """Delete a project with its visit history; returns the renumbered rest."""
    result = run_delete(DeleteProjectInput(project_id=project_id), repo=repo, visits=visits, rules=rules.projects)

    if not result.success:
        if any(err.code == "project_not_found" for err in result.errors):
            raise HTTPException(status_code=404, detail="Project not found")
        raise HTTPException(status_code=503, detail=error_detail(result.errors))

    return _list_response(result)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: UUID,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectResponse:
    result = run_get(GetProjectInput(project_id=project_id), repo=repo, visits=visits, rules=rules.projects)
    return _project_response(result)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: UUID,
    data: ProjectUpdateRequest,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectResponse:
    """Edit a project's content; its position in the list is kept."""
    input_data = UpdateProjectInput(
        project_id=project_id,
        title=data.title,
        description=data.description,
        live_url=data.live_url,
        repo_url=data.repo_url,
        thumbnail_url=data.thumbnail_url,
        technologies=data.technologies,
        features=data.features,
    )

    result = run_update(input_data, repo=repo, visits=visits, rules=rules.projects)
    return _project_response(result)
