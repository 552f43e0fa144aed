"""Public routes: contact form, visit tracking and project listings."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request

from src.adapters.sqlite.repos import (
    SQLiteContactRepo,
    SQLiteProjectRepo,
    SQLiteVisitRepo,
    SQLiteVisitStatsRepo,
)
from src.api.deps import (
    get_client_key,
    get_clock,
    get_contact_repo,
    get_limits_store,
    get_project_repo,
    get_rules,
    get_session_key,
    get_session_store,
    get_visit_repo,
    get_visit_stats_repo,
)
from src.api.schemas import (
    ContactRequestResponse,
    ContactSubmitRequest,
    ContactSubmitResponse,
    ProjectListResponse,
    ProjectResponse,
    RateLimitStatusResponse,
    TrackVisitRequest,
    TrackVisitResponse,
    error_detail,
)
from src.components.contact import (
    ContactStatusInput,
    SubmitContactInput,
    run_status,
    run_submit,
)
from src.components.projects import GetProjectInput, ListProjectsInput, run_get, run_list
from src.components.visits import (
    TrackHomeInput,
    TrackProjectInput,
    TrackVisitOutput,
    VisitContext,
    run_track_home,
    run_track_project,
)
from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStorePort
from src.rules.models import Rules

router = APIRouter()


# --- Contact ---


@router.post("/contact", response_model=ContactSubmitResponse, status_code=201)
def submit_contact(
    data: ContactSubmitRequest,
    client_key: str = Depends(get_client_key),
    repo: SQLiteContactRepo = Depends(get_contact_repo),
    limits: KeyValueStorePort = Depends(get_limits_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> ContactSubmitResponse:
    """Store a contact request, subject to the per-client rate limit."""
    result = run_submit(
        SubmitContactInput(client_key=client_key, name=data.name, email=data.email, message=data.message),
        repo=repo,
        limits=limits,
        clock=clock,
        rules=rules.contact,
        rate_rules=rules.rate_limits.contact_form,
    )

    if not result.success:
        codes = {err.code for err in result.errors}
        if "rate_limited" in codes:
            wait = result.status.wait_time_seconds if result.status else 0
            raise HTTPException(
                status_code=429,
                detail=error_detail(result.errors),
                headers={"Retry-After": str(wait)},
            )
        if "storage_error" in codes:
            raise HTTPException(status_code=503, detail="Message could not be saved")
        raise HTTPException(status_code=400, detail=error_detail(result.errors))

    assert result.request is not None
    return ContactSubmitResponse(
        request=ContactRequestResponse.model_validate(result.request),
        rate_limit=RateLimitStatusResponse.from_status(result.status) if result.status else None,
    )


@router.get("/contact/status", response_model=RateLimitStatusResponse)
def contact_status(
    client_key: str = Depends(get_client_key),
    repo: SQLiteContactRepo = Depends(get_contact_repo),
    limits: KeyValueStorePort = Depends(get_limits_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> RateLimitStatusResponse:
    """Whether this client may send a message now."""
    result = run_status(
        ContactStatusInput(client_key=client_key),
        repo=repo,
        limits=limits,
        clock=clock,
        rules=rules.contact,
        rate_rules=rules.rate_limits.contact_form,
    )
    return RateLimitStatusResponse.from_status(result.status)


# --- Visits ---


def _visit_context(request: Request, data: TrackVisitRequest | None) -> VisitContext:
    data = data or TrackVisitRequest()
    return VisitContext(
        user_agent=request.headers.get("user-agent"),
        referrer=data.referrer or request.headers.get("referer"),
        country=data.country,
        city=data.city,
    )


def _track_response(result: TrackVisitOutput) -> TrackVisitResponse:
    if not result.success:
        if any(err.code == "session_unavailable" for err in result.errors):
            raise HTTPException(status_code=503, detail="Visit tracking unavailable")
        raise HTTPException(status_code=400, detail=error_detail(result.errors))

    return TrackVisitResponse(
        tracked=result.result.tracked,
        duplicate=result.result.duplicate,
        visitor_id=result.result.visitor_id,
    )


@router.post("/visits/home", response_model=TrackVisitResponse)
def track_home(
    request: Request,
    data: TrackVisitRequest | None = None,
    session_key: str = Depends(get_session_key),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    stats: SQLiteVisitStatsRepo = Depends(get_visit_stats_repo),
    sessions: KeyValueStorePort = Depends(get_session_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> TrackVisitResponse:
    """Log a home page view once per session."""
    result = run_track_home(
        TrackHomeInput(session_key=session_key, context=_visit_context(request, data)),
        visits=visits,
        stats=stats,
        sessions=sessions,
        clock=clock,
        rules=rules.analytics,
    )
    return _track_response(result)


@router.post("/visits/project/{project_id}", response_model=TrackVisitResponse)
def track_project(
    project_id: str,
    request: Request,
    data: TrackVisitRequest | None = None,
    session_key: str = Depends(get_session_key),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    stats: SQLiteVisitStatsRepo = Depends(get_visit_stats_repo),
    sessions: KeyValueStorePort = Depends(get_session_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> TrackVisitResponse:
    """Log a project page view once per session and project."""
    result = run_track_project(
        TrackProjectInput(
            session_key=session_key,
            project_id=project_id,
            project_name=data.project_name if data else None,
            context=_visit_context(request, data),
        ),
        visits=visits,
        stats=stats,
        sessions=sessions,
        clock=clock,
        rules=rules.analytics,
    )
    return _track_response(result)


# --- Projects ---


@router.get("/profiles/{profile_id}/projects", response_model=ProjectListResponse)
def list_profile_projects(
    profile_id: UUID,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectListResponse:
    """A profile's projects in stored display order; nothing is written."""
    result = run_list(
        ListProjectsInput(profile_id=profile_id, normalize=False),
        repo=repo,
        visits=visits,
        rules=rules.projects,
    )

    if not result.success:
        raise HTTPException(status_code=503, detail="Projects unavailable")

    return ProjectListResponse(
        items=[ProjectResponse.model_validate(p) for p in result.projects],
        total=len(result.projects),
    )


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_public_project(
    project_id: UUID,
    repo: SQLiteProjectRepo = Depends(get_project_repo),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    rules: Rules = Depends(get_rules),
) -> ProjectResponse:
    """One project for its detail page."""
    result = run_get(GetProjectInput(project_id=project_id), repo=repo, visits=visits, rules=rules.projects)

    if not result.success:
        if any(err.code == "project_not_found" for err in result.errors):
            raise HTTPException(status_code=404, detail="Project not found")
        raise HTTPException(status_code=503, detail="Projects unavailable")

    assert result.project is not None
    return ProjectResponse.model_validate(result.project)
