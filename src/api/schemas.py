from collections.abc import Sequence
from datetime import date, datetime
from typing import Any, Protocol
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.components.ratelimit import RateLimitStatus, format_time_remaining
from src.domain.entities import ContactStatus, TimeRange


class ComponentError(Protocol):
    code: str
    message: str
    field_name: str | None


def error_detail(errors: Sequence[ComponentError]) -> list[dict[str, Any]]:
    """Component errors in the shape HTTPException details use."""
    return [{"code": err.code, "message": err.message, "field": err.field_name} for err in errors]


class ErrorItem(BaseModel):
    code: str
    message: str
    field: str | None = None


# --- Projects ---
class ProjectCreateRequest(BaseModel):
    profile_id: UUID
    title: str
    description: str = ""
    live_url: str | None = None
    repo_url: str | None = None
    thumbnail_url: str | None = None
    technologies: list[str] = []
    features: list[str] = []


class ProjectUpdateRequest(BaseModel):
    title: str
    description: str = ""
    live_url: str | None = None
    repo_url: str | None = None
    thumbnail_url: str | None = None
    technologies: list[str] = []
    features: list[str] = []


class ProjectReorderRequest(BaseModel):
    profile_id: UUID
    from_index: int
    to_index: int


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    profile_id: UUID
    title: str
    description: str
    live_url: str | None
    repo_url: str | None
    thumbnail_url: str | None
    technologies: list[str]
    features: list[str]
    display_order: int | None
    created_at: datetime


class ProjectListResponse(BaseModel):
    items: list[ProjectResponse]
    total: int
    # False when the order shown could not be saved.
    persisted: bool = True
    warnings: list[ErrorItem] = []


# --- Contact ---
class ContactSubmitRequest(BaseModel):
    name: str
    email: str
    message: str


class RateLimitStatusResponse(BaseModel):
    can_submit: bool
    wait_time_seconds: int
    wait_time: str | None = None
    attempts: int

    @classmethod
    def from_status(cls, status: RateLimitStatus) -> "RateLimitStatusResponse":
        return cls(
            can_submit=status.can_submit,
            wait_time_seconds=status.wait_time_seconds,
            wait_time=(
                format_time_remaining(status.wait_time_seconds) if status.wait_time_seconds else None
            ),
            attempts=status.attempts,
        )


class ContactRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    message: str
    status: ContactStatus
    created_at: datetime


class ContactSubmitResponse(BaseModel):
    request: ContactRequestResponse
    rate_limit: RateLimitStatusResponse | None = None


class ContactRequestListResponse(BaseModel):
    items: list[ContactRequestResponse]
    total: int
    unread: int


# --- Visits ---
class TrackVisitRequest(BaseModel):
    referrer: str | None = None
    country: str | None = None
    city: str | None = None
    project_name: str | None = None


class TrackVisitResponse(BaseModel):
    tracked: bool
    duplicate: bool = False
    visitor_id: str | None = None


# --- Analytics ---
class VisitBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    visits: int
    percentage: float | None = None


class ProjectVisitBucketResponse(VisitBucketResponse):
    project_id: str | None = None


class DailyBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    visits: int
    label: str


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    countries: list[VisitBucketResponse] = []
    cities: list[VisitBucketResponse] = []


class HomeVisitsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    today: int
    last_7_days: int
    last_30_days: int


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time_range: TimeRange
    generated_at: datetime
    total_visits: int
    last_updated: datetime | None
    home: HomeVisitsResponse
    daily: list[DailyBucketResponse]
    projects: list[ProjectVisitBucketResponse]
    devices: list[VisitBucketResponse]
    browsers: list[VisitBucketResponse]
    referrers: list[VisitBucketResponse]
    locations: LocationResponse


class DailyVisitsResponse(BaseModel):
    time_range: str
    items: list[DailyBucketResponse] = Field(default_factory=list)
