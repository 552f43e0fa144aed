from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
PageType = Literal["home", "project"]
TimeRange = Literal["week", "month", "quarter"]
ContactStatus = Literal["new", "read"]

DIRECT_LINK = "Direct Link"
UNKNOWN = "Unknown"

# --- Ordering ---


class OrderedItem(BaseModel):
    """Entity that takes part in manual ordering within its collection."""

    id: UUID = Field(default_factory=uuid4)
    display_order: int | None = None


# --- Projects ---


class Project(OrderedItem):
    profile_id: UUID
    title: str
    description: str = ""
    live_url: str | None = None
    repo_url: str | None = None
    thumbnail_url: str | None = None
    technologies: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


# --- Analytics ---


class VisitEvent(BaseModel):
    """One logged page view. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    page_type: PageType
    visitor_id: str
    timestamp: datetime
    project_id: str | None = None
    project_name: str | None = None
    user_agent: str | None = None
    referrer: str | None = DIRECT_LINK
    country: str | None = UNKNOWN
    city: str | None = UNKNOWN


class VisitStats(BaseModel):
    total_visits: int = 0
    last_updated: datetime | None = None


# --- Contact ---


class ContactRequest(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    email: str
    message: str
    status: ContactStatus = "new"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
