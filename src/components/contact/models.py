"""
Contact component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.components.ratelimit import RateLimitStatus
from src.domain.entities import ContactRequest

# --- Validation Error ---


@dataclass(frozen=True)
class ContactValidationError:
    """Contact validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SubmitContactInput:
    """Input for a public contact form submission."""

    client_key: str
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class ContactStatusInput:
    """Input for asking whether a client may submit now."""

    client_key: str


@dataclass(frozen=True)
class ListContactRequestsInput:
    """Input for the admin inbox."""


@dataclass(frozen=True)
class MarkReadInput:
    """Input for marking a request as read."""

    request_id: UUID


@dataclass(frozen=True)
class DeleteContactRequestInput:
    """Input for deleting a request."""

    request_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class SubmitContactOutput:
    """Output for contact submission."""

    request: ContactRequest | None
    status: RateLimitStatus | None = None
    errors: list[ContactValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContactStatusOutput:
    """Output for rate limit status."""

    status: RateLimitStatus
    errors: list[ContactValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContactRequestOutput:
    """Output for single-request admin operations."""

    request: ContactRequest | None
    errors: list[ContactValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ContactRequestListOutput:
    """Output for the admin inbox."""

    requests: list[ContactRequest]
    errors: list[ContactValidationError] = field(default_factory=list)
    success: bool = True
