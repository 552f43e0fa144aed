"""
ContactService - Public contact form and admin inbox.

Key behaviors:
- Submissions are validated, then checked against the client's rate limit
- A request is stored before the rate limit is advanced, so a failed save
  does not cost the visitor an attempt
- Rate limit state is kept per client key in a shared durable store
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from uuid import UUID

from src.adapters.kv_store import ScopedKeyValueStore
from src.components.ratelimit import (
    RateLimitConfig,
    RateLimitService,
    RateLimitStatus,
    format_time_remaining,
)
from src.domain.entities import ContactRequest

from .models import ContactValidationError
from .ports import ClockPort, ContactRepoPort, KeyValueStorePort

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
CLIENT_SCOPE = "client"


# --- Configuration ---


@dataclass(frozen=True)
class ContactConfig:
    """Contact form configuration."""

    name_max: int = 100
    email_max: int = 254
    message_max: int = 5000


DEFAULT_CONFIG = ContactConfig()


# --- Validation Functions ---


def _check_text(
    value: str, field_name: str, label: str, max_length: int
) -> ContactValidationError | None:
    if not value or not value.strip():
        return ContactValidationError(
            code=f"{field_name}_required",
            message=f"{label} is required",
            field_name=field_name,
        )
    if len(value.strip()) > max_length:
        return ContactValidationError(
            code=f"{field_name}_too_long",
            message=f"{label} must be {max_length} characters or less",
            field_name=field_name,
        )
    return None


def validate_contact_data(
    name: str,
    email: str,
    message: str,
    config: ContactConfig = DEFAULT_CONFIG,
) -> list[ContactValidationError]:
    """Validate contact form data."""
    errors = [
        error
        for error in (
            _check_text(name, "name", "Name", config.name_max),
            _check_text(email, "email", "Email", config.email_max),
            _check_text(message, "message", "Message", config.message_max),
        )
        if error is not None
    ]

    if not any(e.field_name == "email" for e in errors) and not EMAIL_RE.match(email.strip()):
        errors.append(
            ContactValidationError(
                code="email_invalid",
                message="Email address is not valid",
                field_name="email",
            )
        )

    return errors


def rate_limited_error(status: RateLimitStatus) -> ContactValidationError:
    wait = format_time_remaining(status.wait_time_seconds)
    return ContactValidationError(
        code="rate_limited",
        message=f"Please wait {wait} before sending another message",
    )


# --- Contact Service ---


class ContactService:
    """
    Contact service.

    ``limits`` is the shared rate limit store; it is scoped per client key.
    Repository errors propagate.
    """

    def __init__(
        self,
        repo: ContactRepoPort,
        limits: KeyValueStorePort,
        clock: ClockPort,
        rate_config: RateLimitConfig | None = None,
        config: ContactConfig | None = None,
    ) -> None:
        """Initialize service."""
        self._repo = repo
        self._limits = limits
        self._clock = clock
        self._rate_config = rate_config or RateLimitConfig()
        self._config = config or DEFAULT_CONFIG

    def limiter(self, client_key: str) -> RateLimitService:
        """Rate limiter bound to one client."""
        store = ScopedKeyValueStore(self._limits, f"{CLIENT_SCOPE}:{client_key}")
        return RateLimitService(store, self._clock, self._rate_config)

    def status(self, client_key: str) -> RateLimitStatus:
        return self.limiter(client_key).check()

    def submit(
        self, client_key: str, name: str, email: str, message: str
    ) -> tuple[ContactRequest | None, RateLimitStatus | None, list[ContactValidationError]]:
        """
        Handle a contact form submission.

        Returns:
            Tuple of (request, status, errors). Request is None if the
            submission was rejected; status is the limiter state afterwards.
        """
        errors = validate_contact_data(name, email, message, self._config)
        if errors:
            return None, None, errors

        limiter = self.limiter(client_key)
        status = limiter.check()
        if not status.can_submit:
            logger.info("Contact submission from %s rate limited for %ds", client_key, status.wait_time_seconds)
            return None, status, [rate_limited_error(status)]

        request = self._repo.save(
            ContactRequest(
                name=name.strip(),
                email=email.strip(),
                message=message.strip(),
                created_at=self._clock.now(),
            )
        )

        limiter.update()
        return request, limiter.check(), []

    # --- Admin Inbox ---

    def list_requests(self) -> list[ContactRequest]:
        return self._repo.list_all()

    def mark_read(self, request_id: UUID) -> tuple[ContactRequest | None, list[ContactValidationError]]:
        """Set a request's status to read."""
        request = self._repo.get_by_id(request_id)
        if not request:
            return None, [_not_found(request_id)]

        if request.status == "read":
            return request, []

        return self._repo.save(request.model_copy(update={"status": "read"})), []

    def delete_request(self, request_id: UUID) -> tuple[bool, list[ContactValidationError]]:
        """Delete a request."""
        if not self._repo.get_by_id(request_id):
            return False, [_not_found(request_id)]

        self._repo.delete(request_id)
        return True, []


def _not_found(request_id: UUID) -> ContactValidationError:
    return ContactValidationError(
        code="request_not_found",
        message=f"Contact request with ID {request_id} not found",
    )
