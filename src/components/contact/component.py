"""
Contact component - Public contact form and admin inbox.

Invariants:
- I1: a rate limited submission is never stored
- I2: the rate limit advances only after the request was stored
"""

from __future__ import annotations

import logging

from src.components.ratelimit import RateLimitConfig
from src.ports.repo import RepositoryError
from src.rules.models import ContactRules, RateLimitActionRules

from ._impl import ContactConfig, ContactService
from .models import (
    ContactRequestListOutput,
    ContactRequestOutput,
    ContactStatusInput,
    ContactStatusOutput,
    ContactValidationError,
    DeleteContactRequestInput,
    ListContactRequestsInput,
    MarkReadInput,
    SubmitContactInput,
    SubmitContactOutput,
)
from .ports import ClockPort, ContactRepoPort, KeyValueStorePort

logger = logging.getLogger(__name__)


def _build_service(
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None,
    rate_rules: RateLimitActionRules | None,
) -> ContactService:
    config = ContactConfig() if rules is None else ContactConfig(**rules.model_dump())
    rate_config = (
        RateLimitConfig()
        if rate_rules is None
        else RateLimitConfig(action_key=rate_rules.action_key, base_wait_hours=rate_rules.base_wait_hours)
    )
    return ContactService(repo, limits, clock, rate_config=rate_config, config=config)


def _storage_error(e: RepositoryError) -> ContactValidationError:
    return ContactValidationError(code="storage_error", message=str(e))


# --- Component Entry Points ---


def run_submit(
    inp: SubmitContactInput,
    *,
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None = None,
    rate_rules: RateLimitActionRules | None = None,
) -> SubmitContactOutput:
    """
    Submit the public contact form.

    Args:
        inp: Input with client key and form fields.
        repo: Contact request repository port.
        limits: Shared rate limit store.
        clock: Clock port.
        rules: Optional contact rules.
        rate_rules: Optional rate limit rules for the contact form.

    Returns:
        SubmitContactOutput with the stored request, or errors.
    """
    service = _build_service(repo, limits, clock, rules, rate_rules)
    try:
        request, status, errors = service.submit(inp.client_key, inp.name, inp.email, inp.message)
    except RepositoryError as e:
        logger.error("Failed to store contact request: %s", e)
        return SubmitContactOutput(request=None, errors=[_storage_error(e)], success=False)

    return SubmitContactOutput(request=request, status=status, errors=errors, success=request is not None)


def run_status(
    inp: ContactStatusInput,
    *,
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None = None,
    rate_rules: RateLimitActionRules | None = None,
) -> ContactStatusOutput:
    """Whether the client may submit now, and how long to wait otherwise."""
    service = _build_service(repo, limits, clock, rules, rate_rules)
    return ContactStatusOutput(status=service.status(inp.client_key))


def run_list(
    inp: ListContactRequestsInput,
    *,
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None = None,
    rate_rules: RateLimitActionRules | None = None,
) -> ContactRequestListOutput:
    """All contact requests, newest first."""
    service = _build_service(repo, limits, clock, rules, rate_rules)
    try:
        return ContactRequestListOutput(requests=service.list_requests())
    except RepositoryError as e:
        logger.error("Failed to list contact requests: %s", e)
        return ContactRequestListOutput(requests=[], errors=[_storage_error(e)], success=False)


def run_mark_read(
    inp: MarkReadInput,
    *,
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None = None,
    rate_rules: RateLimitActionRules | None = None,
) -> ContactRequestOutput:
    """Mark a request as read."""
    service = _build_service(repo, limits, clock, rules, rate_rules)
    try:
        request, errors = service.mark_read(inp.request_id)
    except RepositoryError as e:
        logger.error("Failed to update contact request %s: %s", inp.request_id, e)
        return ContactRequestOutput(request=None, errors=[_storage_error(e)], success=False)

    return ContactRequestOutput(request=request, errors=errors, success=request is not None)


def run_delete(
    inp: DeleteContactRequestInput,
    *,
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None = None,
    rate_rules: RateLimitActionRules | None = None,
) -> ContactRequestOutput:
    """Delete a request."""
    service = _build_service(repo, limits, clock, rules, rate_rules)
    try:
        deleted, errors = service.delete_request(inp.request_id)
    except RepositoryError as e:
        logger.error("Failed to delete contact request %s: %s", inp.request_id, e)
        return ContactRequestOutput(request=None, errors=[_storage_error(e)], success=False)

    return ContactRequestOutput(request=None, errors=errors, success=deleted)


def run(
    inp: SubmitContactInput
    | ContactStatusInput
    | ListContactRequestsInput
    | MarkReadInput
    | DeleteContactRequestInput,
    *,
    repo: ContactRepoPort,
    limits: KeyValueStorePort,
    clock: ClockPort,
    rules: ContactRules | None = None,
    rate_rules: RateLimitActionRules | None = None,
) -> SubmitContactOutput | ContactStatusOutput | ContactRequestListOutput | ContactRequestOutput:
    """
    Main entry point for the contact component.

    Dispatches to appropriate handler based on input type.
    """
    kwargs = {"repo": repo, "limits": limits, "clock": clock, "rules": rules, "rate_rules": rate_rules}
    if isinstance(inp, SubmitContactInput):
        return run_submit(inp, **kwargs)  # type: ignore[arg-type]
    elif isinstance(inp, ContactStatusInput):
        return run_status(inp, **kwargs)  # type: ignore[arg-type]
    elif isinstance(inp, ListContactRequestsInput):
        return run_list(inp, **kwargs)  # type: ignore[arg-type]
    elif isinstance(inp, MarkReadInput):
        return run_mark_read(inp, **kwargs)  # type: ignore[arg-type]
    elif isinstance(inp, DeleteContactRequestInput):
        return run_delete(inp, **kwargs)  # type: ignore[arg-type]
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
