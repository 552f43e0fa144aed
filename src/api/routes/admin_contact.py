"""Admin routes for the contact request inbox."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.sqlite.repos import SQLiteContactRepo
from src.api.deps import get_clock, get_contact_repo, get_limits_store, get_rules
from src.api.schemas import ContactRequestListResponse, ContactRequestResponse, error_detail
from src.components.contact import (
    ContactValidationError,
    DeleteContactRequestInput,
    ListContactRequestsInput,
    MarkReadInput,
    run_delete,
    run_list,
    run_mark_read,
)
from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStorePort
from src.rules.models import Rules

router = APIRouter()


def _raise_for_errors(errors: list[ContactValidationError]) -> None:
    if any(err.code == "request_not_found" for err in errors):
        raise HTTPException(status_code=404, detail="Contact request not found")
    raise HTTPException(status_code=503, detail=error_detail(errors))


@router.get("", response_model=ContactRequestListResponse)
def list_contact_requests(
    repo: SQLiteContactRepo = Depends(get_contact_repo),
    limits: KeyValueStorePort = Depends(get_limits_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> ContactRequestListResponse:
    """All requests, newest first."""
    result = run_list(
        ListContactRequestsInput(),
        repo=repo,
        limits=limits,
        clock=clock,
        rules=rules.contact,
        rate_rules=rules.rate_limits.contact_form,
    )

    if not result.success:
        _raise_for_errors(result.errors)

    return ContactRequestListResponse(
        items=[ContactRequestResponse.model_validate(r) for r in result.requests],
        total=len(result.requests),
        unread=sum(1 for r in result.requests if r.status == "new"),
    )


@router.post("/{request_id}/read", response_model=ContactRequestResponse)
def mark_contact_request_read(
    request_id: UUID,
    repo: SQLiteContactRepo = Depends(get_contact_repo),
    limits: KeyValueStorePort = Depends(get_limits_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> ContactRequestResponse:
    result = run_mark_read(
        MarkReadInput(request_id=request_id),
        repo=repo,
        limits=limits,
        clock=clock,
        rules=rules.contact,
        rate_rules=rules.rate_limits.contact_form,
    )

    if not result.success:
        _raise_for_errors(result.errors)

    return ContactRequestResponse.model_validate(result.request)


@router.delete("/{request_id}", status_code=204)
def delete_contact_request(
    request_id: UUID,
    repo: SQLiteContactRepo = Depends(get_contact_repo),
    limits: KeyValueStorePort = Depends(get_limits_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> None:
    """Delete a request."""
    result = run_delete(
        DeleteContactRequestInput(request_id=request_id),
        repo=repo,
        limits=limits,
        clock=clock,
        rules=rules.contact,
        rate_rules=rules.rate_limits.contact_form,
    )

    if not result.success:
        _raise_for_errors(result.errors)
