"""
Contact component - Public contact form and admin inbox.
"""

from ._impl import ContactConfig, ContactService, validate_contact_data
from .component import run, run_delete, run_list, run_mark_read, run_status, run_submit
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

__all__ = [
    # Entry points
    "run",
    "run_delete",
    "run_list",
    "run_mark_read",
    "run_status",
    "run_submit",
    # Input models
    "ContactStatusInput",
    "DeleteContactRequestInput",
    "ListContactRequestsInput",
    "MarkReadInput",
    "SubmitContactInput",
    # Output models
    "ContactRequestListOutput",
    "ContactRequestOutput",
    "ContactStatusOutput",
    "ContactValidationError",
    "SubmitContactOutput",
    # Ports
    "ClockPort",
    "ContactRepoPort",
    "KeyValueStorePort",
    # Service
    "ContactConfig",
    "ContactService",
    "validate_contact_data",
]
