"""
Visits component - Page visit logging.

Invariants:
- I1: a page is logged at most once per session while its flag is alive
- I2: session flags and the visit counter change only after a successful insert
- I3: tracking failures never raise into the page request
"""

from __future__ import annotations

import logging

from src.rules.models import AnalyticsRules

from ._impl import TrackingConfig, VisitTrackingService
from .models import (
    TrackHomeInput,
    TrackProjectInput,
    TrackResult,
    TrackVisitOutput,
    VisitsValidationError,
)
from .ports import (
    ClockPort,
    KeyValueStoreError,
    KeyValueStorePort,
    VisitCounterPort,
    VisitWriterPort,
)

logger = logging.getLogger(__name__)


def _build_config(rules: AnalyticsRules | None) -> TrackingConfig:
    """Build tracking config from rules."""
    if rules is None:
        return TrackingConfig()
    return TrackingConfig(
        track_location=rules.track_location,
        flag_ttl_seconds=rules.session_flag_ttl_seconds,
        cleanup_interval_seconds=rules.session_cleanup_interval_seconds,
    )


def _validate_session(session_key: str) -> list[VisitsValidationError]:
    if not session_key or not session_key.strip():
        return [
            VisitsValidationError(
                code="missing_session",
                message="Session key is required",
                field_name="session_key",
            )
        ]
    return []


def _output(result: TrackResult) -> TrackVisitOutput:
    if result.tracked or result.duplicate:
        return TrackVisitOutput(result=result)
    return TrackVisitOutput(
        result=result,
        errors=[VisitsValidationError(code="visit_not_recorded", message="Visit could not be saved")],
    )


def _failed(errors: list[VisitsValidationError]) -> TrackVisitOutput:
    return TrackVisitOutput(result=TrackResult(tracked=False), errors=errors, success=False)


# --- Component Entry Points ---


def run_track_home(
    inp: TrackHomeInput,
    *,
    visits: VisitWriterPort,
    stats: VisitCounterPort,
    sessions: KeyValueStorePort,
    clock: ClockPort,
    rules: AnalyticsRules | None = None,
) -> TrackVisitOutput:
    """
    Track a home page visit.

    Args:
        inp: Input with session key and request context.
        visits: Visit log port.
        stats: Visit counter port.
        sessions: Shared session flag store.
        clock: Clock port.
        rules: Optional analytics rules.

    Returns:
        TrackVisitOutput; a failed insert is reported, not raised.
    """
    errors = _validate_session(inp.session_key)
    if errors:
        return _failed(errors)

    service = VisitTrackingService(visits, stats, sessions, clock, _build_config(rules))
    try:
        result = service.track_home(inp.session_key, inp.context, now=inp.now)
    except KeyValueStoreError as e:
        logger.error("Session store unavailable, home visit not tracked: %s", e)
        return _failed([VisitsValidationError(code="session_unavailable", message=str(e))])

    return _output(result)


def run_track_project(
    inp: TrackProjectInput,
    *,
    visits: VisitWriterPort,
    stats: VisitCounterPort,
    sessions: KeyValueStorePort,
    clock: ClockPort,
    rules: AnalyticsRules | None = None,
) -> TrackVisitOutput:
    """Track a project page visit."""
    errors = _validate_session(inp.session_key)
    if not str(inp.project_id).strip():
        errors.append(
            VisitsValidationError(
                code="missing_project_id",
                message="Project id is required",
                field_name="project_id",
            )
        )
    if errors:
        return _failed(errors)

    service = VisitTrackingService(visits, stats, sessions, clock, _build_config(rules))
    try:
        result = service.track_project(
            inp.session_key, inp.project_id, inp.project_name, inp.context, now=inp.now
        )
    except KeyValueStoreError as e:
        logger.error("Session store unavailable, project visit not tracked: %s", e)
        return _failed([VisitsValidationError(code="session_unavailable", message=str(e))])

    return _output(result)


def run(
    inp: TrackHomeInput | TrackProjectInput,
    *,
    visits: VisitWriterPort,
    stats: VisitCounterPort,
    sessions: KeyValueStorePort,
    clock: ClockPort,
    rules: AnalyticsRules | None = None,
) -> TrackVisitOutput:
    """
    Main entry point for the visits component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, TrackHomeInput):
        return run_track_home(
            inp, visits=visits, stats=stats, sessions=sessions, clock=clock, rules=rules
        )
    elif isinstance(inp, TrackProjectInput):
        return run_track_project(
            inp, visits=visits, stats=stats, sessions=sessions, clock=clock, rules=rules
        )
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
