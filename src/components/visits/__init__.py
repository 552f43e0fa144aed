"""
Visits component - Page visit logging with per-session deduplication.
"""

from ._impl import (
    HOME_FLAG,
    TrackingConfig,
    VisitTrackingService,
    build_event,
    generate_visitor_id,
    project_flag,
)
from .component import run, run_track_home, run_track_project
from .models import (
    TrackHomeInput,
    TrackProjectInput,
    TrackResult,
    TrackVisitOutput,
    VisitContext,
    VisitsValidationError,
)
from .ports import VisitCounterPort, VisitWriterPort

__all__ = [
    # Entry points
    "run",
    "run_track_home",
    "run_track_project",
    # Input models
    "TrackHomeInput",
    "TrackProjectInput",
    "VisitContext",
    # Output models
    "TrackResult",
    "TrackVisitOutput",
    "VisitsValidationError",
    # Ports
    "VisitCounterPort",
    "VisitWriterPort",
    # Service and pure functions
    "HOME_FLAG",
    "TrackingConfig",
    "VisitTrackingService",
    "build_event",
    "generate_visitor_id",
    "project_flag",
]
