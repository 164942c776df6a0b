"""Process hooks: structured logging and the per-composition run tracker."""

from __future__ import annotations

from grc_report.hooks.logging_config import setup_logging
from grc_report.hooks.run_tracker import end_run, get_current_run, start_run, track_stage

__all__ = [
    "end_run",
    "get_current_run",
    "setup_logging",
    "start_run",
    "track_stage",
]
