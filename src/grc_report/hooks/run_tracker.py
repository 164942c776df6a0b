"""Per-composition run tracker using ContextVars.

Opt-in: ``track_stage`` still times a stage when no run is active, it just
has nowhere to record it.

Usage::

    run = start_run(organization_id="org-42")
    with track_stage("render_table") as stage:
        ...
    run = end_run()
    print(run.stage_names(), run.total_duration_ms)
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Generator, Literal

import structlog

from grc_report.models import ReportRun, StageMetrics

_current_run: ContextVar[ReportRun | None] = ContextVar("grc_current_run", default=None)


def get_current_run() -> ReportRun | None:
    """Get the active ReportRun, or None if no run is active."""
    return _current_run.get()


def start_run(organization_id: str = "", run_id: str | None = None) -> ReportRun:
    """Create and activate a new ReportRun for the current context."""
    run = ReportRun(
        run_id=run_id or uuid.uuid4().hex[:12],
        organization_id=organization_id,
        started_at=datetime.now(timezone.utc),
        status="running",
    )
    _current_run.set(run)
    structlog.contextvars.bind_contextvars(run_id=run.run_id)
    return run


def end_run(status: Literal["completed", "failed"] = "completed") -> ReportRun | None:
    """Finalize the current run and return it. Returns None if no run is active."""
    run = _current_run.get()
    if run is None:
        return None

    run.finalize(status)
    _current_run.set(None)
    structlog.contextvars.unbind_contextvars("run_id")
    return run


@contextmanager
def track_stage(name: str) -> Generator[StageMetrics, None, None]:
    """Record a StageMetrics entry on the current run.

    A stage that raises is recorded with status ``failed`` before the
    exception propagates.
    """
    run = _current_run.get()
    stage = StageMetrics(stage=name, started_at=datetime.now(timezone.utc))
    structlog.contextvars.bind_contextvars(stage=name)

    try:
        yield stage
    except BaseException:
        stage.status = "failed"
        raise
    finally:
        stage.ended_at = datetime.now(timezone.utc)
        if stage.started_at:
            stage.duration_ms = (stage.ended_at - stage.started_at).total_seconds() * 1000
        if run is not None:
            run.stages.append(stage)
        structlog.contextvars.unbind_contextvars("stage")
