"""Exception hierarchy for grc-report."""

from __future__ import annotations


class GRCReportError(Exception):
    """Base exception for all grc-report errors."""


class RenderError(GRCReportError):
    """Raised when the layout, measurement or commit step of a render fails."""

    def __init__(self, message: str, stage: str = "") -> None:
        super().__init__(message)
        self.stage = stage


class DocumentFinalizedError(GRCReportError):
    """Raised when a finalized output document is mutated."""


class AssessmentDataError(GRCReportError):
    """Assessment input could not be read into rows."""

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(message)
        self.source = source


__all__ = [
    "GRCReportError",
    "RenderError",
    "DocumentFinalizedError",
    "AssessmentDataError",
]
