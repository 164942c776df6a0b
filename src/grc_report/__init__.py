"""grc-report: maturity assessment report generation for GRC programs.

Public API::

    from grc_report import ReportComposer, PDFLayoutConfig

    report = ReportComposer(PDFLayoutConfig()).compose(template, rows)
    Path(report.filename).write_bytes(report.pdf)
"""

from __future__ import annotations

from grc_report.composer import (
    PLACEHOLDER,
    ReportComposer,
    compose_report,
    gapped_rows,
    select_table_rows,
    split_template,
)
from grc_report.core.config import AppSettings, PDFLayoutConfig
from grc_report.exceptions import (
    AssessmentDataError,
    DocumentFinalizedError,
    GRCReportError,
    RenderError,
)
from grc_report.models import (
    AssessmentItem,
    AssessmentRow,
    ComposedReport,
    MaturityLevel,
    RenderCursor,
    TemplateSegments,
)
from grc_report.templates import DEFAULT_TEMPLATE, TemplateStore

__all__ = [
    "AppSettings",
    "AssessmentDataError",
    "AssessmentItem",
    "AssessmentRow",
    "ComposedReport",
    "DEFAULT_TEMPLATE",
    "DocumentFinalizedError",
    "GRCReportError",
    "MaturityLevel",
    "PDFLayoutConfig",
    "PLACEHOLDER",
    "RenderCursor",
    "RenderError",
    "ReportComposer",
    "TemplateSegments",
    "TemplateStore",
    "compose_report",
    "gapped_rows",
    "select_table_rows",
    "split_template",
]
