"""Maturity assessment report generation endpoint."""

from __future__ import annotations

from io import BytesIO
from typing import Any

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from grc_report.assessment_data import load_rows
from grc_report.composer import ReportComposer

router = APIRouter(tags=["reports"])


class MaturityReportRequest(BaseModel):
    """Template and assessment data for one report.

    ``rows`` entries are either seven-field arrays in table column order or
    assessment items with level values (``currentMaturityLevel`` etc.).
    """

    organization_id: str | None = None
    template: str | None = None
    rows: list[list[Any] | dict[str, Any]] = Field(default_factory=list)


@router.post("/reports/maturity-assessment")
async def maturity_assessment_report(request: MaturityReportRequest, req: Request) -> StreamingResponse:
    """Compose the maturity assessment report and return it as a PDF download.

    The template is taken from the request, then from the organization's
    stored template, then the default template.
    """
    settings = req.app.state.settings
    if request.template is not None:
        template = request.template
    else:
        template = req.app.state.template_store.get(request.organization_id)

    rows = load_rows(request.rows, source="request")
    composer = ReportComposer(settings.pdf)
    report = await run_in_threadpool(
        composer.compose, template, rows, organization_id=request.organization_id or ""
    )

    return StreamingResponse(
        BytesIO(report.pdf),
        media_type=report.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{report.filename}"',
            "X-Report-Pages": str(report.page_count),
        },
    )
