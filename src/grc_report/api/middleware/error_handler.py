"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from grc_report.exceptions import AssessmentDataError, GRCReportError, RenderError

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(AssessmentDataError)
    async def handle_data_error(request: Request, exc: AssessmentDataError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "type": "assessment_data_error"})

    @app.exception_handler(RenderError)
    async def handle_render_error(request: Request, exc: RenderError) -> JSONResponse:
        log.error(f"Render failed in {exc.stage or 'unknown'} stage: {exc}")
        return JSONResponse(status_code=500, content={"error": "Report generation failed", "type": "render_error"})

    @app.exception_handler(GRCReportError)
    async def handle_generic_error(request: Request, exc: GRCReportError) -> JSONResponse:
        log.error(f"Report generation failed: {exc}")
        return JSONResponse(status_code=500, content={"error": "Report generation failed", "type": "grc_report_error"})

    @app.exception_handler(KeyError)
    async def handle_not_found(request: Request, exc: KeyError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc.args[0]) if exc.args else "Not found", "type": "not_found"})
