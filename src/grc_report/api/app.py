"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from grc_report.api.middleware.error_handler import register_error_handlers
from grc_report.api.routes import health, reports, templates
from grc_report.core.config import APIConfig, AppSettings
from grc_report.core.startup_checks import validate_settings
from grc_report.hooks import setup_logging
from grc_report.templates import create_template_store


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("grc-report")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup/shutdown lifecycle."""
    settings = AppSettings()
    validate_settings(settings)
    setup_logging(settings.observability)

    app.state.settings = settings
    app.state.template_store = create_template_store(settings.templates)
    yield


_api_config = APIConfig()

app = FastAPI(
    title=_api_config.title,
    description=_api_config.description,
    version=_get_version(),
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(templates.router, prefix="/api")
app.include_router(reports.router, prefix="/api")
