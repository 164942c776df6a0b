"""Nested pydantic-settings configuration for the application.

Each group reads its own ``GRC_<GROUP>_*`` env vars and ``AppSettings``
aggregates them, so both ``AppSettings().pdf.page_size`` and
``GRC_PDF_PAGE_SIZE=letter`` work.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class PDFLayoutConfig(BaseSettings):
    """Page geometry and typography of the maturity assessment report.

    Margins, gaps and the table font are in points. The HTML font sizes are
    layout units of the fixed-width print container and are multiplied by
    ``html_scale`` when drawn.

    Env vars use ``GRC_PDF_`` prefix::

        export GRC_PDF_PAGE_SIZE=letter
        export GRC_PDF_HTML_SCALE=0.7
        export GRC_PDF_IMAGE_ROOT=/srv/grc/template-assets
    """

    model_config = {"env_prefix": "GRC_PDF_"}

    page_size: Literal["a4", "letter"] = "a4"
    top_margin: float = Field(default=40.0, ge=0.0, le=300.0)
    bottom_margin: float = Field(default=40.0, ge=0.0, le=300.0)
    side_margin: float = Field(default=20.0, ge=0.0, le=300.0)

    html_container_width: float = Field(default=800.0, gt=0.0)
    html_scale: float = Field(default=0.6, gt=0.0, le=2.0)
    block_gap: float = Field(default=10.0, ge=0.0)
    table_gap: float = Field(default=24.0, ge=0.0)

    font_family: Literal["Times", "Helvetica", "Courier"] = "Times"
    body_font_size: float = Field(default=15.0, ge=4.0, le=96.0)
    title_font_size: float = Field(default=29.0, ge=4.0, le=96.0)
    heading_font_size: float = Field(default=19.0, ge=4.0, le=96.0)
    line_height: float = Field(default=1.5, ge=1.0, le=3.0)

    table_font_size: float = Field(default=10.0, ge=4.0, le=72.0)
    table_cell_padding: float = Field(default=2.0, ge=0.0, le=24.0)

    # Directory local <img src> paths may be read from. Unset: data URIs only.
    image_root: Path | None = None

    output_filename: str = "Maturity-Assessment-Report.pdf"


class TemplateStoreConfig(BaseSettings):
    """Per-organization report template storage.

    Env vars use ``GRC_TEMPLATES_`` prefix.
    """

    model_config = {"env_prefix": "GRC_TEMPLATES_"}

    backend: Literal["file", "memory"] = "file"
    store_path: Path = Path("./report_templates")


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``GRC_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "GRC_OBSERVABILITY_"}

    service_name: str = "grc-report"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP surface configuration.

    Env vars use ``GRC_API_`` prefix.
    """

    model_config = {"env_prefix": "GRC_API_"}

    title: str = "GRC Report API"
    description: str = "Maturity assessment report generation and template management"
    port: int = 8080


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs.

    Each sub-config reads its own ``GRC_<GROUP>_*`` env vars.
    """

    pdf: PDFLayoutConfig = Field(default_factory=PDFLayoutConfig)
    templates: TemplateStoreConfig = Field(default_factory=TemplateStoreConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
