"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from reportlab.lib.pagesizes import A4, LETTER

if TYPE_CHECKING:
    from grc_report.core.config import AppSettings, PDFLayoutConfig

log = logging.getLogger(__name__)

PAGE_SIZES: dict[str, tuple[float, float]] = {"a4": A4, "letter": LETTER}


def page_dimensions(config: PDFLayoutConfig) -> tuple[float, float]:
    """Return ``(width, height)`` in points for the configured page size."""
    width, height = PAGE_SIZES[config.page_size]
    return float(width), float(height)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_page_geometry(settings.pdf)
    _check_template_store(settings)


def _check_page_geometry(config: PDFLayoutConfig) -> None:
    """Reject margins that leave no printable area or an HTML container wider than the page."""
    width, height = page_dimensions(config)
    printable_height = height - config.top_margin - config.bottom_margin
    content_width = width - 2 * config.side_margin
    if printable_height <= 0:
        raise ValueError(
            f"GRC_PDF_TOP_MARGIN + GRC_PDF_BOTTOM_MARGIN ({config.top_margin + config.bottom_margin}) "
            f"leave no printable height on a {config.page_size} page ({height}pt)."
        )
    if content_width <= 0:
        raise ValueError(
            f"GRC_PDF_SIDE_MARGIN ({config.side_margin}) leaves no printable width "
            f"on a {config.page_size} page ({width}pt)."
        )
    rendered_width = config.html_container_width * config.html_scale
    if rendered_width > content_width:
        raise ValueError(
            f"HTML container renders {rendered_width:.1f}pt wide but only {content_width:.1f}pt "
            "fit between the side margins. Lower GRC_PDF_HTML_SCALE or GRC_PDF_HTML_CONTAINER_WIDTH."
        )


def _check_template_store(settings: AppSettings) -> None:
    """Warn about file-backed template storage in containerized environments."""
    is_container = bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
    )
    if is_container and settings.templates.backend == "file":
        log.warning(
            "GRC_TEMPLATES_BACKEND=file in a container environment. "
            "Templates will be lost on container restart unless store_path is on a mounted volume."
        )
