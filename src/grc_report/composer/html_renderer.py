"""Render one template block into the output document."""

from __future__ import annotations

import logging

from grc_report.composer.document import OutputDocument
from grc_report.composer.html_layout import PrintLayout
from grc_report.composer.measure import IBlockMeasurer, ReportLabBlockMeasurer
from grc_report.composer.sanitize import sanitize_block
from grc_report.core.config import PDFLayoutConfig
from grc_report.exceptions import GRCReportError, RenderError
from grc_report.models import RenderCursor, RenderedBlock

log = logging.getLogger(__name__)

_EXCERPT_CHARS = 60


class HTMLBlockRenderer:
    """Sanitizes, measures and commits template HTML at the cursor.

    The block is drawn at the side margin and may flow over several pages.
    The returned cursor is ``y + measured height + block_gap``; when that
    falls below the bottom margin a page is appended and the cursor moves to
    the top margin of the new page.
    """

    def __init__(
        self,
        document: OutputDocument,
        config: PDFLayoutConfig,
        layout: PrintLayout | None = None,
        measurer: IBlockMeasurer | None = None,
    ) -> None:
        self._document = document
        self._config = config
        self._layout = layout or PrintLayout(
            config,
            max_image_height=(document.bottom_limit - document.top_margin) / config.html_scale,
        )
        self._measurer = measurer or ReportLabBlockMeasurer(self._layout)

    def render(self, text: str, cursor: RenderCursor) -> RenderCursor:
        if not text or not text.strip():
            return cursor
        markup = sanitize_block(text)
        if not markup:
            return cursor

        document = self._document
        try:
            measured = self._measurer.measure(markup)
            end_y = document.flow(
                self._layout.flowables(markup),
                x=self._config.side_margin,
                y=cursor.y,
                width=self._layout.rendered_width,
                scale=self._layout.scale,
            )
        except GRCReportError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to render template block: {exc}", stage="html") from exc

        start_page, start_y = document.last_flow_start or (cursor.page, cursor.y)
        document.record(
            RenderedBlock(
                kind="html",
                start_page=start_page,
                start_y=start_y,
                end_page=document.page_count,
                end_y=end_y,
                excerpt=markup[:_EXCERPT_CHARS],
            )
        )

        next_y = cursor.y + measured + self._config.block_gap
        if next_y > document.bottom_limit:
            document.add_page()
            next_y = document.top_margin
        log.debug(
            f"Rendered template block ({measured:.1f}pt) from y={cursor.y:.1f}; "
            f"cursor now y={next_y:.1f} on page {document.page_count}"
        )
        return RenderCursor(y=next_y, page=document.page_count)
