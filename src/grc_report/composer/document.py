"""Paginated PDF output document.

Wraps a reportlab ``Canvas`` and exposes a top-down coordinate system: every
``y`` handed in or out of this module is measured in points from the top
edge of the current page. Content can only be added to the last page.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from io import BytesIO

from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Flowable

from grc_report.core.config import PDFLayoutConfig
from grc_report.core.startup_checks import page_dimensions
from grc_report.exceptions import DocumentFinalizedError
from grc_report.models import RenderedBlock

log = logging.getLogger(__name__)

# Float slack when comparing a wrapped height against the space left.
_EPSILON = 1e-6


class OutputDocument:
    """The report under construction. Owned by one composition, then finalized."""

    def __init__(self, config: PDFLayoutConfig, title: str = "Maturity Assessment Report") -> None:
        self._config = config
        self.page_width, self.page_height = page_dimensions(config)
        self._buffer = BytesIO()
        self._canvas = Canvas(self._buffer, pagesize=(self.page_width, self.page_height))
        self._canvas.setTitle(title)
        self._page_count = 1
        self._finalized = False
        self.blocks: list[RenderedBlock] = []
        # (page, y) of the first flowable drawn by the most recent flow() call.
        self.last_flow_start: tuple[int, float] | None = None

    # ── Geometry ─────────────────────────────────────────────────────

    @property
    def top_margin(self) -> float:
        return self._config.top_margin

    @property
    def side_margin(self) -> float:
        return self._config.side_margin

    @property
    def bottom_limit(self) -> float:
        """Lowest writable y on a page."""
        return self.page_height - self._config.bottom_margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self._config.side_margin

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def finalized(self) -> bool:
        return self._finalized

    # ── Mutation ─────────────────────────────────────────────────────

    def add_page(self) -> None:
        """Append a new page; subsequent drawing goes there."""
        self._ensure_open()
        self._canvas.showPage()
        self._page_count += 1
        log.debug(f"Started page {self._page_count}")

    def record(self, block: RenderedBlock) -> None:
        self._ensure_open()
        self.blocks.append(block)

    def flow(
        self,
        flowables: Iterable[Flowable],
        *,
        x: float,
        y: float,
        width: float,
        scale: float = 1.0,
    ) -> float:
        """Lay *flowables* out top-down from *y* and return the y below the last one.

        *width* is the width on the page; flowables are wrapped at
        ``width / scale`` and drawn scaled by *scale*. Flowables that do not fit
        the rest of the page are split when they support it (paragraphs, tables
        with repeated header rows, rows split inside themselves); otherwise they
        move to a new page. A flowable that starts at the top margin and still
        cannot split is drawn anyway and the cursor moves to the bottom limit.
        The page and y of the first drawn flowable land in ``last_flow_start``.
        """
        self._ensure_open()
        pending = list(flowables)
        self.last_flow_start = None
        avail_width = width / scale
        fresh_page = False

        while pending:
            flowable = pending.pop(0)
            space_before = 0.0 if fresh_page else flowable.getSpaceBefore() * scale
            top = y + space_before
            avail_height = (self.bottom_limit - top) / scale

            if avail_height > 0:
                w, h = flowable.wrapOn(self._canvas, avail_width, avail_height)
                if h <= avail_height + _EPSILON:
                    self._draw(flowable, x, top, avail_width - w, h, scale)
                    self._mark_start(top)
                    y = top + (h + flowable.getSpaceAfter()) * scale
                    fresh_page = False
                    continue
                parts = flowable.splitOn(self._canvas, avail_width, avail_height)
                if len(parts) > 1:
                    pending[:0] = parts
                    continue

            if fresh_page or y <= self.top_margin + _EPSILON:
                w, h = flowable.wrapOn(self._canvas, avail_width, avail_height)
                log.warning(
                    f"{type(flowable).__name__} is {h * scale:.0f}pt tall and cannot split; "
                    f"drawing it past the bottom margin of page {self._page_count}"
                )
                self._draw(flowable, x, top, avail_width - w, h, scale)
                self._mark_start(top)
                y = self.bottom_limit
                fresh_page = False
                continue

            self.add_page()
            y = self.top_margin
            fresh_page = True
            pending.insert(0, flowable)

        return y

    def _mark_start(self, top: float) -> None:
        if self.last_flow_start is None:
            self.last_flow_start = (self._page_count, top)

    def finalize(self) -> bytes:
        """Close the last page and return the PDF. No further mutation is allowed."""
        self._ensure_open()
        self._canvas.showPage()
        self._canvas.save()
        self._finalized = True
        log.debug(f"Finalized document with {self._page_count} page(s)")
        return self._buffer.getvalue()

    # ── Internals ────────────────────────────────────────────────────

    def _draw(
        self,
        flowable: Flowable,
        x: float,
        top: float,
        slack_width: float,
        height: float,
        scale: float,
    ) -> None:
        canvas = self._canvas
        canvas.saveState()
        canvas.translate(x, self.page_height - top)
        canvas.scale(scale, scale)
        flowable.drawOn(canvas, 0, -height, _sW=slack_width)
        canvas.restoreState()

    def _ensure_open(self) -> None:
        if self._finalized:
            raise DocumentFinalizedError("Output document is finalized; start a new document")
