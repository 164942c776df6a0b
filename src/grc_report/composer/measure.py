"""Off-surface height measurement of template blocks.

The renderer needs a block's height before it commits the block, so that the
cursor can be advanced (or a page appended) afterwards. Any engine can supply
that as long as it measures with the same fonts and width that the committing
renderer uses.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from grc_report.composer.html_layout import PrintLayout

# Measurement is never paginated.
_UNBOUNDED_HEIGHT = 1.0e7


@runtime_checkable
class IBlockMeasurer(Protocol):
    """Protocol for block measurers (reportlab, headless browser, fakes)."""

    def measure(self, markup: str) -> float:
        """Rendered height of *markup* in page units (points)."""
        ...


class ReportLabBlockMeasurer:
    """Measures a block by laying out its own copy of the flowables."""

    def __init__(self, layout: PrintLayout) -> None:
        self._layout = layout

    def measure(self, markup: str) -> float:
        height = 0.0
        for flowable in self._layout.flowables(markup):
            _, h = flowable.wrap(self._layout.width, _UNBOUNDED_HEIGHT)
            height += flowable.getSpaceBefore() + h + flowable.getSpaceAfter()
        return height * self._layout.scale
