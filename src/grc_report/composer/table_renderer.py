"""Render the gap assessment table into the output document."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors as rl_colors
from reportlab.lib.colors import HexColor
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Table, TableStyle

from grc_report.composer.document import OutputDocument
from grc_report.composer.html_layout import font_faces
from grc_report.composer.sanitize import replace_missing_glyphs
from grc_report.composer.styles import (
    BODY_TEXT_COLOR,
    GAP_TABLE_COLUMN_WEIGHTS,
    GAP_TABLE_HEADERS,
    GRID_LINE_COLOR,
    HEADER_BG_COLOR,
    HEADER_TEXT_COLOR,
    LEVEL_COLUMNS,
)
from grc_report.core.config import PDFLayoutConfig
from grc_report.exceptions import GRCReportError, RenderError
from grc_report.models import AssessmentRow, RenderCursor, RenderedBlock
from grc_report.reference.maturity_levels import find_level

log = logging.getLogger(__name__)


def _hex(color_str: str) -> HexColor:
    return HexColor(color_str)


class GapTableRenderer:
    """Draws assessment rows as a grid table starting exactly at the cursor.

    Page breaks inside the table are left to reportlab's ``Table.split``,
    which repeats the header row on every continuation page. The returned
    cursor is the y below the last row plus ``table_gap``.
    """

    def __init__(self, document: OutputDocument, config: PDFLayoutConfig) -> None:
        self._document = document
        self._config = config
        self._styles = self._build_styles()

    def render(self, rows: Sequence[AssessmentRow], cursor: RenderCursor) -> RenderCursor:
        if not rows:
            return cursor

        document = self._document
        try:
            table = self._build_table(rows)
            final_y = document.flow(
                [table],
                x=self._config.side_margin,
                y=cursor.y,
                width=document.content_width,
            )
        except GRCReportError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to render gap table: {exc}", stage="table") from exc

        start_page, start_y = document.last_flow_start or (cursor.page, cursor.y)
        document.record(
            RenderedBlock(
                kind="table",
                start_page=start_page,
                start_y=start_y,
                end_page=document.page_count,
                end_y=final_y,
                row_count=len(rows),
            )
        )
        log.debug(f"Rendered gap table with {len(rows)} row(s), ending at y={final_y:.1f}")
        return RenderCursor(y=final_y + self._config.table_gap, page=document.page_count)

    # ── Table construction ───────────────────────────────────────────

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        regular, bold, _ = font_faces(self._config.font_family)
        size = self._config.table_font_size
        return {
            "header": ParagraphStyle(
                "gap_table_header",
                fontName=bold,
                fontSize=size,
                leading=size * 1.15,
                textColor=_hex(HEADER_TEXT_COLOR),
            ),
            "cell": ParagraphStyle(
                "gap_table_cell",
                fontName=regular,
                fontSize=size,
                leading=size * 1.15,
                textColor=_hex(BODY_TEXT_COLOR),
            ),
        }

    def _cell(self, text: str, style: str) -> list[Paragraph]:
        # Cells hold a flowable list so a row taller than a page can split inside itself.
        return [Paragraph(escape(replace_missing_glyphs(text)), self._styles[style])]

    def _build_table(self, rows: Sequence[AssessmentRow]) -> Table:
        header = [self._cell(h, "header") for h in GAP_TABLE_HEADERS]
        body = [[self._cell(value, "cell") for value in row.as_cells()] for row in rows]
        width = self._document.content_width
        col_widths = [width * weight for weight in GAP_TABLE_COLUMN_WEIGHTS]
        padding = self._config.table_cell_padding

        commands: list[tuple] = [
            ("BACKGROUND", (0, 0), (-1, 0), _hex(HEADER_BG_COLOR)),
            ("GRID", (0, 0), (-1, -1), 0.5, _hex(GRID_LINE_COLOR)),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), padding),
            ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
            ("LEFTPADDING", (0, 0), (-1, -1), padding),
            ("RIGHTPADDING", (0, 0), (-1, -1), padding),
            ("BACKGROUND", (0, 1), (-1, -1), rl_colors.white),
        ]
        for row_index, row in enumerate(rows, start=1):
            cells = row.as_cells()
            for col in LEVEL_COLUMNS:
                level = find_level(cells[col])
                if level is not None:
                    commands.append(("BACKGROUND", (col, row_index), (col, row_index), _hex(level.color)))

        table = Table([header, *body], colWidths=col_widths, repeatRows=1, splitInRow=1)
        table.setStyle(TableStyle(commands))
        return table
