"""Report composer: template splitting, row selection, HTML and table rendering, assembly."""

from __future__ import annotations

from grc_report.composer.assembler import ReportComposer, compose_report
from grc_report.composer.document import OutputDocument
from grc_report.composer.html_layout import PrintLayout, parse_blocks
from grc_report.composer.html_renderer import HTMLBlockRenderer
from grc_report.composer.measure import IBlockMeasurer, ReportLabBlockMeasurer
from grc_report.composer.rows import coerce_rows, gapped_rows, select_table_rows
from grc_report.composer.sanitize import sanitize_block
from grc_report.composer.table_renderer import GapTableRenderer
from grc_report.composer.template import PLACEHOLDER, has_placeholder, split_template

__all__ = [
    "GapTableRenderer",
    "HTMLBlockRenderer",
    "IBlockMeasurer",
    "OutputDocument",
    "PLACEHOLDER",
    "PrintLayout",
    "ReportComposer",
    "ReportLabBlockMeasurer",
    "coerce_rows",
    "compose_report",
    "gapped_rows",
    "has_placeholder",
    "parse_blocks",
    "sanitize_block",
    "select_table_rows",
    "split_template",
]
