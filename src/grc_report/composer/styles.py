"""Centralized style constants for the gap table."""

from __future__ import annotations

# Kept as plain hex so the renderer can convert to whatever color object
# the rendering library requires (e.g. reportlab HexColor).

HEADER_BG_COLOR = "#2980B9"
HEADER_TEXT_COLOR = "#FFFFFF"
GRID_LINE_COLOR = "#808080"
BODY_TEXT_COLOR = "#000000"

GAP_TABLE_HEADERS: list[str] = [
    "Category",
    "Section",
    "Standard Ref",
    "Assessment Question",
    "Current Maturity Level",
    "Target Maturity Level",
    "Current Comments",
]

# Fractions of the content width; the question column gets the most room.
GAP_TABLE_COLUMN_WEIGHTS: list[float] = [0.12, 0.13, 0.09, 0.27, 0.13, 0.13, 0.13]

# Columns tinted with the maturity level color.
LEVEL_COLUMNS: tuple[int, int] = (4, 5)
