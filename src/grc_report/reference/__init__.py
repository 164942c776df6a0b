"""Static maturity scale reference data."""

from __future__ import annotations

from grc_report.reference.maturity_levels import (
    MATURITY_LEVELS,
    find_level,
    level_label,
    maturity_scores,
    rows_from_items,
)

__all__ = [
    "MATURITY_LEVELS",
    "find_level",
    "level_label",
    "maturity_scores",
    "rows_from_items",
]
