"""Select the assessment rows that go into the gap table."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from grc_report.models import AssessmentRow


def coerce_rows(rows: Iterable[AssessmentRow | Sequence[Any]]) -> list[AssessmentRow]:
    """Normalize positional sequences to ``AssessmentRow`` without validating them."""
    return [r if isinstance(r, AssessmentRow) else AssessmentRow.from_values(r) for r in rows]


def gapped_rows(rows: Iterable[AssessmentRow]) -> list[AssessmentRow]:
    """Rows whose current level label differs from the target, in input order."""
    return [row for row in rows if row.is_gapped]


def select_table_rows(rows: Sequence[AssessmentRow]) -> tuple[list[AssessmentRow], bool]:
    """Rows to render and whether the no-gap fallback was used.

    A fully compliant assessment has no gapped rows; the whole row set is
    rendered instead so the report never carries an empty table section.
    """
    gapped = gapped_rows(rows)
    if gapped:
        return gapped, False
    return list(rows), bool(rows)
