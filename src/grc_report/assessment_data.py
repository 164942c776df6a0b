"""Loading assessment input for the API and CLI.

Accepts either positional rows (seven-field arrays, in gap table column
order) or questionnaire items (objects with level values, snake_case or
camelCase keys). Items are converted with level labels substituted, which is
how the assessment pages build the table rows.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from grc_report.exceptions import AssessmentDataError
from grc_report.models import AssessmentItem, AssessmentRow
from grc_report.reference.maturity_levels import rows_from_items


def _entries(data: Any, source: str) -> list[Any]:
    """Unwrap a top-level ``rows`` or ``items`` object into its list."""
    if isinstance(data, dict):
        if "rows" in data:
            data = data["rows"]
        elif "items" in data:
            data = data["items"]
        else:
            raise AssessmentDataError("Expected a list of rows or an object with 'rows'", source=source)

    if not isinstance(data, list):
        raise AssessmentDataError(f"Expected a list of rows, got {type(data).__name__}", source=source)
    return data


def load_rows(data: Any, source: str = "") -> list[AssessmentRow]:
    """Convert decoded JSON into table rows.

    A top-level object with a ``rows`` or ``items`` key is unwrapped first.
    Short positional rows are padded rather than rejected.
    """
    rows: list[AssessmentRow] = []
    for index, entry in enumerate(_entries(data, source)):
        if isinstance(entry, dict):
            rows.extend(rows_from_items([AssessmentItem.from_dict(entry)]))
        elif isinstance(entry, Sequence) and not isinstance(entry, (str, bytes)):
            rows.append(AssessmentRow.from_values(entry))
        else:
            raise AssessmentDataError(
                f"Row {index} is a {type(entry).__name__}; expected an array or an object",
                source=source,
            )
    return rows


def load_items(data: Any, source: str = "") -> list[AssessmentItem]:
    """Convert decoded JSON into questionnaire items.

    Positional rows carry display labels rather than level values, so only
    objects are accepted here.
    """
    items: list[AssessmentItem] = []
    for index, entry in enumerate(_entries(data, source)):
        if not isinstance(entry, dict):
            raise AssessmentDataError(
                f"Item {index} is a {type(entry).__name__}; expected an object with level values",
                source=source,
            )
        items.append(AssessmentItem.from_dict(entry))
    return items


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise AssessmentDataError(f"Cannot read {path}: {exc}", source=str(path)) from exc
    except json.JSONDecodeError as exc:
        raise AssessmentDataError(f"{path} is not valid JSON: {exc}", source=str(path)) from exc


def load_rows_file(path: Path) -> list[AssessmentRow]:
    """Read a JSON file of rows or items."""
    return load_rows(_read_json(path), source=str(path))


def load_items_file(path: Path) -> list[AssessmentItem]:
    return load_items(_read_json(path), source=str(path))
