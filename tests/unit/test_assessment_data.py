"""Tests for loading assessment rows from JSON input."""

from __future__ import annotations

import json

import pytest

from grc_report.assessment_data import load_items, load_items_file, load_rows, load_rows_file
from grc_report.exceptions import AssessmentDataError


class TestLoadRows:
    def test_positional_rows(self) -> None:
        (row,) = load_rows([["Cat", "Sec", "A.5.1", "Q?", "1 - Yes, but ad hoc", "3 - Yes, Consistent but no metrics", ""]])
        assert row.standard_ref == "A.5.1"
        assert row.is_gapped

    def test_items_get_level_labels(self) -> None:
        (row,) = load_rows(
            [{"category": "Cat", "section": "S", "standardRef": "A.8.5", "question": "Q?",
              "currentMaturityLevel": "0", "targetMaturityLevel": "4"}]
        )
        assert row.current_level == "0 - No"
        assert row.target_level == "4 - Yes, measured & managed"

    def test_wrapped_object(self) -> None:
        assert len(load_rows({"rows": [["a"], ["b"]]})) == 2
        assert len(load_rows({"items": [{"category": "x"}]})) == 1

    def test_mixed_entries(self) -> None:
        rows = load_rows([["a", "b"], {"category": "c"}])
        assert [r.category for r in rows] == ["a", "c"]

    @pytest.mark.parametrize("data", ["rows", 42, {"data": []}, [1, 2], ["not a row"]])
    def test_rejects_malformed_input(self, data) -> None:
        with pytest.raises(AssessmentDataError):
            load_rows(data, source="test")


class TestLoadRowsFile:
    def test_reads_json_file(self, tmp_path) -> None:
        path = tmp_path / "rows.json"
        path.write_text(json.dumps([["Cat", "S", "R", "Q", "1", "2", ""]]), encoding="utf-8")
        (row,) = load_rows_file(path)
        assert row.target_level == "2"

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "rows.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(AssessmentDataError) as excinfo:
            load_rows_file(path)
        assert excinfo.value.source == str(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(AssessmentDataError):
            load_rows_file(tmp_path / "missing.json")


class TestLoadItems:
    def test_keeps_level_values(self, tmp_path) -> None:
        path = tmp_path / "items.json"
        path.write_text(
            json.dumps({"items": [{"question": "MFA?", "currentMaturityLevel": "1", "targetMaturityLevel": "4"}]}),
            encoding="utf-8",
        )
        (item,) = load_items_file(path)
        assert (item.current_maturity_level, item.target_maturity_level) == ("1", "4")

    def test_positional_rows_rejected(self) -> None:
        with pytest.raises(AssessmentDataError, match="Item 0"):
            load_items([["a", "b", "c", "d", "1", "2", ""]])
