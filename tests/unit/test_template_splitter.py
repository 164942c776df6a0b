"""Tests for splitting templates around the table placeholder."""

from __future__ import annotations

import pytest

from grc_report.composer.template import PLACEHOLDER, has_placeholder, split_template


class TestSplitTemplate:
    @pytest.mark.parametrize(
        "template",
        [
            "<p>Intro</p>{{GAP_ASSESSMENT_TABLE}}<p>Outro</p>",
            "{{GAP_ASSESSMENT_TABLE}}",
            "{{GAP_ASSESSMENT_TABLE}}<p>only after</p>",
            "<p>only before</p>{{GAP_ASSESSMENT_TABLE}}",
        ],
    )
    def test_reassembles_to_template(self, template: str) -> None:
        segments = split_template(template)
        assert segments.has_placeholder
        assert segments.before + PLACEHOLDER + segments.after == template

    def test_missing_placeholder_keeps_whole_template_before(self) -> None:
        segments = split_template("<p>No table here</p>")
        assert segments.before == "<p>No table here</p>"
        assert segments.after == ""
        assert not segments.has_placeholder

    def test_only_first_occurrence_splits(self) -> None:
        template = "<p>A</p>{{GAP_ASSESSMENT_TABLE}}<p>B</p>{{GAP_ASSESSMENT_TABLE}}<p>C</p>"
        segments = split_template(template)
        assert segments.before == "<p>A</p>"
        assert segments.after == "<p>B</p>{{GAP_ASSESSMENT_TABLE}}<p>C</p>"

    def test_empty_template(self) -> None:
        segments = split_template("")
        assert segments.before == ""
        assert segments.after == ""
        assert not segments.has_placeholder

    def test_custom_placeholder(self) -> None:
        segments = split_template("x[[T]]y", placeholder="[[T]]")
        assert (segments.before, segments.after) == ("x", "y")


def test_has_placeholder() -> None:
    assert has_placeholder("a {{GAP_ASSESSMENT_TABLE}} b")
    assert not has_placeholder("a {{GAP_TABLE}} b")
