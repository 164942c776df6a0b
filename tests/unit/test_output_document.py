"""Tests for OutputDocument pagination and finalization."""

from __future__ import annotations

import pytest
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, Spacer

from grc_report.composer.document import OutputDocument
from grc_report.core.config import PDFLayoutConfig
from grc_report.exceptions import DocumentFinalizedError
from grc_report.models import RenderedBlock


class TestGeometry:
    def test_a4_defaults(self, document: OutputDocument) -> None:
        assert document.page_width == pytest.approx(595.2756, abs=1e-3)
        assert document.page_height == pytest.approx(841.8898, abs=1e-3)
        assert document.top_margin == 40
        assert document.bottom_limit == pytest.approx(document.page_height - 40)
        assert document.content_width == pytest.approx(document.page_width - 40)
        assert document.page_count == 1

    def test_letter(self) -> None:
        doc = OutputDocument(PDFLayoutConfig(page_size="letter"))
        assert (doc.page_width, doc.page_height) == (612.0, 792.0)


class TestFlow:
    def test_returns_y_below_flowable(self, document: OutputDocument) -> None:
        y = document.flow([Spacer(10, 100)], x=20, y=40, width=555)
        assert y == pytest.approx(140)
        assert document.page_count == 1

    def test_scale_applies_to_height(self, document: OutputDocument) -> None:
        y = document.flow([Spacer(10, 100)], x=20, y=40, width=300, scale=0.5)
        assert y == pytest.approx(90)

    def test_unsplittable_flowable_moves_to_new_page(self, document: OutputDocument) -> None:
        y = document.flow([Spacer(10, 100)], x=20, y=750, width=555)
        assert document.page_count == 2
        assert y == pytest.approx(document.top_margin + 100)

    def test_oversized_flowable_drawn_on_fresh_page(self, document: OutputDocument) -> None:
        document.flow([Spacer(10, 10)], x=20, y=40, width=555)
        y = document.flow([Spacer(10, 5000)], x=20, y=60, width=555)
        assert document.page_count == 2
        assert y == pytest.approx(document.bottom_limit)
        assert document.last_flow_start == (2, document.top_margin)

    def test_oversized_flowable_at_top_margin_stays_on_page(self, document: OutputDocument) -> None:
        y = document.flow([Spacer(10, 5000)], x=20, y=40, width=555)
        assert document.page_count == 1
        assert y == pytest.approx(document.bottom_limit)

    def test_last_flow_start_tracks_first_drawn_flowable(self, document: OutputDocument) -> None:
        document.flow([Spacer(10, 50), Spacer(10, 70)], x=20, y=120, width=555)
        assert document.last_flow_start == (1, 120)
        document.flow([Spacer(10, 100)], x=20, y=750, width=555)
        assert document.last_flow_start == (2, document.top_margin)
        document.flow([], x=20, y=200, width=555)
        assert document.last_flow_start is None

    def test_long_paragraph_splits_across_pages(self, document: OutputDocument) -> None:
        style = ParagraphStyle("t", fontName="Times-Roman", fontSize=12, leading=14)
        text = " ".join(["Access reviews are performed quarterly by control owners."] * 300)
        y = document.flow([Paragraph(text, style)], x=20, y=40, width=555)
        assert document.page_count > 1
        assert document.top_margin < y <= document.bottom_limit

    def test_sequential_flowables_stack(self, document: OutputDocument) -> None:
        y = document.flow([Spacer(10, 50), Spacer(10, 70)], x=20, y=40, width=555)
        assert y == pytest.approx(160)


class TestFinalize:
    def test_empty_document_is_one_blank_page(self, document: OutputDocument) -> None:
        pdf = document.finalize()
        assert pdf[:5] == b"%PDF-"
        assert document.finalized
        assert document.page_count == 1
        assert document.blocks == []

    def test_mutation_after_finalize_rejected(self, document: OutputDocument) -> None:
        document.finalize()
        with pytest.raises(DocumentFinalizedError):
            document.add_page()
        with pytest.raises(DocumentFinalizedError):
            document.flow([Spacer(1, 1)], x=0, y=40, width=100)
        with pytest.raises(DocumentFinalizedError):
            document.record(RenderedBlock("html", 1, 40, 1, 50))
        with pytest.raises(DocumentFinalizedError):
            document.finalize()

    def test_added_pages_are_in_output(self, document: OutputDocument) -> None:
        document.add_page()
        document.add_page()
        pdf = document.finalize()
        assert document.page_count == 3
        assert b"/Count 3" in pdf
