"""Shared fixtures for grc-report tests."""

from __future__ import annotations

import logging
import os

import pytest

from grc_report.composer.document import OutputDocument
from grc_report.core.config import PDFLayoutConfig
from grc_report.models import AssessmentRow


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging replaces the root handlers; put the originals back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer GRC_* variables out of settings under test."""
    for name in list(os.environ):
        if name.startswith("GRC_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def layout_config() -> PDFLayoutConfig:
    """Default A4 layout: margins 40/40/20, 800-unit container at 0.6."""
    return PDFLayoutConfig()


@pytest.fixture
def document(layout_config: PDFLayoutConfig) -> OutputDocument:
    return OutputDocument(layout_config)


@pytest.fixture
def sample_rows() -> list[AssessmentRow]:
    """Three ISO 27001 rows; the first and third are gapped."""
    return [
        AssessmentRow(
            "Organizational",
            "5.1 Policies for information security",
            "A.5.1",
            "Are information security policies defined and approved by management?",
            "1 - Yes, but ad hoc",
            "3 - Yes, Consistent but no metrics",
            "Draft policy awaiting sign-off",
        ),
        AssessmentRow(
            "Organizational",
            "5.2 Information security roles",
            "A.5.2",
            "Are information security roles and responsibilities defined?",
            "3 - Yes, Consistent but no metrics",
            "3 - Yes, Consistent but no metrics",
            "",
        ),
        AssessmentRow(
            "Technological",
            "8.5 Secure authentication",
            "A.8.5",
            "Is multi-factor authentication enforced for privileged access?",
            "0 - No",
            "4 - Yes, measured & managed",
            "MFA only on VPN",
        ),
    ]
