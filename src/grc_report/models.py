"""Domain models for maturity assessment reports.

Plain dataclasses, like the rest of the domain layer. Pydantic is reserved for
configuration and the HTTP request/response schemas.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

# ── Assessment rows ──────────────────────────────────────────────────

ROW_FIELD_COUNT = 7
CURRENT_LEVEL_INDEX = 4
TARGET_LEVEL_INDEX = 5


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class AssessmentRow:
    """One line of the gap table.

    Fields are positional in the source data: index 4 is the current level
    label and index 5 the target level label.
    """

    category: str = ""
    section: str = ""
    standard_ref: str = ""
    question: str = ""
    current_level: str = ""
    target_level: str = ""
    current_comments: str = ""

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> AssessmentRow:
        """Build a row from a positional sequence.

        Missing trailing fields become empty strings and extra fields are
        ignored, so malformed rows never raise.
        """
        cells = [_cell(v) for v in list(values)[:ROW_FIELD_COUNT]]
        cells.extend([""] * (ROW_FIELD_COUNT - len(cells)))
        return cls(*cells)

    @property
    def is_gapped(self) -> bool:
        return self.current_level != self.target_level

    def as_cells(self) -> list[str]:
        return [
            self.category,
            self.section,
            self.standard_ref,
            self.question,
            self.current_level,
            self.target_level,
            self.current_comments,
        ]


# ── Maturity reference data ──────────────────────────────────────────


@dataclass(frozen=True)
class MaturityLevel:
    """A selectable maturity level on the assessment scale."""

    value: str
    label: str
    score: int
    description: str
    color: str


@dataclass
class AssessmentItem:
    """A questionnaire entry with the organization's current and target levels."""

    category: str
    section: str
    standard_ref: str
    question: str
    current_maturity_level: str = ""
    target_maturity_level: str = ""
    current_comments: str = ""
    target_comments: str = ""
    id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssessmentItem:
        """Accept both snake_case keys and the camelCase keys of the web client."""

        def pick(snake: str, camel: str) -> str:
            return _cell(data.get(snake, data.get(camel, "")))

        return cls(
            category=pick("category", "category"),
            section=pick("section", "section"),
            standard_ref=pick("standard_ref", "standardRef"),
            question=pick("question", "question"),
            current_maturity_level=pick("current_maturity_level", "currentMaturityLevel"),
            target_maturity_level=pick("target_maturity_level", "targetMaturityLevel"),
            current_comments=pick("current_comments", "currentComments"),
            target_comments=pick("target_comments", "targetComments"),
            id=data.get("id"),
        )


@dataclass(frozen=True)
class MaturityScores:
    """Average scores across an assessment."""

    current: float
    target: float

    @property
    def gap(self) -> float:
        return round(self.target - self.current, 2)


# ── Composition ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class TemplateSegments:
    """A report template split around the table placeholder."""

    before: str
    after: str
    has_placeholder: bool


@dataclass(frozen=True)
class RenderCursor:
    """Next writable position: ``y`` points below the top edge of ``page``."""

    y: float
    page: int = 1


@dataclass(frozen=True)
class RenderedBlock:
    """A content block committed to the output document."""

    kind: Literal["html", "table"]
    start_page: int
    start_y: float
    end_page: int
    end_y: float
    excerpt: str = ""
    row_count: int = 0


@dataclass
class ComposedReport:
    """Result of a finished report composition."""

    pdf: bytes
    filename: str
    page_count: int
    blocks: list[RenderedBlock] = field(default_factory=list)
    table_rows: list[AssessmentRow] = field(default_factory=list)
    has_placeholder: bool = False
    used_fallback_rows: bool = False

    @property
    def content_type(self) -> str:
        return "application/pdf"


# ── Run tracking ─────────────────────────────────────────────────────


@dataclass
class StageMetrics:
    """Timing of one assembler stage."""

    stage: str
    started_at: datetime | None = None
    ended_at: datetime | None = None
    duration_ms: float = 0.0
    status: Literal["ok", "skipped", "failed"] = "ok"


@dataclass
class ReportRun:
    """Analytics for a single report composition."""

    run_id: str
    organization_id: str = ""
    started_at: datetime | None = None
    ended_at: datetime | None = None
    status: Literal["running", "completed", "failed"] = "running"
    stages: list[StageMetrics] = field(default_factory=list)
    total_duration_ms: float = 0.0

    def finalize(self, status: Literal["completed", "failed"] = "completed") -> None:
        """Stamp the end time and total duration."""
        self.ended_at = datetime.now(timezone.utc)
        if self.started_at:
            self.total_duration_ms = (self.ended_at - self.started_at).total_seconds() * 1000
        self.status = status

    def stage_names(self) -> list[str]:
        return [s.stage for s in self.stages]
