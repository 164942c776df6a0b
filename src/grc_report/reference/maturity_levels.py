"""Maturity scale used by the ISO 27001 and PCI DSS gap assessments."""

from __future__ import annotations

from collections.abc import Iterable

from grc_report.models import AssessmentItem, AssessmentRow, MaturityLevel, MaturityScores

# Tint colors are plain hex so the table renderer can convert them to
# whatever color object the rendering library requires.

MATURITY_LEVELS: list[MaturityLevel] = [
    MaturityLevel(
        value="0",
        label="0 - No",
        score=0,
        description="Organization does not perform the security practice.",
        color="#FFCCCB",
    ),
    MaturityLevel(
        value="1",
        label="1 - Yes, but ad hoc",
        score=1,
        description=(
            "Policies, procedures, and strategies are not formalized; activities are "
            "performed in an ad-hoc, reactive manner."
        ),
        color="#FFE5B4",
    ),
    MaturityLevel(
        value="2",
        label="2 - Yes, documented but inconsistent",
        score=2,
        description=(
            "Policies, procedures, and strategies are formalized and documented but not "
            "consistently implemented."
        ),
        color="#FFFFC7",
    ),
    MaturityLevel(
        value="3",
        label="3 - Yes, Consistent but no metrics",
        score=3,
        description=(
            "Policies, procedures, and strategies are consistently implemented, but "
            "quantitative and qualitative effectiveness measures are lacking."
        ),
        color="#C7E0FF",
    ),
    MaturityLevel(
        value="4",
        label="4 - Yes, measured & managed",
        score=4,
        description=(
            "Quantitative and qualitative measures on the effectiveness of policies, "
            "procedures, and strategies are collected across the organization and used "
            "to assess them and make necessary changes."
        ),
        color="#C7FFDC",
    ),
    MaturityLevel(
        value="5",
        label="5 - Yes, Optimizing & continually improved",
        score=5,
        description=(
            "Policies, procedures, and strategies are fully institutionalized, repeatable, "
            "self-generating, and regularly updated based on a changing threat and "
            "technology landscape and business/mission needs."
        ),
        color="#E5C7FF",
    ),
    MaturityLevel(
        value="NA",
        label="NA - Not Applicable",
        score=0,
        description="The requirement is not applicable to the organization.",
        color="#F0F0F0",
    ),
]

_BY_VALUE = {level.value: level for level in MATURITY_LEVELS}
_BY_LABEL = {level.label.casefold(): level for level in MATURITY_LEVELS}


def find_level(value_or_label: str) -> MaturityLevel | None:
    """Look a level up by its value (``"3"``) or its display label."""
    key = value_or_label.strip()
    if key in _BY_VALUE:
        return _BY_VALUE[key]
    return _BY_LABEL.get(key.casefold())


def level_label(value: str) -> str:
    """Display label for a level value, or the raw value when it is unknown."""
    level = _BY_VALUE.get(value)
    return level.label if level else value


def rows_from_items(items: Iterable[AssessmentItem]) -> list[AssessmentRow]:
    """Map questionnaire entries to gap table rows, substituting level labels."""
    return [
        AssessmentRow(
            category=item.category,
            section=item.section,
            standard_ref=item.standard_ref,
            question=item.question,
            current_level=level_label(item.current_maturity_level),
            target_level=level_label(item.target_maturity_level),
            current_comments=item.current_comments,
        )
        for item in items
    ]


def maturity_scores(items: Iterable[AssessmentItem]) -> MaturityScores:
    """Average current and target scores; unknown levels score 0."""
    items = list(items)
    if not items:
        return MaturityScores(current=0.0, target=0.0)

    def score(value: str) -> int:
        level = _BY_VALUE.get(value)
        return level.score if level else 0

    current = sum(score(i.current_maturity_level) for i in items) / len(items)
    target = sum(score(i.target_maturity_level) for i in items) / len(items)
    return MaturityScores(current=round(current, 2), target=round(target, 2))
