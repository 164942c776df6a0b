"""Split a report template around the gap table placeholder."""

from __future__ import annotations

from grc_report.models import TemplateSegments

PLACEHOLDER = "{{GAP_ASSESSMENT_TABLE}}"


def split_template(template: str, placeholder: str = PLACEHOLDER) -> TemplateSegments:
    """Split *template* at the first occurrence of *placeholder*.

    Later occurrences stay in ``after`` as literal text. Without a placeholder
    the whole template is ``before`` and the table is appended after it.
    """
    head, found, tail = template.partition(placeholder)
    if not found:
        return TemplateSegments(before=template, after="", has_placeholder=False)
    return TemplateSegments(before=head, after=tail, has_placeholder=True)


def has_placeholder(template: str, placeholder: str = PLACEHOLDER) -> bool:
    return placeholder in template
