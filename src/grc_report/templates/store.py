"""Per-organization report templates on top of a persistence backend."""

from __future__ import annotations

import logging
import re

from grc_report.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)

TEMPLATE_KEY_PREFIX = "gap_assessment_template"

DEFAULT_TEMPLATE = """
<h2>Suggested Bridging Options</h2>
<p>Recommend actionable strategies to bridge the identified gaps, including process improvements, tool enhancements, training programs, and resource allocation.</p>
{{GAP_ASSESSMENT_TABLE}}
<h2>Summary and Next Steps</h2>
<p>Summarize the key findings from the gap analysis. Outline the next steps to be taken, including timelines for implementation, responsible parties, and any follow-up assessments required to measure progress.</p>
""".strip()

_DIV_TAG = re.compile(r"<(/?)div\b[^>]*>", re.IGNORECASE)


def unwrap_editor_markup(template: str) -> str:
    """Drop the outer ``<div>`` the rich-text editor wraps its content in.

    Only a single div enclosing the whole template is removed: the div
    opening at the start must be the one that closes at the very end.
    Anything else, such as ``<div>a</div><p>b</p>``, is returned unchanged.
    """
    stripped = template.strip()
    opening = _DIV_TAG.match(stripped)
    if opening is None or opening.group(1):
        return template
    depth = 0
    for tag in _DIV_TAG.finditer(stripped):
        depth += -1 if tag.group(1) else 1
        if depth == 0:
            if tag.end() != len(stripped):
                return template
            inner = stripped[opening.end():tag.start()]
            return inner if inner.strip() else template
    return template


class TemplateStore:
    """Reads and writes report templates keyed by organization id.

    The store never edits template content beyond removing the editor
    wrapper. A template without the table placeholder is stored as is; the
    composer appends the table after it.
    """

    def __init__(self, backend: IPersistenceBackend, default_template: str = DEFAULT_TEMPLATE) -> None:
        self._backend = backend
        self._default = default_template

    @property
    def default_template(self) -> str:
        return self._default

    @staticmethod
    def key_for(org_id: str) -> str:
        org_id = org_id.strip()
        if not org_id:
            raise KeyError("Organization id is required")
        return f"{TEMPLATE_KEY_PREFIX}/{org_id}"

    def get(self, org_id: str | None) -> str:
        """The organization's template, or the built-in default."""
        if not org_id or not org_id.strip():
            return self._default
        try:
            return self.get_stored(org_id)
        except KeyError:
            return self._default

    def get_stored(self, org_id: str) -> str:
        """The organization's stored template. Raises KeyError if it has none."""
        return self._backend.load(self.key_for(org_id))

    def save(self, org_id: str, template: str) -> str:
        """Store *template* for the organization and return what was stored."""
        content = unwrap_editor_markup(template)
        if content is not template:
            log.info(f"Removed editor wrapper from template for organization {org_id}")
        self._backend.save(self.key_for(org_id), content)
        return content

    def delete(self, org_id: str) -> None:
        self._backend.delete(self.key_for(org_id))

    def is_custom(self, org_id: str) -> bool:
        return self._backend.exists(self.key_for(org_id))

    def organizations(self) -> list[str]:
        prefix = f"{TEMPLATE_KEY_PREFIX}/"
        return [key[len(prefix):] for key in self._backend.list_keys(prefix)]
