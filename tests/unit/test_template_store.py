"""Tests for per-organization template storage."""

from __future__ import annotations

import pytest

from grc_report.composer.template import PLACEHOLDER
from grc_report.core.config import TemplateStoreConfig
from grc_report.persistence import FilePersistenceBackend, MemoryPersistenceBackend
from grc_report.templates import (
    DEFAULT_TEMPLATE,
    TemplateStore,
    create_template_store,
    unwrap_editor_markup,
)
from tests.fakes.fake_persistence import FakePersistenceBackend


@pytest.fixture
def backend() -> FakePersistenceBackend:
    return FakePersistenceBackend()


@pytest.fixture
def store(backend: FakePersistenceBackend) -> TemplateStore:
    return TemplateStore(backend)


class TestDefaultTemplate:
    def test_has_single_placeholder(self) -> None:
        assert DEFAULT_TEMPLATE.count(PLACEHOLDER) == 1
        assert "Suggested Bridging Options" in DEFAULT_TEMPLATE
        assert "Summary and Next Steps" in DEFAULT_TEMPLATE

    def test_unknown_org_gets_default(self, store: TemplateStore) -> None:
        assert store.get("org-unknown") == DEFAULT_TEMPLATE
        assert store.get(None) == DEFAULT_TEMPLATE
        assert store.get("  ") == DEFAULT_TEMPLATE
        assert not store.is_custom("org-unknown")


class TestSaveAndLoad:
    def test_round_trip(self, store: TemplateStore, backend: FakePersistenceBackend) -> None:
        template = f"<h1>Acme ISMS</h1>{PLACEHOLDER}<p>Next steps</p>"
        store.save("org-1", template)
        assert store.get("org-1") == template
        assert store.get_stored("org-1") == template
        assert store.is_custom("org-1")
        assert backend.list_keys() == ["gap_assessment_template/org-1"]

    def test_get_stored_raises_for_unknown_org(self, store: TemplateStore) -> None:
        with pytest.raises(KeyError):
            store.get_stored("org-2")

    def test_blank_org_id_rejected(self, store: TemplateStore) -> None:
        with pytest.raises(KeyError):
            store.save("", "<p>x</p>")

    def test_template_without_placeholder_stored_unchanged(self, store: TemplateStore) -> None:
        store.save("org-1", "<p>No table marker</p>")
        assert store.get("org-1") == "<p>No table marker</p>"

    def test_editor_wrapper_removed_on_save(self, store: TemplateStore) -> None:
        stored = store.save("org-1", f'<div class="ProseMirror"><p>Intro</p>{PLACEHOLDER}</div>')
        assert stored == f"<p>Intro</p>{PLACEHOLDER}"
        assert store.get("org-1") == stored

    def test_delete(self, store: TemplateStore) -> None:
        store.save("org-1", "<p>x</p>")
        store.delete("org-1")
        assert not store.is_custom("org-1")
        assert store.get("org-1") == DEFAULT_TEMPLATE

    def test_organizations(self, store: TemplateStore) -> None:
        store.save("org-b", "<p>b</p>")
        store.save("org-a", "<p>a</p>")
        assert sorted(store.organizations()) == ["org-a", "org-b"]


class TestUnwrapEditorMarkup:
    def test_non_div_unchanged(self) -> None:
        assert unwrap_editor_markup("<p>x</p>") == "<p>x</p>"

    def test_nested_divs_keep_inner_divs(self) -> None:
        template = "<div><div>inner</div><p>text</p></div>"
        assert unwrap_editor_markup(template) == "<div>inner</div><p>text</p>"

    def test_empty_wrapper_unchanged(self) -> None:
        assert unwrap_editor_markup("<div></div>") == "<div></div>"

    def test_leading_div_followed_by_content_unchanged(self) -> None:
        template = "<div>Intro</div><p>{{GAP_ASSESSMENT_TABLE}}</p><p>Outro</p>"
        assert unwrap_editor_markup(template) == template

    def test_sibling_divs_unchanged(self) -> None:
        assert unwrap_editor_markup("<div>a</div><div>b</div>") == "<div>a</div><div>b</div>"

    def test_wrapper_with_attributes_and_whitespace(self) -> None:
        template = '\n<div class="ProseMirror">\n<p>x</p>{{GAP_ASSESSMENT_TABLE}}\n</div>\n'
        assert unwrap_editor_markup(template) == "\n<p>x</p>{{GAP_ASSESSMENT_TABLE}}\n"

    def test_save_keeps_leading_div_content(self, store: TemplateStore) -> None:
        template = "<div>Intro</div><p>{{GAP_ASSESSMENT_TABLE}}</p><p>Outro</p>"
        assert store.save("org-1", template) == template
        assert store.get("org-1") == template


class TestFactory:
    def test_memory_backend(self) -> None:
        store = create_template_store(TemplateStoreConfig(backend="memory"))
        store.save("org-1", "<p>x</p>")
        assert store.is_custom("org-1")

    def test_file_backend(self, tmp_path) -> None:
        store = create_template_store(TemplateStoreConfig(backend="file", store_path=tmp_path))
        store.save("org-1", "<p>x</p>")
        assert (tmp_path / "gap_assessment_template" / "org-1.html").read_text() == "<p>x</p>"


@pytest.mark.parametrize("backend_factory", [MemoryPersistenceBackend, "file"])
def test_store_works_on_real_backends(backend_factory, tmp_path) -> None:
    backend = FilePersistenceBackend(tmp_path) if backend_factory == "file" else backend_factory()
    store = TemplateStore(backend)
    store.save("org-9", "<p>nine</p>")
    assert store.get("org-9") == "<p>nine</p>"
    assert store.organizations() == ["org-9"]
