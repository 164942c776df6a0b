"""Report template storage."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grc_report.persistence import FilePersistenceBackend, MemoryPersistenceBackend
from grc_report.templates.store import (
    DEFAULT_TEMPLATE,
    TEMPLATE_KEY_PREFIX,
    TemplateStore,
    unwrap_editor_markup,
)

if TYPE_CHECKING:
    from grc_report.core.config import TemplateStoreConfig

__all__ = [
    "DEFAULT_TEMPLATE",
    "TEMPLATE_KEY_PREFIX",
    "TemplateStore",
    "create_template_store",
    "unwrap_editor_markup",
]


def create_template_store(config: TemplateStoreConfig) -> TemplateStore:
    """Build the store for the configured backend."""
    if config.backend == "memory":
        return TemplateStore(MemoryPersistenceBackend())
    return TemplateStore(FilePersistenceBackend(config.store_path))
