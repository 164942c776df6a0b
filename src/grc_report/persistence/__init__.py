"""Pluggable persistence backends for report templates."""

from __future__ import annotations

from grc_report.persistence.file_backend import FilePersistenceBackend
from grc_report.persistence.keys import normalize_key
from grc_report.persistence.memory_backend import MemoryPersistenceBackend
from grc_report.persistence.protocols import IPersistenceBackend

__all__ = ["IPersistenceBackend", "FilePersistenceBackend", "MemoryPersistenceBackend", "normalize_key"]
