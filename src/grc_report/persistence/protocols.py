"""Contract for the stores behind ``TemplateStore``."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPersistenceBackend(Protocol):
    """Text storage addressed by ``/``-separated keys.

    Implementations canonicalize keys with
    :func:`grc_report.persistence.keys.normalize_key`; a key with no usable
    segment raises ``KeyError`` from every method.
    """

    def save(self, key: str, data: str) -> None:
        """Store *data*, replacing any earlier value."""
        ...

    def load(self, key: str) -> str:
        """Return the stored text. Raises ``KeyError`` when absent."""
        ...

    def exists(self, key: str) -> bool: ...

    def delete(self, key: str) -> None:
        """Remove the entry; absent keys are ignored."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]:
        """Sorted normalized keys starting with *prefix*."""
        ...
