"""Process-local template storage, for tests and single-worker deployments."""

from __future__ import annotations

import logging

from grc_report.persistence.keys import normalize_key

log = logging.getLogger(__name__)


class MemoryPersistenceBackend:
    """Keeps templates in a dict under their normalized keys.

    Keys go through the same rules as the file backend, so switching
    ``GRC_TEMPLATES_BACKEND`` between ``memory`` and ``file`` never changes
    which organization ids ``list_keys`` reports. Contents are lost when the
    process exits.
    """

    def __init__(self) -> None:
        self._templates: dict[str, str] = {}

    def save(self, key: str, data: str) -> None:
        key = normalize_key(key)
        self._templates[key] = data
        log.debug(f"Stored {len(data)} chars under {key} (memory)")

    def load(self, key: str) -> str:
        try:
            return self._templates[normalize_key(key)]
        except KeyError:
            raise KeyError(f"No stored template under {key!r}") from None

    def exists(self, key: str) -> bool:
        return normalize_key(key) in self._templates

    def delete(self, key: str) -> None:
        if self._templates.pop(normalize_key(key), None) is not None:
            log.debug(f"Removed {key} (memory)")

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._templates if k.startswith(prefix))
