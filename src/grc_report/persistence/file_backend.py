"""File-based persistence backend: one text file per key on the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from grc_report.persistence.keys import normalize_key

log = logging.getLogger(__name__)


class FilePersistenceBackend:
    """Stores each key as ``<base>/<segment>/.../<segment><suffix>``.

    ``/`` in a key maps to a subdirectory. Each segment is reduced to a
    filesystem-safe name so keys built from organization ids can never
    escape the base directory.
    """

    def __init__(self, base_path: Path, suffix: str = ".html") -> None:
        self._base = Path(base_path)
        self._suffix = suffix
        self._base.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        segments = normalize_key(key).split("/")
        segments[-1] += self._suffix
        return self._base.joinpath(*segments)

    def save(self, key: str, data: str) -> None:
        path = self._key_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data, encoding="utf-8")
        log.debug(f"Saved {key} to {path}")

    def load(self, key: str) -> str:
        path = self._key_path(key)
        if not path.is_file():
            raise KeyError(f"Not found: {key} (path: {path})")
        return path.read_text(encoding="utf-8")

    def exists(self, key: str) -> bool:
        return self._key_path(key).is_file()

    def delete(self, key: str) -> None:
        path = self._key_path(key)
        if path.is_file():
            path.unlink()

    def list_keys(self, prefix: str = "") -> list[str]:
        keys = []
        for path in self._base.rglob(f"*{self._suffix}"):
            relative = path.relative_to(self._base).as_posix()
            key = relative[: -len(self._suffix)] if self._suffix else relative
            if key.startswith(prefix):
                keys.append(key)
        return sorted(keys)
