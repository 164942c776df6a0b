"""Storage key rules shared by every persistence backend."""

from __future__ import annotations

import re

_SAFE_SEGMENT = re.compile(r"[^A-Za-z0-9._-]")


def normalize_key(key: str) -> str:
    """Return the canonical form of a ``/``-separated storage key.

    Empty, ``.`` and ``..`` segments are dropped and every other character
    outside ``[A-Za-z0-9._-]`` becomes ``_``, so ``"tpl//org 1"`` and
    ``"tpl/org_1"`` name the same entry in every backend. Raises
    ``KeyError`` when nothing is left.
    """
    segments = [_SAFE_SEGMENT.sub("_", s) for s in key.split("/") if s not in ("", ".", "..")]
    if not segments:
        raise KeyError(f"Invalid key: {key!r}")
    return "/".join(segments)
