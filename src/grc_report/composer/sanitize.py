"""Text clean-up applied to template blocks before layout."""

from __future__ import annotations

import re

# Zero-width space, non-joiner, joiner and the byte-order mark.
_INVISIBLE = re.compile("[\u200b-\u200d\ufeff]")


def sanitize_block(text: str) -> str:
    """Strip zero-width characters and surrounding whitespace. Idempotent."""
    return _INVISIBLE.sub("", text).strip()


# ── Glyph fallbacks ──────────────────────────────────────────────────
# The built-in PDF fonts lack glyphs for many characters that rich-text
# editors emit (non-breaking hyphens, narrow spaces, smart quotes, etc.).
# Text is cleaned at the Paragraph boundary so every flowable is safe.

_GLYPH_REPLACEMENTS: dict[str, str] = {
    # Dashes / hyphens
    "\u2011": "-",       # non-breaking hyphen
    "\u2010": "-",       # hyphen
    "\u2012": "-",       # figure dash
    "\u2013": "-",       # en-dash
    "\u2014": "-",       # em-dash
    "\u2015": "-",       # horizontal bar
    "\u2212": "-",       # minus sign
    # Spaces
    "\u202f": " ",       # narrow no-break space
    "\u00a0": " ",       # non-breaking space
    "\u2009": " ",       # thin space
    "\u200a": " ",       # hair space
    # Quotes
    "\u2018": "'",       # left single quote
    "\u2019": "'",       # right single quote
    "\u201c": '"',       # left double quote
    "\u201d": '"',       # right double quote
    # Misc punctuation
    "\u2026": "...",     # ellipsis
    "\u2192": "->",      # rightwards arrow
    "\u2713": "v",       # check mark
}


def replace_missing_glyphs(text: str) -> str:
    for char, replacement in _GLYPH_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text
