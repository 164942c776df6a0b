"""Fixed-width print layout for rich-text template blocks.

Template HTML comes from the report template editor. It is parsed with the
standard-library ``HTMLParser`` into a flat list of blocks and each block is
turned into a reportlab flowable styled for print: centered ``h1`` titles,
left-aligned bold sub-headings, justified body text and images bounded by
the container width.

All sizes here are layout units of the print container. The container is
``html_container_width`` units wide no matter how wide the page is; the
renderer draws it at ``html_scale`` so typography is identical on every page
size.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Flowable, HRFlowable, Image, Paragraph

from grc_report.composer.sanitize import replace_missing_glyphs
from grc_report.core.config import PDFLayoutConfig

log = logging.getLogger(__name__)

_FONT_FACES: dict[str, tuple[str, str, str]] = {
    # family: (regular, bold, italic)
    "Times": ("Times-Roman", "Times-Bold", "Times-Italic"),
    "Helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique"),
    "Courier": ("Courier", "Courier-Bold", "Courier-Oblique"),
}


def font_faces(family: str) -> tuple[str, str, str]:
    """Return the (regular, bold, italic) built-in font names for *family*."""
    return _FONT_FACES[family]


_BLOCK_STYLES: dict[str, str] = {
    "p": "body",
    "div": "body",
    "section": "body",
    "article": "body",
    "header": "body",
    "footer": "body",
    "tr": "body",
    "pre": "body",
    "h1": "title",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "blockquote": "quote",
    "li": "bullet",
}

_INLINE_TAGS: dict[str, str] = {
    "b": "b",
    "strong": "b",
    "i": "i",
    "em": "i",
    "u": "u",
    "s": "strike",
    "strike": "strike",
    "del": "strike",
    "sup": "super",
    "sub": "sub",
}

_TAG_RE = re.compile(r"<[^>]+>")
_EDGE_BREAKS_RE = re.compile(r"^(?:\s|<br/>)+|(?:\s|<br/>)+$")

IMAGE_SPACE_AFTER = 24.0


@dataclass
class _Block:
    kind: str
    style: str = "body"
    markup: str = ""
    bullet: str = ""
    attrs: dict[str, str] = field(default_factory=dict)


class _PrintHTMLParser(HTMLParser):
    """Flattens template HTML into paragraph, rule and image blocks."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: list[_Block] = []
        self._buffer: list[str] = []
        self._style = "body"
        self._bullet = ""
        self._lists: list[list] = []  # [tag, counter]
        self._inline: list[tuple[str, str, str]] = []  # (html tag, open markup, close markup)

    # -- HTMLParser hooks -------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attributes = {name: value or "" for name, value in attrs}

        if tag in _BLOCK_STYLES:
            self._flush()
            if tag == "li":
                self._style, self._bullet = "bullet", self._next_bullet()
            elif not self._bullet:
                self._style = _BLOCK_STYLES[tag]
        elif tag in ("ul", "ol"):
            self._flush()
            self._lists.append([tag, 0])
        elif tag == "br":
            self._buffer.append("<br/>")
        elif tag == "hr":
            self._flush()
            self.blocks.append(_Block(kind="rule"))
        elif tag == "img":
            self._flush()
            self.blocks.append(_Block(kind="image", attrs=attributes))
        elif tag in _INLINE_TAGS:
            rl_tag = _INLINE_TAGS[tag]
            self._open_inline(tag, f"<{rl_tag}>", f"</{rl_tag}>")
        elif tag == "a" and attributes.get("href"):
            self._open_inline(tag, f"<a href={quoteattr(attributes['href'])} color=\"blue\">", "</a>")

    def handle_endtag(self, tag: str) -> None:
        if tag in _BLOCK_STYLES:
            self._flush()
            self._style = "bullet" if self._lists and tag != "li" else "body"
            self._bullet = ""
        elif tag in ("ul", "ol"):
            self._flush()
            if self._lists and self._lists[-1][0] == tag:
                self._lists.pop()
            self._style = "body"
        elif tag in ("td", "th"):
            self._buffer.append("  ")
        elif tag in _INLINE_TAGS or tag == "a":
            self._close_inline(tag)

    def handle_data(self, data: str) -> None:
        if not data.strip():
            if self._buffer:
                self._buffer.append(" ")
            return
        text = escape(replace_missing_glyphs(data))
        self._buffer.append(text.replace("\n", "<br/>"))

    def close(self) -> None:
        super().close()
        self._flush()

    # -- Internal helpers -------------------------------------------------

    def _next_bullet(self) -> str:
        if not self._lists:
            return "•"
        current = self._lists[-1]
        current[1] += 1
        return f"{current[1]}." if current[0] == "ol" else "•"

    def _open_inline(self, tag: str, open_markup: str, close_markup: str) -> None:
        self._inline.append((tag, open_markup, close_markup))
        self._buffer.append(open_markup)

    def _close_inline(self, tag: str) -> None:
        positions = [i for i, (name, _, _) in enumerate(self._inline) if name == tag]
        if not positions:
            return
        index = positions[-1]
        reopened = self._inline[index + 1:]
        # Close everything above the tag too, then reopen it so markup stays nested.
        for _, _, close_markup in reversed(self._inline[index:]):
            self._buffer.append(close_markup)
        del self._inline[index:]
        for name, open_markup, close_markup in reopened:
            self._open_inline(name, open_markup, close_markup)

    def _flush(self) -> None:
        for _, _, close_markup in reversed(self._inline):
            self._buffer.append(close_markup)
        markup = _EDGE_BREAKS_RE.sub("", "".join(self._buffer))
        self._buffer = [open_markup for _, open_markup, _ in self._inline]
        if _TAG_RE.sub("", markup).strip():
            self.blocks.append(_Block(kind="text", style=self._style, markup=markup, bullet=self._bullet))
            self._bullet = ""


def parse_blocks(markup: str) -> list[_Block]:
    """Parse template HTML into layout blocks. Text outside any tag becomes a paragraph."""
    parser = _PrintHTMLParser()
    parser.feed(markup)
    parser.close()
    return parser.blocks


class PrintLayout:
    """Builds print-styled flowables for a template block at a fixed width."""

    def __init__(self, config: PDFLayoutConfig, max_image_height: float | None = None) -> None:
        self._config = config
        self.width: float = config.html_container_width
        self.scale: float = config.html_scale
        self._max_image_height = max_image_height
        self._styles = self._build_styles()

    @property
    def rendered_width(self) -> float:
        """Width of the container on the page, in points."""
        return self.width * self.scale

    def flowables(self, markup: str) -> list[Flowable]:
        """Lay *markup* out as a fresh list of flowables."""
        items: list[Flowable] = []
        for block in parse_blocks(markup):
            if block.kind == "text":
                items.append(self._paragraph(block))
            elif block.kind == "rule":
                items.append(HRFlowable(width="100%", thickness=1, spaceBefore=8, spaceAfter=8))
            elif block.kind == "image":
                image = self._image(block.attrs)
                if image is not None:
                    items.append(image)
        return items

    # ── Style setup ──────────────────────────────────────────────────

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        regular, bold, italic = _FONT_FACES[self._config.font_family]
        body_sz = self._config.body_font_size
        title_sz = self._config.title_font_size
        heading_sz = self._config.heading_font_size
        leading = body_sz * self._config.line_height

        body = ParagraphStyle(
            "print_body",
            fontName=regular,
            fontSize=body_sz,
            leading=leading,
            alignment=TA_JUSTIFY,
            spaceAfter=8,
        )
        return {
            "body": body,
            "title": ParagraphStyle(
                "print_title",
                parent=body,
                fontName=bold,
                fontSize=title_sz,
                leading=title_sz * 1.2,
                alignment=TA_CENTER,
                spaceBefore=32,
                spaceAfter=18,
            ),
            "heading": ParagraphStyle(
                "print_heading",
                parent=body,
                fontName=bold,
                fontSize=heading_sz,
                leading=heading_sz * 1.3,
                alignment=TA_LEFT,
                spaceBefore=24,
                spaceAfter=12,
            ),
            "bullet": ParagraphStyle(
                "print_bullet",
                parent=body,
                leftIndent=28,
                bulletIndent=10,
                bulletFontName=regular,
                spaceAfter=4,
            ),
            "quote": ParagraphStyle(
                "print_quote",
                parent=body,
                fontName=italic,
                leftIndent=28,
                rightIndent=28,
            ),
        }

    def _paragraph(self, block: _Block) -> Paragraph:
        style = self._styles.get(block.style, self._styles["body"])
        if block.bullet:
            return Paragraph(block.markup, style, bulletText=block.bullet)
        return Paragraph(block.markup, style)

    # ── Images ───────────────────────────────────────────────────────

    def _image(self, attrs: dict[str, str]) -> Image | None:
        data = _load_image_bytes(attrs.get("src", ""), self._config.image_root)
        if data is None:
            return None
        natural_w, natural_h = ImageReader(BytesIO(data)).getSize()
        width = _length(attrs.get("width")) or float(natural_w)
        height = _length(attrs.get("height")) or width * natural_h / max(natural_w, 1)

        # max-width: 100% of the container, aspect ratio kept
        if width > self.width:
            height *= self.width / width
            width = self.width
        if self._max_image_height and height > self._max_image_height:
            width *= self._max_image_height / height
            height = self._max_image_height

        image = Image(BytesIO(data), width=width, height=height, hAlign="CENTER")
        image.spaceAfter = IMAGE_SPACE_AFTER
        return image


def _length(value: str | None) -> float | None:
    if not value:
        return None
    match = re.match(r"\s*(\d+(?:\.\d+)?)\s*(px)?\s*$", value)
    return float(match.group(1)) if match else None


def _load_image_bytes(src: str, image_root: Path | None = None) -> bytes | None:
    """Decode a base64 data URI, or read a file that resolves inside *image_root*.

    Templates are user supplied, so a path is only read when an image root is
    configured and the resolved file stays under it. Remote images are skipped.
    """
    if src.startswith("data:"):
        header, _, payload = src.partition(",")
        if not header.endswith(";base64"):
            log.info("Skipping image data URI that is not base64 encoded")
            return None
        try:
            return base64.b64decode(payload)
        except binascii.Error:
            log.warning("Skipping image with malformed base64 payload")
            return None
    if src.startswith(("http://", "https://", "//")):
        log.info(f"Skipping remote image {src[:80]}")
        return None
    if not src or image_root is None:
        log.info(f"Skipping image source {src[:80]!r}; only data URIs are embedded")
        return None
    root = Path(image_root).resolve()
    path = (root / src.lstrip("/")).resolve()
    if not path.is_relative_to(root):
        log.warning(f"Skipping image {src[:80]!r} outside the image root")
        return None
    if not path.is_file():
        log.info(f"Skipping unresolvable image source {src[:80]!r}")
        return None
    return path.read_bytes()
