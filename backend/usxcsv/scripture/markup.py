"""Inline markup translation and note extraction shared by both dialects.

USX and USFM express the same character styles and notes differently, but
they feed the same output vocabulary. The style table and heading styles
here are used by the USX walker; the regex helpers implement the USFM
content-segment pipeline:

1. strip ``\\sup ... \\sup*`` spans
2. pull ``\\f ... \\f*`` footnotes and ``\\x ... \\x*`` cross-references out
3. translate known style markers to tags (styled text only)
4. replace leftover markers with a space and normalize whitespace
"""

from __future__ import annotations

import re

from usxcsv.scripture.rows import VerseAccumulator, normalize_whitespace

# Character style code -> styled-text tag name
STYLE_TAGS: dict[str, str] = {
    "wj": "wj",
    "add": "add",
    "nd": "nd",
    "it": "i",
    "bd": "b",
    "bdit": "bdit",
}

# Paragraph styles whose text becomes the running subtitle
HEADING_STYLES = frozenset(
    {"s", "s1", "s2", "s3", "sp", "ms", "mr", "mt", "mt1", "mt2"}
)

SUPERSCRIPT_PATTERN = re.compile(
    r"\\\+?sup\b.*?\\\+?sup\*", re.IGNORECASE | re.DOTALL
)
FOOTNOTE_PATTERN = re.compile(r"\\f\b(.*?\\f\*)", re.IGNORECASE | re.DOTALL)
CROSSREF_PATTERN = re.compile(r"\\x\b(.*?\\x\*)", re.IGNORECASE | re.DOTALL)
# Note body: text after \ft up to the next marker
NOTE_TEXT_PATTERN = re.compile(r"\\ft\b([^\\]*)", re.IGNORECASE)
# Any marker token: \p, \+nd, \wj*, \q1 ...
UNKNOWN_MARKER_PATTERN = re.compile(r"\\\+?[a-z0-9]+\*?", re.IGNORECASE)

# (opening pattern, closing pattern, tag) per known style. The opening
# marker swallows its delimiter space; the closing marker has none.
_STYLE_PATTERNS = [
    (
        re.compile(rf"\\\+?{code}\b\s*", re.IGNORECASE),
        re.compile(rf"\\\+?{code}\*", re.IGNORECASE),
        tag,
    )
    for code, tag in STYLE_TAGS.items()
]


def style_tag(style: str) -> str | None:
    """Return the output tag for a character style, or None if unstyled."""
    return STYLE_TAGS.get(style)


def is_heading_style(style: str) -> bool:
    return style in HEADING_STYLES


def strip_superscripts(segment: str) -> str:
    return SUPERSCRIPT_PATTERN.sub(" ", segment)


def strip_unknown_markers(segment: str) -> str:
    return UNKNOWN_MARKER_PATTERN.sub(" ", segment)


def apply_style_tags(segment: str) -> str:
    """Turn known style markers into ``<tag>`` / ``</tag>``."""
    for open_pattern, close_pattern, tag in _STYLE_PATTERNS:
        # Closing first: "\bd*" would otherwise match the opening pattern.
        segment = close_pattern.sub(f"</{tag}>", segment)
        segment = open_pattern.sub(f"<{tag}>", segment)
    return segment


def note_body(note_text: str) -> str:
    """Return the normalized ``\\ft`` text of a note span, or ""."""
    match = NOTE_TEXT_PATTERN.search(note_text)
    if not match:
        return ""
    return normalize_whitespace(match.group(1))


def extract_notes(segment: str, acc: VerseAccumulator) -> str:
    """Move footnotes and cross-references from ``segment`` into ``acc``.

    Footnotes are handled before cross-references. Each note span is
    replaced by a single space so no marker residue is left behind.

    Returns:
        The segment with all note spans removed.
    """
    if not segment.strip():
        return segment

    def _footnote(match: re.Match[str]) -> str:
        acc.add_footnote(note_body(match.group(0)))
        return " "

    def _crossref(match: re.Match[str]) -> str:
        acc.add_crossref(note_body(match.group(0)))
        return " "

    segment = FOOTNOTE_PATTERN.sub(_footnote, segment)
    return CROSSREF_PATTERN.sub(_crossref, segment)


def clean_heading(text: str, acc: VerseAccumulator) -> str:
    """Reduce a USFM heading line's content to plain subtitle text.

    Notes inside the heading still land in the accumulator's lists.
    """
    text = extract_notes(text, acc)
    return normalize_whitespace(strip_unknown_markers(text))


def translate_segment(segment: str) -> tuple[str, str]:
    """Return ``(plain, styled)`` for a segment whose notes are gone."""
    styled = normalize_whitespace(strip_unknown_markers(apply_style_tags(segment)))
    plain = normalize_whitespace(strip_unknown_markers(segment))
    return plain, styled


def process_segment(segment: str, acc: VerseAccumulator) -> None:
    """Run a USFM content segment through the full inline pipeline.

    Notes go to the accumulator's lists; the remaining text is appended to
    the plain and styled buffers if any plain text is left.
    """
    if not segment.strip():
        return

    segment = extract_notes(strip_superscripts(segment), acc)
    if not segment.strip():
        return

    plain, styled = translate_segment(segment)
    if plain:
        acc.append_text(plain, styled)
