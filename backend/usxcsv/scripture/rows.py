"""Verse rows, the per-document accumulator, and row ordering.

Both dialect engines (USX tree walking and USFM line parsing) collect
verse content into a ``VerseAccumulator`` and emit immutable
``VerseRow`` values. ``sort_rows`` gives the final output order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

# Joins individual footnote / cross-reference bodies in the output record
NOTE_SEPARATOR = " | "

CSV_HEADER = (
    "Book",
    "Chapter",
    "Verse",
    "TextPlain",
    "TextStyled",
    "Footnotes",
    "Crossrefs",
    "Subtitle",
)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""
    return " ".join(text.split())


@dataclass(frozen=True)
class VerseRow:
    """A single finalized verse.

    Attributes:
        book: Book code, e.g. "GEN".
        chapter: Chapter number as written in the source.
        verse: Verse number as written in the source (may be "3a").
        text_plain: Verse text with all markup removed.
        text_styled: Verse text with the reduced inline tag vocabulary.
        footnotes: Extracted footnote bodies in document order.
        crossrefs: Extracted cross-reference bodies in document order.
        subtitle: Nearest preceding heading, or "".
    """

    book: str
    chapter: str
    verse: str
    text_plain: str
    text_styled: str
    footnotes: tuple[str, ...] = ()
    crossrefs: tuple[str, ...] = ()
    subtitle: str = ""

    @property
    def chapter_number(self) -> int:
        """Chapter parsed as an integer, 0 when it is not numeric."""
        try:
            return int(self.chapter)
        except ValueError:
            return 0

    def to_record(self) -> list[str]:
        """Return the output fields in ``CSV_HEADER`` order."""
        return [
            self.book,
            self.chapter,
            self.verse,
            self.text_plain,
            self.text_styled,
            NOTE_SEPARATOR.join(self.footnotes),
            NOTE_SEPARATOR.join(self.crossrefs),
            self.subtitle,
        ]


@dataclass
class VerseAccumulator:
    """Mutable traversal state shared by both dialect engines.

    ``book``, ``chapter`` and ``subtitle`` are document-scoped: the subtitle
    is never cleared at a verse boundary, only replaced by the next heading.
    Everything else is verse-scoped and reset by ``reset_verse``.
    """

    book: str = ""
    chapter: str = ""
    subtitle: str = ""
    verse: str = ""
    plain: str = ""
    styled: str = ""
    footnotes: list[str] = field(default_factory=list)
    crossrefs: list[str] = field(default_factory=list)
    rows: list[VerseRow] = field(default_factory=list)
    # Offset in ``styled`` where the tags opened since the last text begin
    open_tags_at: int | None = None

    @property
    def in_verse(self) -> bool:
        """True while a verse is open."""
        return bool(self.verse)

    def reset_verse(self) -> None:
        """Clear the verse number and all verse-scoped buffers."""
        self.verse = ""
        self.plain = ""
        self.styled = ""
        self.footnotes = []
        self.crossrefs = []
        self.open_tags_at = None

    def start_verse(self, number: str) -> None:
        """Open a new verse with empty buffers."""
        self.reset_verse()
        self.verse = number

    def set_subtitle(self, text: str) -> None:
        """Replace the subtitle unless ``text`` is empty."""
        if text:
            self.subtitle = text

    def append_text(self, plain: str, styled: str | None = None) -> None:
        """Append a normalized fragment to the plain and styled buffers.

        Fragments are space-joined. In the styled buffer the joining space
        goes in front of any opening tags that were just emitted, so
        ``"a" + "<wj>" + "b"`` reads ``"a <wj>b"``.
        """
        if styled is None:
            styled = plain
        cut = len(self.styled) if self.open_tags_at is None else self.open_tags_at
        self.open_tags_at = None
        if not self.plain:
            self.plain = plain
            self.styled += styled
            return
        self.plain = f"{self.plain} {plain}"
        self.styled = f"{self.styled[:cut]} {self.styled[cut:]}{styled}"

    def open_tag(self, tag: str) -> None:
        if self.open_tags_at is None:
            self.open_tags_at = len(self.styled)
        self.styled += f"<{tag}>"

    def close_tag(self, tag: str) -> None:
        self.open_tags_at = None
        self.styled += f"</{tag}>"

    def add_footnote(self, text: str) -> None:
        if text:
            self.footnotes.append(text)

    def add_crossref(self, text: str) -> None:
        if text:
            self.crossrefs.append(text)

    def emit(self) -> VerseRow | None:
        """Finalize the open verse into a row.

        A row is produced only when book, chapter and verse are set and the
        plain text is non-empty. Buffers are left untouched; callers reset
        them explicitly.
        """
        plain = self.plain.strip()
        if not (self.book and self.chapter and self.verse and plain):
            return None
        row = VerseRow(
            book=self.book,
            chapter=self.chapter,
            verse=self.verse,
            text_plain=plain,
            text_styled=self.styled.strip(),
            footnotes=tuple(self.footnotes),
            crossrefs=tuple(self.crossrefs),
            subtitle=self.subtitle.strip(),
        )
        self.rows.append(row)
        return row


def sort_rows(rows: Iterable[VerseRow]) -> list[VerseRow]:
    """Order rows by book, numeric chapter, then verse string.

    Verses compare as strings, so "10" sorts before "9". The sort is
    stable: ties keep their emission order.
    """
    return sorted(rows, key=lambda r: (r.book, r.chapter_number, r.verse))
