"""Line-oriented USFM/SFM parser.

Each trimmed, non-empty line is classified by the first matching marker
pattern (chapter, heading, verse, paragraph) and anything else is treated
as continuation text of the open verse. Inline content goes through
``markup.process_segment``.
"""

from __future__ import annotations

import logging
import re

from usxcsv.scripture.markup import clean_heading, process_segment
from usxcsv.scripture.rows import VerseAccumulator, VerseRow, sort_rows

logger = logging.getLogger(__name__)

DEFAULT_BOOK_CODE = "UNKNOWN"

ID_PATTERN = re.compile(r"^\\id\s+(\S+)", re.IGNORECASE)
CHAPTER_PATTERN = re.compile(r"^\\c\s+(\d+)\b", re.IGNORECASE)
# \b after the marker keeps "\sp" from reading as "\s" + "p ..."
HEADING_PATTERN = re.compile(
    r"^\\(s[0-3]?|sp|ms|mr|mt[12]?)\b\s*(.*)$", re.IGNORECASE
)
VERSE_PATTERN = re.compile(r"^\\v\s+(\d+)\s*(.*)$", re.IGNORECASE)
PARAGRAPH_PATTERN = re.compile(
    r"^\\(m|p|pi|q[0-4]?|qt[0-4]?)\b\s*(.*)$", re.IGNORECASE
)


def split_lines(text: str) -> list[str]:
    """Split on LF, treating CRLF the same as LF."""
    return text.replace("\r\n", "\n").split("\n")


def detect_book_code(lines: list[str], fallback: str) -> str:
    """Return the token after the first ``\\id`` marker, else ``fallback``."""
    for line in lines:
        match = ID_PATTERN.match(line.strip())
        if match:
            return match.group(1)
    return fallback


class UsfmLineParser:
    """Convert USFM text into verse rows.

    Usage::

        parser = UsfmLineParser(fallback_book="GEN")
        rows = parser.parse(text)
    """

    def __init__(self, fallback_book: str = DEFAULT_BOOK_CODE):
        self.fallback_book = fallback_book

    def parse(self, text: str) -> list[VerseRow]:
        """Parse a whole document and return rows in emission order."""
        lines = split_lines(text)
        state = VerseAccumulator(book=detect_book_code(lines, self.fallback_book))

        for raw_line in lines:
            line = raw_line.strip()
            if line:
                self._handle_line(line, state)

        if state.in_verse:
            state.emit()

        logger.debug(f"{state.book}: {len(state.rows)} rows from USFM")
        return list(state.rows)

    def _handle_line(self, line: str, state: VerseAccumulator) -> None:
        match = CHAPTER_PATTERN.match(line)
        if match:
            if state.in_verse:
                state.emit()
            state.reset_verse()
            state.chapter = match.group(1)
            return

        match = HEADING_PATTERN.match(line)
        if match:
            state.set_subtitle(clean_heading(match.group(2), state))
            return

        match = VERSE_PATTERN.match(line)
        if match:
            if state.in_verse:
                state.emit()
            state.start_verse(match.group(1))
            rest = match.group(2)
            if rest:
                process_segment(rest, state)
            return

        match = PARAGRAPH_PATTERN.match(line)
        if match:
            rest = match.group(2)
            if state.in_verse and rest:
                process_segment(rest, state)
            return

        if state.in_verse:
            process_segment(line, state)


def parse_usfm(text: str, fallback_book: str = DEFAULT_BOOK_CODE) -> list[VerseRow]:
    """Parse USFM text into ordered verse rows.

    Args:
        text: Decoded document text.
        fallback_book: Book code used when the document has no ``\\id`` line.
    """
    return sort_rows(UsfmLineParser(fallback_book).parse(text))
