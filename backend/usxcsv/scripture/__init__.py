"""USX and USFM parsing into verse rows."""

from usxcsv.scripture.rows import (
    CSV_HEADER,
    NOTE_SEPARATOR,
    VerseAccumulator,
    VerseRow,
    normalize_whitespace,
    sort_rows,
)
from usxcsv.scripture.tree import Element, Text, build_tree
from usxcsv.scripture.usfm import UsfmLineParser, parse_usfm
from usxcsv.scripture.usx import UsxWalker, parse_usx

__all__ = [
    # Rows
    "CSV_HEADER",
    "NOTE_SEPARATOR",
    "VerseAccumulator",
    "VerseRow",
    "normalize_whitespace",
    "sort_rows",
    # USX
    "Element",
    "Text",
    "build_tree",
    "UsxWalker",
    "parse_usx",
    # USFM
    "UsfmLineParser",
    "parse_usfm",
]
