"""Write verse rows to CSV."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from usxcsv.scripture.rows import CSV_HEADER, VerseRow

logger = logging.getLogger(__name__)


def write_rows(path: Path, rows: Iterable[VerseRow], encoding: str = "utf-8") -> int:
    """Write a header and one record per row.

    Args:
        path: Destination file, overwritten if it exists.
        rows: Rows in output order.
        encoding: File encoding.

    Returns:
        Number of rows written (header excluded).
    """
    count = 0
    with open(path, "w", encoding=encoding, newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow(row.to_record())
            count += 1
    logger.debug(f"Wrote {count} rows to {path}")
    return count
