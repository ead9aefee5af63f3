"""Convert USX/USFM documents on disk into CSV files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from usxcsv.errors import DocumentIOError, InputResolutionError, MalformedMarkupError
from usxcsv.export.csv_writer import write_rows
from usxcsv.export.files import collect_files, file_format, output_path, resolve_input_items
from usxcsv.schemas import ConversionSummary, FileResult
from usxcsv.scripture.rows import VerseRow
from usxcsv.scripture.usfm import parse_usfm
from usxcsv.scripture.usx import parse_usx

logger = logging.getLogger(__name__)


def read_document(path: Path) -> bytes:
    """Read raw document bytes.

    Raises:
        DocumentIOError: If the file cannot be read.
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise DocumentIOError(f"Failed to read {path}: {e}") from e


def decode_usfm(data: bytes, path: Path) -> str:
    """Decode USFM bytes as UTF-8, dropping a leading BOM."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedMarkupError(f"{path} is not valid UTF-8: {e}") from e


def rows_for_file(path: Path) -> list[VerseRow]:
    """Parse a single document into ordered rows, dispatching on extension.

    USFM documents use the file stem as their fallback book code.
    """
    fmt = file_format(path)
    data = read_document(path)

    if fmt == "usx":
        return parse_usx(data)
    if fmt in ("usfm", "sfm"):
        return parse_usfm(decode_usfm(data, path), fallback_book=path.stem)

    raise InputResolutionError(f"Unsupported input format: {path}")


def convert_file(
    path: Path,
    output_folder: Path | None = None,
    encoding: str = "utf-8",
) -> FileResult:
    """Convert one document and write its CSV.

    Returns:
        Summary of the written file.
    """
    fmt = file_format(path)
    label = "USX" if fmt == "usx" else "USFM/SFM"
    logger.info(f"Processing ({label}) {path}")

    rows = rows_for_file(path)
    csv_path = output_path(path, output_folder)
    try:
        count = write_rows(csv_path, rows, encoding=encoding)
    except OSError as e:
        raise DocumentIOError(f"Failed to write {csv_path}: {e}") from e

    logger.info(f"Created CSV: {csv_path}")
    return FileResult(input=str(path), output=str(csv_path), format=fmt, rows=count)


def convert_paths(
    inputs: Iterable[str],
    output_folder: Path | None = None,
    encoding: str = "utf-8",
) -> ConversionSummary:
    """Resolve inputs and convert every document found.

    Processing stops at the first failing document.

    Raises:
        InputResolutionError: If inputs are missing or contain no documents.
        ConversionError: Any per-document failure.
    """
    files = collect_files(resolve_input_items(inputs))
    if not files:
        raise InputResolutionError("No .usx, .usfm, or .sfm files found.")

    if output_folder is not None:
        output_folder = Path(output_folder)
        try:
            output_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DocumentIOError(f"Cannot create output folder {output_folder}: {e}") from e

    summary = ConversionSummary()
    for path in files:
        summary.files.append(
            convert_file(
                path,
                output_folder=output_folder,
                encoding=encoding,
            )
        )

    logger.debug(f"Converted {len(summary.files)} files, {summary.total_rows} rows")
    return summary
