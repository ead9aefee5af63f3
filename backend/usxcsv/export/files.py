"""Resolve command-line inputs into the documents to convert."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from pathlib import Path

from usxcsv.errors import InputResolutionError

SUPPORTED_EXTENSIONS = frozenset({"usx", "usfm", "sfm"})


def file_format(path: Path) -> str:
    """Return the lower-cased extension without the dot, e.g. "usfm"."""
    return path.suffix.lstrip(".").lower()


def is_supported(path: Path) -> bool:
    return file_format(path) in SUPPORTED_EXTENSIONS


def has_wildcard(text: str) -> bool:
    return any(c in text for c in "*?[")


def resolve_input_items(inputs: Iterable[str]) -> list[Path]:
    """Expand raw inputs into existing paths.

    Each input may hold several comma-separated paths. Parts containing
    wildcards are globbed; plain parts must exist.

    Raises:
        InputResolutionError: If a path or pattern matches nothing.
    """
    items: list[Path] = []
    for raw in inputs:
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue

            if has_wildcard(part):
                matches = sorted(glob.glob(part))
                if not matches:
                    raise InputResolutionError(f"Input path not found: {part}")
                items.extend(Path(m) for m in matches)
                continue

            path = Path(part)
            if not path.exists():
                raise InputResolutionError(f"Input path not found: {part}")
            items.append(path)
    return items


def collect_files(items: Iterable[Path]) -> list[Path]:
    """Turn resolved items into a flat list of convertible files.

    Directories contribute their supported files (not recursively).

    Raises:
        InputResolutionError: If an item vanished or a plain file has an
            unsupported extension.
    """
    files: list[Path] = []
    for item in items:
        if not item.exists():
            raise InputResolutionError(f"Input path not found: {item}")

        if item.is_dir():
            files.extend(
                child
                for child in sorted(item.iterdir())
                if child.is_file() and is_supported(child)
            )
            continue

        if not is_supported(item):
            raise InputResolutionError(
                "Input must be a .usx, .usfm, or .sfm file, "
                "or a folder containing them."
            )
        files.append(item)
    return files


def output_path(input_path: Path, output_folder: Path | None = None) -> Path:
    """Return where the CSV for ``input_path`` goes.

    With a folder the file is ``<folder>/<stem>.csv``; otherwise the CSV
    sits next to the input.
    """
    if output_folder is not None:
        return Path(output_folder) / f"{input_path.stem or 'output'}.csv"
    return input_path.with_suffix(".csv")
