"""File-level conversion: input resolution, CSV output, orchestration."""

from usxcsv.export.converter import convert_file, convert_paths, rows_for_file
from usxcsv.export.csv_writer import write_rows
from usxcsv.export.files import collect_files, output_path, resolve_input_items

__all__ = [
    "convert_file",
    "convert_paths",
    "rows_for_file",
    "write_rows",
    "collect_files",
    "output_path",
    "resolve_input_items",
]
