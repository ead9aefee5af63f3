"""Tests for file conversion and CSV output."""

import csv
from pathlib import Path

import pytest

from usxcsv.errors import (
    ConversionError,
    DocumentIOError,
    InputResolutionError,
    MalformedMarkupError,
    MissingBookCodeError,
)
from usxcsv.export.converter import convert_file, convert_paths, rows_for_file
from usxcsv.export.csv_writer import write_rows
from usxcsv.scripture.rows import CSV_HEADER, VerseRow

USX_DOC = """<?xml version="1.0" encoding="utf-8"?>
<usx version="3.0">
  <book code="JHN" style="id"/>
  <chapter number="11" style="c" sid="JHN 11"/>
  <para style="s1">Lazarus</para>
  <para style="p">
    <verse number="35" style="v" sid="JHN 11:35"/><char style="wj">Jesus wept.</char><note style="f"><char style="ft">Shortest, "verse"</char></note><verse eid="JHN 11:35"/>
  </para>
</usx>
"""

USFM_DOC = "\\c 1\n\\v 1 The words, of Amos.\n"


def _read_csv(path: Path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestWriteRows:
    """Tests for the CSV writer."""

    def test_header_and_quoting(self, tmp_path: Path) -> None:
        row = VerseRow(
            book="GEN",
            chapter="1",
            verse="1",
            text_plain='He said, "Let there be light"',
            text_styled="He said, <wj>light</wj>",
            footnotes=("a", "b"),
        )
        path = tmp_path / "out.csv"

        assert write_rows(path, [row]) == 1

        records = _read_csv(path)
        assert records[0] == list(CSV_HEADER)
        assert records[1] == row.to_record()
        assert records[1][5] == "a | b"

    def test_empty_rows_write_header(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        assert write_rows(path, []) == 0
        assert _read_csv(path) == [list(CSV_HEADER)]


class TestConvertFile:
    """Tests for single-document conversion."""

    def test_usx(self, tmp_path: Path) -> None:
        src = tmp_path / "43JHN.usx"
        src.write_text(USX_DOC, encoding="utf-8")

        result = convert_file(src)

        assert result.format == "usx"
        assert result.rows == 1
        assert result.output == str(tmp_path / "43JHN.csv")
        records = _read_csv(tmp_path / "43JHN.csv")
        assert records[1] == [
            "JHN",
            "11",
            "35",
            "Jesus wept.",
            "<wj>Jesus wept.</wj>",
            'Shortest, "verse"',
            "",
            "Lazarus",
        ]

    def test_usfm_uses_stem_as_book(self, tmp_path: Path) -> None:
        src = tmp_path / "AMO.sfm"
        src.write_text(USFM_DOC, encoding="utf-8")

        (row,) = rows_for_file(src)
        assert row.book == "AMO"
        assert row.text_plain == "The words, of Amos."

    def test_usfm_bom_removed(self, tmp_path: Path) -> None:
        src = tmp_path / "x.usfm"
        src.write_bytes("\\id AMO\n\\c 1\n\\v 1 text".encode("utf-8-sig"))
        (row,) = rows_for_file(src)
        assert row.book == "AMO"

    def test_usfm_invalid_utf8(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.usfm"
        src.write_bytes(b"\\id AMO\n\\c 1\n\\v 1 \xff\xfe")
        with pytest.raises(MalformedMarkupError):
            rows_for_file(src)

    def test_unreadable_document(self, tmp_path: Path) -> None:
        src = tmp_path / "folder.usx"
        src.mkdir()
        with pytest.raises(DocumentIOError):
            rows_for_file(src)

    def test_usx_errors_propagate(self, tmp_path: Path) -> None:
        src = tmp_path / "nobook.usx"
        src.write_text("<usx><para>text</para></usx>")
        with pytest.raises(MissingBookCodeError):
            convert_file(src)
        assert not (tmp_path / "nobook.csv").exists()

    def test_output_folder(self, tmp_path: Path) -> None:
        src = tmp_path / "AMO.usfm"
        src.write_text(USFM_DOC)
        out = tmp_path / "out"
        out.mkdir()

        result = convert_file(src, output_folder=out)
        assert Path(result.output) == out / "AMO.csv"
        assert (out / "AMO.csv").exists()


class TestConvertPaths:
    """Tests for multi-document conversion."""

    def test_folder(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.mkdir()
        (src / "JHN.usx").write_text(USX_DOC, encoding="utf-8")
        (src / "AMO.usfm").write_text(USFM_DOC, encoding="utf-8")
        out = tmp_path / "csv" / "nested"

        summary = convert_paths([str(src)], output_folder=out)

        assert sorted(f.format for f in summary.files) == ["usfm", "usx"]
        assert summary.total_rows == 2
        assert (out / "JHN.csv").exists()
        assert (out / "AMO.csv").exists()

    def test_no_documents(self, tmp_path: Path) -> None:
        (tmp_path / "readme.txt").write_text("nothing here")
        with pytest.raises(InputResolutionError, match="No .usx, .usfm, or .sfm files found."):
            convert_paths([str(tmp_path)])

    def test_first_failure_aborts(self, tmp_path: Path) -> None:
        (tmp_path / "bad.usx").write_text("<usfm/>")
        with pytest.raises(ConversionError):
            convert_paths([str(tmp_path / "bad.usx")])
