"""Tests for the command-line entry point and settings."""

import json
from pathlib import Path

import pytest

from usxcsv.cli import build_parser, main
from usxcsv.config import Settings

USFM_DOC = "\\id RUT\n\\c 1\n\\s1 Naomi\n\\v 1 In the days when the judges judged.\n"


@pytest.fixture
def usfm_file(tmp_path: Path) -> Path:
    path = tmp_path / "08RUT.usfm"
    path.write_text(USFM_DOC, encoding="utf-8")
    return path


class TestMain:
    """Tests for main()."""

    def test_no_inputs_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_converts_and_reports(
        self, usfm_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([str(usfm_file), "--quiet"]) == 0
        assert "All conversions completed." in capsys.readouterr().out
        assert usfm_file.with_suffix(".csv").exists()

    def test_json_summary(
        self, usfm_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out = tmp_path / "out"
        assert main(["--input", str(usfm_file), "-o", str(out), "-q", "--json"]) == 0

        summary = json.loads(capsys.readouterr().out)
        assert summary == {
            "files": [
                {
                    "input": str(usfm_file),
                    "output": str(out / "08RUT.csv"),
                    "format": "usfm",
                    "rows": 1,
                }
            ]
        }

    def test_single_dash_long_options(self) -> None:
        args = build_parser().parse_args(
            ["-input", "GEN.usx", "-output", "out", "-quiet", "-json"]
        )
        assert args.extra_inputs == ["GEN.usx"]
        assert args.inputs == []
        assert args.output == Path("out")
        assert args.quiet
        assert args.json

    def test_single_dash_options_convert(
        self, usfm_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out = tmp_path / "csv"
        assert main(["-input", str(usfm_file), "-output", str(out), "-quiet"]) == 0
        assert (out / "08RUT.csv").exists()
        assert "All conversions completed." in capsys.readouterr().out

    def test_json_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        missing = tmp_path / "missing.usx"
        assert main([str(missing), "--json", "-q"]) == 1

        report = json.loads(capsys.readouterr().out)
        assert report == {"error": f"Input path not found: {missing}"}

    def test_error_exit_code(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.usx"
        bad.write_text("<usx><book code='GEN'>")
        assert main([str(bad), "-q"]) == 1


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("USXCSV_CSV_ENCODING", raising=False)
        monkeypatch.delenv("USXCSV_OUTPUT_DIR", raising=False)
        settings = Settings(_env_file=None)
        assert settings.csv_encoding == "utf-8"
        assert settings.output_dir is None

    def test_only_conversion_knobs_are_exposed(self) -> None:
        # USFM book fallback comes from the file name, never from settings
        assert set(Settings.model_fields) == {"log_level", "output_dir", "csv_encoding"}

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USXCSV_CSV_ENCODING", "utf-8-sig")
        monkeypatch.setenv("usxcsv_output_dir", "/tmp/csv")
        settings = Settings(_env_file=None)
        assert settings.csv_encoding == "utf-8-sig"
        assert settings.output_dir == Path("/tmp/csv")
