"""Tests for the command-line interface.

WHY: The CLI is how most people run the inspector. Its exit codes are
used by scripts to tell "not a JPEG" apart from other failures, so
they are part of the contract.

HOW: main() is called with an explicit argv. Reports printed to stdout
are captured with capsys, saved reports are checked in tmp_path, and
URL loading is patched out with unittest.mock.

RULES:
- Exit 0: report produced
- Exit 1: bad arguments, unreadable source, malformed stream
- Exit 2: strict mode and the source is not a JPEG stream
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from jpeg_inspector.cli import _resolve_output_path, _source_stem, build_parser, main


@pytest.fixture
def jpeg_file(tmp_path, baseline_jpeg):
    path = tmp_path / "photo.jpg"
    path.write_bytes(baseline_jpeg)
    return path


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["photo.jpg"])
        assert args.source == "photo.jpg"
        assert args.formats is None
        assert args.output_dir is None
        assert args.verbose is False

    def test_no_strict(self):
        assert build_parser().parse_args(["x.jpg", "--no-strict"]).strict is False


class TestStdoutOutput:

    def test_json_report_to_stdout(self, jpeg_file, capsys):
        main([str(jpeg_file), "--formats", "json_report"])
        captured = capsys.readouterr()
        report = json.loads(captured.out)
        assert report["frames"][0]["marker"] == "SOF0"
        assert "1 frame(s), 1 scan(s), 1 comment(s)" in captured.err

    def test_all_formats_by_default(self, jpeg_file, capsys):
        main([str(jpeg_file)])
        out = capsys.readouterr().out
        assert '"version": "1.0.0"' in out
        assert "Frames: 1, scans: 1" in out


class TestSavedOutput:

    def test_saves_each_format(self, jpeg_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(jpeg_file), "--output-dir", str(out_dir)])
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "photo-segments.json",
            "photo-segments.txt",
        ]

    def test_conflicts_get_numeric_suffix(self, jpeg_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(jpeg_file), "--output-dir", str(out_dir), "--formats", "summary_text"])
        main([str(jpeg_file), "--output-dir", str(out_dir), "--formats", "summary_text"])
        assert (out_dir / "photo-segments-2.txt").exists()

    def test_resolve_output_path_counts_up(self, tmp_path):
        (tmp_path / "a-segments.json").write_text("{}")
        (tmp_path / "a-segments-2.json").write_text("{}")
        path = _resolve_output_path("a", "-segments.json", tmp_path)
        assert path.name == "a-segments-3.json"

    def test_missing_output_dir(self, jpeg_file, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([str(jpeg_file), "--output-dir", str(tmp_path / "missing")])
        assert excinfo.value.code == 1


class TestExitCodes:

    def test_not_a_jpeg_in_strict_mode(self, tmp_path, capsys):
        path = tmp_path / "notes.jpg"
        path.write_bytes(b"GIF89a")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--strict"])
        assert excinfo.value.code == 2
        assert "Error:" in capsys.readouterr().err

    def test_headerless_stream_in_lenient_mode(self, tmp_path, jpeg, capsys):
        path = tmp_path / "bare.jpg"
        path.write_bytes(jpeg(header=False).comment(b"hi").eoi().build())
        main([str(path), "--no-strict", "--formats", "summary_text"])
        assert "  hi" in capsys.readouterr().out.splitlines()

    def test_truncated_stream(self, tmp_path, baseline_jpeg):
        path = tmp_path / "cut.jpg"
        path.write_bytes(baseline_jpeg[:-2])
        with pytest.raises(SystemExit) as excinfo:
            main([str(path)])
        assert excinfo.value.code == 1

    def test_unknown_format(self, jpeg_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(jpeg_file), "--formats", "xml"])
        assert excinfo.value.code == 1
        assert "Unknown format 'xml'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "nope.jpg")])
        assert excinfo.value.code == 1

    def test_extension_warning(self, tmp_path, baseline_jpeg, capsys):
        path = tmp_path / "photo.bin"
        path.write_bytes(baseline_jpeg)
        main([str(path), "--formats", "summary_text"])
        assert "does not have a JPEG extension" in capsys.readouterr().err


class TestUrlSource:

    def test_url_is_downloaded(self, baseline_jpeg, capsys):
        with patch("jpeg_inspector.cli.load_source_bytes", return_value=baseline_jpeg) as load:
            main(["https://example.test/images/photo.jpg", "--formats", "summary_text"])
        load.assert_called_once_with("https://example.test/images/photo.jpg")
        assert "Frames: 1, scans: 1" in capsys.readouterr().out

    def test_download_too_large(self):
        with patch("jpeg_inspector.cli.load_source_bytes", side_effect=ValueError("too big")):
            with pytest.raises(SystemExit) as excinfo:
                main(["https://example.test/photo.jpg"])
        assert excinfo.value.code == 1

    def test_source_stem_from_url(self):
        assert _source_stem("https://example.test/images/photo.jpg?x=1") == "photo"
        assert _source_stem("https://example.test/") == "download"
