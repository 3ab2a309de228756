"""Command-line interface for JPEG Inspector.

WHY: Users need a quick way to see how a JPEG file is put together
(frames, scans, tables, comments) or to check whether a file is a
well-formed JPEG stream at all, from the terminal or from scripts.

HOW: Uses argparse to accept a local path or http(s) URL, the
validation mode, the report formats and an optional output directory.
The source is loaded into memory, parsed with open_document, and each
selected formatter's output is either printed to stdout or saved next
to the other reports. Status messages go to stderr.

RULES:
- Positional argument: local file path or http(s) URL
- --strict / --no-strict: header and field validation (default from config)
- --formats: comma-separated formatter keys (default: all registered)
- Without --output-dir, reports are printed to stdout
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-segments-2.json)
- Exit codes: 0 ok, 1 error, 2 not a JPEG stream (strict mode)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import httpx

from jpeg_inspector.config import DEFAULT_STRICT_MODE, JPEG_EXTENSIONS, LOG_FORMAT, LOG_LEVEL
from jpeg_inspector.core.errors import JpegOpenError, NotThisFormatError
from jpeg_inspector.core.opener import open_document
from jpeg_inspector.formatters import FORMATTERS
from jpeg_inspector.formatters.base import FormatterOutput
from jpeg_inspector.sources import is_url, load_source_bytes

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_NOT_JPEG = 2


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str, code: int = EXIT_ERROR) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(code)


def _source_stem(location: str) -> str:
    """Filename stem for a path or URL, e.g. ``"photo"`` for ``.../photo.jpg``."""
    if is_url(location):
        name = Path(urlparse(location).path).name
        return Path(name).stem or "download"
    return Path(location).stem


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. photo-segments.json)
    - Conflict: insert counter before the extension (photo-segments-2.json)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    """Write one formatter output to disk and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")
    return path


def _select_formats(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def _run(args: argparse.Namespace) -> None:
    """Load, parse and report on one source."""
    format_keys = _select_formats(args.formats)

    output_dir: Optional[Path] = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            _fail("Output directory does not exist: {}".format(output_dir))

    location = args.source
    if not is_url(location):
        path = Path(location)
        if not path.is_file():
            _fail("File not found: {}".format(path.resolve()))
        if path.suffix.lower() not in JPEG_EXTENSIONS:
            _status("Warning: '{}' does not have a JPEG extension".format(path.name))

    try:
        data = load_source_bytes(location)
    except httpx.HTTPError as e:
        _fail("Download failed: {}".format(e))
    except (OSError, ValueError) as e:
        _fail(str(e))

    _status("Parsing {} ({} bytes, {} mode)...".format(
        location, len(data), "strict" if args.strict else "lenient",
    ))
    try:
        document = open_document(data, strict_mode=args.strict)
    except NotThisFormatError as e:
        _fail(str(e), EXIT_NOT_JPEG)
    except JpegOpenError as e:
        logger.debug("Parse failed", exc_info=True)
        _fail(str(e))

    _status("  {} frame(s), {} scan(s), {} comment(s)".format(
        document.frame_count(), document.scan_count, len(document.comments),
    ))

    stem = _source_stem(location)
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(document):
            if output_dir is None:
                content = output.content
                if isinstance(content, bytes):
                    content = content.decode("utf-8")
                sys.stdout.write(content)
                if not content.endswith("\n"):
                    sys.stdout.write("\n")
            else:
                saved_path = _save_output(output, stem, output_dir)
                _status("  Saved: {}".format(saved_path.name))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="jpeg_inspector",
        description="Read the marker/segment structure of a JPEG file and report "
                    "its frames, scans, tables and comments.",
    )

    parser.add_argument(
        "source",
        help="Path or http(s) URL of the JPEG to inspect.",
    )

    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_STRICT_MODE,
        help="Require the JPEG header and reject out-of-range fields (default: %(default)s).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of report formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save report files (default: print to stdout).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging of every segment.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    _run(args)


if __name__ == "__main__":
    main()
