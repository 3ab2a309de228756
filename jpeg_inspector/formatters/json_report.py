"""JSON structure report formatter.

WHY: Pipelines that audit or index JPEG files want the segment
structure as machine-readable data: frames with their scans, the
tables in force at EOI, every Huffman redefinition, and comments.

HOW: Walk the Document and build plain dicts and lists, then validate
the result against document_report_schema.json with jsonschema before
serializing it.

RULES:
- Tables are listed in ascending destination id order
- huffman_history lists every definition per id, oldest first
- Quantization tables have no history section (only the current table exists)
- Frames and scans keep stream order
- Output suffix: "-segments.json"
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from jpeg_inspector.core.ir import Document, Frame, HuffmanTableSpec, Scan
from jpeg_inspector.core.markers import marker_name
from jpeg_inspector.formatters.base import BaseFormatter, FormatterOutput

REPORT_VERSION = "1.0.0"

_SCHEMA_PATH = Path(__file__).resolve().parent / "document_report_schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    """Load the report schema from disk, once."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _huffman_dict(spec: HuffmanTableSpec) -> dict[str, Any]:
    return {
        "destination_id": spec.destination_id,
        "table_class": spec.table_class,
        "code_lengths": list(spec.code_lengths),
        "values": list(spec.values),
    }


def _scan_dict(scan: Scan) -> dict[str, Any]:
    return {
        "components": [
            {
                "id": component.component_id,
                "dc_table_id": component.dc_table_id,
                "ac_table_id": component.ac_table_id,
            }
            for component in scan.components
        ],
        "spectral_start": scan.spectral_start,
        "spectral_end": scan.spectral_end,
        "approximation_high": scan.approximation_high,
        "approximation_low": scan.approximation_low,
    }


def _frame_dict(frame: Frame) -> dict[str, Any]:
    return {
        "marker": marker_name(frame.marker),
        "kind": frame.kind,
        "precision": frame.precision,
        "height": frame.height,
        "width": frame.width,
        "components": [
            {
                "id": component.component_id,
                "horizontal_sampling": component.horizontal_sampling,
                "vertical_sampling": component.vertical_sampling,
                "quantization_table_id": component.quantization_table_id,
            }
            for component in frame.components
        ],
        "scans": [_scan_dict(scan) for scan in frame.scans],
    }


def build_report(document: Document) -> dict[str, Any]:
    """Convert a Document into the report dict (not yet validated)."""
    quantization = document.quantization_tables
    huffman = document.huffman_tables
    history = document.huffman_history

    return {
        "version": REPORT_VERSION,
        "comments": [
            {"text": comment.text, "length": len(comment.data)}
            for comment in document.comments
        ],
        "restart_interval": document.restart_interval,
        "quantization_tables": [
            {
                "destination_id": table_id,
                "precision": quantization[table_id].precision,
                "values": list(quantization[table_id].values),
            }
            for table_id in sorted(quantization)
        ],
        "huffman_tables": [_huffman_dict(huffman[table_id]) for table_id in sorted(huffman)],
        "huffman_history": [
            {
                "destination_id": table_id,
                "definitions": [_huffman_dict(spec) for spec in history[table_id]],
            }
            for table_id in sorted(history)
        ],
        "frames": [_frame_dict(frame) for frame in document.frames],
    }


class JsonReportFormatter(BaseFormatter):
    """Formatter that produces the JSON structure report."""

    @property
    def name(self) -> str:
        return "JSON report"

    def format(self, document: Document) -> list[FormatterOutput]:
        """Render the Document as schema-validated JSON.

        Raises:
            jsonschema.ValidationError: If the report does not conform
                to document_report_schema.json.
        """
        report = build_report(document)
        jsonschema.validate(instance=report, schema=_get_schema())

        return [
            FormatterOutput(
                suffix="-segments.json",
                content=json.dumps(report, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
