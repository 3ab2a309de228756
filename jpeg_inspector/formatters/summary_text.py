"""Plain text structure summary formatter.

WHY: A person looking at a suspicious or unusual JPEG wants a quick
outline, not a JSON dump: how many frames, what kind, which scans,
which table slots were defined and how often.

HOW: One line per fact, indented by nesting level. Huffman slots show
how many times they were defined; quantization slots only show the
table in force because no history is kept for them.

RULES:
- Frames numbered from 1, scans numbered from 1 within their frame
- Comments are shown on one line each, control characters escaped
- Empty sections are written as "(none)"
- Output suffix: "-segments.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from jpeg_inspector.core.ir import Document, Frame
from jpeg_inspector.core.markers import marker_name
from jpeg_inspector.formatters.base import BaseFormatter, FormatterOutput

_TABLE_CLASSES = {0: "DC", 1: "AC"}


def _printable(text: str) -> str:
    """Escape control characters so each comment stays on one line."""
    return "".join(ch if ch.isprintable() else "\\x{:02x}".format(ord(ch)) for ch in text)


def _frame_lines(index: int, frame: Frame) -> List[str]:
    lines = [
        "Frame {}: {} ({}), {}x{}, {}-bit, {} component(s)".format(
            index,
            marker_name(frame.marker),
            frame.kind,
            frame.width,
            frame.height,
            frame.precision,
            len(frame.components),
        )
    ]
    for component in frame.components:
        lines.append("  Component {}: sampling {}x{}, quantization table {}".format(
            component.component_id,
            component.horizontal_sampling,
            component.vertical_sampling,
            component.quantization_table_id,
        ))
    if not frame.scans:
        lines.append("  Scans: (none)")
    for scan_index, scan in enumerate(frame.scans, start=1):
        ids = ", ".join(str(c.component_id) for c in scan.components)
        lines.append("  Scan {}: components [{}], spectral {}-{}, approximation {}/{}".format(
            scan_index,
            ids,
            scan.spectral_start,
            scan.spectral_end,
            scan.approximation_high,
            scan.approximation_low,
        ))
    return lines


class SummaryTextFormatter(BaseFormatter):
    """Formatter that produces a short human-readable outline."""

    @property
    def name(self) -> str:
        return "Text summary"

    def format(self, document: Document) -> List[FormatterOutput]:
        lines: List[str] = []

        lines.append("Frames: {}, scans: {}".format(document.frame_count(), document.scan_count))
        for index, frame in enumerate(document.frames, start=1):
            lines.extend(_frame_lines(index, frame))

        lines.append("")
        lines.append("Quantization tables:")
        quantization = document.quantization_tables
        if not quantization:
            lines.append("  (none)")
        for table_id in sorted(quantization):
            spec = quantization[table_id]
            lines.append("  Table {}: {}-bit".format(table_id, 8 if spec.precision == 0 else 16))

        lines.append("")
        lines.append("Huffman tables:")
        huffman = document.huffman_tables
        history = document.huffman_history
        if not huffman:
            lines.append("  (none)")
        for table_id in sorted(huffman):
            spec = huffman[table_id]
            lines.append("  Table {}: {}, {} code(s), defined {} time(s)".format(
                table_id,
                _TABLE_CLASSES.get(spec.table_class, "class {}".format(spec.table_class)),
                len(spec.values),
                len(history.get(table_id, ())),
            ))

        lines.append("")
        if document.restart_interval is None:
            lines.append("Restart interval: (none)")
        else:
            lines.append("Restart interval: {} MCU(s)".format(document.restart_interval))

        lines.append("")
        lines.append("Comments:")
        if not document.comments:
            lines.append("  (none)")
        for comment in document.comments:
            lines.append("  {}".format(_printable(comment.text)))

        return [
            FormatterOutput(
                suffix="-segments.txt",
                content="\n".join(lines) + "\n",
                media_type="text/plain",
            )
        ]
