"""Intermediate representation of an opened JPEG segment stream.

WHY: The dispatch engine turns a flat marker sequence into structure:
comments, table definitions, frames and the scans that belong to each
frame. Formatters, the CLI and any later pixel-reconstruction stage
all consume this one typed form instead of re-walking the bytes.

HOW: Table specs, frame components and scan components are frozen
dataclasses produced by the segment decoders. Frame and Scan are
plain dataclasses. Document is the accumulator the engine fills in a
single pass; it owns a TableRegistry for the table slots.

RULES:
- Comments, frames and scans keep insertion order (it is decode order)
- A Frame only grows by appending scans
- A Scan belongs to exactly one Frame
- Table specs are immutable once built but replaceable in the registry
- Each open_document call builds a fresh Document; nothing is shared
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from jpeg_inspector.core.errors import StructuralViolationError
from jpeg_inspector.core.markers import FRAME_KINDS, Marker, marker_name
from jpeg_inspector.core.tables import TableRegistry


@dataclass(frozen=True)
class Comment:
    """One COM segment.

    RULES:
    - data: payload bytes exactly as stored
    - text: latin-1 view of data with trailing NUL bytes removed
    """

    data: bytes
    text: str


@dataclass(frozen=True)
class QuantizationTableSpec:
    """One quantization table from a DQT segment.

    RULES:
    - precision: 0 for 8-bit values, 1 for 16-bit values
    - destination_id: table slot (0-3 in conforming streams)
    - values: 64 coefficients in zig-zag order, as stored
    """

    precision: int
    destination_id: int
    values: Tuple[int, ...]


@dataclass(frozen=True)
class HuffmanTableSpec:
    """One Huffman table from a DHT segment.

    RULES:
    - table_class: 0 for DC / lossless tables, 1 for AC tables
    - destination_id: table slot (0-3 in conforming streams)
    - code_lengths: 16 counts, number of codes of each length 1..16
    - values: symbol values in code order
    """

    table_class: int
    destination_id: int
    code_lengths: Tuple[int, ...]
    values: Tuple[int, ...]


@dataclass(frozen=True)
class FrameComponent:
    component_id: int
    horizontal_sampling: int
    vertical_sampling: int
    quantization_table_id: int


@dataclass(frozen=True)
class ScanComponent:
    component_id: int
    dc_table_id: int
    ac_table_id: int


@dataclass
class Scan:
    """Header of one entropy-coded pass. The engine never looks inside."""

    components: Tuple[ScanComponent, ...]
    spectral_start: int
    spectral_end: int
    approximation_high: int
    approximation_low: int


@dataclass
class Frame:
    """A start-of-frame header plus the scans decoded after it.

    RULES:
    - marker: the originating SOFn code, records the frame kind
    - scans: appended in stream order, never reordered or removed
    """

    marker: int
    precision: int
    height: int
    width: int
    components: Tuple[FrameComponent, ...]
    scans: List[Scan] = field(default_factory=list)

    @property
    def kind(self) -> str:
        """Human-readable frame kind, e.g. ``"progressive DCT, Huffman"``."""
        try:
            return FRAME_KINDS[Marker(self.marker)]
        except (KeyError, ValueError):
            return "unknown ({})".format(marker_name(self.marker))


class Document:
    """Everything accumulated from one pass over a JPEG segment stream.

    WHY: The engine needs one mutable place to record results as markers
    arrive, and the caller needs one value to take away afterwards.

    HOW: Comments and frames are plain lists. Table slots are delegated
    to a TableRegistry so the quantization/Huffman asymmetry lives in
    one class. Frame handles are list indices.

    RULES:
    - add_frame returns the handle of the frame it added
    - append_scan accepts any existing frame handle
    - restart_interval holds the last DRI value seen, or None
    """

    def __init__(self) -> None:
        self.comments: List[Comment] = []
        self.frames: List[Frame] = []
        self.tables = TableRegistry()
        self.restart_interval: Optional[int] = None

    def add_comment(self, comment: Comment) -> None:
        self.comments.append(comment)

    def add_frame(self, frame: Frame) -> int:
        self.frames.append(frame)
        return len(self.frames) - 1

    def append_scan(self, handle: int, scan: Scan) -> None:
        if not 0 <= handle < len(self.frames):
            raise StructuralViolationError(
                "No frame with handle {} (document has {} frames)".format(
                    handle, len(self.frames)
                )
            )
        self.frames[handle].scans.append(scan)

    def frame_count(self) -> int:
        return len(self.frames)

    def record_restart_interval(self, interval: int) -> None:
        self.restart_interval = interval

    @property
    def quantization_tables(self) -> Mapping[int, QuantizationTableSpec]:
        return self.tables.quantization_tables

    @property
    def huffman_tables(self) -> Mapping[int, HuffmanTableSpec]:
        return self.tables.huffman_tables

    @property
    def huffman_history(self) -> Mapping[int, Sequence[HuffmanTableSpec]]:
        return self.tables.huffman_histories

    @property
    def scan_count(self) -> int:
        return sum(len(frame.scans) for frame in self.frames)

    def is_empty(self) -> bool:
        return not (
            self.comments
            or self.frames
            or self.tables.quantization_tables
            or self.tables.huffman_tables
            or self.restart_interval is not None
        )

    def __repr__(self) -> str:
        return (
            "Document(comments={}, frames={}, scans={}, quantization_tables={}, "
            "huffman_tables={})".format(
                len(self.comments),
                len(self.frames),
                self.scan_count,
                sorted(self.quantization_tables),
                sorted(self.huffman_tables),
            )
        )
