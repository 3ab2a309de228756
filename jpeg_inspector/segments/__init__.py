"""Segment decoder registry.

WHY: The dispatch engine decides skip-versus-decode by asking whether a
segment kind has a decoder. Keeping the mapping in one dict makes the
default set explicit and lets callers pass a different set to
open_document.

HOW: DECODERS maps segment-kind keys to decoder *classes* (not
instances). The engine instantiates the classes once per call.

RULES:
- Keys: "comment", "quantization", "huffman", "frame", "scan"
- A kind missing from the mapping is skipped by length instead of decoded
- Every decoder listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jpeg_inspector.segments.comment import CommentDecoder
from jpeg_inspector.segments.frame import FrameDecoder
from jpeg_inspector.segments.huffman import HuffmanTableDecoder
from jpeg_inspector.segments.quantization import QuantizationTableDecoder
from jpeg_inspector.segments.scan import ScanDecoder

if TYPE_CHECKING:
    from jpeg_inspector.segments.base import BaseSegmentDecoder

DECODERS: dict[str, type[BaseSegmentDecoder]] = {
    "comment": CommentDecoder,
    "quantization": QuantizationTableDecoder,
    "huffman": HuffmanTableDecoder,
    "frame": FrameDecoder,
    "scan": ScanDecoder,
}
