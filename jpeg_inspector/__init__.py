"""JPEG Inspector: marker-segment dispatch for JPEG bitstreams.

WHY: Tools that sniff, audit or later decode JPEG files first need the
file's structure: which frames and scans it has, which tables it
defines (and redefines), what comments it carries. This package reads
that structure in one forward pass without touching pixel data.

HOW: Three stages. The cursor reads bytes and markers, the dispatch
engine routes each segment to a pluggable decoder and fills a
Document, and formatters render the Document (JSON report, text
summary). Each stage is independently testable.

RULES:
- open_document is the single entry point for parsing
- Adding a segment decoder = one module in segments/, one registry line
- Adding an output format = one module in formatters/, one registry line
- The Document IR is the contract between parsing and formatting
"""

from jpeg_inspector.core.errors import (
    JpegOpenError,
    NotThisFormatError,
    SegmentError,
    StructuralViolationError,
    TruncatedStreamError,
    UnsupportedFeatureError,
)
from jpeg_inspector.core.ir import Document
from jpeg_inspector.core.opener import open_document

__version__ = "0.1.0"

__all__ = [
    "Document",
    "JpegOpenError",
    "NotThisFormatError",
    "SegmentError",
    "StructuralViolationError",
    "TruncatedStreamError",
    "UnsupportedFeatureError",
    "open_document",
]
