"""Marker-driven dispatch engine that opens a JPEG segment stream.

WHY: A JPEG file is a flat run of marker-delimited segments, but its
meaning depends on order and position: scans belong to the frame
before them, tables can be redefined between scans, and EOI ends the
image. This module walks the markers once, in order, and builds the
Document that captures that structure.

HOW: After the SOI header check, read a marker, decide whether a
decoder owns it, decode or mark it for skipping, then advance to the
next marker. Decoded segments leave the cursor at their end; skipped
segments are stepped over using their length field. The loop stops on
EOI. Any failure propagates straight to the caller.

RULES:
- Strict mode: the source must start with FF D8 or NotThisFormatError
- Lenient mode: a missing header is tolerated and nothing is consumed
- DQT: current table per id is overwritten, no history
- DHT: current table per id is overwritten AND appended to history
- DAC: UnsupportedFeatureError in every mode
- DRI: interval value recorded, nothing else
- SOS with no frame yet: StructuralViolationError in every mode
- SOF0-15 (frame variants): one shared path, the marker code travels with the frame
- Anything else: skipped by its declared length
- No local recovery; no partial Document is ever returned
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

from jpeg_inspector.core.cursor import ByteCursor, Source
from jpeg_inspector.core.errors import (
    NotThisFormatError,
    StructuralViolationError,
    UnsupportedFeatureError,
)
from jpeg_inspector.core.ir import Document
from jpeg_inspector.core.markers import (
    FRAME_MARKERS,
    MARKER_ESCAPE,
    STANDALONE_MARKERS,
    Marker,
    MarkerCode,
    marker_name,
)
from jpeg_inspector.segments import DECODERS
from jpeg_inspector.segments.base import BaseSegmentDecoder

logger = logging.getLogger(__name__)

JPEG_HEADER = bytes([MARKER_ESCAPE, Marker.SOI])

# Segment kinds with a decoder slot, keyed by marker code.
_SEGMENT_KINDS: dict[int, str] = {
    Marker.COM: "comment",
    Marker.DQT: "quantization",
    Marker.DHT: "huffman",
    Marker.SOS: "scan",
}
_SEGMENT_KINDS.update({marker: "frame" for marker in FRAME_MARKERS})


def has_jpeg_header(cursor: ByteCursor) -> bool:
    """Return True if the next two bytes are the SOI header (FF D8).

    Only peeks; the cursor position is unchanged.
    """
    return cursor.peek(2) == JPEG_HEADER


def open_document(
    source: Union[Source, ByteCursor],
    strict_mode: bool = True,
    decoders: Optional[Mapping[str, type[BaseSegmentDecoder]]] = None,
) -> Document:
    """Parse a JPEG segment stream into a Document.

    Args:
        source: Raw bytes, a readable binary stream, or a ByteCursor.
                Streams are borrowed: never closed, read forward only.
        strict_mode: Require the SOI header and let decoders reject
                     out-of-range fields.
        decoders: Segment-kind → decoder class mapping. Defaults to
                  DECODERS. Kinds missing here are skipped by length.

    Returns:
        The Document accumulated up to the EOI marker.

    Raises:
        NotThisFormatError: Strict mode and no SOI header.
        UnsupportedFeatureError: A DAC segment was found.
        StructuralViolationError: A scan appeared before any frame.
        TruncatedStreamError: The stream ended before EOI.
        SegmentError: A decoder rejected a segment payload.
    """
    if source is None:
        raise ValueError("source must not be None")
    readable = getattr(source, "readable", None)
    if callable(readable) and not readable():
        raise ValueError(
            "The provided stream of type {} was not readable.".format(type(source).__name__)
        )

    cursor = source if isinstance(source, ByteCursor) else ByteCursor(source)

    if has_jpeg_header(cursor):
        cursor.read(2)
    elif strict_mode:
        raise NotThisFormatError(
            "The provided source did not start with the JPEG header.",
            offset=cursor.offset,
        )
    else:
        logger.debug("No SOI header at offset %d, continuing in lenient mode", cursor.offset)

    active = {
        kind: decoder_cls()
        for kind, decoder_cls in (DECODERS if decoders is None else decoders).items()
    }
    document = Document()

    marker = cursor.read_marker(context="Expected the first marker after the JPEG header.")
    while marker != Marker.EOI:
        skip_payload = _dispatch(marker, cursor, document, active, strict_mode)
        marker = cursor.read_marker(
            skip_payload,
            "Expected next marker after reading section of type: {}.".format(marker_name(marker)),
        )

    logger.info(
        "Opened JPEG: %d frame(s), %d scan(s), %d comment(s), %d byte(s) read",
        document.frame_count(), document.scan_count, len(document.comments), cursor.offset,
    )
    return document


def _dispatch(
    marker: MarkerCode,
    cursor: ByteCursor,
    document: Document,
    active: Mapping[str, BaseSegmentDecoder],
    strict_mode: bool,
) -> bool:
    """Handle one segment and return whether its payload still needs skipping."""
    offset = cursor.offset
    logger.debug("Segment %s at offset %d", marker_name(marker), offset)

    if marker == Marker.DAC:
        raise UnsupportedFeatureError(
            "No support for arithmetic coding conditioning tables.",
            marker=marker,
            offset=offset,
        )

    if marker == Marker.DRI:
        context = "Reading DRI segment."
        cursor.read_u16(context)  # segment length, always 4
        document.record_restart_interval(cursor.read_u16(context))
        return False

    if marker in STANDALONE_MARKERS:
        return False

    # Checked before any decoding: a stray scan is fatal even if SOS is not decoded.
    if marker == Marker.SOS and document.frame_count() == 0:
        raise StructuralViolationError(
            "Scan encountered outside any frame.",
            marker=marker,
            offset=offset,
        )

    kind = _SEGMENT_KINDS.get(marker)
    decoder = active.get(kind) if kind else None
    if decoder is None:
        return True

    if kind == "comment":
        document.add_comment(decoder.decode(cursor, strict_mode, marker))
    elif kind == "quantization":
        for spec in decoder.decode(cursor, strict_mode, marker):
            document.tables.set_quantization(spec.destination_id, spec)
    elif kind == "huffman":
        for spec in decoder.decode(cursor, strict_mode, marker):
            document.tables.set_huffman(spec.destination_id, spec)
    elif kind == "scan":
        scan = decoder.decode(cursor, strict_mode, marker)
        document.append_scan(document.frame_count() - 1, scan)
    elif kind == "frame":
        document.add_frame(decoder.decode(cursor, strict_mode, marker))

    return False
