"""Error taxonomy for opening a JPEG segment stream.

WHY: Callers need to tell "this is not a JPEG, try another decoder"
apart from "this is a JPEG we cannot or will not read". A typed
hierarchy lets the format-detection layer and the CLI react to each
case without string matching.

HOW: Every failure raised while opening derives from JpegOpenError,
which carries the marker being processed and the byte offset when
they are known. Segment decoders raise SegmentError; the engine lets
it through unchanged.

RULES:
- NotThisFormatError: strict header sniff failed (recoverable by caller)
- UnsupportedFeatureError: arithmetic conditioning tables, any mode
- StructuralViolationError: scan with no frame to own it
- TruncatedStreamError: expected bytes missing; message names the context
- SegmentError: opaque decoder failure, never wrapped by the engine
"""

from __future__ import annotations

from typing import Optional


class JpegOpenError(Exception):
    """Base class for every failure raised by open_document.

    Attributes:
        marker: Marker code being processed when the error occurred, if known.
        offset: Byte offset into the source where the error was detected, if known.
    """

    def __init__(
        self,
        message: str,
        marker: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> None:
        self.message = message
        self.marker = marker
        self.offset = offset
        super().__init__(self._describe())

    def _describe(self) -> str:
        details = []
        if self.marker is not None:
            details.append("marker=0x{:02X}".format(self.marker))
        if self.offset is not None:
            details.append("offset={}".format(self.offset))
        if not details:
            return self.message
        return "{} ({})".format(self.message, ", ".join(details))


class NotThisFormatError(JpegOpenError):
    """Raised in strict mode when the source does not start with FF D8."""


class UnsupportedFeatureError(JpegOpenError):
    """Raised when the stream uses a feature this decoder does not implement."""


class StructuralViolationError(JpegOpenError):
    """Raised when segments appear in a position the format forbids."""


class TruncatedStreamError(JpegOpenError):
    """Raised when the source ends before an expected marker, length or payload.

    The message always names what was being read, e.g. the segment kind
    whose payload was being skipped.
    """


class SegmentError(JpegOpenError):
    """Raised by segment decoders for malformed segment payloads."""
