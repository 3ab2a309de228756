"""Sequential byte cursor over a JPEG source.

WHY: The dispatch engine and the segment decoders only ever move
forward through the stream: read N bytes, read a big-endian 16-bit
value, find the next marker. Wrapping the source once gives them a
single place that tracks the byte offset and turns "ran out of bytes"
into a TruncatedStreamError with context.

HOW: ByteCursor accepts bytes-like objects or any binary file-like
object with ``read(n)``. Data is pulled from the source in chunks into
a small push-back buffer, so ``peek`` works on non-seekable streams
(sockets, pipes, HTTP bodies). The marker scan walks over
entropy-coded data: stuffed ``FF 00`` pairs, fill bytes and restart
markers are not segment boundaries.

RULES:
- The cursor never closes or seeks its source
- ``offset`` counts bytes consumed, not bytes buffered
- Segment length fields count themselves (payload = length - 2)
- Missing bytes always raise TruncatedStreamError naming the context
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Optional, Union

from jpeg_inspector.core.errors import SegmentError, TruncatedStreamError
from jpeg_inspector.core.markers import MARKER_ESCAPE, RESTART_MARKERS, MarkerCode, classify

Source = Union[bytes, bytearray, memoryview, BinaryIO]

_CHUNK_SIZE = 64 * 1024


class ByteCursor:
    """Forward-only reader over a borrowed byte source.

    Args:
        source: Raw bytes or a readable binary stream. Streams stay
                owned by the caller.
    """

    def __init__(self, source: Source) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        elif not hasattr(source, "read"):
            raise TypeError(
                "Expected bytes or a readable binary stream, got {}".format(
                    type(source).__name__
                )
            )
        self._source = source
        self._buffer = bytearray()
        self._offset = 0
        self._exhausted = False

    @property
    def offset(self) -> int:
        """Number of bytes consumed from the source so far."""
        return self._offset

    def _fill(self, n: int) -> bool:
        """Buffer at least n bytes if the source still has them."""
        while len(self._buffer) < n and not self._exhausted:
            chunk = self._source.read(max(n - len(self._buffer), _CHUNK_SIZE))
            if not chunk:
                self._exhausted = True
                break
            self._buffer.extend(chunk)
        return len(self._buffer) >= n

    def _consume(self, n: int) -> None:
        del self._buffer[:n]
        self._offset += n

    def _truncated(self, context: Optional[str], wanted: str) -> TruncatedStreamError:
        if context:
            message = "{} Stream ended while reading {}.".format(context, wanted)
        else:
            message = "Stream ended while reading {}.".format(wanted)
        return TruncatedStreamError(message, offset=self._offset + len(self._buffer))

    def peek(self, n: int) -> bytes:
        """Return up to n upcoming bytes without consuming them."""
        self._fill(n)
        return bytes(self._buffer[:n])

    def read(self, n: int, context: Optional[str] = None) -> bytes:
        """Read exactly n bytes.

        Raises:
            TruncatedStreamError: If fewer than n bytes remain.
        """
        if n < 0:
            raise ValueError("Cannot read a negative number of bytes: {}".format(n))
        if not self._fill(n):
            raise self._truncated(context, "{} bytes".format(n))
        data = bytes(self._buffer[:n])
        self._consume(n)
        return data

    def read_u8(self, context: Optional[str] = None) -> int:
        return self.read(1, context)[0]

    def read_u16(self, context: Optional[str] = None) -> int:
        """Read a big-endian unsigned 16-bit value."""
        return struct.unpack(">H", self.read(2, context))[0]

    def read_segment_payload(self, context: Optional[str] = None) -> bytes:
        """Read a length-prefixed segment body and return the payload bytes.

        The length field counts its own two bytes, so the returned payload
        is ``length - 2`` bytes long.
        """
        length_offset = self._offset
        length = self.read_u16(context)
        if length < 2:
            raise SegmentError(
                "Segment length {} is smaller than its own length field".format(length),
                offset=length_offset,
            )
        return self.read(length - 2, context)

    def read_marker(self, skip_payload: bool = False, context: str = "") -> MarkerCode:
        """Advance to the next marker and return its code.

        Args:
            skip_payload: When True, first read a length field and discard
                          the payload it declares.
            context: Prefix for the TruncatedStreamError message, normally
                     naming the segment that was just processed.

        Returns:
            A Marker member, or the raw int code for unrecognized markers.
        """
        if skip_payload:
            self.read_segment_payload(context)

        while True:
            if not self._fill(1):
                raise self._truncated(context, "the next marker")
            index = self._buffer.find(MARKER_ESCAPE)
            if index < 0:
                self._consume(len(self._buffer))
                continue
            self._consume(index + 1)

            code = self._read_code_byte(context)
            # FF 00 is a stuffed data byte, RSTn sits inside scan data.
            if code == 0x00 or code in RESTART_MARKERS:
                continue
            return classify(code)

    def _read_code_byte(self, context: str) -> int:
        """Read the byte after an escape, skipping fill bytes (FF FF ...)."""
        while True:
            if not self._fill(1):
                raise self._truncated(context, "a marker code")
            code = self._buffer[0]
            self._consume(1)
            if code != MARKER_ESCAPE:
                return code
