"""Abstract segment decoder and in-memory payload reader.

WHY: The dispatch engine routes each marker to a decoder but must not
know how any payload is laid out. A common interface lets the engine
treat every decoder the same way and lets callers swap decoders in
(for example to record raw payloads, or in tests).

HOW: BaseSegmentDecoder is an ABC with a ``name`` property and a
``decode(cursor, strict_mode, marker)`` method. Decoders read their
whole length-prefixed payload in one call, then parse it with
PayloadReader, so they always consume exactly their own segment.

RULES:
- decode() leaves the cursor just after the segment payload
- Malformed payloads raise SegmentError naming the segment
- strict_mode enables field checks; lenient mode tolerates them
- To add a decoder: subclass, implement name/decode, register in DECODERS
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import Any

from jpeg_inspector.core.cursor import ByteCursor
from jpeg_inspector.core.errors import SegmentError


class PayloadReader:
    """Bounds-checked reads over one segment payload.

    Args:
        payload: The segment bytes after the length field.
        segment: Segment name used in error messages, e.g. ``"DQT"``.
        base_offset: Stream offset of the first payload byte.
    """

    def __init__(self, payload: bytes, segment: str, base_offset: int = 0) -> None:
        self._payload = payload
        self._segment = segment
        self._base_offset = base_offset
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._payload) - self._pos

    def error(self, message: str) -> SegmentError:
        return SegmentError(
            "{}: {}".format(self._segment, message),
            offset=self._base_offset + self._pos,
        )

    def read(self, n: int) -> bytes:
        if n > self.remaining:
            raise self.error(
                "payload too short, needed {} more bytes but {} remain".format(n, self.remaining)
            )
        data = self._payload[self._pos:self._pos + n]
        self._pos += n
        return data

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u16(self) -> int:
        return struct.unpack(">H", self.read(2))[0]

    def read_nibbles(self) -> tuple[int, int]:
        """Read one byte and split it into (high, low) 4-bit fields."""
        value = self.read_u8()
        return value >> 4, value & 0x0F


class BaseSegmentDecoder(ABC):
    """Abstract base for all segment decoders."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short segment name, e.g. 'DQT'."""

    @abstractmethod
    def decode(self, cursor: ByteCursor, strict_mode: bool, marker: int) -> Any:
        """Read one segment payload from the cursor and return its value.

        Args:
            cursor: Positioned just after the marker, at the length field.
            strict_mode: Reject out-of-range fields instead of tolerating them.
            marker: The marker code that introduced this segment.

        Raises:
            SegmentError: If the payload is malformed.
            TruncatedStreamError: If the stream ends inside the segment.
        """

    def open_payload(self, cursor: ByteCursor) -> PayloadReader:
        """Read the length-prefixed payload and wrap it for parsing."""
        payload = cursor.read_segment_payload(
            "Reading {} segment payload.".format(self.name)
        )
        return PayloadReader(payload, self.name, cursor.offset - len(payload))
