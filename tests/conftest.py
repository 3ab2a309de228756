"""Shared test fixtures for the jpeg_inspector test suite.

WHY: Almost every test needs small, exact JPEG byte streams: a header,
a handful of segments in a chosen order, sometimes deliberately broken.
Writing those bytes by hand in each test is noisy and error-prone.

HOW: JpegBuilder assembles streams segment by segment with correct
length fields. The ``jpeg`` fixture hands tests the builder class, and
``baseline_jpeg`` is a complete single-scan baseline stream.

RULES:
- Builders always write length fields that count themselves
- ENTROPY_DATA contains a stuffed FF 00 pair and an RST0 marker so every
  scan exercises the entropy-data marker scan
- Streams are plain bytes; tests wrap them in BytesIO when they need a stream
"""

from __future__ import annotations

import struct
from typing import Iterable, List, Sequence, Tuple

import pytest

SOI = b"\xff\xd8"
EOI = b"\xff\xd9"

ENTROPY_DATA = bytes([0x12, 0xFF, 0x00, 0x34, 0xFF, 0xD0, 0x56, 0x78])

# One code of length 2 → symbol 0x05
SIMPLE_CODE_LENGTHS: Tuple[int, ...] = (0, 1) + (0,) * 14
SIMPLE_VALUES: Tuple[int, ...] = (0x05,)


class JpegBuilder:
    """Fluent builder for JPEG byte streams used in tests."""

    def __init__(self, header: bool = True) -> None:
        self._parts: List[bytes] = [SOI] if header else []

    # -- payload helpers (usable without a builder instance) ---------------

    @staticmethod
    def segment_bytes(code: int, payload: bytes) -> bytes:
        return bytes([0xFF, code]) + struct.pack(">H", len(payload) + 2) + payload

    @staticmethod
    def dqt_payload(table_id: int, value: int = 1, precision: int = 0) -> bytes:
        if precision == 0:
            values = bytes([value]) * 64
        else:
            values = struct.pack(">64H", *([value] * 64))
        return bytes([(precision << 4) | table_id]) + values

    @staticmethod
    def dht_payload(
        table_class: int,
        table_id: int,
        code_lengths: Sequence[int] = SIMPLE_CODE_LENGTHS,
        values: Sequence[int] = SIMPLE_VALUES,
    ) -> bytes:
        return bytes([(table_class << 4) | table_id]) + bytes(code_lengths) + bytes(values)

    @staticmethod
    def sof_payload(
        precision: int = 8,
        height: int = 16,
        width: int = 16,
        components: Iterable[Tuple[int, int, int]] = ((1, 0x11, 0),),
    ) -> bytes:
        components = list(components)
        body = struct.pack(">BHHB", precision, height, width, len(components))
        for component_id, sampling, table_id in components:
            body += bytes([component_id, sampling, table_id])
        return body

    @staticmethod
    def sos_payload(
        components: Iterable[Tuple[int, int]] = ((1, 0x00),),
        spectral_start: int = 0,
        spectral_end: int = 63,
        approximation: int = 0,
    ) -> bytes:
        components = list(components)
        body = bytes([len(components)])
        for component_id, tables in components:
            body += bytes([component_id, tables])
        return body + bytes([spectral_start, spectral_end, approximation])

    # -- stream building ---------------------------------------------------

    def raw(self, data: bytes) -> JpegBuilder:
        self._parts.append(data)
        return self

    def segment(self, code: int, payload: bytes) -> JpegBuilder:
        return self.raw(self.segment_bytes(code, payload))

    def comment(self, text: bytes) -> JpegBuilder:
        return self.segment(0xFE, text)

    def dqt(self, table_id: int, value: int = 1, precision: int = 0) -> JpegBuilder:
        return self.segment(0xDB, self.dqt_payload(table_id, value, precision))

    def dht(
        self,
        table_class: int,
        table_id: int,
        code_lengths: Sequence[int] = SIMPLE_CODE_LENGTHS,
        values: Sequence[int] = SIMPLE_VALUES,
    ) -> JpegBuilder:
        return self.segment(0xC4, self.dht_payload(table_class, table_id, code_lengths, values))

    def sof(self, marker: int = 0xC0, **kwargs) -> JpegBuilder:
        return self.segment(marker, self.sof_payload(**kwargs))

    def sos(self, entropy: bytes = ENTROPY_DATA, **kwargs) -> JpegBuilder:
        self.segment(0xDA, self.sos_payload(**kwargs))
        return self.raw(entropy)

    def dri(self, interval: int) -> JpegBuilder:
        return self.segment(0xDD, struct.pack(">H", interval))

    def eoi(self) -> JpegBuilder:
        return self.raw(EOI)

    def build(self) -> bytes:
        return b"".join(self._parts)


@pytest.fixture
def jpeg():
    """The JpegBuilder class; call it to start a new stream."""
    return JpegBuilder


@pytest.fixture
def baseline_jpeg():
    """A complete baseline stream: JFIF APP0, two DQT, SOF0, four DHT, one scan."""
    jfif = b"JFIF\x00\x01\x01\x00\x00\x48\x00\x48\x00\x00"
    return (
        JpegBuilder()
        .segment(0xE0, jfif)
        .comment(b"created by tests")
        .dqt(0, value=2)
        .dqt(1, value=3)
        .sof(
            0xC0,
            height=8,
            width=8,
            components=((1, 0x11, 0), (2, 0x11, 1), (3, 0x11, 1)),
        )
        .dht(0, 0)
        .dht(1, 0)
        .dht(0, 1)
        .dht(1, 1)
        .sos(components=((1, 0x00), (2, 0x11), (3, 0x11)))
        .eoi()
        .build()
    )
