"""Marker codes and classification for the JPEG segment stream.

WHY: Every segment in the bitstream is introduced by a two-byte marker
(0xFF escape + one code byte). The dispatch engine routes on the code
byte, so the set of codes it knows about lives in one place.

HOW: Known codes form a closed IntEnum. Codes outside the enum stay
plain ints: an unrecognized marker is a value, not an error.
FRAME_MARKERS groups the thirteen start-of-frame variants, which share
one handling path and differ only in the code they carry.

RULES:
- MARKER_ESCAPE (0xFF) precedes every marker code
- FRAME_MARKERS: SOF0-3, SOF5-7, SOF9-11, SOF13-15 (0xC4, 0xC8, 0xCC are not frames)
- STANDALONE_MARKERS carry no length field
- RESTART_MARKERS (RST0-7) only occur inside entropy-coded data
"""

from __future__ import annotations

from enum import IntEnum, unique
from typing import Union

MARKER_ESCAPE = 0xFF


@unique
class Marker(IntEnum):
    """Known marker code bytes (the byte after the 0xFF escape)."""

    SOF0 = 0xC0  # baseline DCT, Huffman
    SOF1 = 0xC1  # extended sequential DCT, Huffman
    SOF2 = 0xC2  # progressive DCT, Huffman
    SOF3 = 0xC3  # lossless, Huffman
    DHT = 0xC4
    SOF5 = 0xC5  # differential sequential DCT, Huffman
    SOF6 = 0xC6  # differential progressive DCT, Huffman
    SOF7 = 0xC7  # differential lossless, Huffman
    JPG = 0xC8
    SOF9 = 0xC9  # extended sequential DCT, arithmetic
    SOF10 = 0xCA  # progressive DCT, arithmetic
    SOF11 = 0xCB  # lossless, arithmetic
    DAC = 0xCC
    SOF13 = 0xCD  # differential sequential DCT, arithmetic
    SOF14 = 0xCE  # differential progressive DCT, arithmetic
    SOF15 = 0xCF  # differential lossless, arithmetic
    RST0 = 0xD0
    RST1 = 0xD1
    RST2 = 0xD2
    RST3 = 0xD3
    RST4 = 0xD4
    RST5 = 0xD5
    RST6 = 0xD6
    RST7 = 0xD7
    SOI = 0xD8
    EOI = 0xD9
    SOS = 0xDA
    DQT = 0xDB
    DNL = 0xDC
    DRI = 0xDD
    DHP = 0xDE
    EXP = 0xDF
    APP0 = 0xE0
    APP1 = 0xE1
    APP2 = 0xE2
    APP3 = 0xE3
    APP4 = 0xE4
    APP5 = 0xE5
    APP6 = 0xE6
    APP7 = 0xE7
    APP8 = 0xE8
    APP9 = 0xE9
    APP10 = 0xEA
    APP11 = 0xEB
    APP12 = 0xEC
    APP13 = 0xED
    APP14 = 0xEE
    APP15 = 0xEF
    COM = 0xFE
    TEM = 0x01


MarkerCode = Union[Marker, int]

FRAME_MARKERS: frozenset[Marker] = frozenset({
    Marker.SOF0, Marker.SOF1, Marker.SOF2, Marker.SOF3,
    Marker.SOF5, Marker.SOF6, Marker.SOF7,
    Marker.SOF9, Marker.SOF10, Marker.SOF11,
    Marker.SOF13, Marker.SOF14, Marker.SOF15,
})

RESTART_MARKERS: frozenset[Marker] = frozenset({
    Marker.RST0, Marker.RST1, Marker.RST2, Marker.RST3,
    Marker.RST4, Marker.RST5, Marker.RST6, Marker.RST7,
})

STANDALONE_MARKERS: frozenset[Marker] = frozenset({Marker.SOI, Marker.TEM})

# Human-readable frame kinds, keyed by the originating start-of-frame code.
FRAME_KINDS: dict[Marker, str] = {
    Marker.SOF0: "baseline DCT, Huffman",
    Marker.SOF1: "extended sequential DCT, Huffman",
    Marker.SOF2: "progressive DCT, Huffman",
    Marker.SOF3: "lossless, Huffman",
    Marker.SOF5: "differential sequential DCT, Huffman",
    Marker.SOF6: "differential progressive DCT, Huffman",
    Marker.SOF7: "differential lossless, Huffman",
    Marker.SOF9: "extended sequential DCT, arithmetic",
    Marker.SOF10: "progressive DCT, arithmetic",
    Marker.SOF11: "lossless, arithmetic",
    Marker.SOF13: "differential sequential DCT, arithmetic",
    Marker.SOF14: "differential progressive DCT, arithmetic",
    Marker.SOF15: "differential lossless, arithmetic",
}


def classify(code: int) -> MarkerCode:
    """Return the Marker member for a code byte, or the raw int when unknown."""
    try:
        return Marker(code)
    except ValueError:
        return code


def marker_name(code: int) -> str:
    """Display name for a marker code, e.g. ``"SOF2"`` or ``"0xF3"``."""
    marker = classify(code)
    if isinstance(marker, Marker):
        return marker.name
    return "0x{:02X}".format(code)


def is_frame_marker(code: int) -> bool:
    return code in FRAME_MARKERS
