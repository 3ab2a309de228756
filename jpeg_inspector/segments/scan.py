"""SOS (start of scan) segment decoder.

Reads only the scan header. The entropy-coded data that follows is
left in the stream; the engine's marker scan walks over it.
"""

from __future__ import annotations

from typing import List

from jpeg_inspector.core.cursor import ByteCursor
from jpeg_inspector.core.ir import Scan, ScanComponent
from jpeg_inspector.segments.base import BaseSegmentDecoder

_MAX_SCAN_COMPONENTS = 4


class ScanDecoder(BaseSegmentDecoder):

    @property
    def name(self) -> str:
        return "SOS"

    def decode(self, cursor: ByteCursor, strict_mode: bool, marker: int) -> Scan:
        reader = self.open_payload(cursor)

        component_count = reader.read_u8()
        if strict_mode and not 1 <= component_count <= _MAX_SCAN_COMPONENTS:
            raise reader.error("invalid scan component count {}".format(component_count))

        components: List[ScanComponent] = []
        for _ in range(component_count):
            component_id = reader.read_u8()
            dc_table_id, ac_table_id = reader.read_nibbles()
            components.append(ScanComponent(
                component_id=component_id,
                dc_table_id=dc_table_id,
                ac_table_id=ac_table_id,
            ))

        spectral_start = reader.read_u8()
        spectral_end = reader.read_u8()
        approximation_high, approximation_low = reader.read_nibbles()

        if strict_mode and reader.remaining:
            raise reader.error("{} unexpected trailing bytes".format(reader.remaining))

        return Scan(
            components=tuple(components),
            spectral_start=spectral_start,
            spectral_end=spectral_end,
            approximation_high=approximation_high,
            approximation_low=approximation_low,
        )
