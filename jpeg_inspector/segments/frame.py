"""SOFn (start of frame) segment decoder.

WHY: All thirteen start-of-frame variants share one header layout;
only the marker code tells them apart. The decoder keeps that code on
the Frame so later stages know whether the frame is baseline,
progressive, lossless, hierarchical, Huffman- or arithmetic-coded.

HOW: Read P, Y, X, Nf, then Nf component entries of (C, H|V, Tq).

RULES:
- The originating marker is stored on Frame.marker unchanged
- Strict: Nf >= 1, sampling factors 1-4, no trailing payload bytes
- Lenient: out-of-range fields and trailing bytes are accepted
"""

from __future__ import annotations

from typing import List

from jpeg_inspector.core.cursor import ByteCursor
from jpeg_inspector.core.ir import Frame, FrameComponent
from jpeg_inspector.core.markers import marker_name
from jpeg_inspector.segments.base import BaseSegmentDecoder


class FrameDecoder(BaseSegmentDecoder):

    @property
    def name(self) -> str:
        return "SOF"

    def decode(self, cursor: ByteCursor, strict_mode: bool, marker: int) -> Frame:
        reader = self.open_payload(cursor)

        precision = reader.read_u8()
        height = reader.read_u16()
        width = reader.read_u16()
        component_count = reader.read_u8()
        if strict_mode and component_count == 0:
            raise reader.error("{} frame declares no components".format(marker_name(marker)))

        components: List[FrameComponent] = []
        for _ in range(component_count):
            component_id = reader.read_u8()
            horizontal, vertical = reader.read_nibbles()
            quantization_table_id = reader.read_u8()
            if strict_mode and not (1 <= horizontal <= 4 and 1 <= vertical <= 4):
                raise reader.error(
                    "component {} has invalid sampling factors {}x{}".format(
                        component_id, horizontal, vertical,
                    )
                )
            components.append(FrameComponent(
                component_id=component_id,
                horizontal_sampling=horizontal,
                vertical_sampling=vertical,
                quantization_table_id=quantization_table_id,
            ))

        if strict_mode and reader.remaining:
            raise reader.error("{} unexpected trailing bytes".format(reader.remaining))

        return Frame(
            marker=int(marker),
            precision=precision,
            height=height,
            width=width,
            components=tuple(components),
        )
