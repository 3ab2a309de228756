"""DHT (define Huffman table) segment decoder.

WHY: A DHT segment may define several DC and AC tables in one go. The
engine records each table separately, current and in history, under
its destination id.

HOW: Loop over the payload: one Tc|Th byte, sixteen code-length
counts, then as many symbol values as the counts add up to.

RULES:
- Strict: Tc must be 0 or 1, Th must be 0-3, total codes <= 256
- Code lengths and values are copied as stored; no code is built here
- A table cut short by the segment end is a SegmentError in both modes
"""

from __future__ import annotations

from typing import List

from jpeg_inspector.core.cursor import ByteCursor
from jpeg_inspector.core.ir import HuffmanTableSpec
from jpeg_inspector.segments.base import BaseSegmentDecoder

_CODE_LENGTH_COUNTS = 16
_MAX_CODES = 256
_MAX_DESTINATION_ID = 3


class HuffmanTableDecoder(BaseSegmentDecoder):

    @property
    def name(self) -> str:
        return "DHT"

    def decode(
        self,
        cursor: ByteCursor,
        strict_mode: bool,
        marker: int,
    ) -> List[HuffmanTableSpec]:
        reader = self.open_payload(cursor)
        tables: List[HuffmanTableSpec] = []

        while reader.remaining > 0:
            table_class, destination_id = reader.read_nibbles()
            if strict_mode:
                if table_class > 1:
                    raise reader.error("invalid table class {}".format(table_class))
                if destination_id > _MAX_DESTINATION_ID:
                    raise reader.error("invalid destination id {}".format(destination_id))

            code_lengths = tuple(reader.read(_CODE_LENGTH_COUNTS))
            total = sum(code_lengths)
            if strict_mode and total > _MAX_CODES:
                raise reader.error("table declares {} codes, at most {} allowed".format(
                    total, _MAX_CODES,
                ))

            tables.append(HuffmanTableSpec(
                table_class=table_class,
                destination_id=destination_id,
                code_lengths=code_lengths,
                values=tuple(reader.read(total)),
            ))

        return tables
