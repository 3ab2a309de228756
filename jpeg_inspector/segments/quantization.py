"""DQT (define quantization table) segment decoder.

WHY: One DQT segment may carry several tables back to back. The
engine needs each one as a separate spec so it can store it under its
destination id.

HOW: Loop over the payload: one Pq|Tq byte, then 64 values of 8 bits
(Pq=0) or 16 bits (Pq=1). Collect a QuantizationTableSpec per table.

RULES:
- Strict: Pq must be 0 or 1, Tq must be 0-3, no partial trailing table
- Lenient: any Pq other than 0 is read as 16-bit, a partial trailing
  table is dropped with a warning
- Table content (the coefficient values) is not validated
"""

from __future__ import annotations

import logging
import struct
from typing import List

from jpeg_inspector.core.cursor import ByteCursor
from jpeg_inspector.core.ir import QuantizationTableSpec
from jpeg_inspector.segments.base import BaseSegmentDecoder

logger = logging.getLogger(__name__)

_TABLE_VALUES = 64
_MAX_DESTINATION_ID = 3


class QuantizationTableDecoder(BaseSegmentDecoder):

    @property
    def name(self) -> str:
        return "DQT"

    def decode(
        self,
        cursor: ByteCursor,
        strict_mode: bool,
        marker: int,
    ) -> List[QuantizationTableSpec]:
        reader = self.open_payload(cursor)
        tables: List[QuantizationTableSpec] = []

        while reader.remaining > 0:
            precision, destination_id = reader.read_nibbles()
            if strict_mode:
                if precision not in (0, 1):
                    raise reader.error("invalid table precision {}".format(precision))
                if destination_id > _MAX_DESTINATION_ID:
                    raise reader.error("invalid destination id {}".format(destination_id))

            value_size = 1 if precision == 0 else 2
            needed = _TABLE_VALUES * value_size
            if reader.remaining < needed and not strict_mode:
                logger.warning(
                    "Dropping truncated quantization table %d (%d of %d bytes)",
                    destination_id, reader.remaining, needed,
                )
                break

            raw = reader.read(needed)
            if value_size == 1:
                values = tuple(raw)
            else:
                values = struct.unpack(">64H", raw)

            tables.append(QuantizationTableSpec(
                precision=precision,
                destination_id=destination_id,
                values=values,
            ))

        return tables
