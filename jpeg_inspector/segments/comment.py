"""COM (comment) segment decoder."""

from __future__ import annotations

from jpeg_inspector.core.cursor import ByteCursor
from jpeg_inspector.core.ir import Comment
from jpeg_inspector.segments.base import BaseSegmentDecoder


class CommentDecoder(BaseSegmentDecoder):
    """Decodes a COM segment into a Comment.

    Comments have no structure, so strict mode changes nothing here.
    The text view uses latin-1, which maps every byte to a character.
    """

    @property
    def name(self) -> str:
        return "COM"

    def decode(self, cursor: ByteCursor, strict_mode: bool, marker: int) -> Comment:
        payload = cursor.read_segment_payload("Reading COM segment payload.")
        return Comment(data=payload, text=payload.rstrip(b"\x00").decode("latin-1"))
