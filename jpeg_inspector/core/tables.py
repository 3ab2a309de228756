"""Registry of quantization and Huffman table definitions.

WHY: A JPEG stream may define the same table slot several times; each
new definition applies to the scans that follow it. Quantization and
Huffman slots are tracked differently: a Huffman slot remembers every
definition it has seen, a quantization slot only remembers the latest.

HOW: Two separate code paths, one per table kind, instead of one
generic keyed map. Quantization writes overwrite. Huffman writes
overwrite the current entry and append to a per-id history list.

RULES:
- At most one current table per (kind, destination id)
- Quantization: last write wins, no history
- Huffman: last write wins for current, history is append-only and ordered
- Lookups return None for ids that were never set
- There is no delete operation
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from jpeg_inspector.core.ir import HuffmanTableSpec, QuantizationTableSpec


class TableRegistry:
    """Current and historical table definitions keyed by destination id."""

    def __init__(self) -> None:
        self._quantization: Dict[int, QuantizationTableSpec] = {}
        self._huffman: Dict[int, HuffmanTableSpec] = {}
        self._huffman_history: Dict[int, List[HuffmanTableSpec]] = {}

    # ------------------------------------------------------------------
    # Quantization (current only)
    # ------------------------------------------------------------------

    def set_quantization(self, destination_id: int, spec: QuantizationTableSpec) -> None:
        self._quantization[destination_id] = spec

    def current_quantization(self, destination_id: int) -> Optional[QuantizationTableSpec]:
        return self._quantization.get(destination_id)

    # ------------------------------------------------------------------
    # Huffman (current + history)
    # ------------------------------------------------------------------

    def set_huffman(self, destination_id: int, spec: HuffmanTableSpec) -> None:
        self._huffman[destination_id] = spec
        self._huffman_history.setdefault(destination_id, []).append(spec)

    def current_huffman(self, destination_id: int) -> Optional[HuffmanTableSpec]:
        return self._huffman.get(destination_id)

    def huffman_history(self, destination_id: int) -> Optional[Sequence[HuffmanTableSpec]]:
        """All definitions seen for this id, oldest first."""
        history = self._huffman_history.get(destination_id)
        if history is None:
            return None
        return tuple(history)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def quantization_tables(self) -> Mapping[int, QuantizationTableSpec]:
        return MappingProxyType(self._quantization)

    @property
    def huffman_tables(self) -> Mapping[int, HuffmanTableSpec]:
        return MappingProxyType(self._huffman)

    @property
    def huffman_histories(self) -> Mapping[int, Sequence[HuffmanTableSpec]]:
        return {key: tuple(values) for key, values in self._huffman_history.items()}
