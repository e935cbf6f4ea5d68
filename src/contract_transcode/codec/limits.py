# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resource bounds shared by the encoder and the decoder.

Both sides apply the same bounds at the same points of the type graph, so a
value the encoder accepts always decodes again:

- nesting is limited to :data:`MAX_NESTING_DEPTH` levels of the type graph;
- elements of zero-sized types (``()``, empty structs) occupy no bytes, so
  the input length cannot bound their number. One encode or decode call
  accepts at most :data:`MAX_ZERO_SIZED_ELEMENTS` of them across all
  sequences.
"""

from contract_transcode.metadata.registry import Registry
from contract_transcode.model.types import (
    ArrayDef,
    BytesDef,
    CompactDef,
    CompositeDef,
    PrimitiveDef,
    SequenceDef,
    StrDef,
    TupleDef,
    VariantDef,
)

MAX_NESTING_DEPTH = 128

MAX_ZERO_SIZED_ELEMENTS = 1 << 16


class SizeBudget:
    """Minimum encoded sizes of types and the zero-sized element count of one call."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry
        self._min_sizes: dict[int, int] = {}
        self._zero_sized = 0

    def admit(self, element: int, count: int) -> bool:
        """Charge a sequence of *count* elements of type *element*.

        Returns:
            False once more than :data:`MAX_ZERO_SIZED_ELEMENTS` zero-sized
            elements have been charged in total.
        """
        if count == 0 or self.min_size(element) > 0:
            return True
        self._zero_sized += count
        return self._zero_sized <= MAX_ZERO_SIZED_ELEMENTS

    def min_size(self, type_id: int) -> int:
        """Return a lower bound on the encoded size of any value of *type_id*."""
        return self._min_size(type_id, frozenset())

    def _min_size(self, type_id: int, visiting: frozenset[int]) -> int:
        if type_id in self._min_sizes:
            return self._min_sizes[type_id]
        if type_id in visiting or type_id not in self._registry:
            return 0
        visiting = visiting | {type_id}
        definition = self._registry.resolve(type_id)

        if isinstance(definition, PrimitiveDef):
            size = definition.width // 8
        elif isinstance(definition, BytesDef):
            size = definition.length if definition.length is not None else 1
        elif isinstance(definition, (CompactDef, StrDef, SequenceDef)):
            size = 1
        elif isinstance(definition, ArrayDef):
            size = definition.length * self._min_size(definition.element, visiting)
        elif isinstance(definition, TupleDef):
            size = sum(self._min_size(e, visiting) for e in definition.elements)
        elif isinstance(definition, CompositeDef):
            size = sum(self._min_size(f.type_id, visiting) for f in definition.fields)
        elif isinstance(definition, VariantDef):
            cases = [sum(self._min_size(f.type_id, visiting) for f in case.fields) for case in definition.cases]
            size = 1 + min(cases, default=0)
        else:
            size = 0

        self._min_sizes[type_id] = size
        return size
