"""Fixed-size membership sets over node indices."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class BitIndexSet:
    """A set of node indices in ``range(size)`` stored as a bit array.

    Membership test and insertion are O(1); iteration and cardinality are
    O(size). Iteration always yields indices in ascending order.
    """

    __slots__ = ("_size", "_bits")

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"BitIndexSet size must be non-negative, got {size}")
        self._size = size
        self._bits = 0

    @classmethod
    def from_indices(cls, size: int, indices: Iterable[int]) -> BitIndexSet:
        result = cls(size)
        for idx in indices:
            result.add(idx)
        return result

    @property
    def size(self) -> int:
        """Capacity of the set (number of addressable indices)."""
        return self._size

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"Index {index} out of range for BitIndexSet of size {self._size}")

    def add(self, index: int) -> None:
        self._check(index)
        self._bits |= 1 << index

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int) or not 0 <= index < self._size:
            return False
        return bool(self._bits >> index & 1)

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        idx = 0
        while bits:
            if bits & 1:
                yield idx
            bits >>= 1
            idx += 1

    def __len__(self) -> int:
        return self._bits.bit_count()

    def complement(self) -> BitIndexSet:
        """Indices in ``range(size)`` that are not members."""
        result = BitIndexSet(self._size)
        result._bits = ((1 << self._size) - 1) & ~self._bits
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitIndexSet):
            return NotImplemented
        return self._size == other._size and self._bits == other._bits

    def __repr__(self) -> str:
        return f"BitIndexSet(size={self._size}, members={list(self)})"
