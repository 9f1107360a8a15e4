"""
Fixed-size bit set backed by numpy uint32 words.

Bit i lives in word i // 32 at position i % 32 (least significant bit first).
On a little-endian host the raw bytes therefore read as "byte i // 8,
bit i % 8", which is what a display surface expects when it blits the
buffer directly.
"""
from __future__ import annotations

from typing import Iterator

import numpy as np

from .constants import BLOCK_BITS


class FixedBitSet:
    """
    Dense bit array with a fixed length.

    Indexing outside [0, len) raises IndexError; negative indices are not
    interpreted as offsets from the end.
    """

    __slots__ = ('_len', '_words')

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"bit set size must be non-negative, got {size}")
        self._len = int(size)
        block_count = (self._len + BLOCK_BITS - 1) // BLOCK_BITS
        self._words = np.zeros(block_count, dtype='<u4')

    @classmethod
    def with_capacity(cls, size: int) -> FixedBitSet:
        """All-clear bit set of the given length."""
        return cls(size)

    @classmethod
    def from_bools(cls, values: np.ndarray) -> FixedBitSet:
        """Pack a flat bool array into a new bit set."""
        flat = np.asarray(values, dtype=bool).ravel()
        bits = cls(flat.size)
        packed = np.packbits(flat, bitorder='little')
        padded = np.zeros(bits._words.size * 4, dtype=np.uint8)
        padded[:packed.size] = packed
        bits._words = padded.view('<u4').copy()
        return bits

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[bool]:
        for value in self.to_bools():
            yield bool(value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FixedBitSet):
            return NotImplemented
        return self._len == other._len and np.array_equal(self._words, other._words)

    def __repr__(self) -> str:
        return f"FixedBitSet(len={self._len}, ones={self.count_ones()})"

    def _locate(self, index: int):
        if index < 0 or index >= self._len:
            raise IndexError(f"bit index {index} out of range (len: {self._len})")
        return index // BLOCK_BITS, np.uint32(1 << (index % BLOCK_BITS))

    def __getitem__(self, index: int) -> bool:
        block, mask = self._locate(index)
        return bool(self._words[block] & mask)

    def set(self, index: int, value: bool):
        block, mask = self._locate(index)
        if value:
            self._words[block] |= mask
        else:
            self._words[block] &= ~mask

    def toggle(self, index: int):
        block, mask = self._locate(index)
        self._words[block] ^= mask

    def clear(self):
        """Clear every bit in place."""
        self._words.fill(0)

    def copy(self) -> FixedBitSet:
        bits = FixedBitSet(0)
        bits._len = self._len
        bits._words = self._words.copy()
        return bits

    def count_ones(self) -> int:
        return int(np.count_nonzero(self.to_bools()))

    def to_bools(self) -> np.ndarray:
        """Unpack into a (len,) bool array (a copy)."""
        unpacked = np.unpackbits(self._words.view(np.uint8), bitorder='little')
        return unpacked[:self._len].astype(bool)

    def as_slice(self) -> np.ndarray:
        """
        Read-only view over the backing words.

        The view shares memory with the bit set. It reflects in-place bit
        writes, and goes stale once the owner swaps in new storage.
        """
        view = self._words.view()
        view.flags.writeable = False
        return view
