"""Fixed-size bit vector over feature or contact indices."""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np

_WORD_BITS = 32
_FULL_WORD = np.uint32(0xFFFFFFFF)


class BitArray:
    """Bit vector backed by 32-bit words.

    Parameters
    ----------
    length : int
        Number of addressable bits. Fixed after construction.
    set_all : bool
        Initial value of every bit.
    """

    def __init__(self, length: int, set_all: bool = False) -> None:
        self.length = int(length)
        n_words = (self.length + _WORD_BITS - 1) // _WORD_BITS
        self._words = np.zeros(n_words, dtype=np.uint32)
        if set_all and n_words:
            self._words[:] = _FULL_WORD
            tail = self.length % _WORD_BITS
            if tail:
                self._words[-1] = np.uint32((1 << tail) - 1)

    def __len__(self) -> int:
        return self.length

    def set(self, i: int) -> None:
        self._words[i >> 5] |= np.uint32(1 << (i & 31))

    def set_bits(self, i: int, j: int) -> None:
        """Set both bits of a pair."""
        self.set(i)
        self.set(j)

    def clear(self, i: int) -> None:
        self._words[i >> 5] &= ~np.uint32(1 << (i & 31))

    def is_set(self, i: int) -> bool:
        return bool(self._words[i >> 5] & np.uint32(1 << (i & 31)))

    def to_mask(self) -> np.ndarray:
        """Boolean array of length ``length``."""
        bits = np.unpackbits(self._words.astype("<u4").view(np.uint8), bitorder="little")
        return bits[: self.length].astype(bool)

    def indices(self) -> np.ndarray:
        """Indices of set bits in ascending order."""
        return np.flatnonzero(self.to_mask())

    def __iter__(self) -> Iterator[int]:
        return (int(i) for i in self.indices())

    def for_each(self, fn: Callable[[int], object]) -> None:
        """Call ``fn(i)`` for every set bit, ascending."""
        for i in self.indices():
            fn(int(i))

    def size(self) -> int:
        """Number of set bits."""
        return int(np.count_nonzero(self.to_mask()))

    def __repr__(self) -> str:
        return f"BitArray(length={self.length}, set={self.size()})"
