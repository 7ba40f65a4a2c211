"""Append-only columnar store of candidate contacts."""

from __future__ import annotations

import numpy as np


class ContactStore:
    """Parallel ``index1``/``index2``/``type`` arrays with a growing ``count``.

    The store does not deduplicate; detectors visit each unordered feature
    pair once.
    """

    def __init__(self, capacity: int = 64) -> None:
        capacity = max(1, int(capacity))
        self._index1 = np.zeros(capacity, dtype=np.int32)
        self._index2 = np.zeros(capacity, dtype=np.int32)
        self._type = np.zeros(capacity, dtype=np.int8)
        self.count = 0

    def __len__(self) -> int:
        return self.count

    @property
    def capacity(self) -> int:
        return len(self._index1)

    @property
    def index1(self) -> np.ndarray:
        return self._index1[: self.count]

    @property
    def index2(self) -> np.ndarray:
        return self._index2[: self.count]

    @property
    def type(self) -> np.ndarray:
        return self._type[: self.count]

    def add_contact(self, index1: int, index2: int, contact_type: int) -> int:
        """Append one record and return its contact id."""
        if self.count == self.capacity:
            self._grow()
        k = self.count
        self._index1[k] = index1
        self._index2[k] = index2
        self._type[k] = int(contact_type)
        self.count += 1
        return k

    def _grow(self) -> None:
        size = 2 * self.capacity
        for name in ("_index1", "_index2", "_type"):
            old = getattr(self, name)
            new = np.zeros(size, dtype=old.dtype)
            new[: len(old)] = old
            setattr(self, name, new)
