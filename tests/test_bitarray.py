"""Tests for the fixed-size bit vector."""

import numpy as np

from molcontacts.bitarray import BitArray


class TestBitArray:
    def test_set_and_query(self):
        bits = BitArray(70)
        bits.set(0)
        bits.set(33)
        bits.set(69)
        assert bits.is_set(0)
        assert bits.is_set(33)
        assert bits.is_set(69)
        assert not bits.is_set(1)
        assert bits.size() == 3
        assert len(bits) == 70

    def test_clear(self):
        bits = BitArray(40)
        bits.set_bits(5, 35)
        bits.clear(5)
        assert not bits.is_set(5)
        assert bits.is_set(35)
        assert bits.size() == 1

    def test_set_all_masks_tail(self):
        """Bits past ``length`` are never set, even with set_all."""
        bits = BitArray(70, set_all=True)
        assert bits.size() == 70
        assert bits.to_mask().all()
        assert len(bits.to_mask()) == 70

    def test_set_all_word_aligned(self):
        assert BitArray(64, set_all=True).size() == 64

    def test_empty(self):
        bits = BitArray(0, set_all=True)
        assert bits.size() == 0
        assert list(bits) == []

    def test_iteration_ascending(self):
        bits = BitArray(100)
        for i in (97, 3, 64, 31, 32):
            bits.set(i)
        assert list(bits) == [3, 31, 32, 64, 97]
        assert bits.indices().tolist() == [3, 31, 32, 64, 97]

    def test_for_each(self):
        bits = BitArray(10)
        bits.set_bits(7, 2)
        seen = []
        bits.for_each(seen.append)
        assert seen == [2, 7]

    def test_to_mask_matches_is_set(self):
        rng = np.random.default_rng(3)
        bits = BitArray(200)
        chosen = rng.choice(200, size=50, replace=False)
        for i in chosen:
            bits.set(int(i))
        mask = bits.to_mask()
        assert sorted(np.flatnonzero(mask).tolist()) == sorted(chosen.tolist())
        assert all(mask[i] == bits.is_set(i) for i in range(200))
