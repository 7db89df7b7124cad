"""pycutstab.utils.bitset"""
from __future__ import annotations

import numpy as np


class BitSet:
    """Fixed-size boolean mask, used for per-component flags of a DoF."""

    def __init__(self, mask):
        self.mask = np.array(mask, dtype=bool)

    @classmethod
    def empty(cls, size: int) -> "BitSet":
        return cls(np.zeros(int(size), dtype=bool))

    def set(self, idx):
        self.mask[idx] = True

    def reset(self, idx):
        self.mask[idx] = False

    def union(self, other): return BitSet(self.mask | other.mask)
    def intersect(self, other): return BitSet(self.mask & other.mask)
    def diff(self, other): return BitSet(self.mask & ~other.mask)
    __or__ = union
    __and__ = intersect
    __sub__ = diff
    def any(self): return bool(self.mask.any())
    def cardinality(self): return int(self.mask.sum())
    def to_indices(self): return np.flatnonzero(self.mask)
    def __len__(self): return len(self.mask)
    def __repr__(self): return f'<BitSet {self.cardinality()}/{len(self)}>'

    def __eq__(self, other):
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.mask.shape == other.mask.shape and bool(np.all(self.mask == other.mask))

    __hash__ = None

    @property
    def array(self):
        return self.mask

    def __getitem__(self, idx):      # BitSet[i] → bool
        return bool(self.mask[idx])

    def __contains__(self, idx):     # idx in BitSet
        return bool(self.mask[idx])
