"""pycutstab.stabilization.incidence
DoF → element incidence ("one-ring") of a field.
"""
from __future__ import annotations

import numba
import numpy as np


@numba.njit(cache=True)
def _incidence_csr(element_dofs, n_dofs):
    """CSR arrays (offsets, element ids); ids ascend within every row."""
    n_elem, n_loc = element_dofs.shape
    counts = np.zeros(n_dofs + 1, dtype=np.int64)
    for e in range(n_elem):
        for k in range(n_loc):
            counts[element_dofs[e, k] + 1] += 1
    offsets = np.cumsum(counts)
    cursor = offsets[:-1].copy()
    indices = np.empty(offsets[-1], dtype=np.int64)
    for e in range(n_elem):
        for k in range(n_loc):
            d = element_dofs[e, k]
            indices[cursor[d]] = e
            cursor[d] += 1
    return offsets, indices


class IncidenceIndex:
    """
    For every DoF id, the ascending element ids whose local DoF list
    contains that DoF. Built in a single pass over the elements.
    """

    def __init__(self, offsets: np.ndarray, indices: np.ndarray):
        self.offsets = offsets
        self.indices = indices

    @classmethod
    def build(cls, field) -> "IncidenceIndex":
        if field.n_elements == 0:
            return cls(np.zeros(field.n_dofs + 1, dtype=np.int64), np.empty(0, dtype=np.int64))
        offsets, indices = _incidence_csr(field.element_dof_array(), field.n_dofs)
        return cls(offsets, indices)

    def one_ring(self, dof_id: int) -> np.ndarray:
        return self.indices[self.offsets[dof_id]:self.offsets[dof_id + 1]]

    def __len__(self):
        return len(self.offsets) - 1

    def __repr__(self):
        return f"<IncidenceIndex n_dofs={len(self)}, n_entries={len(self.indices)}>"
