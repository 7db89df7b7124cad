"""pycutstab.core.field
Finite-element field: per-element local DoF lists plus the global DoF set.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from pycutstab.core.dofs import DegreeOfFreedom, ACTIVE, INACTIVE, CONSTRAINED
from pycutstab.fem.reference import get_reference, reference_nodes, vertex_slots


class FieldElement:
    """
    Local view of the field on one element.

    ``dofs`` is ordered like the reference lattice so that ``dofs[k]`` pairs
    with the k-th shape function; ``primary_slots`` are the local indices of
    the vertex DoFs.
    """

    def __init__(self, id: int, dofs: Sequence[int], primary_slots: Sequence[int],
                 element_type: str, poly_order: int):
        self.id = int(id)
        self.dofs: Tuple[int, ...] = tuple(int(d) for d in dofs)
        self.primary_slots: Tuple[int, ...] = tuple(int(s) for s in primary_slots)
        self.element_type = element_type
        self.poly_order = poly_order

    @property
    def primary_dofs(self) -> Tuple[int, ...]:
        return tuple(self.dofs[s] for s in self.primary_slots)

    def evaluate(self, xi) -> np.ndarray:
        """Shape-function values at local coordinate ``xi``, one per local DoF."""
        return np.asarray(get_reference(self.element_type, self.poly_order).shape(xi))

    def __repr__(self):
        return f"<FieldElement {self.id} dofs={self.dofs}>"


class Field:
    """Collection of field elements (same id space as the mesh) and DoFs."""

    def __init__(self, elements: Sequence[FieldElement], n_dofs: int, n_components: int = 1):
        self.n_components = int(n_components)
        self.elements_list: List[FieldElement] = list(elements)
        self.dofs_list: List[DegreeOfFreedom] = [DegreeOfFreedom(i, self.n_components)
                                                 for i in range(int(n_dofs))]
        for pos, el in enumerate(self.elements_list):
            if el.id != pos:
                raise ValueError(f"Field element at position {pos} has id {el.id}; ids must be 0..n-1.")
            bad = [d for d in el.dofs if not 0 <= d < n_dofs]
            if bad:
                raise ValueError(f"Element {el.id} references unknown DoFs {bad}.")
        self._dof_array = None

    @classmethod
    def from_mesh(cls, mesh, n_components: int = 1) -> "Field":
        """Continuous Lagrange field on the mesh nodes; DoF id = node id."""
        slots = vertex_slots(mesh.element_type, mesh.poly_order)
        elements = [FieldElement(el.id, el.nodes, slots, mesh.element_type, mesh.poly_order)
                    for el in mesh.elements_list]
        return cls(elements, len(mesh.nodes_list), n_components)

    # --- access ---
    @property
    def n_dofs(self) -> int:
        return len(self.dofs_list)

    @property
    def n_elements(self) -> int:
        return len(self.elements_list)

    def element(self, elem_id: int) -> FieldElement:
        if not 0 <= elem_id < self.n_elements:
            raise IndexError(f"Element ID {elem_id} out of range.")
        return self.elements_list[elem_id]

    def dof(self, dof_id: int) -> DegreeOfFreedom:
        return self.dofs_list[dof_id]

    def element_dof_array(self) -> np.ndarray:
        """(n_elements, n_loc) int64 array of the local DoF lists."""
        if self._dof_array is None:
            self._dof_array = np.array([el.dofs for el in self.elements_list], dtype=np.int64)
            if self._dof_array.ndim != 2:
                raise ValueError("All field elements must have the same number of local DoFs.")
        return self._dof_array

    def all_dofs_active(self, elem_id: int, primary_only: bool = False) -> bool:
        """True iff every component of every (primary) DoF of the element is active."""
        el = self.elements_list[elem_id]
        ids = el.primary_dofs if primary_only else el.dofs
        for d in ids:
            dof = self.dofs_list[d]
            for c in range(dof.size):
                if not dof.is_active(c):
                    return False
        return True

    def status_counts(self) -> Dict[str, int]:
        counts = {ACTIVE: 0, INACTIVE: 0, CONSTRAINED: 0}
        for dof in self.dofs_list:
            for c in range(dof.size):
                counts[dof.status(c)] += 1
        return counts

    # --- locations ---
    def associate_locations(self) -> List[Tuple[int, np.ndarray]]:
        """
        For every DoF, the lowest-id element containing it and the local
        coordinate of its node in that element.
        """
        out: List = [None] * self.n_dofs
        for el in self.elements_list:
            nodes = None
            for slot, d in enumerate(el.dofs):
                if out[d] is None:
                    if nodes is None:
                        nodes = reference_nodes(el.element_type, el.poly_order)
                    out[d] = (el.id, nodes[slot].copy())
        missing = [i for i, loc in enumerate(out) if loc is None]
        if missing:
            raise ValueError(f"DoFs {missing[:10]} are not part of any element.")
        return out

    def dof_coordinates(self, mesh) -> np.ndarray:
        """Physical position of every DoF, shape (n_dofs, spatial_dim)."""
        locs = self.associate_locations()
        return np.array([mesh.position(eid, xi) for eid, xi in locs], dtype=float)

    def constrain_by_locator(self, mesh, locator: Callable[..., bool], value=0.0,
                             components: Optional[Sequence[int]] = None) -> List[int]:
        """
        Dirichlet-constrain every DoF whose position satisfies ``locator(*x)``.

        ``value`` is a number or a callable of the coordinates. Returns the
        ids of the constrained DoFs.
        """
        comps = range(self.n_components) if components is None else components
        hit = []
        for dof, x in zip(self.dofs_list, self.dof_coordinates(mesh)):
            if not locator(*x):
                continue
            v = value(*x) if callable(value) else value
            v = np.broadcast_to(np.asarray(v, dtype=float), (self.n_components,))
            for d in comps:
                dof.constrain_value(d, float(v[d]))
            hit.append(dof.id)
        return hit

    def __repr__(self):
        return (f"<Field n_dofs={self.n_dofs}, n_elems={self.n_elements}, "
                f"n_components={self.n_components}>")
