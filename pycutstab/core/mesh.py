import numpy as np
from typing import List, Optional

from pycutstab.core.topology import Node, Element
from pycutstab.fem import transform
from pycutstab.fem.reference import (
    reference_centroid, reference_measure, reference_dim, reference_nodes, vertex_slots,
)


class Mesh:
    """
    Geometry mesh of isoparametric Lagrange elements.

    Owns the node coordinates and the element connectivity and exposes the
    element geometry map ``position(eid, xi)``, its Jacobian and contravariant
    basis, and the reference-shape data (centroid, measure) used by the
    basis stabilisation.
    """

    def __init__(self,
                 nodes: List[Node],
                 element_connectivity: np.ndarray,
                 elements_corner_nodes: Optional[np.ndarray] = None,
                 *,
                 element_type: str = 'tri',
                 poly_order: int = 1):
        if element_type not in ('line', 'tri', 'quad'):
            raise ValueError(f"Unsupported element type '{element_type}'.")
        self.element_type = element_type
        self.poly_order = poly_order
        self.spatial_dim = reference_dim(element_type)
        self.nodes_list: List[Node] = list(nodes)
        self.nodes_pos = np.array([n.coords[:self.spatial_dim] for n in self.nodes_list], dtype=float)
        self.elements_connectivity = np.asarray(element_connectivity, dtype=int)
        if elements_corner_nodes is None:
            slots = list(vertex_slots(element_type, poly_order))
            elements_corner_nodes = self.elements_connectivity[:, slots]
        self.corner_connectivity = np.asarray(elements_corner_nodes, dtype=int)
        self.n_elements = len(self.elements_connectivity)

        n_loc = (len(self.elements_connectivity[0]) if self.n_elements else 0)
        expected = len(reference_nodes(element_type, poly_order))
        if self.n_elements and n_loc != expected:
            raise ValueError(f"{element_type} P{poly_order} elements need {expected} nodes, got {n_loc}.")

        self.elements_list: List[Element] = [
            Element(id=eid,
                    nodes=tuple(int(n) for n in conn),
                    corner_nodes=tuple(int(n) for n in self.corner_connectivity[eid]),
                    element_type=element_type,
                    poly_order=poly_order)
            for eid, conn in enumerate(self.elements_connectivity)
        ]

    # --- element access ---
    def element(self, elem_id: int) -> Element:
        """Return the Element with the given id."""
        if not 0 <= elem_id < self.n_elements:
            raise IndexError(f"Element ID {elem_id} out of range.")
        return self.elements_list[elem_id]

    # --- geometry map ---
    def position(self, elem_id: int, xi) -> np.ndarray:
        """Global point x(xi) of element ``elem_id``."""
        return transform.x_mapping(self, elem_id, xi)

    def jacobian(self, elem_id: int, xi) -> np.ndarray:
        return transform.jacobian(self, elem_id, xi)

    def contravariant_basis(self, elem_id: int, xi) -> np.ndarray:
        """G = J^{-T} at ``xi``; Newton updates in local coordinates use G^T r."""
        return transform.contravariant_basis(self, elem_id, xi)

    def reference_centroid(self) -> np.ndarray:
        return reference_centroid(self.element_type)

    def reference_measure(self) -> float:
        return reference_measure(self.element_type)

    def centroid(self, elem_id: int) -> np.ndarray:
        """Reference centroid mapped through the geometry map (cached)."""
        elem = self.element(elem_id)
        if elem.centroid is None:
            elem.centroid = self.position(elem_id, self.reference_centroid())
        return elem.centroid

    def measures(self) -> np.ndarray:
        """Physical length/area of every element (vertex polygon)."""
        out = np.zeros(self.n_elements)
        for elem in self.elements_list:
            c = self.nodes_pos[list(elem.corner_nodes)]
            if self.element_type == 'line':
                out[elem.id] = abs(c[1, 0] - c[0, 0])
            else:
                x, y = c[:, 0], c[:, 1]
                out[elem.id] = 0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))
        return out

    def __repr__(self):
        return (f"<Mesh n_nodes={len(self.nodes_list)}, "
                f"n_elems={self.n_elements}, "
                f"elem_type='{self.element_type}', "
                f"poly_order={self.poly_order}>")
