"""pycutstab.utils.meshgen
Structured mesh generators for quick tests.
"""
import numpy as np
from typing import List, Optional, Tuple

from pycutstab.core.topology import Node

__all__ = ["structured_line", "structured_quad", "structured_triangles"]


def _check_order(order):
    if not isinstance(order, int) or order < 1:
        raise ValueError("Polynomial order must be a positive integer.")


def structured_line(L: float, *, nx: int, poly_order: int = 1,
                    offset: float = 0.0) -> Tuple[List[Node], np.ndarray, np.ndarray]:
    """
    Uniform mesh of ``nx`` P_n line elements on [offset, offset + L].

    Returns:
        tuple: (nodes, elements, elements_corner_nodes)
    """
    _check_order(poly_order)
    n_nodes = poly_order * nx + 1
    xs = np.linspace(0.0, L, n_nodes) + offset
    nodes = []
    for i, x in enumerate(xs):
        tags = []
        if i == 0: tags.append("boundary_left")
        if i == n_nodes - 1: tags.append("boundary_right")
        tags.append("corner" if i % poly_order == 0 else "interior")
        nodes.append(Node(id=i, x=float(x), tag=",".join(tags)))

    elements = np.array([[poly_order * e + k for k in range(poly_order + 1)] for e in range(nx)], dtype=int)
    corners = elements[:, [0, poly_order]].copy()
    return nodes, elements, corners


def structured_quad(Lx: float, Ly: float, *, nx: int, ny: int, poly_order: int,
                    offset: Optional[Tuple[float, float]] = None):
    """
    Structured Q_n quadrilaterals on [0,Lx]x[0,Ly].

    Element nodes follow the reference lattice (eta outer, xi inner); corners
    are stored CCW starting bottom-left.

    Returns:
        tuple: (nodes, elements, elements_corner_nodes)
    """
    _check_order(poly_order)
    order = poly_order
    nnx, nny = order * nx + 1, order * ny + 1
    x_coords = np.linspace(0, Lx, nnx)
    y_coords = np.linspace(0, Ly, nny)
    ox, oy = offset if offset is not None else (0.0, 0.0)

    nodes: List[Node] = []
    for j in range(nny):
        for i in range(nnx):
            x, y = x_coords[i], y_coords[j]
            tags = []
            if i == 0: tags.append("boundary_left")
            if i == nnx - 1: tags.append("boundary_right")
            if j == 0: tags.append("boundary_bottom")
            if j == nny - 1: tags.append("boundary_top")
            on_x, on_y = i % order == 0, j % order == 0
            tags.append("corner" if on_x and on_y else "edge" if on_x or on_y else "interior")
            nodes.append(Node(id=len(nodes), x=x + ox, y=y + oy, tag=",".join(tags)))

    gid = lambda ix, iy: iy * nnx + ix
    elements = np.empty((nx * ny, (order + 1) ** 2), dtype=int)
    corners = np.empty((nx * ny, 4), dtype=int)
    for ej in range(ny):
        for ei in range(nx):
            eid = ej * nx + ei
            sx, sy = order * ei, order * ej
            elements[eid] = [gid(sx + a, sy + b) for b in range(order + 1) for a in range(order + 1)]
            corners[eid] = [gid(sx, sy), gid(sx + order, sy), gid(sx + order, sy + order), gid(sx, sy + order)]
    return nodes, elements, corners


def structured_triangles(Lx: float, Ly: float, *, nx_quads: int, ny_quads: int, poly_order: int,
                         offset: Optional[Tuple[float, float]] = None):
    """
    Structured P_n triangles, two per quad cell (split along the rising diagonal).

    Returns:
        tuple: (nodes, elements, elements_corner_nodes)
    """
    _check_order(poly_order)
    k = poly_order
    nnx, nny = k * nx_quads + 1, k * ny_quads + 1
    x_fine = np.linspace(0, Lx, nnx)
    y_fine = np.linspace(0, Ly, nny)
    ox, oy = offset if offset is not None else (0.0, 0.0)

    nodes: List[Node] = []
    for j in range(nny):
        for i in range(nnx):
            tags = []
            if i == 0: tags.append("boundary_left")
            if i == nnx - 1: tags.append("boundary_right")
            if j == 0: tags.append("boundary_bottom")
            if j == nny - 1: tags.append("boundary_top")
            nodes.append(Node(id=len(nodes), x=x_fine[i] + ox, y=y_fine[j] + oy, tag=",".join(tags)))

    gid = lambda ix, iy: iy * nnx + ix
    n_loc = (k + 1) * (k + 2) // 2
    elements, corners = [], []
    for ey in range(ny_quads):
        for ex in range(nx_quads):
            v00 = (k * ex, k * ey)
            v10 = (k * (ex + 1), k * ey)
            v01 = (k * ex, k * (ey + 1))
            v11 = (k * (ex + 1), k * (ey + 1))
            for V0, V1, V2 in ((v00, v10, v11), (v00, v11, v01)):
                # lattice steps along the two reference axes
                s1 = ((V1[0] - V0[0]) // k, (V1[1] - V0[1]) // k)
                s2 = ((V2[0] - V0[0]) // k, (V2[1] - V0[1]) // k)
                conn = [gid(V0[0] + a * s1[0] + b * s2[0], V0[1] + a * s1[1] + b * s2[1])
                        for b in range(k + 1) for a in range(k + 1 - b)]
                assert len(conn) == n_loc
                elements.append(conn)
                corners.append([gid(*V0), gid(*V1), gid(*V2)])
    return nodes, np.array(elements, dtype=int), np.array(corners, dtype=int)
