# pycutstab.fem.reference
"""
Order-agnostic reference-element factory.

Reference domains:
    'line'  [-1, 1]
    'quad'  [-1, 1]^2, tensor-product lattice (eta outer, xi inner)
    'tri'   (0,0)-(1,0)-(0,1), lattice rows in eta, xi inner
"""
from functools import lru_cache
from importlib import import_module
from typing import Tuple
import numpy as np

_DIM = {"line": 1, "quad": 2, "tri": 2}

_CENTROID = {
    "line": (0.0,),
    "quad": (0.0, 0.0),
    "tri": (1.0 / 3.0, 1.0 / 3.0),
}

_MEASURE = {"line": 2.0, "quad": 4.0, "tri": 0.5}


def _key(xi) -> Tuple[float, ...]:
    return tuple(float(v) for v in np.atleast_1d(np.asarray(xi, dtype=float)))


def _frozen(a):
    a = np.asarray(a).astype(float).ravel()
    a.setflags(write=False)
    return a


class Ref:
    """Lagrange basis of one reference shape, evaluated at local coordinates ``xi``."""

    def __init__(self, element_type, poly_order, shape_lambda, deriv_lambdas):
        self.element_type = element_type
        self.poly_order = poly_order
        self.dim = _DIM[element_type]
        self.shape_lambda = shape_lambda
        self.deriv_lambdas = deriv_lambdas

    @property
    def n_nodes(self) -> int:
        return len(reference_nodes(self.element_type, self.poly_order))

    def shape(self, xi) -> np.ndarray:
        return self._shape(_key(xi))

    def derivative(self, xi, alpha) -> np.ndarray:
        return self._derivative(_key(xi), tuple(alpha))

    def grad(self, xi) -> np.ndarray:
        """(n_loc, dim) array of first derivatives w.r.t. the local coordinates."""
        return self._grad(_key(xi))

    @lru_cache(maxsize=None)
    def _shape(self, xi):
        return _frozen(self.shape_lambda(*xi))

    @lru_cache(maxsize=None)
    def _derivative(self, xi, alpha):
        if alpha not in self.deriv_lambdas:
            raise ValueError(f"Derivative order {alpha} not computed for '{self.element_type}'.")
        return _frozen(self.deriv_lambdas[alpha](*xi))

    @lru_cache(maxsize=None)
    def _grad(self, xi):
        cols = []
        for a in range(self.dim):
            alpha = tuple(1 if b == a else 0 for b in range(self.dim))
            cols.append(self._derivative(xi, alpha))
        g = np.column_stack(cols)
        g.setflags(write=False)
        return g

    def __repr__(self):
        return f"<Ref {self.element_type} P{self.poly_order}>"


@lru_cache(maxsize=None)
def get_reference(element_type: str, poly_order: int = 1, max_deriv_order: int = 1):
    if element_type == "line":
        shape_l, deriv_lambdas = import_module("pycutstab.fem.reference.line_pn").line_pn(poly_order, max_deriv_order)
    elif element_type == "quad":
        shape_l, deriv_lambdas = import_module("pycutstab.fem.reference.quad_qn").quad_qn(poly_order, max_deriv_order)
    elif element_type == "tri":
        shape_l, deriv_lambdas = import_module("pycutstab.fem.reference.tri_pn").tri_pn(poly_order, max_deriv_order)
    else:
        raise KeyError(element_type)
    return Ref(element_type, poly_order, shape_l, deriv_lambdas)


def reference_dim(element_type: str) -> int:
    return _DIM[element_type]


def reference_centroid(element_type: str) -> np.ndarray:
    """Geometric centre of the reference shape."""
    return np.array(_CENTROID[element_type], dtype=float)


def reference_measure(element_type: str) -> float:
    """Length / area of the reference shape."""
    return _MEASURE[element_type]


@lru_cache(maxsize=None)
def _reference_nodes(element_type: str, poly_order: int):
    n = poly_order
    if element_type == "line":
        pts = [(x,) for x in np.linspace(-1.0, 1.0, n + 1)]
    elif element_type == "quad":
        s = np.linspace(-1.0, 1.0, n + 1)
        pts = [(x, y) for y in s for x in s]
    elif element_type == "tri":
        pts = [(i / n, j / n) for j in range(n + 1) for i in range(n + 1 - j)]
    else:
        raise KeyError(element_type)
    return np.array(pts, dtype=float)


def reference_nodes(element_type: str, poly_order: int) -> np.ndarray:
    """Local coordinates of the Lagrange nodes, shape (n_loc, dim), in lattice order."""
    return _reference_nodes(element_type, poly_order).copy()


def vertex_slots(element_type: str, poly_order: int) -> Tuple[int, ...]:
    """Local indices of the vertex nodes (CCW for 2D shapes)."""
    n = poly_order
    if element_type == "line":
        return (0, n)
    if element_type == "quad":
        return (0, n, (n + 1) ** 2 - 1, n * (n + 1))
    if element_type == "tri":
        return (0, n, (n + 1) * (n + 2) // 2 - 1)
    raise KeyError(element_type)
