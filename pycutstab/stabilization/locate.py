"""pycutstab.stabilization.locate
Local coordinates of a (possibly exterior) point with respect to an element.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocateResult:
    """Outcome of the point search; ``converged`` is False when ``max_iter`` ran out."""

    xi: np.ndarray
    converged: bool
    iterations: int
    residual: float

    @property
    def exhausted(self) -> bool:
        return not self.converged


def locate_point_wrt_element(x, mesh, elem_id: int,
                             tolerance: float = 1e-8, max_iter: int = 10, xi0=None) -> LocateResult:
    r"""
    Find ξ with x(ξ) = x for the geometry map of element ``elem_id``.

    Newton iteration from ``xi0`` (default: the reference centroid),

        r = x − x(ξ),   ξ ← ξ + Gᵀ r,   G = J^{-T},

    stopped once ‖r‖ < tolerance. The point usually lies outside the
    element, so this is an extrapolation and may fail to converge; in that
    case a warning is logged and the last iterate is returned.
    """
    x = np.asarray(x, dtype=float)
    xi = mesh.reference_centroid() if xi0 is None else np.array(xi0, dtype=float)

    for it in range(max_iter):
        rhs = x - mesh.position(elem_id, xi)
        residual = float(np.linalg.norm(rhs))
        if residual < tolerance:
            return LocateResult(xi=xi, converged=True, iterations=it, residual=residual)
        G = mesh.contravariant_basis(elem_id, xi)
        xi = xi + G.T @ rhs

    residual = float(np.linalg.norm(x - mesh.position(elem_id, xi)))
    logger.warning(
        f"Reached maximal number of iterations ({max_iter}) when trying to find "
        f"({' '.join(f'{v:g}' for v in x)}) in element {elem_id}; residual={residual:.3e}"
    )
    return LocateResult(xi=xi, converged=False, iterations=max_iter, residual=residual)
