"""pycutstab.stabilization.constraints
Linear constraints that express a degenerate DoF through a donor element.
"""
from __future__ import annotations

import numpy as np

from pycutstab.stabilization.locate import LocateResult, locate_point_wrt_element


def generate_constraints(dof, component, mesh, field, elem_id: int, x,
                         tolerance: float = 1e-8, max_iter: int = 10) -> LocateResult:
    r"""
    Constrain the flagged components of ``dof`` to the donor element ``elem_id``.

    With ξ such that x(ξ) = x, the coefficients are the donor's shape
    functions evaluated there,

        u_i^d = Σ_j φ_j(ξ) u_j^d,

    so u_i is the extrapolation of the donor's field to the DoF location.
    No renormalisation is applied to the weights.
    """
    located = locate_point_wrt_element(x, mesh, elem_id, tolerance, max_iter)
    donor = field.element(elem_id)
    phi = donor.evaluate(located.xi)
    comps = [int(d) for d in component.to_indices()]

    for donor_dof, weight in zip(donor.dofs, phi):
        for d in comps:
            dof.make_constraint(d).add_weighted_dof(donor_dof, d, float(weight))
    return located
