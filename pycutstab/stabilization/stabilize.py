"""pycutstab.stabilization.stabilize
Basis stabilisation by extension for cut (immersed-boundary) elements.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pycutstab.stabilization.parameters import StabilizationParameters
from pycutstab.stabilization.incidence import IncidenceIndex
from pycutstab.stabilization.classify import classify_dofs
from pycutstab.stabilization.ring import find_supporting_element
from pycutstab.stabilization.constraints import generate_constraints

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StabilizedDof:
    """Record of one constrained DoF."""

    dof_id: int
    components: Tuple[int, ...]
    element_id: int             # donor element
    location: np.ndarray        # physical position of the DoF
    xi: np.ndarray              # its local coordinate in the donor
    converged: bool


def _check_inputs(mesh, field, measures, dof_locations):
    if measures.shape != (field.n_dofs,):
        raise ValueError(f"Expected {field.n_dofs} support measures, got shape {measures.shape}.")
    if np.any(measures < 0.0) or not np.all(np.isfinite(measures)):
        raise ValueError("Support measures must be finite and non-negative.")
    if len(dof_locations) != field.n_dofs:
        raise ValueError(f"Expected {field.n_dofs} DoF locations, got {len(dof_locations)}.")
    bad = [i for i, (eid, _) in enumerate(dof_locations) if not 0 <= int(eid) < mesh.n_elements]
    if bad:
        raise IndexError(f"DoF locations {bad[:10]} refer to elements outside the mesh.")
    if field.n_elements != mesh.n_elements:
        raise ValueError(f"Field has {field.n_elements} elements but the mesh has {mesh.n_elements}.")


def stabilize_basis(mesh, field,
                    support_measures: Sequence[float],
                    dof_locations: Sequence[Tuple[int, Sequence[float]]],
                    tolerance: Optional[float] = None,
                    max_iter: Optional[int] = None,
                    upper_threshold_factor: Optional[float] = None,
                    lower_threshold: Optional[float] = None,
                    *,
                    params: Optional[StabilizationParameters] = None) -> List[StabilizedDof]:
    r"""
    Stabilise the FE basis of ``field`` by extension.

    Shape functions whose support barely overlaps the physical domain make
    the system matrix arbitrarily ill-conditioned. Their DoFs are replaced
    by linear combinations of DoFs that are well inside:

    1. categorise the DoFs as active, inactive or degenerate by the size of
       their support (:func:`classify_dofs`),
    2. for every degenerate DoF, find the closest element with only active
       DoFs (:func:`find_supporting_element`),
    3. store u_i = Σ_j φ_j(ξ_i) u_j as a constraint, where x(ξ_i) is the
       DoF location in that element (:func:`generate_constraints`).

    Parameters
    ----------
    mesh : Mesh
        Geometry representation.
    field : Field
        Field to stabilise; modified in place.
    support_measures : sequence of float
        Reference-space size of supp(φ_i) ∩ Ω for every DoF id.
    dof_locations : sequence of (element id, local coordinate)
        Physical location of every DoF, see :meth:`Field.associate_locations`.
    tolerance, max_iter, upper_threshold_factor, lower_threshold
        Override the corresponding entries of ``params``.
    params : StabilizationParameters, optional

    Returns
    -------
    list of StabilizedDof
        One record per constrained DoF, in processing order.

    Raises
    ------
    SupportNotFoundError
        A degenerate DoF has no fully active element in its two- or
        three-ring. DoFs later in the order are left unconstrained.
    """
    params = (params or StabilizationParameters()).with_overrides(
        tolerance=tolerance, max_iter=max_iter,
        upper_threshold_factor=upper_threshold_factor, lower_threshold=lower_threshold,
    )
    measures = np.asarray(support_measures, dtype=float)
    _check_inputs(mesh, field, measures, dof_locations)

    upper = params.upper_threshold(mesh.reference_measure())

    incidence = IncidenceIndex.build(field)
    degenerate = classify_dofs(field, incidence, measures, params.lower_threshold, upper)

    records: List[StabilizedDof] = []
    for dof_id, component in degenerate:
        eid, xi_loc = dof_locations[dof_id]
        x = mesh.position(int(eid), xi_loc)

        donor = find_supporting_element(mesh, field, incidence, dof_id, x)
        located = generate_constraints(field.dof(dof_id), component, mesh, field, donor, x,
                                       params.tolerance, params.max_iter)
        logger.debug(f"DoF {dof_id} -> element {donor} at xi={located.xi}")
        records.append(StabilizedDof(
            dof_id=dof_id,
            components=tuple(int(d) for d in component.to_indices()),
            element_id=donor,
            location=x,
            xi=located.xi,
            converged=located.converged,
        ))

    counts = field.status_counts()
    logger.info(f"Basis stabilisation: {len(records)} DoFs constrained; "
                f"components active={counts['active']}, inactive={counts['inactive']}, "
                f"constrained={counts['constrained']}")
    return records
