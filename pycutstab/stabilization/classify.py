"""pycutstab.stabilization.classify
Active / inactive / degenerate categorisation of DoFs by support size.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from pycutstab.utils.bitset import BitSet

logger = logging.getLogger(__name__)

DegenerateDof = Tuple[int, BitSet]


def _categorise(dof, measure: float, is_inside: bool, lower: float) -> BitSet:
    """
    Activate or deactivate every component that no one else has constrained
    and return the components that need a stabilising constraint.
    """
    component = BitSet.empty(dof.size)
    for d in range(dof.size):
        if dof.is_constrained(d):
            continue
        if is_inside:
            dof.activate(d)
        else:
            dof.deactivate(d)
            if measure >= lower:
                component.set(d)
    return component


def classify_dofs(field, incidence, support_measures: Sequence[float],
                  lower_threshold: float, upper_threshold: float) -> List[DegenerateDof]:
    """
    Categorise the DoFs of ``field`` according to the size of their support.

    1. Primary (vertex) DoFs, element by element: a support of at least
       ``upper_threshold`` makes the DoF active, anything smaller makes it
       inactive, and an inactive DoF with support of at least
       ``lower_threshold`` is degenerate.
    2. All remaining DoFs in id order: same rule, except that the DoF counts
       as inside whenever one of its elements has all primary DoFs active.

    Every DoF is categorised exactly once. Components already constrained
    (e.g. by Dirichlet conditions) are left untouched.

    Returns
    -------
    list of (dof_id, BitSet)
        Degenerate DoFs and the components to constrain, in categorisation order.
    """
    measures = np.asarray(support_measures, dtype=float)
    visited = np.zeros(field.n_dofs, dtype=bool)
    degenerate: List[DegenerateDof] = []

    # 1) primary DoFs
    for el in field.elements_list:
        for dof_id in el.primary_dofs:
            if visited[dof_id]:
                continue
            dof = field.dof(dof_id)
            area = measures[dof_id]
            component = _categorise(dof, area, area >= upper_threshold, lower_threshold)
            if component.any():
                degenerate.append((dof_id, component))
            visited[dof_id] = True

    # 2) the rest, which may borrow activity from a fully active element
    for dof in field.dofs_list:
        if visited[dof.id]:
            continue
        borrowed = any(field.all_dofs_active(int(eid), primary_only=True)
                       for eid in incidence.one_ring(dof.id))
        area = measures[dof.id]
        component = _categorise(dof, area, area >= upper_threshold or borrowed, lower_threshold)
        if component.any():
            degenerate.append((dof.id, component))
        visited[dof.id] = True

    logger.debug(f"classify_dofs: {len(degenerate)} degenerate DoFs "
                 f"(lower={lower_threshold:.3e}, upper={upper_threshold:.6g})")
    return degenerate
