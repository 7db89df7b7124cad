"""pycutstab.stabilization.ring
Search for a fully active donor element around a degenerate DoF.
"""
from __future__ import annotations

import logging
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


class SupportNotFoundError(RuntimeError):
    """No fully active element was found around a degenerate DoF."""

    def __init__(self, dof_id: int, location):
        self.dof_id = int(dof_id)
        self.location = np.asarray(location, dtype=float)
        super().__init__(
            f"Cannot find supporting element in element ring around DoF {self.dof_id} "
            f"at ({' '.join(f'{v:g}' for v in self.location)})"
        )


def two_ring_of_dof(field, incidence, dof_id: int) -> List[int]:
    """
    Fully active elements among the one-rings of all other DoFs that share an
    element with ``dof_id``, in ascending id order.

    Elements containing ``dof_id`` itself drop out through the activity
    filter, since a degenerate DoF is never active.
    """
    ring = set()
    for eid in incidence.one_ring(dof_id):
        for other in field.element(int(eid)).dofs:
            if other == dof_id:
                continue
            for cand in incidence.one_ring(other):
                cand = int(cand)
                if cand not in ring and field.all_dofs_active(cand):
                    ring.add(cand)
    return sorted(ring)


def three_ring_of_dof(field, incidence, dof_id: int) -> List[int]:
    """Union of the two-rings of every DoF sharing an element with ``dof_id``."""
    surrounding = set()
    for eid in incidence.one_ring(dof_id):
        surrounding.update(d for d in field.element(int(eid)).dofs if d != dof_id)
    ring = set()
    for other in sorted(surrounding):
        ring.update(two_ring_of_dof(field, incidence, other))
    return sorted(ring)


def closest_element(mesh, candidates, x) -> int:
    """Candidate whose mapped reference centroid is closest to ``x``; ties go to the first."""
    x = np.asarray(x, dtype=float)
    best, shortest = None, np.inf
    for eid in candidates:
        dist = np.linalg.norm(x - mesh.centroid(eid))
        if dist < shortest:
            best, shortest = eid, dist
    return best


def find_supporting_element(mesh, field, incidence, dof_id: int, x) -> int:
    """
    Id of the fully active element closest to the degenerate DoF at ``x``.

    The two-ring is searched first and the three-ring only if the two-ring
    holds no candidate.

    Raises
    ------
    SupportNotFoundError
        If neither ring contains a fully active element.
    """
    candidates = two_ring_of_dof(field, incidence, dof_id)
    if not candidates:
        candidates = three_ring_of_dof(field, incidence, dof_id)
        logger.debug(f"DoF {dof_id}: empty two-ring, three-ring has {len(candidates)} candidates")
    if not candidates:
        err = SupportNotFoundError(dof_id, x)
        logger.error(str(err))
        raise err
    return closest_element(mesh, candidates, x)
