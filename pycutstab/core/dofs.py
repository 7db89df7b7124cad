"""pycutstab.core.dofs
Degrees of freedom with per-component status and linear constraints.
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import numpy as np

ACTIVE = "active"
INACTIVE = "inactive"
CONSTRAINED = "constrained"


class Constraint:
    """
    Linear relation   u_i^d = Σ_k w_k · u_{j_k}^{d_k} + value

    ``weighted_dofs`` keeps the (dof id, component, weight) triples in the
    order they were added. Stabilisation constraints have ``value == 0``;
    Dirichlet constraints carry only ``value``.
    """

    def __init__(self):
        self.weighted_dofs: List[Tuple[int, int, float]] = []
        self.value: float = 0.0

    def add_weighted_dof(self, dof_id: int, component: int, weight: float) -> None:
        self.weighted_dofs.append((int(dof_id), int(component), float(weight)))

    def set_value(self, value: float) -> None:
        self.value = float(value)

    def donors(self) -> List[Tuple[int, int]]:
        return [(d, c) for d, c, _ in self.weighted_dofs]

    def weights(self) -> np.ndarray:
        return np.array([w for _, _, w in self.weighted_dofs], dtype=float)

    def evaluate(self, values: np.ndarray) -> float:
        """Value of the constrained component given donor values[dof, component]."""
        out = self.value
        for d, c, w in self.weighted_dofs:
            out += w * values[d, c]
        return out

    def __len__(self):
        return len(self.weighted_dofs)

    def __iter__(self) -> Iterator[Tuple[int, int, float]]:
        return iter(self.weighted_dofs)

    def __repr__(self):
        terms = " + ".join(f"{w:.4g}*u[{d},{c}]" for d, c, w in self.weighted_dofs)
        if self.value or not terms:
            terms = f"{terms} + {self.value:.4g}" if terms else f"{self.value:.4g}"
        return f"<Constraint {terms}>"


class DegreeOfFreedom:
    """
    A (vector-valued) unknown of the field.

    Every component is in exactly one of the states ``'active'``,
    ``'inactive'`` or ``'constrained'``; a constrained component owns one
    :class:`Constraint`.
    """

    def __init__(self, id: int, size: int = 1):
        if size < 1:
            raise ValueError("A DoF needs at least one component.")
        self.id = int(id)
        self.size = int(size)
        self._status: List[str] = [ACTIVE] * self.size
        self._constraints: List[Optional[Constraint]] = [None] * self.size
        self.index: List[Optional[int]] = [None] * self.size  # equation numbers

    def status(self, d: int) -> str:
        return self._status[d]

    def is_active(self, d: int) -> bool:
        return self._status[d] == ACTIVE

    def is_constrained(self, d: int) -> bool:
        return self._status[d] == CONSTRAINED

    def activate(self, d: int) -> None:
        self._status[d] = ACTIVE
        self._constraints[d] = None

    def deactivate(self, d: int) -> None:
        self._status[d] = INACTIVE
        self._constraints[d] = None

    def make_constraint(self, d: int) -> Constraint:
        """Create the constraint of component ``d`` if absent and return it."""
        if self._constraints[d] is None:
            self._constraints[d] = Constraint()
            self._status[d] = CONSTRAINED
            self.index[d] = None
        return self._constraints[d]

    def get_constraint(self, d: int) -> Optional[Constraint]:
        return self._constraints[d]

    def constrain_value(self, d: int, value: float) -> None:
        """Dirichlet-type constraint: u^d = value."""
        self.deactivate(d)
        self.make_constraint(d).set_value(value)

    def __repr__(self):
        return f"<DoF {self.id} {self._status}>"
