"""pycutstab.core.numbering
Equation numbering of active DoFs and resolution of linear constraints.

Full component vectors are laid out DoF by DoF: entry ``dof_id * n_components + d``.
"""
from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
import scipy.sparse as sp


def number_dofs_consecutively(field, start: int = 0) -> int:
    """
    Give every active component an equation index, in DoF-id then component
    order, starting at ``start``. Returns the number of indices handed out.
    """
    n = start
    for dof in field.dofs_list:
        for d in range(dof.size):
            if dof.is_active(d):
                dof.index[d] = n
                n += 1
            else:
                dof.index[d] = None
    return n - start


def _resolve(field, dof_id: int, d: int, memo: Dict, in_progress: set):
    """Return ({equation: coefficient}, offset) for one component."""
    key = (dof_id, d)
    if key in memo:
        return memo[key]
    dof = field.dof(dof_id)
    if dof.is_active(d):
        out = ({dof.index[d]: 1.0}, 0.0)
    elif not dof.is_constrained(d):
        out = ({}, 0.0)
    else:
        if key in in_progress:
            raise ValueError(f"Cyclic constraint chain through DoF {dof_id}, component {d}.")
        in_progress.add(key)
        coeffs: Dict[int, float] = {}
        offset = dof.get_constraint(d).value
        for donor, c, w in dof.get_constraint(d):
            sub, sub_off = _resolve(field, donor, c, memo, in_progress)
            for eq, v in sub.items():
                coeffs[eq] = coeffs.get(eq, 0.0) + w * v
            offset += w * sub_off
        in_progress.discard(key)
        out = (coeffs, offset)
    memo[key] = out
    return out


def constraint_operator(field) -> Tuple[sp.csr_matrix, np.ndarray]:
    """
    Sparse T and offset g with  u_full = T @ u + g,  u the active unknowns.

    Numbers the field's DoFs consecutively first. Constrained donors are
    resolved recursively; inactive donors contribute nothing.
    """
    n_eq = number_dofs_consecutively(field)
    size = field.n_components
    n_full = field.n_dofs * size

    rows, cols, vals = [], [], []
    g = np.zeros(n_full)
    memo: Dict = {}
    for dof in field.dofs_list:
        for d in range(size):
            coeffs, offset = _resolve(field, dof.id, d, memo, set())
            row = dof.id * size + d
            g[row] = offset
            for eq, v in coeffs.items():
                rows.append(row)
                cols.append(eq)
                vals.append(v)

    T = sp.coo_matrix((vals, (rows, cols)), shape=(n_full, n_eq)).tocsr()
    return T, g


def distribute_solution(field, u: np.ndarray) -> np.ndarray:
    """Values of all components, shape (n_dofs, n_components), from the active unknowns ``u``."""
    T, g = constraint_operator(field)
    u = np.asarray(u, dtype=float)
    if u.shape != (T.shape[1],):
        raise ValueError(f"Expected {T.shape[1]} active unknowns, got shape {u.shape}.")
    return (T @ u + g).reshape(field.n_dofs, field.n_components)
