from functools import lru_cache
import sympy as sp
import numpy as np


@lru_cache(maxsize=None)
def lagrange_basis_1d(n: int, max_deriv_order: int):
    """
    Lagrange polynomials through n+1 equispaced nodes on [-1,1] and their
    derivatives up to ``max_deriv_order``, lambdified to numpy.

    Returns (nodes, [d^0 L_i], [d^1 L_i], ...).
    """
    x = sp.symbols('x')
    nodes = [sp.Rational(2 * i, n) - 1 for i in range(n + 1)]
    polys = [sp.expand(sp.prod([(x - b) / (a - b) for b in nodes if b != a])) for a in nodes]
    derivs = [[sp.lambdify(x, sp.diff(p, x, k), 'numpy') for p in polys]
              for k in range(max_deriv_order + 1)]
    return np.array(nodes, dtype=float), *derivs


def eval_1d(fns, z):
    # constants lambdify to scalars, so build the array entry by entry
    return np.array([f(z) for f in fns], dtype=float)


@lru_cache(maxsize=None)
def line_pn(n: int, max_deriv_order: int = 2):
    """
    Lagrange P_n on the reference line [-1,1], nodes ordered from -1 to +1.

    Returns (shape_fn, deriv_fns) with deriv_fns[(k,)] the k-th derivative,
    k <= max_deriv_order; both map xi to an (n+1,) array.
    """
    if n < 1:
        raise ValueError("Polynomial order n must be a positive integer.")
    _, *tables = lagrange_basis_1d(n, max_deriv_order)
    derivs = {(k,): (lambda xi, fns=fns: eval_1d(fns, xi)) for k, fns in enumerate(tables)}
    return derivs[(0,)], derivs
