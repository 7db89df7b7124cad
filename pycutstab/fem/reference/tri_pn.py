from functools import lru_cache
import sympy as sp


@lru_cache(maxsize=None)
def tri_pn(n: int, max_deriv_order: int = 2):
    """
    Lagrange P_n on the reference triangle (0,0)-(1,0)-(0,1).

    Nodes are (i/n, j/n) with j outer and i inner, so vertex 0 is the first
    node, vertex 1 the n-th and vertex 2 the last one.

    Returns:
        tuple: (shape_lambda, deriv_lambdas)
            - shape_lambda(xi, eta) -> values of all basis functions, shape (N, 1)
            - deriv_lambdas[(ax, ay)](xi, eta) -> derivative values, ax+ay<=max_deriv_order
    """
    if n < 1:
        raise ValueError("Polynomial order n must be a positive integer.")
    xi_sym, eta_sym = sp.symbols("xi eta")

    nodes = [(sp.Rational(i, n), sp.Rational(j, n))
             for j in range(n + 1) for i in range(n + 1 - j)]
    monomials = [xi_sym**p * eta_sym**(deg - p)
                 for deg in range(n + 1) for p in range(deg + 1)]
    if len(nodes) != len(monomials):
        raise RuntimeError(f"Internal error: {len(nodes)} nodes but {len(monomials)} monomials for P{n}.")

    # V[i, k] = m_k(node_i); the Lagrange basis is m^T V^{-1}
    V = sp.Matrix([[m.subs({xi_sym: a, eta_sym: b}) for m in monomials] for a, b in nodes])
    try:
        coeffs = V.inv()
    except ValueError as exc:
        raise RuntimeError(f"Vandermonde matrix is singular for tri_pn order n={n}.") from exc

    basis = [sp.expand((sp.Matrix(monomials).T * coeffs.col(k))[0, 0]) for k in range(len(nodes))]

    shape_lambda = sp.lambdify((xi_sym, eta_sym), sp.Matrix(basis), "numpy")
    deriv_lambdas = {}
    for ax in range(max_deriv_order + 1):
        for ay in range(max_deriv_order + 1 - ax):
            d = [sp.diff(phi, xi_sym, ax, eta_sym, ay) for phi in basis]
            deriv_lambdas[(ax, ay)] = sp.lambdify((xi_sym, eta_sym), sp.Matrix(d), "numpy")
    return shape_lambda, deriv_lambdas
