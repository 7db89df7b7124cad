from functools import lru_cache
import numpy as np

from pycutstab.fem.reference.line_pn import line_pn


def _tensor(fx, fy):
    def f(xi, eta):
        # eta outer, xi inner
        return np.outer(fy(eta), fx(xi)).reshape(-1)
    return f


@lru_cache(maxsize=None)
def quad_qn(n: int, max_deriv_order: int = 2):
    """
    Q_n on [-1,1]^2 as the tensor product of two P_n line bases.

    Returns (shape_fn, deriv_fns); basis k = j*(n+1) + i pairs the i-th
    xi-factor with the j-th eta-factor, and deriv_fns is keyed by (ax, ay)
    with ax + ay <= max_deriv_order.
    """
    shape_1d, d1 = line_pn(n, max_deriv_order)
    derivs = {(ax, ay): _tensor(d1[(ax,)], d1[(ay,)])
              for ax in range(max_deriv_order + 1)
              for ay in range(max_deriv_order + 1 - ax)}
    return _tensor(shape_1d, shape_1d), derivs
