# dacemp/corr/product.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Product rule for separable correlations r(d) = prod_j s_j(d_j)."""
import dacemp.num as dnp


def separable_product(s, ds, d2s=None):
    """Assemble a separable correlation and its derivatives.

    Products are formed explicitly rather than by dividing r by s_j,
    so that factors which vanish (compact support) are handled exactly.

    Parameters
    ----------
    s, ds : ndarray, shape (m, n)
        One-dimensional factors and their first derivatives.
    d2s : ndarray, shape (m, n), optional
        Second derivatives of the factors.

    Returns
    -------
    r : ndarray, shape (m,)
    dr : ndarray, shape (m, n)
        dr[:, j] = ds_j prod_{k != j} s_k
    d2r : ndarray, shape (m, n, n) or None
        Diagonal d2s_j prod_{k != j} s_k, off-diagonal
        ds_a ds_b prod_{k != a, b} s_k.
    """
    m, n = s.shape
    r = dnp.prod(s, axis=1)

    dr = dnp.zeros((m, n))
    for j in range(n):
        f = dnp.copy(s)
        f[:, j] = ds[:, j]
        dr[:, j] = dnp.prod(f, axis=1)

    if d2s is None:
        return r, dr, None

    d2r = dnp.zeros((m, n, n))
    for a in range(n):
        f = dnp.copy(s)
        f[:, a] = d2s[:, a]
        d2r[:, a, a] = dnp.prod(f, axis=1)
        for b in range(a + 1, n):
            f = dnp.copy(s)
            f[:, a] = ds[:, a]
            f[:, b] = ds[:, b]
            d2r[:, a, b] = d2r[:, b, a] = dnp.prod(f, axis=1)
    return r, dr, d2r
