# dacemp/regression.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Polynomial regression bases.

A basis maps sites x (m, n) to the regression matrix F (m, p) and,
on request, to its derivatives with respect to the coordinates of x:
df (m, n, p) and d2f (m, n, n, p).

poly0
    constant, p = 1
poly1
    linear, [1, x_1, ..., x_n], p = n + 1
poly2
    quadratic, [1, x_1, ..., x_n, x_1 x_1, x_1 x_2, ..., x_n x_n],
    p = (n + 1)(n + 2) / 2
"""
from enum import Enum

import dacemp.num as dnp

_ALIASES = {
    "constant": "poly0",
    "linear": "poly1",
    "quadratic": "poly2",
    "regpoly0": "poly0",
    "regpoly1": "poly1",
    "regpoly2": "poly2",
}


class Regression(Enum):
    POLY0 = "poly0"
    POLY1 = "poly1"
    POLY2 = "poly2"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            key = _ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown regression basis {value!r}, expected one of {names}"
            ) from None

    def size(self, n):
        """Number of basis functions in dimension n."""
        if self is Regression.POLY0:
            return 1
        if self is Regression.POLY1:
            return n + 1
        return (n + 1) * (n + 2) // 2

    def __call__(self, x, order=0):
        """Evaluate the basis.

        Parameters
        ----------
        x : array_like, shape (m, n)
        order : int
            0 for F, 1 for (F, df), 2 for (F, df, d2f).
        """
        x = dnp.atleast_2d(dnp.asarray(x))
        m, n = x.shape
        if self is Regression.POLY0:
            out = _poly0(m, n, order)
        elif self is Regression.POLY1:
            out = _poly1(x, order)
        else:
            out = _poly2(x, order)
        if order == 0:
            return out[0]
        return out[: order + 1]


def _poly0(m, n, order):
    F = dnp.ones((m, 1))
    df = dnp.zeros((m, n, 1)) if order >= 1 else None
    d2f = dnp.zeros((m, n, n, 1)) if order >= 2 else None
    return F, df, d2f


def _poly1(x, order):
    m, n = x.shape
    F = dnp.hstack((dnp.ones((m, 1)), x))
    df = d2f = None
    if order >= 1:
        J = dnp.hstack((dnp.zeros((n, 1)), dnp.eye(n)))
        df = dnp.tile(J, (m, 1, 1))
    if order >= 2:
        d2f = dnp.zeros((m, n, n, n + 1))
    return F, df, d2f


def _quadratic_pairs(n):
    return [(k, l) for k in range(n) for l in range(k, n)]


def _poly2(x, order):
    m, n = x.shape
    pairs = _quadratic_pairs(n)
    p = 1 + n + len(pairs)

    F = dnp.zeros((m, p))
    F[:, 0] = 1.0
    F[:, 1 : n + 1] = x
    for c, (k, l) in enumerate(pairs, start=n + 1):
        F[:, c] = x[:, k] * x[:, l]

    df = d2f = None
    if order >= 1:
        df = dnp.zeros((m, n, p))
        for i in range(n):
            df[:, i, i + 1] = 1.0
        for c, (k, l) in enumerate(pairs, start=n + 1):
            df[:, k, c] += x[:, l]
            df[:, l, c] += x[:, k]
    if order >= 2:
        H = dnp.zeros((n, n, p))
        for c, (k, l) in enumerate(pairs, start=n + 1):
            H[k, l, c] += 1.0
            H[l, k, c] += 1.0
        d2f = dnp.tile(H, (m, 1, 1, 1))
    return F, df, d2f
