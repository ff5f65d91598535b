# coding: utf-8
## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""Deterministic test functions used by the examples and the tests.

Every function takes an (m, n) array (or an (m,) array in dimension 1)
and returns an (m,) array of responses.
"""
import math
import numpy as np


def twobumps(x):
    """
    One-dimensional function with two local minima on [-1, 1].

    .. math::
        f(x) = -(0.7x + \\sin(5x + 1) + 0.1 \\sin(10x))
    """
    x = np.asarray(x, dtype=float).reshape(-1)
    return -(0.7 * x + np.sin(5 * x + 1) + 0.1 * np.sin(10 * x))


def braninhoo(x):
    """
    Branin-Hoo function, usually minimized over [-5, 10] x [0, 15].

    Its three global minimizers give the value 0.397887.

    Notes
    -----
    Branin, F. H. and Hoo, S. K. (1972), A Method for Finding Multiple
    Extrema of a Function of n Variables, in Numerical methods of
    Nonlinear Optimization (F. A. Lootsma, editor, Academic Press,
    London), 231-237.
    """
    x = np.atleast_2d(np.asarray(x, dtype=float))
    a = 5.1 / (4 * math.pi**2)
    b = 5 / math.pi
    c = 10 * (1 - 1 / (8 * math.pi))
    x1, x2 = x[:, 0], x[:, 1]
    return (x2 - a * x1**2 + b * x1 - 6) ** 2 + c * np.cos(x1) + 10


def rosenbrock(x):
    """Rosenbrock function in dimension n >= 2, minimum 0 at (1, ..., 1)."""
    x = np.atleast_2d(np.asarray(x, dtype=float))
    return np.sum(100.0 * (x[:, 1:] - x[:, :-1] ** 2) ** 2 + (1.0 - x[:, :-1]) ** 2, axis=1)
