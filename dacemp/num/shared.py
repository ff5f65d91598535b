# dacemp/num/shared.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Backend-independent helpers for dacemp.num."""

from typing import Any, Callable, Union

Scalar = Union[int, float]
ArrayLike = Any


def derivative_finite_diff(
    f: Callable[[Scalar], ArrayLike], x: Scalar, h: Scalar
) -> ArrayLike:
    """
    5-point central difference derivative of f w.r.t. scalar x.
    f(x) must return a NumPy array (or a scalar).
    """
    f_x_p2 = f(x + 2 * h)
    f_x_p1 = f(x + h)
    f_x_m1 = f(x - h)
    f_x_m2 = f(x - 2 * h)
    return (-f_x_p2 + 8 * f_x_p1 - 8 * f_x_m1 + f_x_m2) / (12.0 * h)


def gradient_finite_diff(
    f: Callable[[ArrayLike], ArrayLike], x: ArrayLike, h: Scalar = 1e-5
) -> ArrayLike:
    """
    Gradient of f at the point x (1-D array), one coordinate at a time.

    Returns an array of shape f(x).shape + x.shape.
    """
    import dacemp.num as dnp

    x = dnp.asarray(x).reshape(-1)
    cols = []
    for i in range(x.shape[0]):

        def f_i(xi_scalar):
            x_copy = dnp.copy(x)
            x_copy[i] = xi_scalar
            return dnp.asarray(f(x_copy))

        cols.append(derivative_finite_diff(f_i, float(x[i]), h))
    return dnp.stack(cols, axis=-1)
