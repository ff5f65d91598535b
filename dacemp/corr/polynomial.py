# dacemp/corr/polynomial.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Compactly supported one-dimensional correlation factors.

With :math:`\\xi = \\theta |d|`, every factor below vanishes for
:math:`\\xi \\geq 1`. Same calling convention as in
:mod:`dacemp.corr.exponential`.
"""
import dacemp.num as dnp


def lin_factor(theta, d, order=1):
    """Linear factor, :math:`s = \\max(0, 1 - \\xi)`."""
    xi = theta * dnp.abs(d)
    inside = xi < 1.0
    s = dnp.maximum(0.0, 1.0 - xi)
    ds = dnp.where(inside, -theta * dnp.sign(d), 0.0)
    d2s = dnp.zeros_like(s) if order >= 2 else None
    return s, ds, d2s


def spherical_factor(theta, d, order=1):
    """Spherical factor, :math:`s = 1 - 1.5\\xi + 0.5\\xi^3` on [0, 1)."""
    xi = dnp.minimum(1.0, theta * dnp.abs(d))
    s = 1.0 - xi * (1.5 - 0.5 * xi**2)
    ds = 1.5 * theta * dnp.sign(d) * (xi**2 - 1.0)
    d2s = None
    if order >= 2:
        d2s = dnp.where(xi < 1.0, 3.0 * theta**2 * xi, 0.0)
    return s, ds, d2s


def cubic_factor(theta, d, order=1):
    """Cubic factor, :math:`s = 1 - 3\\xi^2 + 2\\xi^3` on [0, 1)."""
    xi = dnp.minimum(1.0, theta * dnp.abs(d))
    s = 1.0 - xi**2 * (3.0 - 2.0 * xi)
    ds = 6.0 * theta * dnp.sign(d) * xi * (xi - 1.0)
    d2s = None
    if order >= 2:
        d2s = dnp.where(xi < 1.0, theta**2 * (12.0 * xi - 6.0), 0.0)
    return s, ds, d2s


def spline_factor(theta, d, order=1):
    """Cubic spline factor.

    .. math::
        s(\\xi) = \\begin{cases}
            1 - 15\\xi^2 + 30\\xi^3 & 0 \\leq \\xi \\leq 0.2 \\\\
            1.25 (1 - \\xi)^3 & 0.2 < \\xi < 1 \\\\
            0 & \\xi \\geq 1
        \\end{cases}

    Value and first derivative are continuous at 0.2 and at 1.
    """
    xi = theta * dnp.abs(d)
    low = xi <= 0.2
    mid = (xi > 0.2) & (xi < 1.0)
    u = 1.0 - xi

    s = dnp.where(low, 1.0 - xi**2 * (15.0 - 30.0 * xi), 0.0)
    s = dnp.where(mid, 1.25 * u**3, s)

    dxi = dnp.where(low, xi * (90.0 * xi - 30.0), 0.0)
    dxi = dnp.where(mid, -3.75 * u**2, dxi)
    ds = theta * dnp.sign(d) * dxi

    d2s = None
    if order >= 2:
        d2xi = dnp.where(low, 180.0 * xi - 30.0, 0.0)
        d2xi = dnp.where(mid, 7.5 * u, d2xi)
        d2s = theta**2 * d2xi
    return s, ds, d2s
