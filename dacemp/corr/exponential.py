# dacemp/corr/exponential.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exponential-type one-dimensional correlation factors.

Each function takes the per-dimension parameters ``theta`` (shape
(n,), broadcast against the columns of ``d``) and the signed
coordinate differences ``d`` (shape (m, n)), and returns the factor
values s(d) together with ds/dd and d2s/dd2 (the latter only when
``order >= 2``, None otherwise).
"""
import dacemp.num as dnp


def exp_factor(theta, d, order=1):
    """Exponential factor.

    .. math::
        s(d) = \\exp(-\\theta |d|)

    The derivatives at d = 0 are set to 0.
    """
    ad = dnp.abs(d)
    s = dnp.exp(-theta * ad)
    ds = -theta * dnp.sign(d) * s
    d2s = None
    if order >= 2:
        d2s = dnp.where(ad > 0.0, theta**2 * s, 0.0)
    return s, ds, d2s


def expg_factor(theta, d, power, order=1):
    """General exponential factor with power 0 < p <= 2.

    .. math::
        s(d) = \\exp(-\\theta |d|^p)

    Parameters
    ----------
    theta : ndarray, shape (n,)
    d : ndarray, shape (m, n)
    power : float
        Exponent p, with 0 < p <= 2. p = 1 gives the exponential factor
        and p = 2 the Gaussian one.
    """
    if not 0.0 < power <= 2.0:
        raise ValueError(f"The power of expg must satisfy 0 < p <= 2, got {power}")
    ad = dnp.abs(d)
    nz = ad > 0.0
    # avoid 0 ** negative when p < 1 or p < 2
    safe = dnp.where(nz, ad, 1.0)
    s = dnp.exp(-theta * ad**power)
    ds = dnp.where(nz, -power * theta * dnp.sign(d) * safe ** (power - 1.0) * s, 0.0)
    d2s = None
    if order >= 2:
        g = power * theta * safe ** (power - 1.0)
        h = power * (power - 1.0) * theta * safe ** (power - 2.0)
        at0 = -2.0 * theta if power == 2.0 else 0.0
        d2s = dnp.where(nz, (g**2 - h) * s, at0 * dnp.ones_like(s))
    return s, ds, d2s


def gauss_factor(theta, d, order=1):
    """Gaussian factor.

    .. math::
        s(d) = \\exp(-\\theta d^2)
    """
    s = dnp.exp(-theta * d**2)
    ds = -2.0 * theta * d * s
    d2s = None
    if order >= 2:
        d2s = (4.0 * theta**2 * d**2 - 2.0 * theta) * s
    return s, ds, d2s
