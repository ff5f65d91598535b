# dacemp/corr/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Stationary correlation functions.

All families are separable, r(d) = prod_j s(theta_j, d_j), where d is
the difference between two sites. Each family provides its 1-D factor
and the product rule in :mod:`dacemp.corr.product` yields r, dr/dd and,
on request, d2r/dd2.

Modules
-------
exponential
    exp, expg (general power) and gauss factors.
polynomial
    lin, spherical, cubic and spline factors (compact support).
product
    Product rule for separable correlations.

Public API
----------
- Correlation : closed enumeration of the families. Members are
  callable, ``Correlation.GAUSS(theta, d)`` returns ``(r, dr)``.
- correlation_values
"""
from enum import Enum

import dacemp.num as dnp
from dacemp.core.errors import DimensionMismatch
from .exponential import exp_factor, expg_factor, gauss_factor
from .polynomial import lin_factor, spherical_factor, cubic_factor, spline_factor
from .product import separable_product


class Correlation(Enum):
    EXP = "exp"
    EXPG = "expg"
    GAUSS = "gauss"
    LIN = "lin"
    SPHERICAL = "spherical"
    CUBIC = "cubic"
    SPLINE = "spline"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            if key.startswith("corr"):
                key = key[4:]
            for member in cls:
                if member.value == key:
                    return member
        return None

    @classmethod
    def parse(cls, value):
        """Return the member named by ``value`` (member or string)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown correlation family {value!r}, expected one of {names}"
            ) from None

    def allowed_theta_lengths(self, n):
        """Lengths of theta accepted in dimension n."""
        if self is Correlation.EXPG:
            return tuple(sorted({2, n + 1}))
        return tuple(sorted({1, n}))

    def split_theta(self, theta, n):
        """Broadcast theta to one value per dimension.

        Returns
        -------
        theta : ndarray, shape (n,)
        power : float or None
            The power of the expg family, None for the other families.
        """
        theta = dnp.atleast_1d(dnp.asarray(theta)).reshape(-1)
        if theta.shape[0] not in self.allowed_theta_lengths(n):
            raise DimensionMismatch(
                f"Length of theta must be one of {self.allowed_theta_lengths(n)} "
                f"for {self.value} in dimension {n}, got {theta.shape[0]}"
            )
        power = None
        if self is Correlation.EXPG:
            power = float(theta[-1])
            theta = theta[:-1]
        if theta.shape[0] == 1:
            theta = dnp.full((n,), theta[0])
        return theta, power

    def factors(self, theta, d, order=1):
        """One-dimensional factors s, ds (and d2s if order >= 2) at d."""
        d = dnp.atleast_2d(dnp.asarray(d))
        theta, power = self.split_theta(theta, d.shape[1])
        if self is Correlation.EXPG:
            return expg_factor(theta, d, power, order)
        return _FACTORS[self](theta, d, order)

    def __call__(self, theta, d, order=1):
        """Correlations between pairs of sites with differences d.

        Parameters
        ----------
        theta : array_like
            Correlation parameters, see :meth:`split_theta`.
        d : array_like, shape (m, n)
            Differences between sites.
        order : int
            1 for (r, dr), 2 for (r, dr, d2r).

        Returns
        -------
        r : ndarray, shape (m,)
        dr : ndarray, shape (m, n)
        d2r : ndarray, shape (m, n, n), only when order >= 2
        """
        s, ds, d2s = self.factors(theta, d, order)
        r, dr, d2r = separable_product(s, ds, d2s)
        if order >= 2:
            return r, dr, d2r
        return r, dr


_FACTORS = {
    Correlation.EXP: exp_factor,
    Correlation.GAUSS: gauss_factor,
    Correlation.LIN: lin_factor,
    Correlation.SPHERICAL: spherical_factor,
    Correlation.CUBIC: cubic_factor,
    Correlation.SPLINE: spline_factor,
}


def correlation_values(corr, theta, d):
    """Correlation values only, without derivatives."""
    s, _, _ = Correlation.parse(corr).factors(theta, d, order=1)
    return dnp.prod(s, axis=1)


__all__ = [
    "Correlation",
    "correlation_values",
    "exp_factor",
    "expg_factor",
    "gauss_factor",
    "lin_factor",
    "spherical_factor",
    "cubic_factor",
    "spline_factor",
    "separable_product",
]
