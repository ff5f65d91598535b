# dacemp/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `dacemp.core` modules.

This file hosts:
- Shape/type validation & conversion helpers for (S, Y, x)
- Validation of the correlation parameters and their bounds
- Normalization of design sites and responses
"""
import dacemp.num as dnp
from .errors import DimensionMismatch


def ensure_design(S, Y):
    """Validate and adjust shapes/types of design sites and responses.

    Parameters
    ----------
    S : array_like, shape (m, n) or (m,)
        Design sites. A 1-D array is read as m sites in dimension 1.
    Y : array_like, shape (m, q) or (m,)
        Responses at the design sites.

    Returns
    -------
    S : ndarray, shape (m, n)
    Y : ndarray, shape (m, q)

    Raises
    ------
    DimensionMismatch
        If S or Y have more than two dimensions, if their row counts
        differ, or if fewer than two sites are given.
    """
    S = dnp.asarray(S)
    Y = dnp.asarray(Y)
    if S.ndim == 1:
        S = S.reshape(-1, 1)
    if Y.ndim == 1:
        Y = Y.reshape(-1, 1)
    if S.ndim != 2:
        raise DimensionMismatch(f"S should be a 2D array, got shape {S.shape}")
    if Y.ndim != 2:
        raise DimensionMismatch(f"Y should be a 1D or 2D array, got shape {Y.shape}")
    if S.shape[0] != Y.shape[0]:
        raise DimensionMismatch(
            f"S and Y must have the same number of rows ({S.shape[0]} != {Y.shape[0]})"
        )
    if S.shape[0] < 2:
        raise DimensionMismatch("At least two design sites are required")
    if not (dnp.all(dnp.isfinite(S)) and dnp.all(dnp.isfinite(Y))):
        raise ValueError("S and Y must only contain finite values")
    return S, Y


def ensure_query(x, n):
    """Validate trial sites against the training dimension n.

    A scalar is one point (only when n == 1) and a 2-D array holds one
    point per row. A 1-D array is one point of length n, except when
    n == 1 where it holds one trial site per entry.

    Returns
    -------
    x : ndarray, shape (mx, n)

    Raises
    ------
    DimensionMismatch
        If the point dimension differs from n.
    """
    x = dnp.asarray(x)
    if x.ndim == 0:
        x = x.reshape(1, 1)
    elif x.ndim == 1:
        x = x.reshape(-1, 1) if n == 1 else x.reshape(1, -1)
    elif x.ndim != 2:
        raise DimensionMismatch(f"x should be at most a 2D array, got shape {x.shape}")
    if x.shape[1] != n:
        raise DimensionMismatch(f"Dimension of trial sites should be {n}, got {x.shape[1]}")
    return x


def ensure_theta(theta0, lob, upb, allowed_lengths):
    """Validate the initial correlation parameters and their bounds.

    Parameters
    ----------
    theta0 : float or array_like
    lob, upb : float, array_like or None
        Box bounds. Both None means that theta0 is used as is.
    allowed_lengths : tuple of int
        Lengths of theta accepted by the correlation family.

    Returns
    -------
    theta0, lob, upb : ndarray, shape (p,) (lob, upb may be None)

    Raises
    ------
    DimensionMismatch
        If the lengths of theta0, lob and upb differ or theta0 has a
        length the correlation family does not accept.
    ValueError
        If the bounds do not satisfy 0 < lob <= upb, or theta0 is not
        positive when no bounds are given.
    """
    theta0 = dnp.atleast_1d(dnp.asarray(theta0)).reshape(-1)
    if theta0.shape[0] not in allowed_lengths:
        raise DimensionMismatch(
            f"theta0 has length {theta0.shape[0]}, expected one of {allowed_lengths}"
        )
    if (lob is None) != (upb is None):
        raise ValueError("lob and upb must be given together")

    if lob is None:
        if dnp.any(theta0 <= 0.0):
            raise ValueError("theta0 must be strictly positive")
        return theta0, None, None

    lob = dnp.atleast_1d(dnp.asarray(lob)).reshape(-1)
    upb = dnp.atleast_1d(dnp.asarray(upb)).reshape(-1)
    if lob.shape != theta0.shape or upb.shape != theta0.shape:
        raise DimensionMismatch("theta0, lob and upb must have the same length")
    if dnp.any(lob <= 0.0) or dnp.any(upb < lob):
        raise ValueError("The bounds must satisfy 0 < lob <= upb")
    return theta0, lob, upb


def normalize_data(S, Y):
    """Center and scale S and Y column-wise.

    Columns with zero standard deviation ("missing dimension") are only
    centered.

    Returns
    -------
    Sn, Yn : ndarray
        Normalized sites and responses.
    Ssc, Ysc : ndarray, shape (2, n) and (2, q)
        Rows hold the means and the standard deviations.
    """
    mS, sS = dnp.mean(S, axis=0), dnp.std(S, axis=0, ddof=1)
    mY, sY = dnp.mean(Y, axis=0), dnp.std(Y, axis=0, ddof=1)
    sS = dnp.where(sS == 0.0, 1.0, sS)
    sY = dnp.where(sY == 0.0, 1.0, sY)
    Sn = (S - mS) / sS
    Yn = (Y - mY) / sY
    return Sn, Yn, dnp.vstack((mS, sS)), dnp.vstack((mY, sY))


def pairwise_differences(S):
    """Differences S[i] - S[j] for all pairs i < j.

    Returns
    -------
    D : ndarray, shape (m(m-1)/2, n)
    ij : tuple of two int arrays
        Row indices i and j of each difference.
    """
    m = S.shape[0]
    ij = dnp.triu_indices(m, k=1)
    return S[ij[0]] - S[ij[1]], ij
