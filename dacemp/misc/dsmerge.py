# dacemp/misc/dsmerge.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Merging of repeated or nearly repeated design sites.

Kriging interpolates, so two coinciding sites make every correlation
matrix singular. Call :func:`dsmerge` before :func:`dacemp.fit` when
the data may contain repeated evaluations.
"""
import dacemp.num as dnp
from dacemp.config import get_logger
from dacemp.core.errors import DimensionMismatch

logger = get_logger()

SITE_MODES = ("mean", "median", "center")
RESPONSE_MODES = ("mean", "median", "min", "max", "sum")


def _weighted_mean(X, w):
    return dnp.sum(w[:, None] * X, axis=0) / dnp.sum(w)


def dsmerge(S, Y, ds=1e-14, norm=2, site_mode="mean", response_mode="mean", weights=None):
    """Merge design sites closer than ds.

    Sites are scanned in order. Each site not yet merged becomes the
    seed of a cluster made of itself and of all the remaining sites
    within distance ds of it.

    Parameters
    ----------
    S : array_like, shape (m, n) or (m,)
        Design sites.
    Y : array_like, shape (m, q) or (m,)
        Responses.
    ds : float, optional
        Merging distance, default 1e-14.
    norm : {1, 2, inf}, optional
        Norm used for the distance, default 2.
    site_mode : {"mean", "median", "center"}, optional
        How the sites of a cluster are combined. "center" keeps the
        seed of the cluster.
    response_mode : {"mean", "median", "min", "max", "sum"}, optional
        How the responses of a cluster are combined.
    weights : array_like, shape (m,), optional
        Positive weights used by the "mean" modes (default: equal
        weights). Medians are not weighted.

    Returns
    -------
    mS : ndarray, shape (k, n)
        Merged sites, in order of their seeds.
    mY : ndarray, shape (k, q)
        Merged responses.
    """
    S = dnp.asarray(S)
    Y = dnp.asarray(Y)
    if S.ndim == 1:
        S = S.reshape(-1, 1)
    if Y.ndim == 1:
        Y = Y.reshape(-1, 1)
    m = S.shape[0]
    if Y.shape[0] != m:
        raise DimensionMismatch(f"S and Y must have the same number of rows ({m} != {Y.shape[0]})")
    if weights is None:
        w = dnp.ones(m)
    else:
        w = dnp.asarray(weights).reshape(-1)
        if w.shape[0] != m:
            raise DimensionMismatch(f"weights should have length {m}, got {w.shape[0]}")
        if dnp.any(w <= 0.0):
            raise ValueError("weights must be positive")
    if norm not in (1, 2, dnp.inf):
        raise ValueError(f"norm must be 1, 2 or inf, got {norm}")
    if site_mode not in SITE_MODES:
        raise ValueError(f"site_mode must be one of {SITE_MODES}, got {site_mode!r}")
    if response_mode not in RESPONSE_MODES:
        raise ValueError(f"response_mode must be one of {RESPONSE_MODES}, got {response_mode!r}")

    free = dnp.ones(m, dtype=bool)
    mS, mY = [], []
    for i in range(m):
        if not free[i]:
            continue
        d = dnp.norm(S - S[i], ord=norm, axis=1)
        members = dnp.where(free & (d <= ds))[0]
        free[members] = False
        Sk, Yk, wk = S[members], Y[members], w[members]

        if site_mode == "mean":
            mS.append(_weighted_mean(Sk, wk))
        elif site_mode == "median":
            mS.append(dnp.median(Sk, axis=0))
        else:
            mS.append(S[i])

        if response_mode == "mean":
            mY.append(_weighted_mean(Yk, wk))
        elif response_mode == "median":
            mY.append(dnp.median(Yk, axis=0))
        elif response_mode == "min":
            mY.append(dnp.min(Yk, axis=0))
        elif response_mode == "max":
            mY.append(dnp.max(Yk, axis=0))
        else:
            mY.append(dnp.sum(Yk, axis=0))

    mS, mY = dnp.vstack(mS), dnp.vstack(mY)
    if mS.shape[0] < m:
        logger.debug("dsmerge: %d sites merged into %d", m, mS.shape[0])
    return mS, mY
