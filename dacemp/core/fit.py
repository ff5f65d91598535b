# dacemp/core/fit.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Fit a kriging model to design data.

Steps
-----
1. Validate shapes, normalize the sites and the responses.
2. Reject designs with duplicate sites, build the regression matrix.
3. Minimize the concentrated likelihood objective over theta in
   [lob, upb] (or evaluate it at theta0 when no bounds are given).
4. Store the factors of the best candidate in an immutable DaceModel.
"""
import warnings

from scipy.optimize import OptimizeResult

import dacemp.num as dnp
from dacemp.config import get_config, get_logger
from dacemp.corr import Correlation
from dacemp.regression import Regression
from .errors import DimensionMismatch, IllConditionedDesign, NonConvergence
from .utils import ensure_design, ensure_theta, normalize_data, pairwise_differences
from .likelihood import ConcentratedLikelihood
from .boxmin import boxmin
from .selection import autoselect_theta, SCIPY_METHODS
from .model import DaceModel, Performance

logger = get_logger()


def check_duplicates(Sn, tol=None):
    """Raise IllConditionedDesign if two sites are closer than tol (1-norm)."""
    if tol is None:
        tol = get_config().duplicate_tol
    D, ij = pairwise_differences(Sn)
    dist = dnp.sum(dnp.abs(D), axis=1)
    k = dnp.where(dist <= tol)[0]
    if k.shape[0] > 0:
        i, j = int(ij[0][k[0]]), int(ij[1][k[0]])
        raise IllConditionedDesign(
            f"Multiple design sites are not allowed: sites {i} and {j} coincide "
            f"({k.shape[0]} duplicate pair(s)); merge them with dacemp.misc.dsmerge"
        )


def regression_matrix(regr, Sn):
    """Regression matrix F at the normalized sites, with sanity checks."""
    F = regr(Sn)
    m, p = F.shape
    if p > m:
        raise DimensionMismatch(
            f"The {regr.value} basis has {p} functions, more than the {m} design sites"
        )
    c = dnp.cond(F)
    if not c <= get_config().fcond_max:
        raise IllConditionedDesign(
            f"Regression matrix is too ill conditioned (cond(F)={c:.3e}): "
            "poor combination of regression model and design sites"
        )
    return F


def _check_expg_power(corr, theta0, upb):
    if corr is not Correlation.EXPG:
        return
    pmax = theta0[-1] if upb is None else upb[-1]
    if pmax > 2.0:
        raise ValueError("The power of the expg correlation must lie in (0, 2]")


def fit(
    S,
    Y,
    regr="poly2",
    corr="gauss",
    theta0=1.0,
    lob=None,
    upb=None,
    *,
    method="boxmin",
    maxiter=50,
    rtol=1e-4,
    atol=1e-14,
    max_evals=None,
    max_time=None,
    method_options=None,
):
    """Fit a kriging model.

    Parameters
    ----------
    S : array_like, shape (m, n) or (m,)
        Design sites.
    Y : array_like, shape (m, q) or (m,)
        Responses at the design sites.
    regr : str or Regression, optional
        Regression basis ("poly0", "poly1", "poly2"), default "poly2".
    corr : str or Correlation, optional
        Correlation family ("exp", "expg", "gauss", "lin", "spherical",
        "cubic", "spline"), default "gauss".
    theta0 : float or array_like, optional
        Initial correlation parameters. Used as is if lob and upb are
        not given.
    lob, upb : float or array_like, optional
        Bounds on theta, 0 < lob <= upb. Components with lob == upb are
        kept fixed.
    method : {"boxmin", "L-BFGS-B", "SLSQP"}, optional
        Search method.
    maxiter : int, optional
        Maximum number of iterations of the search.
    rtol, atol : float, optional
        Stopping tolerances on the objective improvement.
    max_evals : int, optional
        Maximum number of objective evaluations, at least 1.
    max_time : float, optional
        Time budget (seconds) of the search. The starting point is
        evaluated before the budgets apply.
    method_options : dict, optional
        Extra options for the SciPy methods.

    Returns
    -------
    model : DaceModel
    perf : Performance

    Raises
    ------
    DimensionMismatch
        Inconsistent shapes of S, Y, theta0, lob and upb, or more basis
        functions than sites.
    IllConditionedDesign
        Duplicate sites, ill-conditioned regression matrix, or no
        admissible theta found.
    ValueError
        Invalid bounds, family name or method.

    Warns
    -----
    NonConvergence
        The search stopped on its budget. The best model found is still
        returned and ``perf.converged`` is False.
    """
    config = get_config()
    regr = Regression.parse(regr)
    corr = Correlation.parse(corr)

    S, Y = ensure_design(S, Y)
    m, n = S.shape
    theta0, lob, upb = ensure_theta(theta0, lob, upb, corr.allowed_theta_lengths(n))
    _check_expg_power(corr, theta0, upb)
    if max_evals is not None and max_evals < 1:
        raise ValueError(f"max_evals must be at least 1, got {max_evals}")

    logger.debug(
        "fit: m=%d n=%d q=%d regr=%s corr=%s method=%s",
        m, n, Y.shape[1], regr.value, corr.value, method if lob is not None else "fixed",
    )

    Sn, Yn, Ssc, Ysc = normalize_data(S, Y)
    check_duplicates(Sn, config.duplicate_tol)
    F = regression_matrix(regr, Sn)

    objective = ConcentratedLikelihood(corr, Sn, F, Yn)

    if lob is None:
        method = "fixed"
        value = objective(theta0)
        result = OptimizeResult(
            x=theta0,
            fun=value,
            nfev=1,
            nit=0,
            success=bool(dnp.isfinite(value)),
            message="theta0 used as is",
            history_params=[dnp.copy(theta0)],
            history_criterion=[value],
            history_steps=[1],
            total_time=0.0,
        )
    elif method == "boxmin":
        result = boxmin(
            objective, theta0, lob, upb,
            maxiter=maxiter, rtol=rtol, atol=atol,
            max_evals=max_evals, max_time=max_time,
        )
    elif method in SCIPY_METHODS:
        result = autoselect_theta(
            objective, theta0, lob, upb,
            method=method, maxiter=maxiter, rtol=rtol,
            max_evals=max_evals, max_time=max_time,
            method_options=method_options,
        )
    else:
        raise ValueError(
            f"Unknown method {method!r}, expected 'boxmin' or one of {SCIPY_METHODS}"
        )

    if objective.best_fit is None:
        raise IllConditionedDesign(
            f"No admissible correlation parameters: all {objective.nfactorizations} "
            f"candidate correlation matrices were rejected ({result.message})"
        )

    best = objective.best_fit
    model = DaceModel(
        regr=regr,
        corr=corr,
        theta=objective.best_theta,
        beta=best.beta,
        gamma=best.gamma,
        sigma2=Ysc[1] ** 2 * best.sigma2,
        S=Sn,
        Ssc=Ssc,
        Ysc=Ysc,
        C=best.C,
        Ft=best.Ft,
        G=best.G,
        rcond=best.rcond,
    )

    converged = bool(result.success)
    perf = Performance(
        thetas=dnp.asarray(result.history_params).reshape(len(result.history_params), -1),
        values=dnp.asarray(result.history_criterion),
        steps=dnp.asarray(result.history_steps, dtype=int),
        theta0=theta0,
        fun=objective.best_value,
        nfev=int(result.nfev),
        nfactorizations=objective.nfactorizations,
        nrejected=objective.nrejected,
        nit=int(getattr(result, "nit", 0)),
        converged=converged,
        message=str(result.message),
        method=method,
        time=float(result.total_time),
    )

    logger.debug(
        "fit: theta=%s objective=%.6e nfev=%d rejected=%d converged=%s",
        model.theta, perf.fun, perf.nfev, perf.nrejected, converged,
    )
    if not converged:
        warnings.warn(
            f"Correlation parameter search did not converge ({perf.message}); "
            "returning the best model found",
            NonConvergence,
            stacklevel=2,
        )
    return model, perf
