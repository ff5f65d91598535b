# dacemp/core/selection.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Correlation parameter search with scipy.optimize.minimize.

The search runs on log10(theta) with the box [lo, up] mapped
accordingly, and uses finite-difference gradients. The starting
point is evaluated first; if it is rejected, the box diagonal is
probed as in boxmin and SciPy starts from the best point found. It is
an alternative to :func:`dacemp.core.boxmin.boxmin`; both produce an
OptimizeResult carrying the full evaluation trace.
"""
from scipy.optimize import minimize, OptimizeResult

import dacemp.num as dnp
from .boxmin import SearchTracker, BudgetExhausted, START, probe_diagonal

SCIPY_METHODS = ("L-BFGS-B", "SLSQP")


def autoselect_theta(
    f,
    t0,
    lo,
    up,
    method="L-BFGS-B",
    maxiter=50,
    rtol=1e-4,
    max_evals=None,
    max_time=None,
    method_options=None,
):
    """Minimize f(theta) over [lo, up] with SciPy.

    Parameters
    ----------
    f : callable
        Objective theta -> float. +inf marks rejected candidates.
    t0, lo, up : ndarray, shape (p,)
    method : {"L-BFGS-B", "SLSQP"}
    maxiter : int
        Maximum number of iterations of the SciPy solver.
    rtol : float
        Used as ``ftol`` of the solver.
    max_evals, max_time : optional
        Evaluation and time budgets. The search stops as soon as one of
        them is exhausted and the best point seen is returned.
    method_options : dict, optional
        Additional options passed to SciPy ``minimize``.

    Returns
    -------
    OptimizeResult
        If the final SciPy result is worse than the best visited point,
        the best point is returned and ``best_value_returned`` is False.
        ``history_params`` holds theta values (not their logarithm).
    """
    if method not in SCIPY_METHODS:
        raise ValueError(f"Optimization method {method!r} not implemented.")
    if method_options is None:
        method_options = {}

    tracker = SearchTracker(f, max_evals=max_evals, max_time=max_time)
    lo10, up10 = dnp.log10(lo), dnp.log10(up)
    bounds = list(zip(lo10, up10))

    def criterion_with_history(u):
        return tracker(dnp.clip(10.0**u, lo, up), 0)

    options = {"maxiter": maxiter}
    if method == "L-BFGS-B":
        options.update(dict(ftol=rtol, gtol=1e-6, maxls=40))
    else:
        options.update(dict(ftol=rtol))
    options.update(method_options)

    try:
        t, value = _admissible_start(tracker, t0, lo, up)
        if dnp.isinf(value):
            r = minimize_result_from_trace(tracker, "no admissible starting point in the box")
        else:
            r = minimize(
                criterion_with_history,
                dnp.log10(t),
                method=method,
                bounds=bounds,
                options=options,
            )
            r.x = dnp.clip(10.0**r.x, lo, up)
            r.success = bool(r.success)
            r.message = str(r.message)
    except BudgetExhausted as e:
        r = minimize_result_from_trace(tracker, str(e))

    if tracker.nfev > 0:
        i = int(dnp.argmin(dnp.asarray(tracker.values)))
        if tracker.values[i] < r.fun or not dnp.isfinite(r.fun):
            r.x, r.fun = tracker.thetas[i], tracker.values[i]
            r.best_value_returned = False
        else:
            r.best_value_returned = True

    r.nfev = tracker.nfev
    r.history_params = tracker.thetas
    r.history_criterion = tracker.values
    r.history_steps = tracker.steps
    r.total_time = tracker.elapsed()
    return r


def minimize_result_from_trace(tracker, message):
    """Build an unsuccessful OptimizeResult from the best traced point."""
    x, fun = None, dnp.inf
    if tracker.nfev > 0:
        i = int(dnp.argmin(dnp.asarray(tracker.values)))
        x, fun = tracker.thetas[i], tracker.values[i]
    return OptimizeResult(x=x, fun=fun, nit=0, success=False, status=1, message=message)


def _admissible_start(tracker, t0, lo, up):
    """Evaluate the starting point, probe the box diagonal if it is rejected."""
    t = dnp.clip(t0, lo, up)
    value = tracker(t, START)
    if dnp.isinf(value):
        tracker.reject_last()
        t, value = probe_diagonal(tracker, t, value, lo, up)
    return t, value
