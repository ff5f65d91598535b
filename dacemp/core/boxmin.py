# dacemp/core/boxmin.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Box-constrained multiplicative pattern search.

Derivative-free minimization of f over lo <= t <= up (lo > 0), in the
manner of a Hooke-Jeeves search on log(t). Each sweep is made of

- an explore step: every free coordinate t_j is multiplied, then
  divided, by a step factor D_j, and the first improvement is kept;
- a move step: the displacement of the sweep, as a ratio v = t / t_old,
  is applied again (and squared) as long as it improves f.

After each sweep the step factors are rotated between coordinates and
contracted. Every evaluation is recorded with a step code
(1 start, 2 explore, 3 move, 4 probe), negated when the step did not
improve the objective.
"""
import time

from scipy.optimize import OptimizeResult

import dacemp.num as dnp
from dacemp.config import get_logger

logger = get_logger()

START, EXPLORE, MOVE, PROBE = 1, 2, 3, 4


class BudgetExhausted(Exception):
    """Raised by :class:`SearchTracker` when the evaluation or time budget is spent."""


class SearchTracker:
    """Evaluate f, record the trace and enforce the budgets.

    Parameters
    ----------
    f : callable
        Objective, t -> float (+inf for rejected points).
    max_evals : int or None
        At least 1.
    max_time : float or None
        Budget in seconds, measured from the creation of the tracker.

    The first evaluation is always carried out, whatever the budgets.
    """

    def __init__(self, f, max_evals=None, max_time=None):
        if max_evals is not None and max_evals < 1:
            raise ValueError(f"max_evals must be at least 1, got {max_evals}")
        self.f = f
        self.max_evals = max_evals
        self.max_time = max_time
        self.thetas = []
        self.values = []
        self.steps = []
        self.t0 = time.time()

    @property
    def nfev(self):
        return len(self.values)

    def elapsed(self):
        return time.time() - self.t0

    def __call__(self, t, step):
        if self.nfev > 0:
            self._check_budgets()
        t = dnp.copy(t)
        value = float(self.f(t))
        self.thetas.append(t)
        self.values.append(value)
        self.steps.append(step)
        return value

    def _check_budgets(self):
        if self.max_evals is not None and self.nfev >= self.max_evals:
            raise BudgetExhausted("maximum number of evaluations reached")
        if self.max_time is not None and self.elapsed() >= self.max_time:
            raise BudgetExhausted("time budget exhausted")

    def reject_last(self):
        """Mark the last evaluation as a non-improving step."""
        self.steps[-1] = -abs(self.steps[-1])


def _start(tracker, t0, lo, up):
    p = t0.shape[0]
    t = dnp.copy(t0)
    D = 2.0 ** (dnp.arange(1, p + 1) / (p + 2.0))

    fixed = up == lo
    D[fixed] = 1.0
    t[fixed] = up[fixed]

    outside = (t < lo) | (up < t)
    t[outside] = (lo[outside] * up[outside] ** 7) ** (1.0 / 8.0)

    f = tracker(t, START)
    if dnp.isinf(f):
        tracker.reject_last()
        t, f = probe_diagonal(tracker, t, f, lo, up)
    return t, f, D, dnp.where(~fixed)[0]


def probe_diagonal(tracker, t, f, lo, up, npoints=5):
    """Try log-spaced points on the diagonal of the box."""
    logger.debug("boxmin: starting point rejected, probing the box diagonal")
    for k in range(1, npoints + 1):
        a = k / (npoints + 1.0)
        tt = lo ** (1.0 - a) * up**a
        ff = tracker(tt, PROBE)
        if ff < f:
            t, f = tt, ff
        else:
            tracker.reject_last()
    return t, f


def _explore(tracker, t, f, D, free, lo, up):
    for j in free:
        tt = dnp.copy(t)
        DD = D[j]
        if t[j] == up[j]:
            atbd = True
            tt[j] = t[j] / dnp.sqrt(DD)
        elif t[j] == lo[j]:
            atbd = True
            tt[j] = t[j] * dnp.sqrt(DD)
        else:
            atbd = False
            tt[j] = min(up[j], t[j] * DD)
        ff = tracker(tt, EXPLORE)
        if ff < f:
            t, f = tt, ff
            continue
        tracker.reject_last()
        if not atbd:
            tt[j] = max(lo[j], t[j] / DD)
            ff = tracker(tt, EXPLORE)
            if ff < f:
                t, f = tt, ff
            else:
                tracker.reject_last()
    return t, f


def _move(tracker, th, t, f, lo, up):
    """Pattern move from th through t. Returns (t, f, moved)."""
    v = t / th
    if dnp.all(v == 1.0):
        return t, f, False
    while True:
        tt = dnp.clip(t * v, lo, up)
        ff = tracker(tt, MOVE)
        if ff < f:
            t, f = tt, ff
            v = v**2
        else:
            tracker.reject_last()
            break
        if dnp.any((tt == lo) | (tt == up)):
            break
    return t, f, True


def _rotate(D, free, power):
    if free.shape[0] > 0:
        D[free] = dnp.concatenate((D[free][1:], D[free][:1]))
    return D**power


def boxmin(f, t0, lo, up, maxiter=50, rtol=1e-4, atol=1e-14, max_evals=None, max_time=None):
    """Minimize f over the box [lo, up] by multiplicative pattern search.

    Parameters
    ----------
    f : callable
        Objective t -> float. +inf marks rejected points.
    t0, lo, up : ndarray, shape (p,)
        Starting point and bounds, 0 < lo <= up. A starting value
        outside the box is replaced by (lo up^7)^(1/8).
    maxiter : int
        Maximum number of sweeps (explore + move).
    rtol, atol : float
        A sweep whose improvement f_old - f is at most
        rtol |f_old| + atol ends the search (converged).
    max_evals : int, optional
        Maximum number of objective evaluations.
    max_time : float, optional
        Time budget in seconds.

    Returns
    -------
    OptimizeResult
        With attributes x, fun, nfev, nit, success, message and the
        trace history_params, history_criterion, history_steps.
    """
    tracker = SearchTracker(f, max_evals=max_evals, max_time=max_time)
    t = dnp.copy(t0)
    f_best = dnp.inf
    nit = 0
    success = False
    message = ""

    try:
        t, f_best, D, free = _start(tracker, t0, lo, up)
        if dnp.isinf(f_best):
            message = "no admissible starting point in the box"
        elif free.shape[0] == 0:
            success = True
            message = "all parameters fixed by the bounds"
        else:
            for nit in range(1, maxiter + 1):
                f_old = f_best
                th = dnp.copy(t)
                t, f_best = _explore(tracker, t, f_best, D, free, lo, up)
                t, f_best, moved = _move(tracker, th, t, f_best, lo, up)
                D = _rotate(D, free, 0.25 if moved else 0.2)
                logger.debug("boxmin: sweep %d, f = %.6e", nit, f_best)
                if f_old - f_best <= rtol * abs(f_old) + atol:
                    success = True
                    message = "relative improvement below tolerance"
                    break
            else:
                message = "maximum number of iterations reached"
    except BudgetExhausted as e:
        message = str(e)
        if tracker.nfev > 0:
            i = int(dnp.argmin(dnp.asarray(tracker.values)))
            if tracker.values[i] < f_best:
                t, f_best = tracker.thetas[i], tracker.values[i]

    return OptimizeResult(
        x=t,
        fun=f_best,
        nfev=tracker.nfev,
        nit=nit,
        success=success,
        status=0 if success else 1,
        message=message,
        history_params=tracker.thetas,
        history_criterion=tracker.values,
        history_steps=tracker.steps,
        total_time=tracker.elapsed(),
    )
