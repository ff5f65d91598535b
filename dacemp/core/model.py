# dacemp/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Fitted kriging model and search performance record.
"""
from dataclasses import dataclass, fields
from typing import Any

from numpy import ndarray

import dacemp.num as dnp
from . import predictor


@dataclass(frozen=True, eq=False)
class DaceModel:
    """Kriging model produced by :func:`dacemp.fit`.

    A DaceModel is immutable: every array attribute is read-only and
    re-fitting produces a new model. It may be shared between threads.

    Attributes
    ----------
    regr : Regression
        Regression basis.
    corr : Correlation
        Correlation family.
    theta : ndarray, shape (p_theta,)
        Correlation parameters.
    beta : ndarray, shape (p, q)
        Generalized least-squares estimate of the regression
        coefficients (normalized units).
    gamma : ndarray, shape (m, q)
        R⁻¹ (Y - F beta) (normalized units).
    sigma2 : ndarray, shape (q,)
        Process variance, in response units.
    S : ndarray, shape (m, n)
        Normalized design sites.
    Ssc : ndarray, shape (2, n)
        Means and standard deviations of the design sites.
    Ysc : ndarray, shape (2, q)
        Means and standard deviations of the responses.
    C : ndarray, shape (m, m)
        Lower Cholesky factor of the regularized correlation matrix.
    Ft : ndarray, shape (m, p)
        C⁻¹ F.
    G : ndarray, shape (p, p)
        Upper-triangular factor of the QR decomposition of Ft.
    rcond : float
        Estimated reciprocal condition number of R, rcond(C)^2.
    """

    regr: Any
    corr: Any
    theta: Any
    beta: Any
    gamma: Any
    sigma2: Any
    S: Any
    Ssc: Any
    Ysc: Any
    C: Any
    Ft: Any
    G: Any
    rcond: float

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, ndarray):
                object.__setattr__(self, f.name, dnp.readonly(dnp.copy(value)))

    @property
    def m(self):
        """Number of design sites."""
        return self.S.shape[0]

    @property
    def n(self):
        """Dimension of the design sites."""
        return self.S.shape[1]

    @property
    def q(self):
        """Number of responses."""
        return self.beta.shape[1]

    def __repr__(self):
        return f"<dacemp.core.DaceModel object> {hex(id(self))}"

    def __str__(self):
        return (
            f"DACE Model:\n"
            f"  Regression: {self.regr.value}\n"
            f"  Correlation: {self.corr.value}\n"
            f"  Sites: m={self.m}, n={self.n}, q={self.q}\n"
            f"  theta: {self.theta}\n"
            f"  sigma2: {self.sigma2}\n"
            f"  rcond(R): {self.rcond:.3e}"
        )

    def predict(
        self, x, return_hessian=False, return_mse_gradient=False, full_covariance=False
    ):
        """Prediction at x. See :func:`dacemp.core.predictor.predict`."""
        return predictor.predict(
            self,
            x,
            return_hessian=return_hessian,
            return_mse_gradient=return_mse_gradient,
            full_covariance=full_covariance,
        )


@dataclass
class Performance:
    """Trace and outcome of the correlation parameter search.

    Attributes
    ----------
    thetas : ndarray, shape (nfev, p_theta)
        Evaluated parameters, in order.
    values : ndarray, shape (nfev,)
        Objective values (+inf for rejected candidates).
    steps : ndarray of int, shape (nfev,)
        Step codes: 1 start, 2 explore, 3 move, 4 probe, 0 SciPy
        search. Negative when the step did not improve the objective.
    theta0 : ndarray
        Starting point.
    fun : float
        Best objective value.
    nfev : int
        Number of objective evaluations.
    nfactorizations : int
        Number of correlation matrix factorizations attempted.
    nrejected : int
        Number of candidates rejected (factorization failure or
        ill-conditioning).
    nit : int
        Number of iterations (sweeps for boxmin).
    converged : bool
        False when the search stopped on its iteration, evaluation or
        time budget.
    message : str
    method : str
        "boxmin", "L-BFGS-B", "SLSQP" or "fixed" (no search).
    time : float
        Elapsed time in seconds.
    """

    thetas: Any
    values: Any
    steps: Any
    theta0: Any
    fun: float
    nfev: int
    nfactorizations: int
    nrejected: int
    nit: int
    converged: bool
    message: str = ""
    method: str = "boxmin"
    time: float = 0.0

    @property
    def history(self):
        """List of (theta, value, step) triplets."""
        return list(zip(self.thetas, self.values, self.steps))

    def __str__(self):
        status = "converged" if self.converged else "not converged"
        return (
            f"Performance ({self.method}, {status}):\n"
            f"  best objective: {self.fun:.6e}\n"
            f"  evaluations: {self.nfev}, iterations: {self.nit}\n"
            f"  factorizations: {self.nfactorizations} ({self.nrejected} rejected)\n"
            f"  message: {self.message}\n"
            f"  time: {self.time:.3f}s"
        )
