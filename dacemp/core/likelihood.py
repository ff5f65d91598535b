# dacemp/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Concentrated likelihood objective of the kriging model.

With beta and sigma2 eliminated in closed form, the likelihood only
depends on theta through

    psi(theta) = sum_k sigma2_k(theta) * |R(theta)|^(1/m),

which is minimized by the fitter. For a single output,
-2 log L_c = m log psi + const.
"""
import dacemp.num as dnp
from dacemp.config import get_logger
from .linalg import gls
from .utils import pairwise_differences

logger = get_logger()


class ConcentratedLikelihood:
    """Objective theta -> psi(theta) on normalized data.

    Candidates whose correlation matrix cannot be factorized, or is too
    ill-conditioned, get the value +inf. The best candidate seen so far
    is kept with its GLS quantities.

    Parameters
    ----------
    corr : Correlation
    S : ndarray, shape (m, n)
        Normalized design sites.
    F : ndarray, shape (m, p)
        Regression matrix at S.
    Y : ndarray, shape (m, q)
        Normalized responses.

    Attributes
    ----------
    nfactorizations : int
        Number of factorizations attempted.
    nrejected : int
        Number of candidates rejected.
    best_theta, best_fit, best_value
        Best candidate, its GLSFit and its objective value.
    """

    def __init__(self, corr, S, F, Y):
        self.corr = corr
        self.S = S
        self.F = F
        self.Y = Y
        self.D, self.ij = pairwise_differences(S)
        self.nfactorizations = 0
        self.nrejected = 0
        self.best_theta = None
        self.best_fit = None
        self.best_value = dnp.inf

    @property
    def m(self):
        return self.S.shape[0]

    def evaluate(self, theta):
        """Return the GLSFit at theta, or None if the candidate is rejected."""
        self.nfactorizations += 1
        try:
            fit = gls(self.corr, theta, self.S, self.F, self.Y, self.D, self.ij)
        except Exception as e:
            if dnp._is_linalg_exception(e):
                self.nrejected += 1
                logger.debug("Rejected theta=%s: %s", theta, e)
                return None
            raise
        return fit

    def __call__(self, theta):
        theta = dnp.copy(dnp.asarray(theta))
        fit = self.evaluate(theta)
        if fit is None or not dnp.isfinite(fit.objective):
            return dnp.inf
        if fit.objective < self.best_value:
            self.best_value = fit.objective
            self.best_theta = theta
            self.best_fit = fit
        return fit.objective


def negative_log_likelihood(objective, m):
    """Concentrated negative log-likelihood, up to a constant, from psi."""
    if not dnp.isfinite(objective):
        return dnp.inf
    if objective <= 0.0:
        # exact trend, zero residual variance
        return -dnp.inf
    return 0.5 * m * float(dnp.log(objective))
