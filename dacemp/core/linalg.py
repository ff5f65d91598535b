# dacemp/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Linear-algebra utilities shared across dacemp.core modules.

This file holds the correlation matrix assembly and the generalized
least-squares (GLS) step of the fitter. Inverses of R are never formed:
every solve is a triangular solve against the Cholesky factor C of the
regularized correlation matrix, R + mu I = C Cᵀ.
"""
from dataclasses import dataclass

import dacemp.num as dnp
from dacemp.config import get_config
from .utils import pairwise_differences


@dataclass
class GLSFit:
    """Quantities computed by :func:`gls` for one value of theta.

    Attributes
    ----------
    C : ndarray, shape (m, m)
        Lower Cholesky factor of the regularized correlation matrix.
    Ft : ndarray, shape (m, p)
        C⁻¹ F.
    G : ndarray, shape (p, p)
        Upper-triangular factor of the economic QR decomposition of Ft.
    beta : ndarray, shape (p, q)
        GLS regression coefficients.
    gamma : ndarray, shape (m, q)
        R⁻¹ (Y - F beta).
    sigma2 : ndarray, shape (q,)
        Process variance estimates (normalized response units).
    detR : float
        |R|^(1/m).
    rcond : float
        Estimated reciprocal condition number of R, rcond(C)^2.
    objective : float
        sum(sigma2) * detR.
    """

    C: object
    Ft: object
    G: object
    beta: object
    gamma: object
    sigma2: object
    detR: float
    rcond: float
    objective: float


def regularization(m):
    """Diagonal regularization mu = (10 + m) eps added to R."""
    return (10.0 + m) * dnp.eps


def correlation_matrix(corr, theta, S, D=None, ij=None, mu=0.0):
    """Correlation matrix of the sites S.

    Parameters
    ----------
    corr : Correlation
    theta : array_like
    S : ndarray, shape (m, n)
    D, ij : optional
        Pairwise differences and indices as returned by
        :func:`dacemp.core.utils.pairwise_differences`.
    mu : float
        Value added to the diagonal.

    Returns
    -------
    R : ndarray, shape (m, m)
        Symmetric, with diagonal 1 + mu.
    """
    m = S.shape[0]
    if D is None:
        D, ij = pairwise_differences(S)
    r, _ = corr(theta, D)
    R = (1.0 + mu) * dnp.eye(m)
    R[ij[0], ij[1]] = r
    R[ij[1], ij[0]] = r
    return R


def gls(corr, theta, S, F, Y, D=None, ij=None):
    """Factorize R(theta) and solve the GLS problem.

    Raises
    ------
    numpy.linalg.LinAlgError
        If the Cholesky factorization fails, or if the estimated
        reciprocal condition number of R or of G is below
        ``rcond_tol``. The caller treats this as a rejected candidate.
    """
    tol = get_config().rcond_tol
    m = S.shape[0]

    R = correlation_matrix(corr, theta, S, D, ij, mu=regularization(m))
    C = dnp.cholesky(R)
    # rcond(R) is estimated as rcond(C)^2
    rc = dnp.rcond_triangular(C, lower=True) ** 2
    if rc < tol:
        raise dnp.LinAlgError(
            f"correlation matrix is ill-conditioned (rcond={rc:.3e})"
        )

    Ft = dnp.solve_triangular(C, F, lower=True)
    Q, G = dnp.qr(Ft, mode="economic")
    rcG = dnp.rcond_triangular(G, lower=False)
    if rcG < tol:
        raise dnp.LinAlgError(
            f"regression matrix C^-1 F is ill-conditioned (rcond={rcG:.3e})"
        )

    Yt = dnp.solve_triangular(C, Y, lower=True)
    beta = dnp.solve_triangular(G, Q.T @ Yt, lower=False)
    rho = Yt - Ft @ beta
    sigma2 = dnp.sum(rho**2, axis=0) / m
    detR = float(dnp.prod(dnp.diag(C) ** (2.0 / m)))
    gamma = dnp.solve_triangular(C.T, rho, lower=False)

    return GLSFit(
        C=C,
        Ft=Ft,
        G=G,
        beta=beta,
        gamma=gamma,
        sigma2=sigma2,
        detR=detR,
        rcond=rc,
        objective=float(dnp.sum(sigma2) * detR),
    )
