# dacemp/core/predictor.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kriging predictor, its derivatives and its mean-squared error.

All computations are carried out in normalized units with the stored
factors of the model (C, Ft, G), then mapped back to response units.
For a trial site x with regression row f and correlation vector r,

    y(x)   = f beta + r gamma
    mse(x) = sigma2 (1 + |v|^2 - |rt|^2),
    rt = C⁻¹ r,  u = Ftᵀ rt - fᵀ,  v = G⁻ᵀ u.

Trial sites are processed as a batch sharing the same factors; the
result for each site is the one obtained by predicting it alone.
"""
import dacemp.num as dnp
from dacemp.config import get_logger
from .utils import ensure_query

logger = get_logger()


def _correlations(model, xn, order):
    """Correlations between normalized trial sites and design sites."""
    mx, n = xn.shape
    m = model.m
    D = (xn[:, None, :] - model.S[None, :, :]).reshape(mx * m, n)
    out = model.corr(model.theta, D, order=order)
    r = out[0].reshape(mx, m)
    dr = out[1].reshape(mx, m, n)
    d2r = out[2].reshape(mx, m, n, n) if order >= 2 else None
    return r, dr, d2r


def _clip_mse(mse):
    neg = mse < 0.0
    if dnp.any(neg):
        logger.debug(
            "NumericalUnderflow: %d negative MSE value(s) clipped to 0 (min %.3e)",
            int(dnp.sum(neg)),
            float(dnp.min(mse)),
        )
        mse = dnp.maximum(mse, 0.0)
    return mse


def predict(
    model, x, return_hessian=False, return_mse_gradient=False, full_covariance=False
):
    """Predict the responses of a fitted model at trial sites.

    Parameters
    ----------
    model : DaceModel
        Fitted model.
    x : array_like
        Trial sites: a scalar (only when n = 1), a vector of length n
        (one site, or mx sites when n = 1) or an (mx, n) array.
    return_hessian : bool, optional
        Also return the Hessian of the predictor.
    return_mse_gradient : bool, optional
        Also return the gradient of the MSE.
    full_covariance : bool, optional
        Return the joint (mx, mx, q) covariance of the prediction errors
        instead of the MSE.

    Returns
    -------
    y : ndarray, shape (mx, q)
        Predicted responses.
    dy : ndarray, shape (mx, q, n)
        Gradient of the predictor.
    mse : ndarray, shape (mx, q) or (mx, mx, q)
        Mean-squared error (non-negative).
    d2y : ndarray, shape (mx, q, n, n)
        Hessian of the predictor, only if return_hessian.
    dmse : ndarray, shape (mx, q, n)
        Gradient of the MSE, only if return_mse_gradient.

    Raises
    ------
    DimensionMismatch
        If the dimension of the trial sites differs from the dimension
        of the design sites. Checked before any computation.
    """
    x = ensure_query(x, model.n)
    mS, sS = model.Ssc[0], model.Ssc[1]
    mY, sY = model.Ysc[0], model.Ysc[1]
    m = model.m
    mx = x.shape[0]

    order = 2 if return_hessian else 1
    xn = (x - mS) / sS
    r, dr, d2r = _correlations(model, xn, order)
    fx = model.regr(xn, order=order)
    f, df = fx[0], fx[1]

    # predictor and gradient
    sy = f @ model.beta + r @ model.gamma
    y = mY + sY * sy
    dsy = dnp.einsum("knp,pq->kqn", df, model.beta) + dnp.einsum(
        "kin,iq->kqn", dr, model.gamma
    )
    dy = dsy * sY[None, :, None] / sS[None, None, :]

    # mse
    rt = dnp.solve_triangular(model.C, r.T, lower=True)
    u = model.Ft.T @ rt - f.T
    v = dnp.solve_triangular(model.G.T, u, lower=True)
    msef = 1.0 + dnp.sum(v**2, axis=0) - dnp.sum(rt**2, axis=0)
    mse = _clip_mse(msef[:, None] * model.sigma2[None, :])

    if full_covariance:
        Dxx = (xn[:, None, :] - xn[None, :, :]).reshape(mx * mx, model.n)
        Rxx = model.corr(model.theta, Dxx)[0].reshape(mx, mx)
        K = Rxx - rt.T @ rt + v.T @ v
        idx = dnp.arange(mx)
        mse_full = K[:, :, None] * model.sigma2[None, None, :]
        mse_full[idx, idx, :] = mse
        mse = mse_full

    out = [y, dy, mse]

    if return_hessian:
        d2f = fx[2]
        d2sy = dnp.einsum("kabp,pq->kqab", d2f, model.beta) + dnp.einsum(
            "kiab,iq->kqab", d2r, model.gamma
        )
        scale = sY[None, :, None, None] / (sS[:, None] * sS[None, :])[None, None, :, :]
        out.append(d2sy * scale)

    if return_mse_gradient:
        n = model.n
        Cdr = dnp.solve_triangular(
            model.C, dr.transpose(1, 0, 2).reshape(m, mx * n), lower=True
        ).reshape(m, mx, n)
        Gv = dnp.solve_triangular(model.G, v, lower=False)
        w = model.Ft @ Gv - rt
        g = dnp.einsum("ik,ikn->kn", w, Cdr) - dnp.einsum("knp,pk->kn", df, Gv)
        dmse = 2.0 * model.sigma2[None, :, None] * (g / sS[None, :])[:, None, :]
        out.append(dmse)

    return tuple(out)
