# dacemp/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy / SciPy numerical layer for dacemp.

This module defines the array and linear-algebra API used by the
correlation, regression, fitting and prediction routines.
"""

import builtins
from typing import Optional
from dacemp.config import get_config

_config = get_config()

_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "cholesky",
    "factorization",
    "ill-conditioned",
    "lapack",
    "array must not contain infs or nans",
)

# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy

_np_dtype = numpy.float64

from numpy import (
    copy,
    where,
    any,
    all,
    isinf,
    isfinite,
    atleast_1d,
    atleast_2d,
    hstack,
    vstack,
    stack,
    tile,
    concatenate,
    zeros_like,
    ones_like,
    diag,
    arange,
    triu_indices,
    abs,
    sign,
    sqrt,
    exp,
    log,
    log10,
    sum,
    prod,
    mean,
    median,
    std,
    min,
    max,
    argmin,
    minimum,
    maximum,
    clip,
    einsum,
)
from numpy import inf
from numpy import finfo
from numpy.linalg import norm, cond, LinAlgError
from scipy.linalg import solve_triangular, qr
from scipy.linalg import cholesky as _scipy_cholesky
from scipy.linalg.lapack import dtrcon

# ..................................................

eps = finfo(_np_dtype).eps

# ..................................................


def _is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, numpy.linalg.LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)


# ..................................................


def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    out = numpy.asarray(x)
    if numpy.issubdtype(out.dtype, numpy.integer) or out.dtype == bool:
        return out.astype(_np_dtype)
    if numpy.issubdtype(out.dtype, numpy.floating):
        return out.astype(_np_dtype, copy=False)
    return out


def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)


def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)


def full(shape, fill_value, dtype=None):
    return numpy.full(shape, fill_value, dtype=_np_dtype if dtype is None else dtype)


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)


def readonly(x):
    """Return x with its write flag cleared."""
    x = numpy.asarray(x)
    x.setflags(write=False)
    return x


# ..................................................


def cholesky(A):
    """Lower-triangular Cholesky factor, A = C C^T.

    Raises numpy.linalg.LinAlgError when A is not positive definite.
    """
    return _scipy_cholesky(A, lower=True, check_finite=True)


def rcond_triangular(C, lower=True):
    """Reciprocal condition number (1-norm) of a triangular matrix.

    The estimate comes from LAPACK ``dtrcon``; a zero diagonal entry
    yields 0.
    """
    if C.shape[0] == 0:
        return 1.0
    if not numpy.all(numpy.diag(C)):
        return 0.0
    rc, info = dtrcon(numpy.asfortranarray(C), norm="1", uplo="L" if lower else "U")
    if info != 0:
        raise numpy.linalg.LinAlgError(f"dtrcon failed with info={info}")
    return float(rc)


# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)


def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _config.seed = seed
    _np_rng = numpy.random.default_rng(seed=seed)


def get_rng(seed: Optional[int] = None):
    """Return a generator: a fresh one if seed is given, the global one otherwise."""
    if seed is not None:
        return numpy.random.default_rng(seed=seed)
    return _np_rng
