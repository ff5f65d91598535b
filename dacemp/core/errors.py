# dacemp/core/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions and warning categories raised by the fitter and the predictor.

DimensionMismatch
    A shape precondition is violated (sites vs responses, bounds vs
    theta, query points vs training dimension, basis size vs number of
    sites). Fatal, raised before any computation.
IllConditionedDesign
    No correlation matrix could be factorized (duplicate sites, bad
    parameter region) or the regression matrix is too ill-conditioned.
    Fatal for the fit call; deduplicate (see dacemp.misc.dsmerge) or
    rescale and retry.
NonConvergence
    Warning category issued when the hyperparameter search stops on its
    iteration, evaluation or time budget. The best model found is still
    returned and Performance.converged is False.
"""
import numpy


class DaceError(Exception):
    """Base class of dacemp errors."""


class DimensionMismatch(DaceError, ValueError):
    """Inconsistent array shapes."""


class IllConditionedDesign(DaceError, numpy.linalg.LinAlgError):
    """Correlation or regression matrix cannot be factorized."""


class NonConvergence(RuntimeWarning):
    """Hyperparameter search stopped before meeting its tolerance."""
