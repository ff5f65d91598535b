# dacemp/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the dacemp package.

This subpackage contains the model fitter and the predictor, together
with the generalized least-squares step, the concentrated likelihood
objective, the correlation parameter searches and the error types.

Public API
----------
fit : function
    Fit a kriging model, returns (DaceModel, Performance).
predict : function
    Predictions, gradients and mean-squared errors of a fitted model.
DaceModel, Performance : dataclasses
DaceError, DimensionMismatch, IllConditionedDesign, NonConvergence
"""

from .errors import DaceError, DimensionMismatch, IllConditionedDesign, NonConvergence
from .model import DaceModel, Performance
from .predictor import predict
from .fit import fit

__all__ = [
    "fit",
    "predict",
    "DaceModel",
    "Performance",
    "DaceError",
    "DimensionMismatch",
    "IllConditionedDesign",
    "NonConvergence",
]
