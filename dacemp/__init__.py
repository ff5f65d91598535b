# dacemp/__init__.py

from . import config
from . import num
from . import core
from . import corr
from . import regression
from . import misc
from .core import (
    fit,
    predict,
    DaceModel,
    Performance,
    DaceError,
    DimensionMismatch,
    IllConditionedDesign,
    NonConvergence,
)
from .corr import Correlation
from .regression import Regression

__version__ = config.__version__

__all__ = [
    "fit",
    "predict",
    "DaceModel",
    "Performance",
    "Correlation",
    "Regression",
    "DaceError",
    "DimensionMismatch",
    "IllConditionedDesign",
    "NonConvergence",
    "__version__",
]
