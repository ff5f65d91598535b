# dacemp/num/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Numerical layer for dacemp (NumPy / SciPy)."""

from dacemp.config import get_logger

from . import shared as _shared
from . import numpy_backend as _backend

get_logger().debug("dacemp.num: using numpy %s", _backend.numpy.__version__)

# Re-export backend API.
for _name in dir(_backend):
    if _name.startswith("__"):
        continue
    globals()[_name] = getattr(_backend, _name)

# Re-export backend-independent helpers from shared.py.
derivative_finite_diff = _shared.derivative_finite_diff
gradient_finite_diff = _shared.gradient_finite_diff
