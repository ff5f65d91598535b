# dacemp/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Collaborators of the kriging core: design generators, dataset merger,
test functions and diagnostics. Plotting helpers live in
:mod:`dacemp.misc.plotutils` (imported on demand, requires matplotlib).
"""

from . import dataframe
from . import designs
from . import dsmerge
from . import testfunctions
from . import modeldiagnosis
