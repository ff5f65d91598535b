"""
Repeated evaluations make every correlation matrix singular: merge
them with dsmerge before fitting.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import dacemp
from dacemp.misc.designs import gridsamp
from dacemp.misc.dsmerge import dsmerge
from dacemp.misc.testfunctions import rosenbrock


def main():
    box = [[-2.0, -1.0], [2.0, 3.0]]
    S = gridsamp(box, 5)
    # two repeated evaluations with measurement noise
    S = np.vstack((S, S[[3, 12]]))
    Y = rosenbrock(S)
    Y[-2:] += np.array([0.5, -0.5])

    try:
        dacemp.fit(S, Y, "poly2", "gauss", [1.0, 1.0], [1e-2, 1e-2], [1e1, 1e1])
    except dacemp.IllConditionedDesign as e:
        print(f"fit failed: {e}")

    mS, mY = dsmerge(S, Y, ds=1e-8)
    print(f"{S.shape[0]} sites merged into {mS.shape[0]}")

    model, perf = dacemp.fit(mS, mY, "poly2", "gauss", [1.0, 1.0], [1e-2, 1e-2], [1e1, 1e1])
    print(model)
    print(perf)


if __name__ == "__main__":
    main()
