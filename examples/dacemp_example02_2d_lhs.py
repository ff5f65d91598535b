"""
Kriging model of the Branin-Hoo function on a Latin hypercube design,
with the parameter search carried out by boxmin and by L-BFGS-B.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import dacemp
import dacemp.num as dnp
from dacemp.misc import designs, testfunctions, modeldiagnosis
from dacemp.misc.plotutils import crosssections, plot_search


def main():
    dnp.set_seed(0)
    box = np.array([[-5.0, 0.0], [10.0, 15.0]])

    xi = designs.maximinlhs(30, 2, box, max_iter=50)
    zi = testfunctions.braninhoo(xi)
    xt = designs.lhsamp(500, 2, box, seed=1)
    zt = testfunctions.braninhoo(xt)

    theta0 = [1.0, 1.0]
    lob, upb = [1e-2, 1e-2], [2e1, 2e1]
    for method in ("boxmin", "L-BFGS-B"):
        model, perf = dacemp.fit(
            xi, zi, "poly2", "gauss", theta0, lob, upb, method=method
        )
        print(f"\n=== {method} ===")
        print(perf)
        modeldiagnosis.perf(model, xt, zt)

    # gradient of the predictor at the best design site
    k = int(np.argmin(zi))
    y, dy, mse, d2y = model.predict(xi[k], return_hessian=True)
    print(f"\nAt the best site: y = {y[0, 0]:.4f}, |dy| = {np.linalg.norm(dy):.3e}")
    print(f"Hessian eigenvalues: {np.linalg.eigvalsh(d2y[0, 0])}")

    fig = crosssections(model, box, xi[k])
    fig.close()
    fig = plot_search(perf)
    fig.close()


if __name__ == "__main__":
    main()
