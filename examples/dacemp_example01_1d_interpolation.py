"""
Fit a kriging model to a 1-D function and plot the predictor with
coverage intervals built from the mean-squared error.

Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
"""

import numpy as np
import dacemp
from dacemp.misc import designs, testfunctions, modeldiagnosis
from dacemp.misc.plotutils import Figure


def generate_data():
    """
    Data generation.

    Returns
    -------
    tuple
        (xt, zt): target data
        (xi, zi): design sites and responses
    """
    box = [[-1.0], [1.0]]
    xt = designs.gridsamp(box, 200)
    zt = testfunctions.twobumps(xt)

    xi = designs.gridsamp(box, 7)
    zi = testfunctions.twobumps(xi)
    return xt, zt, xi, zi


def visualize_results(xt, zt, xi, zi, y, mse):
    fig = Figure(isinteractive=True)
    fig.plot(xt, zt, "k", linewidth=1, linestyle=(0, (5, 5)))
    fig.plotdata(xi, zi)
    fig.plotkriging(xt, y, mse)
    fig.xylabels("$x$", "$y$")
    fig.title("Kriging predictor, poly1 basis and gauss correlation")
    fig.show(grid=True, xlim=[-1.0, 1.0], legend=True)
    return fig


def main():
    xt, zt, xi, zi = generate_data()

    model, perf = dacemp.fit(xi, zi, "poly1", "gauss", theta0=1.0, lob=1e-2, upb=1e2)
    modeldiagnosis.diag(model, perf, xi, zi)
    modeldiagnosis.perf(model, xt, zt)

    y, dy, mse = model.predict(xt)
    print(f"\nmax |error| on the grid: {np.max(np.abs(y[:, 0] - zt)):.3e}")

    fig = visualize_results(xt, zt, xi, zi, y, mse)
    fig.close()


if __name__ == "__main__":
    main()
