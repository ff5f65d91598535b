## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""Plotting helpers for kriging predictions and search traces."""
import sys
import numpy as np
import scipy.stats as stats
import matplotlib.pyplot as plt
from matplotlib import interactive


class Figure:
    """Thin wrapper around a matplotlib figure with a grid of axes.

    ``self.ax`` is the current axes, selected with :meth:`subplot`.
    """

    def __init__(self, nrows=1, ncols=1, isinteractive=True, boxoff=True, **kargs):
        # interpreter mode: sys.ps1 exists, or python -i
        self.interpreter = hasattr(sys, "ps1") or bool(sys.flags.interactive)
        if isinteractive and self.interpreter:
            interactive(True)

        self.boxoff = boxoff
        self.fig = plt.figure(**kargs)
        self.nrows = nrows
        self.ncols = ncols
        self.axes = [
            self.fig.add_subplot(nrows, ncols, i + 1) for i in range(nrows * ncols)
        ]
        self.ax = self.axes[0]
        if self.boxoff:
            self.set_boxoff()

    def set_boxoff(self):
        self.ax.spines["right"].set_visible(False)
        self.ax.spines["top"].set_visible(False)
        self.ax.tick_params(direction="in")

    def subplot(self, i):
        self.ax = self.axes[i - 1]
        if self.boxoff:
            self.set_boxoff()

    def show(self, grid=None, legend=None, xlim=None):
        if grid:
            self.grid()
        if legend:
            self.ax.legend()
        if xlim is not None:
            self.ax.set_xlim(xlim)
        plt.show()

    def close(self):
        plt.close(self.fig)

    def plot(self, x, z, *args, **kargs):
        self.ax.plot(x, z, *args, **kargs)

    def plotdata(self, x, z, label="data"):
        self.ax.plot(x, z, "rs", markerfacecolor="none", markersize=6, label=label)

    def xylabels(self, sx="", sy=""):
        self.ax.set_xlabel(sx)
        self.ax.set_ylabel(sy)

    def title(self, s):
        self.ax.set_title(s)

    def grid(self, visible=True, which="major", linestyle=(0, (1, 5)), linewidth=0.5):
        self.ax.grid(visible, which, linestyle=linestyle, linewidth=linewidth)

    def plotkriging(
        self,
        x,
        y,
        mse,
        ci=(0.95, 0.99),
        mean_label="kriging predictor",
        fillcol=("#D8D8D8", "#BFBFBF"),
        mcol="#F2404C",
    ):
        """Plot a 1-D prediction with coverage intervals y ± delta sqrt(mse).

        The intervals are drawn from the widest to the narrowest.
        """
        x = np.asarray(x).flatten()
        y = np.asarray(y).flatten()
        sd = np.sqrt(np.maximum(np.asarray(mse).flatten(), 0.0))

        self.ax.plot(x, y, mcol, linewidth=2.0, label=mean_label)
        order = np.argsort(ci)[::-1]
        for k, i in enumerate(order):
            delta = stats.norm.ppf((1 + ci[i]) / 2)
            lower, upper = y - delta * sd, y + delta * sd
            self.ax.fill(
                np.hstack((x, x[::-1])),
                np.hstack((upper, lower[::-1])),
                color=fillcol[k % len(fillcol)],
                alpha=0.8,
                linewidth=0.5,
                label=f"CI {100 * ci[i]:g}%",
            )


def crosssections(model, box, x0, ind_dim=None, output=0, nt=100):
    """Predictions along the coordinate axes through the point x0.

    Parameters
    ----------
    model : DaceModel
    box : array_like, shape (2, n)
    x0 : array_like, shape (n,)
    ind_dim : list of int, optional
        Coordinates to plot, all by default.
    output : int
        Response column to plot.
    nt : int
        Number of points per cross section.

    Returns
    -------
    Figure
    """
    box = np.asarray(box, dtype=float)
    x0 = np.asarray(x0, dtype=float).reshape(-1)
    if ind_dim is None:
        ind_dim = list(range(x0.shape[0]))

    fig = Figure(len(ind_dim), 1)
    for k, d in enumerate(ind_dim):
        t = np.linspace(box[0, d], box[1, d], nt)
        xt = np.tile(x0, (nt, 1))
        xt[:, d] = t
        y, _, mse = model.predict(xt)
        fig.subplot(k + 1)
        fig.plotkriging(t, y[:, output], mse[:, output])
        fig.plot(x0[d] * np.array([1, 1]), fig.ax.get_ylim(), "k:")
        fig.grid()
        fig.ax.set_ylabel(f"y along x_{d + 1}")
    return fig


def plot_search(perf):
    """Objective values of a correlation parameter search.

    Improving steps are drawn as filled markers.
    """
    fig = Figure()
    values = np.asarray(perf.values, dtype=float)
    steps = np.asarray(perf.steps)
    k = np.arange(values.shape[0])
    finite = np.isfinite(values)
    good = finite & (steps >= 0)
    bad = finite & (steps < 0)
    fig.ax.semilogy(k[good], values[good], "ko", label="improving")
    fig.ax.semilogy(k[bad], values[bad], "o", markerfacecolor="none", color="0.5", label="not improving")
    fig.xylabels("evaluation", "objective")
    fig.title(f"{perf.method}: best {perf.fun:.3e} in {perf.nfev} evaluations")
    fig.grid()
    return fig
