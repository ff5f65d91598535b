## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""
Design generators: Latin hypercube and grid samples.

Boxes are given as 2 x n arrays, box[0] holding the lower bounds and
box[1] the upper bounds. Random designs use the package generator
(see :func:`dacemp.num.set_seed`) unless a seed is given.
"""
import numpy as np
from scipy.stats import qmc
from scipy.spatial.distance import pdist

import dacemp.num as dnp
from dacemp.core.errors import DimensionMismatch


def mindist(sample):
    """
    Calculate the minimum distance (separation) between any pair of points in the sample.

    Parameters
    ----------
    sample : numpy.ndarray
        Array of points in the sample.

    Returns
    -------
    float
        Minimum distance between any pair of points in the sample.
    """
    return np.min(pdist(sample))


def maxdist(sample):
    """Maximum distance (diameter) between any pair of points in the sample."""
    return np.max(pdist(sample))


def _check_box(box, n):
    box = np.asarray(box, dtype=float)
    if box.ndim != 2 or box.shape[0] != 2 or box.shape[1] != n:
        raise DimensionMismatch(f"box should have shape (2, {n}), got {box.shape}")
    if np.any(box[1] < box[0]):
        raise ValueError("box upper bounds must not be smaller than lower bounds")
    return box


def scale(sample_standard, box):
    """
    Map a standard sample in [0, 1]^n to the given box.

    Parameters
    ----------
    sample_standard : numpy.ndarray, shape (m, n)
        Points of the standard sample.
    box : array_like, shape (2, n)
        Lower and upper bounds of the box.

    Returns
    -------
    numpy.ndarray
        Sample points mapped to the given box.
    """
    box = _check_box(box, sample_standard.shape[1])
    return box[0] + sample_standard * (box[1] - box[0])


def lhsamp(m, n, box=None, seed=None):
    """
    Latin hypercube sample of m points in dimension n.

    Each coordinate axis is split into m strata of equal width and each
    stratum holds exactly one point, placed uniformly at random within
    it.

    Parameters
    ----------
    m : int
        Number of points.
    n : int
        Dimension.
    box : array_like, shape (2, n), optional
        Box of the sample, [0, 1]^n by default.
    seed : int, optional
        Seed of a dedicated generator. The package generator is used
        when None.

    Returns
    -------
    numpy.ndarray, shape (m, n)
    """
    if m < 1 or n < 1:
        raise ValueError("m and n must be positive")
    sampler = qmc.LatinHypercube(d=n, seed=dnp.get_rng(seed))
    sample = sampler.random(m)
    if box is not None:
        sample = scale(sample, box)
    return sample


def maximinlhs(m, n, box=None, max_iter=1000, seed=None):
    """
    Maximin Latin hypercube sample: the best of max_iter Latin
    hypercube samples with respect to the minimum pairwise distance.

    Parameters
    ----------
    m : int
        Number of points.
    n : int
        Dimension.
    box : array_like, shape (2, n), optional
        Box of the sample, [0, 1]^n by default.
    max_iter : int, optional
        Number of candidate samples, default is 1000.
    seed : int, optional

    Returns
    -------
    numpy.ndarray, shape (m, n)
    """
    sampler = qmc.LatinHypercube(d=n, optimization=None, seed=dnp.get_rng(seed))

    maximindist = -1.0
    sample_maximin = None
    for i in range(max_iter):
        sample = sampler.random(m)
        d = mindist(sample) if m > 1 else 0.0
        if d > maximindist:
            maximindist = d
            sample_maximin = sample

    if box is not None:
        sample_maximin = scale(sample_maximin, box)
    return sample_maximin


def gridsamp(box, q):
    """
    Full factorial grid over a box.

    Parameters
    ----------
    box : array_like, shape (2, n)
        Lower and upper bounds of the box.
    q : int or array_like of int
        Number of levels, the same for every coordinate or one per
        coordinate. A coordinate with one level sits at the lower
        bound.

    Returns
    -------
    x : numpy.ndarray, shape (prod(q), n)
        Grid points, the first coordinate varying fastest.
    """
    box = np.atleast_2d(np.asarray(box, dtype=float))
    n = box.shape[1]
    box = _check_box(box, n)
    q = np.atleast_1d(np.asarray(q, dtype=int))
    if q.shape[0] == 1:
        q = np.repeat(q, n)
    if q.shape[0] != n:
        raise DimensionMismatch(f"q should have length 1 or {n}, got {q.shape[0]}")
    if np.any(q < 1):
        raise ValueError("The number of levels must be positive")

    levels = [
        np.linspace(box[0, i], box[1, i], q[i]) if q[i] > 1 else box[0, i : i + 1]
        for i in range(n)
    ]
    Xv = np.meshgrid(*levels, indexing="ij")
    N = int(np.prod(q))
    x = np.zeros((N, n))
    for i in range(n):
        x[:, i] = Xv[i].reshape(N, order="F")
    return x
