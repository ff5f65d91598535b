import numpy as np
import pytest

from dacemp.core.errors import DimensionMismatch
from dacemp.misc.dsmerge import dsmerge

S = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 0.0], [1.0, 1e-3], [2.0, 2.0]])
Y = np.array([1.0, 2.0, 3.0, 4.0, 5.0])


def test_exact_duplicates():
    mS, mY = dsmerge(S, Y)
    assert mS.shape == (4, 2)
    assert np.allclose(mS[0], [0.0, 0.0])
    assert np.allclose(mY[:, 0], [2.0, 2.0, 4.0, 5.0])


def test_distance_and_norm():
    mS, mY = dsmerge(S, Y, ds=1e-2)
    assert mS.shape == (3, 2)
    assert np.allclose(mS[1], [1.0, 5e-4])
    assert np.allclose(mY[:, 0], [2.0, 3.0, 5.0])
    mS, _ = dsmerge(S, Y, ds=1e-2, norm=np.inf)
    assert mS.shape == (3, 2)


def test_modes_and_weights():
    mS, mY = dsmerge(S, Y, ds=1e-2, site_mode="center", response_mode="max")
    assert np.allclose(mS[1], [1.0, 0.0])
    assert np.allclose(mY[:, 0], [3.0, 4.0, 5.0])
    _, mY = dsmerge(S, Y, response_mode="sum")
    assert np.allclose(mY[:, 0], [4.0, 2.0, 4.0, 5.0])
    _, mY = dsmerge(S, Y, weights=[3.0, 1.0, 1.0, 1.0, 1.0])
    assert np.isclose(mY[0, 0], (3.0 * 1.0 + 3.0) / 4.0)


def test_errors():
    with pytest.raises(DimensionMismatch):
        dsmerge(S, Y[:3])
    with pytest.raises(DimensionMismatch):
        dsmerge(S, Y, weights=[1.0, 1.0])
    with pytest.raises(ValueError):
        dsmerge(S, Y, site_mode="mode")
    with pytest.raises(ValueError):
        dsmerge(S, Y, norm=3)
