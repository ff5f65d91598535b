import numpy as np
import pytest

import dacemp.num as dnp
from dacemp.core.errors import DimensionMismatch
from dacemp.misc import designs


def test_lhsamp_one_point_per_stratum():
    x = designs.lhsamp(10, 3)
    assert x.shape == (10, 3)
    assert np.all((x >= 0.0) & (x <= 1.0))
    for j in range(3):
        assert np.array_equal(np.sort(np.floor(10 * x[:, j])), np.arange(10))


def test_lhsamp_box_and_seed():
    box = [[-5.0, 0.0], [10.0, 15.0]]
    x1 = designs.lhsamp(8, 2, box, seed=3)
    x2 = designs.lhsamp(8, 2, box, seed=3)
    assert np.array_equal(x1, x2)
    assert np.all(x1 >= np.array(box[0])) and np.all(x1 <= np.array(box[1]))


def test_lhsamp_uses_package_seed():
    dnp.set_seed(42)
    x1 = designs.lhsamp(5, 2)
    dnp.set_seed(42)
    x2 = designs.lhsamp(5, 2)
    assert np.array_equal(x1, x2)


def test_maximinlhs():
    x = designs.maximinlhs(12, 2, max_iter=20, seed=0)
    assert x.shape == (12, 2)
    for j in range(2):
        assert np.array_equal(np.sort(np.floor(12 * x[:, j])), np.arange(12))
    assert designs.mindist(x) > 0.0


def test_gridsamp_order():
    x = designs.gridsamp([[0.0, 0.0], [1.0, 2.0]], [3, 2])
    expected = np.array(
        [[0.0, 0.0], [0.5, 0.0], [1.0, 0.0], [0.0, 2.0], [0.5, 2.0], [1.0, 2.0]]
    )
    assert np.allclose(x, expected)


def test_gridsamp_scalar_levels():
    x = designs.gridsamp([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]], 3)
    assert x.shape == (27, 3)
    assert designs.mindist(x) == pytest.approx(0.5)


def test_bad_box():
    with pytest.raises(DimensionMismatch):
        designs.lhsamp(4, 2, box=[[0.0], [1.0]])
    with pytest.raises(DimensionMismatch):
        designs.gridsamp([[0.0, 0.0], [1.0, 1.0]], [2, 2, 2])
