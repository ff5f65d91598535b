import numpy as np
import pytest

import dacemp.num as dnp
from dacemp.regression import Regression

X = np.array([[0.5, -1.0], [2.0, 0.3], [-0.7, 1.1]])


def test_sizes():
    assert Regression.POLY0.size(3) == 1
    assert Regression.POLY1.size(3) == 4
    assert Regression.POLY2.size(3) == 10
    for regr in Regression:
        assert regr(X).shape == (3, regr.size(2))


def test_poly0_poly1_values():
    assert np.array_equal(Regression.POLY0(X), np.ones((3, 1)))
    assert np.array_equal(Regression.POLY1(X), np.hstack((np.ones((3, 1)), X)))


def test_poly2_column_order():
    x1, x2 = X[:, 0], X[:, 1]
    expected = np.column_stack((np.ones(3), x1, x2, x1 * x1, x1 * x2, x2 * x2))
    assert np.allclose(Regression.POLY2(X), expected)


@pytest.mark.parametrize("regr", list(Regression))
def test_jacobian_finite_differences(regr):
    F, df = regr(X, order=1)
    assert df.shape == (3, 2, regr.size(2))
    for k in range(3):
        g = dnp.gradient_finite_diff(lambda x: regr(x.reshape(1, -1))[0], X[k])
        # g[p, i] = dF_p / dx_i
        assert np.allclose(df[k], g.T, atol=1e-8)


@pytest.mark.parametrize("regr", list(Regression))
def test_hessian_finite_differences(regr):
    F, df, d2f = regr(X, order=2)
    assert d2f.shape == (3, 2, 2, regr.size(2))
    for k in range(3):
        H = dnp.gradient_finite_diff(lambda x: regr(x.reshape(1, -1), order=1)[1][0], X[k])
        # H[i, p, j] = d2F_p / dx_i dx_j
        assert np.allclose(d2f[k], H.transpose(0, 2, 1), atol=1e-6)


def test_aliases():
    assert Regression.parse("regpoly2") is Regression.POLY2
    assert Regression.parse("linear") is Regression.POLY1
    assert Regression.parse("Constant") is Regression.POLY0
    with pytest.raises(ValueError):
        Regression.parse("poly3")
