import dataclasses
import logging
import unittest

import numpy as np
import pytest

import dacemp
import dacemp.num as dnp
from dacemp.core import predictor
from dacemp.core.errors import DimensionMismatch
from dacemp.misc.designs import gridsamp


def response(x):
    x = np.atleast_2d(x)
    return np.column_stack(
        (
            np.sin(3.0 * x[:, 0]) + np.cos(2.0 * x[:, 1]),
            x[:, 0] ** 2 - 0.5 * x[:, 1],
        )
    )


class TestPredictor(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
        cls.Y = response(cls.S)
        # fixed parameters keep the correlation matrix well conditioned
        cls.model, _ = dacemp.fit(cls.S, cls.Y, "poly1", "gauss", [2.0, 1.5])
        cls.xt = np.array([[0.15, 0.4], [0.72, 0.05], [0.5, 0.9]])

    def test_shapes(self):
        y, dy, mse, d2y, dmse = self.model.predict(
            self.xt, return_hessian=True, return_mse_gradient=True
        )
        self.assertEqual(y.shape, (3, 2))
        self.assertEqual(dy.shape, (3, 2, 2))
        self.assertEqual(mse.shape, (3, 2))
        self.assertEqual(d2y.shape, (3, 2, 2, 2))
        self.assertEqual(dmse.shape, (3, 2, 2))

    def test_interpolation_at_design_sites(self):
        y, _, mse = self.model.predict(self.S)
        self.assertTrue(np.allclose(y, self.Y, atol=1e-8))
        self.assertTrue(np.all(mse <= 1e-8 * self.model.sigma2))

    def test_mse_nonnegative_far_away(self):
        x = np.array([[10.0, 10.0], [-50.0, 3.0], [0.5, 1e3]])
        _, _, mse = self.model.predict(x)
        self.assertTrue(np.all(mse >= 0.0))
        self.assertTrue(np.all(mse > 0.5 * self.model.sigma2))

    def test_batch_equals_single_points(self):
        y, dy, mse = self.model.predict(self.xt)
        for k in range(self.xt.shape[0]):
            yk, dyk, msek = self.model.predict(self.xt[k])
            self.assertTrue(np.allclose(yk[0], y[k]))
            self.assertTrue(np.allclose(dyk[0], dy[k]))
            self.assertTrue(np.allclose(msek[0], mse[k]))

    def test_gradient_finite_differences(self):
        _, dy, _ = self.model.predict(self.xt)
        for k in range(self.xt.shape[0]):
            g = dnp.gradient_finite_diff(lambda x: self.model.predict(x)[0][0], self.xt[k])
            self.assertTrue(np.allclose(dy[k], g, rtol=1e-5, atol=1e-7))

    def test_hessian_finite_differences(self):
        _, _, _, d2y = self.model.predict(self.xt, return_hessian=True)
        for k in range(self.xt.shape[0]):
            H = dnp.gradient_finite_diff(lambda x: self.model.predict(x)[1][0], self.xt[k])
            self.assertTrue(np.allclose(d2y[k], H, rtol=1e-4, atol=1e-6))

    def test_mse_gradient_finite_differences(self):
        _, _, _, dmse = self.model.predict(self.xt, return_mse_gradient=True)
        for k in range(self.xt.shape[0]):
            g = dnp.gradient_finite_diff(lambda x: self.model.predict(x)[2][0], self.xt[k])
            self.assertTrue(np.allclose(dmse[k], g, rtol=1e-4, atol=1e-9))

    def test_full_covariance(self):
        _, _, mse = self.model.predict(self.xt)
        _, _, cov = self.model.predict(self.xt, full_covariance=True)
        self.assertEqual(cov.shape, (3, 3, 2))
        for j in range(2):
            self.assertTrue(np.allclose(np.diag(cov[:, :, j]), mse[:, j]))
            self.assertTrue(np.allclose(cov[:, :, j], cov[:, :, j].T))

    def test_wrong_dimension(self):
        with self.assertRaises(DimensionMismatch):
            self.model.predict([0.5, 0.5, 0.5])
        with self.assertRaises(DimensionMismatch):
            self.model.predict(0.5)


def test_query_of_dimension_two_on_one_dimensional_model():
    model, _ = dacemp.fit([0.0, 1.0, 2.0], [0.0, 1.0, 4.0], "poly2", "gauss", 1.0, 0.01, 100.0)
    with pytest.raises(DimensionMismatch):
        dacemp.predict(model, np.array([[1.0, 2.0]]))
    y, dy, mse = dacemp.predict(model, 0.5)
    assert y.shape == (1, 1) and dy.shape == (1, 1, 1)
    y, _, _ = dacemp.predict(model, [[0.5], [1.5]])
    assert np.allclose(y[:, 0], [0.25, 2.25])


def test_vector_query_on_one_dimensional_model():
    model, _ = dacemp.fit([0.0, 1.0, 2.0], [0.0, 1.0, 4.0], "poly2", "gauss", 1.0, 0.01, 100.0)
    x = np.array([0.5, 1.5, 1.0])
    y, dy, mse = dacemp.predict(model, x)
    assert y.shape == (3, 1) and dy.shape == (3, 1, 1)
    assert np.allclose(y[:, 0], x**2)
    y2, _, mse2 = dacemp.predict(model, x[:, None])
    assert np.array_equal(y, y2) and np.array_equal(mse, mse2)


def test_negative_mse_is_clipped_and_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="dacemp")
    mse = predictor._clip_mse(np.array([[-1e-17], [2.0]]))
    assert np.array_equal(mse, [[0.0], [2.0]])
    assert "NumericalUnderflow" in caplog.text


def test_negative_mse_is_clipped_through_predict(caplog):
    S = np.array([0.0, 1.0, 2.0, 3.0])
    model, _ = dacemp.fit(S, np.cos(S), "poly0", "gauss", 10.0)
    # a factor twice too small makes |C^-1 r|^2 close to 4 at the design sites
    broken = dataclasses.replace(model, C=0.5 * model.C)
    caplog.set_level(logging.DEBUG, logger="dacemp")
    _, _, mse = broken.predict(S)
    assert np.all(mse == 0.0)
    assert "NumericalUnderflow" in caplog.text
    _, _, cov = broken.predict(S, full_covariance=True)
    assert np.all(np.diagonal(cov[:, :, 0]) == 0.0)
