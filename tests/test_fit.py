import dataclasses
import unittest
import warnings

import numpy as np
import pytest

import dacemp
from dacemp.core.errors import DimensionMismatch, IllConditionedDesign, NonConvergence
from dacemp.misc.designs import gridsamp


def branin_like(x):
    x = np.atleast_2d(x)
    return np.sin(3.0 * x[:, 0]) + np.cos(2.0 * x[:, 1]) + 0.5 * x[:, 0] * x[:, 1]


class TestQuadraticScenario(unittest.TestCase):
    def setUp(self):
        self.S = np.array([[0.0], [1.0], [2.0]])
        self.Y = np.array([[0.0], [1.0], [4.0]])

    def test_fit_converges_and_interpolates(self):
        model, perf = dacemp.fit(self.S, self.Y, "poly2", "gauss", 1.0, 0.01, 100.0)
        self.assertTrue(perf.converged)
        self.assertTrue(0.01 <= model.theta[0] <= 100.0)
        y, dy, mse = dacemp.predict(model, 1.0)
        self.assertEqual(y.shape, (1, 1))
        self.assertAlmostEqual(y[0, 0], 1.0, places=8)
        self.assertAlmostEqual(mse[0, 0], 0.0, places=8)

    def test_one_dimensional_inputs(self):
        model, _ = dacemp.fit([0.0, 1.0, 2.0], [0.0, 1.0, 4.0], "poly2", "gauss", 1.0, 0.01, 100.0)
        self.assertEqual((model.m, model.n, model.q), (3, 1, 1))

    def test_duplicate_sites(self):
        S = np.array([[0.0], [1.0], [1.0], [2.0]])
        Y = np.array([0.0, 1.0, 1.0, 4.0])
        with self.assertRaises(IllConditionedDesign):
            dacemp.fit(S, Y, "poly2", "gauss", 1.0, 0.01, 100.0)

    def test_rows_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            dacemp.fit(self.S, self.Y[:2], "poly2", "gauss", 1.0, 0.01, 100.0)

    def test_bounds_length_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            dacemp.fit(self.S, self.Y, "poly2", "gauss", 1.0, [0.01, 0.01], [100.0, 100.0])


def test_too_many_basis_functions():
    S = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    Y = np.arange(4.0)
    with pytest.raises(DimensionMismatch):
        dacemp.fit(S, Y, "poly2", "gauss", 1.0, 0.1, 10.0)


def test_invalid_bounds():
    S = np.linspace(0.0, 1.0, 5)
    Y = S**2
    with pytest.raises(ValueError):
        dacemp.fit(S, Y, "poly0", "gauss", 1.0, 10.0, 1.0)
    with pytest.raises(ValueError):
        dacemp.fit(S, Y, "poly0", "gauss", 1.0, 0.0, 1.0)
    with pytest.raises(ValueError):
        dacemp.fit(S, Y, "poly0", "gauss", -1.0)


def test_unknown_names():
    S = np.linspace(0.0, 1.0, 5)
    with pytest.raises(ValueError):
        dacemp.fit(S, S, "poly0", "unknown")
    with pytest.raises(ValueError):
        dacemp.fit(S, S, "poly0", "gauss", 1.0, 0.1, 10.0, method="nelder-mead")


def test_nearly_coincident_sites_reject_every_candidate():
    S = np.array([0.0, 1e-9, 1.0, 2.0])
    Y = np.array([0.0, 0.0, 1.0, 4.0])
    with pytest.raises(IllConditionedDesign):
        dacemp.fit(S, Y, "poly0", "gauss", 0.05, 0.01, 0.1)


def test_deterministic_refit():
    S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
    Y = branin_like(S)
    m1, p1 = dacemp.fit(S, Y, "poly1", "gauss", [1.0, 1.0], [0.1, 0.1], [20.0, 20.0])
    m2, p2 = dacemp.fit(S, Y, "poly1", "gauss", [1.0, 1.0], [0.1, 0.1], [20.0, 20.0])
    assert np.array_equal(m1.theta, m2.theta)
    assert np.array_equal(m1.beta, m2.beta)
    assert np.array_equal(p1.values, p2.values)


def test_performance_record():
    S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
    Y = branin_like(S)
    lob, upb = np.array([0.1, 0.1]), np.array([20.0, 20.0])
    model, perf = dacemp.fit(S, Y, "poly1", "gauss", [1.0, 1.0], lob, upb)
    assert perf.method == "boxmin"
    assert perf.thetas.shape == (perf.nfev, 2)
    assert perf.values.shape == (perf.nfev,)
    assert perf.steps.shape == (perf.nfev,)
    assert perf.steps[0] in (1, -1)
    assert perf.nfactorizations == perf.nfev
    assert 0 <= perf.nrejected <= perf.nfactorizations
    assert np.all(perf.thetas >= lob) and np.all(perf.thetas <= upb)
    assert perf.fun == np.min(perf.values)
    assert len(perf.history) == perf.nfev
    i = int(np.argmin(perf.values))
    assert np.array_equal(perf.thetas[i], model.theta)
    assert "boxmin" in str(perf)


def test_fixed_theta_without_bounds():
    S = np.linspace(0.0, 1.0, 6)
    Y = np.sin(4.0 * S)
    model, perf = dacemp.fit(S, Y, "poly1", "cubic", 1.0)
    assert perf.method == "fixed"
    assert perf.nfev == 1
    assert perf.converged
    assert np.array_equal(model.theta, [1.0])


def test_fixed_coordinate():
    S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
    Y = branin_like(S)
    model, perf = dacemp.fit(S, Y, "poly0", "gauss", [1.0, 2.0], [0.1, 2.0], [20.0, 2.0])
    assert np.all(perf.thetas[:, 1] == 2.0)
    assert model.theta[1] == 2.0


def test_nonconvergence_warning():
    S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
    Y = branin_like(S)
    with pytest.warns(NonConvergence):
        model, perf = dacemp.fit(
            S, Y, "poly1", "gauss", [1.0, 1.0], [0.1, 0.1], [20.0, 20.0], max_evals=2
        )
    assert not perf.converged
    assert perf.nfev == 2
    y, _, _ = model.predict(S)
    assert np.allclose(y[:, 0], Y, atol=1e-6)


@pytest.mark.parametrize("method", ["L-BFGS-B", "SLSQP"])
def test_scipy_methods(method):
    S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
    Y = branin_like(S)
    lob, upb = np.array([0.1, 0.1]), np.array([20.0, 20.0])
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergence)
        model, perf = dacemp.fit(S, Y, "poly1", "gauss", [1.0, 1.0], lob, upb, method=method)
    assert perf.method == method
    assert np.all(model.theta >= lob) and np.all(model.theta <= upb)
    assert perf.steps[0] == 1
    assert np.all(perf.steps[1:] == 0)
    assert perf.fun <= perf.values[0]


def test_expg_power_is_searched():
    S = np.linspace(0.0, 1.0, 8)
    Y = np.exp(S) * np.sin(5.0 * S)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergence)
        model, perf = dacemp.fit(S, Y, "poly0", "expg", [1.0, 1.5], [0.1, 0.5], [10.0, 2.0])
    assert model.theta.shape == (2,)
    assert 0.5 <= model.theta[1] <= 2.0
    with pytest.raises(ValueError):
        dacemp.fit(S, Y, "poly0", "expg", [1.0, 1.5], [0.1, 0.5], [10.0, 3.0])


def test_model_is_immutable():
    S = np.linspace(0.0, 1.0, 6)
    model, _ = dacemp.fit(S, S**2, "poly1", "gauss", 1.0)
    with pytest.raises(ValueError):
        model.beta[0, 0] = 1.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        model.theta = np.array([2.0])
    assert "gauss" in str(model)


def test_multiple_outputs():
    S = gridsamp([[0.0, 0.0], [1.0, 1.0]], 4)
    Y = np.column_stack((branin_like(S), 10.0 * S[:, 0] - S[:, 1] ** 2))
    model, perf = dacemp.fit(S, Y, "poly1", "gauss", [1.0, 1.0], [0.1, 0.1], [20.0, 20.0])
    assert model.q == 2
    assert model.beta.shape == (3, 2)
    assert model.sigma2.shape == (2,)


@pytest.mark.parametrize("method", ["boxmin", "L-BFGS-B", "SLSQP"])
def test_rejected_start_point_is_recovered(method):
    # the two close sites make small theta values inadmissible
    S = np.array([0.0, 1e-4, 0.5, 1.0])
    Y = np.sin(3.0 * S)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergence)
        model, perf = dacemp.fit(S, Y, "poly0", "gauss", 0.05, 0.01, 1e4, method=method)
    assert np.isinf(perf.values[0])
    assert perf.steps[0] == -1
    assert np.any(np.abs(perf.steps) == 4)
    assert perf.nrejected < perf.nfactorizations
    assert 0.01 <= model.theta[0] <= 1e4
    assert np.isfinite(perf.fun)


@pytest.mark.parametrize("method", ["boxmin", "L-BFGS-B"])
def test_spent_time_budget_returns_start_model(method):
    S = np.linspace(0.0, 1.0, 8)
    Y = np.sin(4.0 * S)
    with pytest.warns(NonConvergence):
        model, perf = dacemp.fit(
            S, Y, "poly1", "gauss", 10.0, 0.1, 100.0, method=method, max_time=0.0
        )
    assert perf.nfev == 1
    assert not perf.converged
    assert model.theta[0] == 10.0
    y, _, _ = model.predict(S)
    assert np.allclose(y[:, 0], Y, atol=1e-6)


def test_evaluation_budget_must_be_positive():
    S = np.linspace(0.0, 1.0, 8)
    Y = np.sin(4.0 * S)
    with pytest.raises(ValueError):
        dacemp.fit(S, Y, "poly1", "gauss", 10.0, 0.1, 100.0, max_evals=0)
    with pytest.warns(NonConvergence):
        _, perf = dacemp.fit(S, Y, "poly1", "gauss", 10.0, 0.1, 100.0, max_evals=1)
    assert perf.nfev == 1
