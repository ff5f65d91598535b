import warnings

import numpy as np

import dacemp
from dacemp.core.likelihood import negative_log_likelihood
from dacemp.misc import modeldiagnosis
from dacemp.misc.dataframe import DataFrame, ftos
from dacemp.misc.designs import gridsamp
from dacemp.misc.testfunctions import twobumps


def fitted_1d():
    S = gridsamp([[-1.0], [1.0]], 15)
    Y = twobumps(S)
    return S, Y, dacemp.fit(S, Y, "poly1", "gauss", 1.0, 0.1, 50.0)


def test_compute_performance():
    S, Y, (model, perf) = fitted_1d()
    xt = gridsamp([[-1.0], [1.0]], 101)
    res = modeldiagnosis.compute_performance(model, xt, twobumps(xt))
    assert set(res) == {"test_tss", "test_press", "test_Q2", "test_log10ratio"}
    assert res["test_Q2"].shape == (1,)
    assert res["test_Q2"][0] > 0.8


def test_diag_prints_summary(capsys):
    S, Y, (model, perf) = fitted_1d()
    modeldiagnosis.diag(model, perf, S, Y)
    out = capsys.readouterr().out
    assert "Model diagnosis" in out
    assert "theta0" in out
    assert "y_0" in out and "s_0" in out


def test_ftos():
    assert ftos(float("inf")) == "+Inf"
    assert ftos(0.0) == "0.0"
    assert ftos(1.23456) == "1.235"
    assert ftos(0.05) == "0.0500"
    assert ftos(12345.0) == "1.234e4" or ftos(12345.0) == "1.235e4"


def test_dataframe():
    df = DataFrame([[1.0, 2.0]], ["a", "b"], ["r"])
    assert df["r", "b"] == 2.0
    both = df.concat(DataFrame([[3.0, 4.0]], ["a", "b"], ["s"]))
    assert both.data.shape == (2, 2)
    assert "s:" in repr(both)


def test_negative_log_likelihood_of_exact_trend():
    assert negative_log_likelihood(0.0, 3) == -np.inf
    assert negative_log_likelihood(np.inf, 3) == np.inf
    assert negative_log_likelihood(1.0, 3) == 0.0
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", dacemp.NonConvergence)
        model, perf = dacemp.fit([0.0, 1.0, 2.0], [0.0, 1.0, 4.0], "poly2", "gauss", 1.0, 0.01, 100.0)
    md = modeldiagnosis.modeldiagnosis_init(model, perf)
    assert md["search"]["nll"] < np.inf
