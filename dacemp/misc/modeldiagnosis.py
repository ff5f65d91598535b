# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2023-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Diagnosis of fitted models and of the correlation parameter search."""
import numpy as np

from dacemp.core.likelihood import negative_log_likelihood
from dacemp.misc.dataframe import DataFrame, ftos


def diag(model, perf, S=None, Y=None):
    """Print a diagnosis of a fitted model.

    Parameters
    ----------
    model : DaceModel
    perf : Performance
        Record returned by :func:`dacemp.fit` with the model.
    S, Y : array_like, optional
        Training data, to print descriptive statistics.
    """
    md = modeldiagnosis_init(model, perf)
    model_diagnosis_disp(md, S, Y)


def modeldiagnosis_init(model, perf):
    """Collect the diagnosis of a model as a dictionary."""
    md = {"search": {}, "parameters": {}, "model": {}}

    md["search"] = {
        "method": perf.method,
        "cvg_reached": perf.converged,
        "n_evals": perf.nfev,
        "n_iterations": perf.nit,
        "n_rejected": perf.nrejected,
        "time": perf.time,
        "initial_val": float(perf.values[0]) if len(perf.values) > 0 else float("nan"),
        "final_val": float(perf.fun),
        "nll": negative_log_likelihood(perf.fun, model.m),
        "message": perf.message,
    }

    for i, t in enumerate(np.asarray(model.theta).reshape(-1)):
        md["parameters"][f"theta{i}"] = float(t)

    md["model"] = {
        "regression": model.regr.value,
        "correlation": model.corr.value,
        "m": model.m,
        "n": model.n,
        "q": model.q,
        "rcond": float(model.rcond),
    }
    for j, s2 in enumerate(np.asarray(model.sigma2).reshape(-1)):
        md["model"][f"sigma2_{j}"] = float(s2)
    return md


def model_diagnosis_disp(md, S=None, Y=None):
    print("Model diagnosis")
    print("----------------")
    print("  ***  Parameter search")
    pretty_print_dictionnary(md["search"])
    print("  ***  Parameters")
    pretty_print_dictionnary(md["parameters"])
    print("  ***  Model")
    pretty_print_dictionnary(md["model"])

    if S is None or Y is None:
        return
    S = np.asarray(S, dtype=float).reshape(len(S), -1)
    Y = np.asarray(Y, dtype=float).reshape(len(Y), -1)
    print("  ***  Data")
    print("   {:>0}: {:d}".format("count", Y.shape[0]))
    print("   ----")
    df_y = describe_array(Y, [f"y_{j}" for j in range(Y.shape[1])])
    df_s = describe_array(S, [f"s_{j}" for j in range(S.shape[1])])
    print(df_y.concat(df_s))


def compute_performance(model, xt, zt):
    """Prediction performance on a test set.

    Parameters
    ----------
    model : DaceModel
    xt : array_like, shape (mt, n)
        Test sites.
    zt : array_like, shape (mt, q) or (mt,)
        Responses at the test sites.

    Returns
    -------
    perf : dict
        Per response:
        - 'test_tss': total sum of squares of zt around its mean.
        - 'test_press': sum of squared prediction errors.
        - 'test_Q2': 1 - press / tss.
        - 'test_log10ratio': log10(press / tss).
    """
    zt = np.asarray(zt, dtype=float).reshape(np.shape(zt)[0], -1)
    y, _, _ = model.predict(xt)
    tss = np.sum((zt - np.mean(zt, axis=0)) ** 2, axis=0)
    press = np.sum((y - zt) ** 2, axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = press / tss
        return {
            "test_tss": tss,
            "test_press": press,
            "test_Q2": 1.0 - ratio,
            "test_log10ratio": np.log10(ratio),
        }


def perf(model, xt, zt):
    """Print the test-set performance of a model."""
    print("Prediction performances")
    print("-----------------------")
    pretty_print_dictionnary(compute_performance(model, xt, zt))


def describe_array(x, rownames):
    """Mean, standard deviation, min, max and range of each column of x."""
    x = np.asarray(x, dtype=float).reshape(np.shape(x)[0], -1)
    colnames = ["mean", "std", "min", "max", "delta"]
    data = np.empty((x.shape[1], len(colnames)))
    data[:, 0] = np.mean(x, axis=0)
    data[:, 1] = np.std(x, axis=0)
    data[:, 2] = np.min(x, axis=0)
    data[:, 3] = np.max(x, axis=0)
    data[:, 4] = data[:, 3] - data[:, 2]
    return DataFrame(data, colnames, rownames)


def pretty_print_dictionnary(d, fp=4):
    """Print a dictionary with formatted values.

    Parameters
    ----------
    d : dict
        The dictionary to be printed.
    fp : int, optional
        Number of decimal places for floating-point values, by default 4.
    """
    max_key_length = max(15, max(len(str(k)) for k in d.keys()) + 2)

    for k, v in d.items():
        if isinstance(v, np.ndarray):
            v = v.item() if v.size == 1 else v
        if isinstance(v, np.ndarray):
            print(f"{k:>{max_key_length}s}: " + " ".join(ftos(float(e), fp) for e in v))
        elif isinstance(v, float):
            print(f"{k:>{max_key_length}s}: {ftos(v, fp)}")
        else:
            print(f"{k:>{max_key_length}s}: {v}")
