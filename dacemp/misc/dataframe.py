## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""Minimal labelled table used to print diagnostics."""
import numpy as np


def ftos(x, fp=3):
    """Format a float with fp significant decimals, switching to
    scientific notation outside [0.01, 1000)."""
    if x == float("inf"):
        return "+Inf"
    elif x == float("-inf"):
        return "-Inf"
    elif x != x:
        return "NaN"
    abs_x = abs(x)
    if x == 0:
        return "0.0"
    elif 0.1 <= abs_x < 1000:
        return f"{x:.{fp}f}"
    elif 0.01 <= abs_x < 0.1:
        return f"{x:.{fp + 1}f}"
    exponent = int(np.floor(np.log10(abs_x)))
    coeff = x / 10**exponent
    return f"{coeff:.{fp}f}e{exponent}"


class DataFrame:
    """2-D array with row and column names."""

    def __init__(self, data, colnames, rownames):
        self.data = np.atleast_2d(np.array(data, dtype=float))
        self.colnames = list(colnames)
        self.rownames = list(rownames)
        if self.data.shape != (len(self.rownames), len(self.colnames)):
            raise ValueError("data shape does not match row and column names")

    def __getitem__(self, key):
        row_key, col_key = key
        return self.data[self.rownames.index(row_key), self.colnames.index(col_key)]

    def __repr__(self):
        rows = [[""] + self.colnames] + [
            [self.rownames[i] + ":"] + [ftos(v) for v in self.data[i]]
            for i in range(self.data.shape[0])
        ]
        widths = [max(8, max(len(r[j]) for r in rows)) for j in range(len(rows[0]))]
        return "\n".join(
            " ".join(r[j].rjust(widths[j]) for j in range(len(r))) for r in rows
        )

    def concat(self, other):
        """Stack the rows of other below the rows of self."""
        if self.colnames != other.colnames:
            raise ValueError("DataFrames must have the same column names to concatenate")
        return DataFrame(
            np.vstack([self.data, other.data]),
            self.colnames,
            self.rownames + other.rownames,
        )
