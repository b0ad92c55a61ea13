"""Correlation matrices for heatmaps."""

from __future__ import annotations

from itertools import combinations
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from plotlab.engine.profiling import numeric_columns

CORRELATION_METHODS = ("pearson", "spearman", "kendall")

_SCIPY_TESTS = {
    "pearson": stats.pearsonr,
    "spearman": stats.spearmanr,
    "kendall": stats.kendalltau,
}


def _select_numeric(df: pd.DataFrame, columns: Optional[List[str]]) -> pd.DataFrame:
    """
    Pick the columns to correlate and drop incomplete rows.
    All numeric columns are used when `columns` is empty.
    """
    if columns:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ValueError(f"Unknown column(s): {', '.join(map(str, missing))}")
        non_numeric = [c for c in columns if c not in numeric_columns(df)]
        if non_numeric:
            raise ValueError(f"Column(s) are not numeric: {', '.join(map(str, non_numeric))}")
        cols = list(dict.fromkeys(columns))
    else:
        cols = numeric_columns(df)

    if len(cols) < 2:
        raise ValueError("Need at least 2 numeric columns for a correlation matrix")

    sub = df[cols].dropna()
    if len(sub) < 3:
        raise ValueError("Need at least 3 observations for correlation matrix")
    return sub


def correlation_matrix(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    method: str = "pearson",
) -> Tuple[pd.DataFrame, int]:
    """
    Calculate the correlation matrix the heatmap draws.

    Returns the square matrix and the number of complete rows used.
    """
    if method not in CORRELATION_METHODS:
        raise ValueError(f"Unknown correlation method: {method}")

    sub = _select_numeric(df, columns)
    return sub.corr(method=method), int(len(sub))


def correlation_pvalues(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    method: str = "pearson",
) -> pd.DataFrame:
    """Two-sided p-values for every pair, same shape as correlation_matrix()."""
    if method not in CORRELATION_METHODS:
        raise ValueError(f"Unknown correlation method: {method}")

    sub = _select_numeric(df, columns)
    cols = list(sub.columns)
    test = _SCIPY_TESTS[method]

    pvals = pd.DataFrame(np.zeros((len(cols), len(cols))), index=cols, columns=cols)
    for a, b in combinations(cols, 2):
        _, p = test(sub[a].to_numpy(), sub[b].to_numpy())
        pvals.loc[a, b] = pvals.loc[b, a] = float(p)
    return pvals


def strongest_pairs(matrix: pd.DataFrame, top: int = 3) -> List[Dict[str, Any]]:
    """Off-diagonal pairs ordered by absolute correlation, strongest first."""
    pairs = []
    for a, b in combinations(matrix.columns, 2):
        r = matrix.loc[a, b]
        if pd.isna(r):
            continue
        pairs.append({"x": str(a), "y": str(b), "r": float(r)})

    pairs.sort(key=lambda p: abs(p["r"]), reverse=True)
    return pairs[:top]


def matrix_to_dict(matrix: pd.DataFrame) -> Dict[str, Dict[str, Optional[float]]]:
    """Nested {column: {column: value}} with NaN as None (constant columns)."""
    return {
        str(col): {
            str(idx): (None if pd.isna(v) else float(v))
            for idx, v in matrix[col].items()
        }
        for col in matrix.columns
    }
