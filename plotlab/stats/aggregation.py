"""Grouped estimators, computed the same way seaborn's barplot computes bar heights."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from plotlab.engine.profiling import numeric_columns

# String estimators seaborn passes straight to pandas' Series.agg
ESTIMATORS = ("mean", "sum", "median", "min", "max", "count", "std", "var")


def category_levels(values: pd.Series, order: Optional[Sequence[Any]] = None) -> List[Any]:
    """
    Levels of a categorical axis in the order seaborn draws them.

    An explicit `order` wins. Otherwise a pandas Categorical keeps its
    declared categories, numeric values are sorted and anything else keeps
    the order of first appearance.
    """
    if order is not None:
        return list(order)
    if isinstance(values.dtype, pd.CategoricalDtype):
        return list(values.cat.categories)
    levels = list(values.dropna().unique())
    if pd.api.types.is_numeric_dtype(values) and not pd.api.types.is_bool_dtype(values):
        levels = sorted(levels)
    return levels


def aggregate(
    df: pd.DataFrame,
    x: str,
    y: str,
    hue: Optional[str] = None,
    estimator: str = "mean",
    order: Optional[Sequence[Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Group by `x` (and `hue`) and apply `estimator` to `y`.

    Rows with a missing value in any of the involved columns are dropped
    first, as seaborn does before drawing. Rows come back in drawing order
    (see `category_levels`); with an explicit `order`, levels not listed are
    left out.

    Example:
        aggregate(sales, x="region", y="revenue", estimator="sum")
        -> [{"region": "north", "revenue": 230.0}, {"region": "south", ...}]
    """
    if estimator not in ESTIMATORS:
        raise ValueError(f"Unknown estimator: {estimator}. Use one of {', '.join(ESTIMATORS)}")

    keys = [x] if hue is None else [x, hue]
    for col in keys + [y]:
        if col not in df.columns:
            raise ValueError(f"Unknown column: {col}")
    if y not in numeric_columns(df):
        raise ValueError(f"Value column '{y}' must be numeric")

    sub = df[keys + [y]].dropna()
    if sub.empty:
        raise ValueError("No complete rows left to aggregate")

    grouped = (
        sub.groupby(keys, sort=False, observed=True)[y]
        .agg(estimator)
        .reset_index()
    )

    x_pos = {v: i for i, v in enumerate(category_levels(df[x], order))}
    grouped = grouped[grouped[x].isin(list(x_pos))]
    sort_keys = {"_x_pos": grouped[x].astype(object).map(x_pos)}
    if hue is not None:
        hue_pos = {v: i for i, v in enumerate(category_levels(df[hue]))}
        sort_keys["_hue_pos"] = grouped[hue].astype(object).map(hue_pos)
    grouped = (
        grouped.assign(**sort_keys)
        .sort_values(list(sort_keys), kind="stable")
        .drop(columns=list(sort_keys))
    )

    # to_json handles numpy scalars and NaN (std/var of a single row)
    return json.loads(grouped.to_json(orient="records"))
