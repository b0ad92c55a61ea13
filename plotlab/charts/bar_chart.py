from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.figure import Figure
from pydantic import Field

from plotlab.stats.aggregation import aggregate

from ._base import ChartContext, ChartMeta, FigureOptions, require_columns

META = ChartMeta(
    slug="bar-chart",
    title="Bar Chart with In-Plot Aggregation",
    summary="Group raw rows by a category and let the plotting call apply the "
            "estimator (mean, sum, ...) that sets each bar's height.",
    seaborn_api="seaborn.barplot",
    output_keys=["aggregated", "estimator"],
    tags=["aggregation", "comparison"],
)

Estimator = Literal["mean", "sum", "median", "min", "max", "count", "std", "var"]

# Error bars around a total or a count have no sampling interpretation
_NO_ERRORBAR_BY_DEFAULT = {"sum", "count"}


class Params(FigureOptions):
    x: str
    y: str
    hue: Optional[str] = None
    estimator: Estimator = "mean"
    errorbar: Optional[Literal["none", "ci", "sd", "se", "pi"]] = None
    orient: Literal["v", "h"] = "v"
    order: Optional[List[Union[str, int, float]]] = None
    show_values: bool = False
    width: float = Field(8.0, gt=0, le=40)
    height: float = Field(5.0, gt=0, le=40)


def _errorbar_arg(params: Params) -> Optional[str]:
    if params.errorbar is None:
        return None if params.estimator in _NO_ERRORBAR_BY_DEFAULT else "ci"
    if params.errorbar == "none":
        return None
    return params.errorbar


def run(ctx: ChartContext, params: Params) -> Tuple[Figure, Dict[str, Any]]:
    """Draw sns.barplot with the requested estimator."""
    df = ctx.df
    require_columns(df, [params.x, params.y, params.hue])

    if params.order is not None:
        present = set(df[params.x].dropna().unique().tolist())
        unknown = [v for v in params.order if v not in present]
        if unknown:
            raise ValueError(f"order contains values not in '{params.x}': {unknown}")

    # Validates the value column and estimator before anything is drawn
    aggregated = aggregate(
        df, params.x, params.y, hue=params.hue, estimator=params.estimator, order=params.order
    )

    errorbar = _errorbar_arg(params)

    kwargs: Dict[str, Any] = {}
    if params.hue is not None and params.palette:
        kwargs["palette"] = params.palette

    if params.orient == "h":
        x, y = params.y, params.x
    else:
        x, y = params.x, params.y

    fig, ax = plt.subplots(figsize=(params.width, params.height))
    sns.barplot(
        data=df,
        x=x,
        y=y,
        hue=params.hue,
        estimator=params.estimator,
        errorbar=errorbar,
        order=params.order,
        orient=params.orient,
        seed=0,
        ax=ax,
        **kwargs,
    )

    if params.show_values:
        for container in ax.containers:
            ax.bar_label(container, fmt="%.2f", padding=2, fontsize="small")

    value_label = f"{params.estimator}({params.y})"
    if params.orient == "h":
        ax.set_xlabel(value_label)
    else:
        ax.set_ylabel(value_label)
    if params.title:
        ax.set_title(params.title)

    outputs = {
        "aggregated": aggregated,
        "estimator": params.estimator,
        "errorbar": errorbar,
        "n_bars": len(aggregated),
    }
    return fig, outputs
