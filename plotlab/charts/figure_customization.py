"""
seaborn draws onto ordinary matplotlib Axes, so everything matplotlib offers
(titles, scales, limits, reference lines, legend placement) applies after the
seaborn call. This chart draws one axes-level seaborn plot on an Axes created
with plt.subplots and then customizes it purely through matplotlib.
"""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Tuple

import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from pydantic import Field

from ._base import ChartContext, ChartMeta, FigureOptions, require_columns, require_numeric

META = ChartMeta(
    slug="figure-customization",
    title="seaborn on matplotlib Axes",
    summary="Draw a seaborn plot on a matplotlib Axes and customize it with "
            "the matplotlib API.",
    seaborn_api="seaborn.scatterplot / lineplot / histplot / boxplot",
    output_keys=["axes"],
    tags=["matplotlib", "customization"],
)

Scale = Literal["linear", "log", "symlog"]


class Params(FigureOptions):
    kind: Literal["scatter", "line", "hist", "box"] = "scatter"
    x: Optional[str] = None
    y: Optional[str] = None
    hue: Optional[str] = None

    # matplotlib-side customization
    xlabel: Optional[str] = None
    ylabel: Optional[str] = None
    xscale: Scale = "linear"
    yscale: Scale = "linear"
    xlim: Optional[Tuple[float, float]] = None
    ylim: Optional[Tuple[float, float]] = None
    xtick_rotation: float = Field(0.0, ge=-90, le=90)
    hline: Optional[float] = None
    vline: Optional[float] = None
    legend_loc: Optional[str] = None
    suptitle: Optional[str] = None
    width: float = Field(8.0, gt=0, le=40)
    height: float = Field(5.0, gt=0, le=40)


def _check_columns(ctx: ChartContext, params: Params) -> None:
    df = ctx.df
    require_columns(df, [params.x, params.y, params.hue])

    if params.kind in ("scatter", "line"):
        if params.x is None or params.y is None:
            raise ValueError(f"{params.kind} needs both 'x' and 'y'")
        require_numeric(df, [params.y])
        if params.kind == "scatter":
            require_numeric(df, [params.x])
    elif params.kind == "hist":
        if params.x is None and params.y is None:
            raise ValueError("hist needs 'x' or 'y'")
        require_numeric(df, [params.x or params.y])
    elif params.kind == "box":
        if params.y is None:
            raise ValueError("box needs a numeric 'y'")
        require_numeric(df, [params.y])

    for name, lim in (("xlim", params.xlim), ("ylim", params.ylim)):
        if lim is not None and lim[0] == lim[1]:
            raise ValueError(f"{name} bounds must differ")


def _draw(ctx: ChartContext, params: Params, ax: Axes) -> None:
    kwargs: Dict[str, Any] = {"data": ctx.df, "x": params.x, "y": params.y, "hue": params.hue, "ax": ax}
    if params.hue is not None and params.palette:
        kwargs["palette"] = params.palette

    if params.kind == "scatter":
        sns.scatterplot(**kwargs)
    elif params.kind == "line":
        sns.lineplot(seed=0, **kwargs)
    elif params.kind == "hist":
        sns.histplot(**kwargs)
    else:
        sns.boxplot(**kwargs)


def _customize(fig: Figure, ax: Axes, params: Params) -> None:
    if params.title:
        ax.set_title(params.title)
    if params.xlabel is not None:
        ax.set_xlabel(params.xlabel)
    if params.ylabel is not None:
        ax.set_ylabel(params.ylabel)

    ax.set_xscale(params.xscale)
    ax.set_yscale(params.yscale)
    if params.xlim is not None:
        ax.set_xlim(*params.xlim)
    if params.ylim is not None:
        ax.set_ylim(*params.ylim)

    if params.xtick_rotation:
        plt.setp(ax.get_xticklabels(), rotation=params.xtick_rotation, ha="right")

    if params.hline is not None:
        ax.axhline(params.hline, color="0.3", linestyle="--", linewidth=1)
    if params.vline is not None:
        ax.axvline(params.vline, color="0.3", linestyle="--", linewidth=1)

    if params.legend_loc and ax.get_legend() is not None:
        sns.move_legend(ax, params.legend_loc)

    if params.suptitle:
        fig.suptitle(params.suptitle)


def describe_axes(ax: Axes) -> Dict[str, Any]:
    """Read the customization back from the matplotlib objects."""
    return {
        "type": type(ax).__name__,
        "title": ax.get_title(),
        "xlabel": ax.get_xlabel(),
        "ylabel": ax.get_ylabel(),
        "xlim": [float(v) for v in ax.get_xlim()],
        "ylim": [float(v) for v in ax.get_ylim()],
        "xscale": ax.get_xscale(),
        "yscale": ax.get_yscale(),
        "n_lines": len(ax.lines),
        "n_collections": len(ax.collections),
        "has_legend": ax.get_legend() is not None,
    }


def run(ctx: ChartContext, params: Params) -> Tuple[Figure, Dict[str, Any]]:
    _check_columns(ctx, params)

    fig, ax = plt.subplots(figsize=(params.width, params.height))
    _draw(ctx, params, ax)
    _customize(fig, ax, params)

    return fig, {"axes": describe_axes(ax), "kind": params.kind}
