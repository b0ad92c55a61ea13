from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.figure import Figure
from pydantic import Field

from plotlab.stats.correlation import correlation_matrix, matrix_to_dict, strongest_pairs

from ._base import ChartContext, ChartMeta, FigureOptions

META = ChartMeta(
    slug="correlation-heatmap",
    title="Correlation Heatmap",
    summary="Correlate the numeric columns and colour-encode the matrix, "
            "annotating each cell with its coefficient.",
    seaborn_api="seaborn.heatmap",
    output_keys=["matrix", "method", "n", "variables", "strongest_pairs"],
    tags=["relationship", "correlation"],
)


class Params(FigureOptions):
    columns: Optional[List[str]] = None
    method: Literal["pearson", "spearman", "kendall"] = "pearson"
    annot: bool = True
    fmt: str = ".2f"
    cmap: str = "coolwarm"
    mask_upper: bool = False
    square: bool = True
    linewidths: float = Field(0.5, ge=0, le=5)
    top_pairs: int = Field(3, ge=0, le=50)
    width: Optional[float] = Field(None, gt=0, le=40)
    height: Optional[float] = Field(None, gt=0, le=40)


def _check_style_args(params: Params) -> None:
    if params.cmap not in matplotlib.colormaps:
        raise ValueError(f"Unknown colormap: {params.cmap}")
    try:
        format(0.5, params.fmt)
    except ValueError:
        raise ValueError(f"Invalid number format: {params.fmt!r}")


def run(ctx: ChartContext, params: Params) -> Tuple[Figure, Dict[str, Any]]:
    """df.corr() rendered with sns.heatmap."""
    _check_style_args(params)
    corr, n = correlation_matrix(ctx.df, params.columns, params.method)

    size = len(corr.columns)
    # Scale with the number of variables so annotations stay legible
    default_side = max(4.0, 0.9 * size + 2.0)
    figsize = (params.width or default_side + 1.0, params.height or default_side)

    mask = np.triu(np.ones_like(corr, dtype=bool), k=1) if params.mask_upper else None

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(
        corr,
        mask=mask,
        annot=params.annot,
        fmt=params.fmt,
        cmap=params.cmap,
        vmin=-1.0,
        vmax=1.0,
        center=0.0,
        square=params.square,
        linewidths=params.linewidths,
        cbar_kws={"label": f"{params.method} correlation"},
        ax=ax,
    )
    ax.set_title(params.title or f"{params.method.title()} correlation (n={n})")

    outputs = {
        "matrix": matrix_to_dict(corr),
        "method": params.method,
        "n": n,
        "variables": [str(c) for c in corr.columns],
        "strongest_pairs": strongest_pairs(corr, params.top_pairs),
    }
    return fig, outputs
