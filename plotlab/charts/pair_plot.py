from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple

import seaborn as sns
from matplotlib.figure import Figure
from pydantic import Field

from plotlab.config import settings
from plotlab.engine.profiling import numeric_columns

from ._base import ChartContext, ChartMeta, FigureOptions, require_columns, require_numeric

META = ChartMeta(
    slug="pair-plot",
    title="Pair Plot",
    summary="Scatter every numeric column against every other, with each "
            "column's distribution on the diagonal.",
    seaborn_api="seaborn.pairplot",
    output_keys=["variables", "hue", "grid_shape"],
    tags=["eda", "relationship", "distribution"],
)


class Params(FigureOptions):
    vars: Optional[List[str]] = None
    hue: Optional[str] = None
    kind: Literal["scatter", "kde", "hist", "reg"] = "scatter"
    diag_kind: Literal["auto", "hist", "kde"] = "auto"
    corner: bool = False
    dropna: bool = False
    facet_height: float = Field(2.5, gt=0, le=6)
    aspect: float = Field(1.0, gt=0, le=4)


def _resolve_vars(ctx: ChartContext, params: Params) -> List[str]:
    df = ctx.df
    require_columns(df, [params.hue])

    if params.vars:
        require_columns(df, params.vars)
        require_numeric(df, params.vars)
        variables = list(dict.fromkeys(params.vars))
    else:
        variables = [c for c in numeric_columns(df) if c != params.hue]

    if not variables:
        raise ValueError("Pair plot needs at least one numeric column")
    if len(variables) > settings.pairplot_max_vars:
        raise ValueError(
            f"Pair plot of {len(variables)} variables exceeds the limit of "
            f"{settings.pairplot_max_vars}; pass 'vars' to pick a subset"
        )
    return variables


def run(ctx: ChartContext, params: Params) -> Tuple[Figure, Dict[str, Any]]:
    """Draw sns.pairplot on the dataset."""
    variables = _resolve_vars(ctx, params)

    kwargs: Dict[str, Any] = {}
    if params.hue is not None and params.palette:
        kwargs["palette"] = params.palette

    grid = sns.pairplot(
        ctx.df,
        vars=variables,
        hue=params.hue,
        kind=params.kind,
        diag_kind=params.diag_kind,
        corner=params.corner,
        dropna=params.dropna,
        height=params.facet_height,
        aspect=params.aspect,
        **kwargs,
    )
    if params.title:
        grid.figure.suptitle(params.title, y=1.02)

    outputs = {
        "variables": variables,
        "hue": params.hue,
        "grid_shape": [len(variables), len(variables)],
        "kind": params.kind,
        "diag_kind": params.diag_kind,
    }
    return grid.figure, outputs
