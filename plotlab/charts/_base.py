from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from plotlab.config import settings
from plotlab.engine.profiling import numeric_columns
from plotlab.engine.rendering import RenderedImage

Style = Literal["darkgrid", "whitegrid", "dark", "white", "ticks"]
Context = Literal["paper", "notebook", "talk", "poster"]


@dataclass(frozen=True)
class ChartMeta:
    slug: str
    title: str
    summary: str
    seaborn_api: str
    output_keys: List[str]
    tags: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "summary": self.summary,
            "seaborn_api": self.seaborn_api,
            "output_keys": list(self.output_keys),
            "tags": list(self.tags),
        }


@dataclass
class ChartContext:
    """What a chart needs besides its params: the data and render settings."""
    df: pd.DataFrame
    dataset_id: Optional[str] = None
    image_format: str = field(default_factory=lambda: settings.image_format)
    dpi: int = field(default_factory=lambda: settings.dpi)
    style: str = field(default_factory=lambda: settings.theme_style)
    context: str = field(default_factory=lambda: settings.theme_context)
    palette: str = field(default_factory=lambda: settings.palette)


@dataclass
class ChartResult:
    chart: str
    image: RenderedImage
    outputs: Dict[str, Any]
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chart": self.chart,
            "outputs": self.outputs,
            "image": self.image.to_dict(),
            "elapsed_ms": round(self.elapsed_ms, 1),
        }


class FigureOptions(BaseModel):
    """Options every chart accepts. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    palette: Optional[str] = None
    style: Optional[Style] = None
    context: Optional[Context] = None


# -------------------------
# Column checks shared by the chart modules
# -------------------------

def require_columns(df: pd.DataFrame, columns: Iterable[Optional[str]]) -> None:
    missing = [c for c in columns if c is not None and c not in df.columns]
    if missing:
        raise ValueError(f"Unknown column(s): {', '.join(map(str, missing))}")


def require_numeric(df: pd.DataFrame, columns: Iterable[Optional[str]]) -> None:
    numeric = set(numeric_columns(df))
    bad = [c for c in columns if c is not None and c not in numeric]
    if bad:
        raise ValueError(f"Column(s) must be numeric: {', '.join(map(str, bad))}")
