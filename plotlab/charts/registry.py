from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from types import ModuleType
from typing import Any, Dict, Iterable, List, Optional

from plotlab.engine.rendering import RENDER_LOCK, close_all, figure_to_image, theme
from plotlab.errors import ChartNotFoundError

from ._base import ChartContext, ChartMeta, ChartResult

logger = logging.getLogger(__name__)


def iter_chart_modules() -> Iterable[str]:
    pkg = __name__.rsplit(".", 1)[0]  # plotlab.charts
    pkg_path = importlib.import_module(pkg).__path__
    for m in pkgutil.walk_packages(pkg_path, prefix=pkg + "."):
        name = m.name
        if name.endswith("._base") or name.endswith(".registry"):
            continue
        yield name


def _load_modules() -> Dict[str, ModuleType]:
    modules: Dict[str, ModuleType] = {}
    for modname in iter_chart_modules():
        mod = importlib.import_module(modname)
        meta = getattr(mod, "META", None)
        if meta is not None:
            modules[meta.slug] = mod
    return modules


def load_all_meta() -> List[ChartMeta]:
    metas = [mod.META for mod in _load_modules().values()]
    metas.sort(key=lambda m: m.slug)
    return metas


def meta_by_slug() -> Dict[str, ChartMeta]:
    return {m.slug: m for m in load_all_meta()}


def get_chart(slug: str) -> ModuleType:
    mod = _load_modules().get(slug)
    if mod is None:
        raise ChartNotFoundError(slug)
    return mod


def render_chart(slug: str, ctx: ChartContext, params: Optional[Dict[str, Any]] = None) -> ChartResult:
    """
    Validate params, draw the chart and serialize the figure.

    Raises ChartNotFoundError for an unknown slug and ValueError (including
    pydantic.ValidationError) for params that do not fit the dataset.
    """
    mod = get_chart(slug)
    opts = mod.Params.model_validate(params or {})

    started = time.perf_counter()
    with RENDER_LOCK:
        try:
            with theme(
                opts.style or ctx.style,
                opts.context or ctx.context,
                ctx.palette,
            ):
                fig, outputs = mod.run(ctx, opts)
                image = figure_to_image(fig, ctx.image_format, ctx.dpi)
        except Exception:
            close_all()
            raise
    elapsed_ms = (time.perf_counter() - started) * 1000.0

    logger.info(
        "Rendered %s for dataset %s as %s in %.0f ms",
        slug, ctx.dataset_id or "-", image.format, elapsed_ms,
    )
    return ChartResult(chart=slug, image=image, outputs=outputs, elapsed_ms=elapsed_ms)
