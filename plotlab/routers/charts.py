from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Response
from starlette.concurrency import run_in_threadpool

from plotlab.charts._base import ChartContext, ChartResult
from plotlab.charts.registry import load_all_meta, render_chart
from plotlab.config import IMAGE_FORMATS, settings
from plotlab.errors import ChartNotFoundError, DatasetNotFoundError
from plotlab.models.charts import ChartMetaResponse, ChartRequest, ChartResponse
from plotlab.session_store import store

router = APIRouter()


@router.get("/charts", response_model=List[ChartMetaResponse])
async def list_charts():
    return [ChartMetaResponse(**m.to_dict()) for m in load_all_meta()]


async def _render(
    dataset_id: str,
    chart: str,
    params: Dict[str, Any],
    image_format: Optional[str],
) -> ChartResult:
    try:
        df = store.require(dataset_id)
        ctx = ChartContext(
            df=df,
            dataset_id=dataset_id,
            image_format=image_format or settings.image_format,
        )
        return await run_in_threadpool(render_chart, chart, ctx, params)
    except (DatasetNotFoundError, ChartNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/datasets/{dataset_id}/charts", response_model=ChartResponse)
async def create_chart(dataset_id: str, req: ChartRequest):
    result = await _render(dataset_id, req.chart, req.params, req.image_format)
    return ChartResponse(dataset_id=dataset_id, **result.to_dict())


@router.post("/datasets/{dataset_id}/charts/{slug}/image")
async def chart_image(
    dataset_id: str,
    slug: str,
    params: Optional[Dict[str, Any]] = Body(None),
    image_format: Optional[str] = Query(None, alias="format"),
):
    """Same as POST /charts but returns the raw image bytes."""
    if image_format is not None and image_format not in IMAGE_FORMATS:
        raise HTTPException(status_code=400, detail=f"format must be one of {', '.join(IMAGE_FORMATS)}")

    result = await _render(dataset_id, slug, params or {}, image_format)
    return Response(content=result.image.data, media_type=result.image.media_type)
