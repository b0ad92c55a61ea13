from __future__ import annotations

from fastapi import APIRouter, HTTPException

from plotlab.errors import DatasetNotFoundError
from plotlab.models.charts import (
    AggregateRequest,
    AggregateResponse,
    CorrelationRequest,
    CorrelationResponse,
)
from plotlab.session_store import store
from plotlab.stats import (
    aggregate,
    correlation_matrix,
    correlation_pvalues,
    matrix_to_dict,
    strongest_pairs,
)

router = APIRouter()


@router.post("/{dataset_id}/correlation", response_model=CorrelationResponse)
async def correlation(dataset_id: str, req: CorrelationRequest):
    """The matrix behind correlation-heatmap, without drawing it."""
    try:
        df = store.require(dataset_id)
        matrix, n = correlation_matrix(df, req.columns, req.method)
        pvalues = correlation_pvalues(df, req.columns, req.method) if req.pvalues else None
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CorrelationResponse(
        method=req.method,
        n=n,
        variables=[str(c) for c in matrix.columns],
        matrix=matrix_to_dict(matrix),
        pvalues=matrix_to_dict(pvalues) if pvalues is not None else None,
        strongest_pairs=strongest_pairs(matrix, req.top_pairs),
    )


@router.post("/{dataset_id}/aggregate", response_model=AggregateResponse)
async def aggregate_dataset(dataset_id: str, req: AggregateRequest):
    """The bar heights bar-chart would draw for the same estimator."""
    try:
        df = store.require(dataset_id)
        rows = aggregate(
            df, req.x, req.y, hue=req.hue, estimator=req.estimator, order=req.order
        )
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AggregateResponse(estimator=req.estimator, rows=rows)
