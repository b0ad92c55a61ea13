from __future__ import annotations

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from plotlab.engine import ingest
from plotlab.engine.profiling import profile_dataframe
from plotlab.errors import DatasetLoadError, DatasetNotFoundError
from plotlab.models.common import OkResponse
from plotlab.models.datasets import (
    BuiltinDatasetRequest,
    DatasetCreateResponse,
    DatasetListResponse,
    DatasetProfile,
    InlineDatasetRequest,
)
from plotlab.session_store import store

router = APIRouter()


def _created(df, source: str, name: str | None) -> DatasetCreateResponse:
    # Profile first so a frame that cannot be described is never stored
    profile = DatasetProfile(**profile_dataframe(df))
    dataset_id = ingest.register(df, source=source, name=name)
    return DatasetCreateResponse(
        dataset_id=dataset_id,
        source=source,
        name=name,
        profile=profile,
    )


@router.get("", response_model=DatasetListResponse)
async def list_datasets():
    stats = store.get_stats()
    return DatasetListResponse(
        dataset_ids=store.list_ids(),
        active_datasets=stats["active_datasets"],
        total_memory_mb=round(float(stats["total_memory_mb"]), 3),
    )


@router.post("/builtin", response_model=DatasetCreateResponse)
async def create_builtin_dataset(req: BuiltinDatasetRequest):
    """Load one of seaborn's example datasets (network on first use, then cached)."""
    try:
        df = await run_in_threadpool(ingest.load_builtin, req.name)
        return _created(df, "builtin", req.name.strip().lower())
    except DatasetLoadError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=DatasetCreateResponse)
async def create_inline_dataset(req: InlineDatasetRequest):
    try:
        df = ingest.from_records(req.table())
        return _created(df, "inline", req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/upload", response_model=DatasetCreateResponse)
async def upload_dataset(
    file: UploadFile = File(...),
    name: str | None = Form(None),
):
    raw = await file.read()
    try:
        df = ingest.from_csv_bytes(raw, file.filename)
        return _created(df, "upload", name or file.filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{dataset_id}", response_model=DatasetProfile)
async def get_dataset(dataset_id: str):
    try:
        df = store.require(dataset_id)
    except DatasetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DatasetProfile(**profile_dataframe(df))


@router.delete("/{dataset_id}", response_model=OkResponse)
async def delete_dataset(dataset_id: str):
    if not store.delete(dataset_id):
        raise HTTPException(status_code=404, detail=str(DatasetNotFoundError(dataset_id)))
    return OkResponse()
