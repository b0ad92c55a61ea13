from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator


class ColumnProfile(BaseModel):
    name: str
    dtype: str
    role: str
    missing_pct: float = 0.0
    unique_count: Optional[int] = None


class DatasetProfile(BaseModel):
    n_rows: int
    n_cols: int
    schema_: List[ColumnProfile] = Field(default_factory=list, alias="schema")

    # Small sample for UI preview
    sample_rows: List[Dict[str, Any]] = Field(default_factory=list)

    # Columns each chart can use directly
    numeric_columns: List[str] = Field(default_factory=list)
    categorical_columns: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class BuiltinDatasetRequest(BaseModel):
    name: str


class InlineDatasetRequest(BaseModel):
    """Either `records` (list of rows) or `columns` (dict of lists)."""
    name: Optional[str] = None
    records: Optional[List[Dict[str, Any]]] = None
    columns: Optional[Dict[str, List[Any]]] = None

    @model_validator(mode="after")
    def _exactly_one(self):
        if (self.records is None) == (self.columns is None):
            raise ValueError("Provide exactly one of 'records' or 'columns'")
        return self

    def table(self) -> Union[List[Dict[str, Any]], Dict[str, List[Any]]]:
        return self.records if self.records is not None else self.columns


class DatasetCreateResponse(BaseModel):
    dataset_id: str
    source: str
    name: Optional[str] = None
    profile: DatasetProfile


class DatasetListResponse(BaseModel):
    dataset_ids: List[str]
    active_datasets: int
    total_memory_mb: float
