from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class ChartMetaResponse(BaseModel):
    slug: str
    title: str
    summary: str
    seaborn_api: str
    output_keys: List[str]
    tags: List[str]


class ChartRequest(BaseModel):
    chart: str
    params: Dict[str, Any] = {}
    image_format: Optional[Literal["png", "svg", "pdf"]] = None


class ImagePayload(BaseModel):
    format: str
    media_type: str
    width_px: Optional[int] = None
    height_px: Optional[int] = None
    size_bytes: int
    data_base64: str


class ChartResponse(BaseModel):
    dataset_id: str
    chart: str
    outputs: Dict[str, Any]
    image: ImagePayload
    elapsed_ms: float


class CorrelationRequest(BaseModel):
    columns: Optional[List[str]] = None
    method: Literal["pearson", "spearman", "kendall"] = "pearson"
    pvalues: bool = False
    top_pairs: int = Field(3, ge=0, le=50)


class CorrelationResponse(BaseModel):
    method: str
    n: int
    variables: List[str]
    matrix: Dict[str, Dict[str, Optional[float]]]
    pvalues: Optional[Dict[str, Dict[str, Optional[float]]]] = None
    strongest_pairs: List[Dict[str, Any]]


class AggregateRequest(BaseModel):
    x: str
    y: str
    hue: Optional[str] = None
    estimator: Literal["mean", "sum", "median", "min", "max", "count", "std", "var"] = "mean"
    order: Optional[List[Any]] = None


class AggregateResponse(BaseModel):
    estimator: str
    rows: List[Dict[str, Any]]
