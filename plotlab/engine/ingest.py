"""
Dataset ingest: seaborn example datasets, inline tables and CSV uploads.
"""
from __future__ import annotations

import io
import logging
import re
import uuid
from typing import Any, Dict, List, Optional, Union

import pandas as pd
import seaborn as sns

from plotlab.config import settings
from plotlab.errors import DatasetLoadError
from plotlab.session_store import DatasetStore, store

logger = logging.getLogger(__name__)

_DATASET_NAME = re.compile(r"^[a-z0-9_\-]+$")

Records = Union[List[Dict[str, Any]], Dict[str, List[Any]]]


def new_dataset_id() -> str:
    return str(uuid.uuid4())


def load_builtin(name: str) -> pd.DataFrame:
    """Load one of seaborn's example datasets (iris, tips, penguins, ...)."""
    name = (name or "").strip().lower()
    if not _DATASET_NAME.match(name):
        raise ValueError(f"Invalid dataset name: {name!r}")

    try:
        df = sns.load_dataset(name, data_home=settings.seaborn_data_home)
    except ValueError:
        # seaborn raises ValueError for names outside its example catalogue
        raise ValueError(f"'{name}' is not one of the seaborn example datasets")
    except OSError as e:
        raise DatasetLoadError(f"Could not fetch example dataset '{name}': {e}") from e

    logger.info("Loaded example dataset %s (%d rows, %d cols)", name, len(df), len(df.columns))
    return df


def _is_nested(value: Any) -> bool:
    return isinstance(value, (list, dict, set, tuple))


def from_records(data: Records) -> pd.DataFrame:
    """
    Build a DataFrame from an inline table.

    Accepts either row-oriented records
        [{"region": "north", "revenue": 10}, ...]
    or column-oriented lists
        {"region": ["north", "south"], "revenue": [10, 12]}
    """
    if not data:
        raise ValueError("Inline table is empty")

    if isinstance(data, dict):
        lengths = {k: len(v) for k, v in data.items() if isinstance(v, list)}
        if len(lengths) != len(data):
            raise ValueError("Column-oriented tables must map every column name to a list")
        if len(set(lengths.values())) > 1:
            raise ValueError(f"Columns have different lengths: {lengths}")
        df = pd.DataFrame(data)
    elif isinstance(data, list):
        if not all(isinstance(r, dict) for r in data):
            raise ValueError("Row-oriented tables must be a list of objects")
        df = pd.DataFrame.from_records(data)
    else:
        raise ValueError("Inline table must be a list of rows or a dict of columns")

    if df.empty or len(df.columns) == 0:
        raise ValueError("Inline table has no rows")
    for col in df.columns:
        if df[col].dtype == object and df[col].map(_is_nested).any():
            raise ValueError(f"Column '{col}' contains nested values; cells must be scalars")
    return df


def from_csv_bytes(raw: bytes, filename: Optional[str] = None) -> pd.DataFrame:
    if not raw:
        raise ValueError("Uploaded file is empty")
    try:
        df = pd.read_csv(io.BytesIO(raw))
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        label = f" {filename}" if filename else ""
        raise ValueError(f"Could not parse CSV{label}: {e}")
    if df.empty:
        raise ValueError("CSV has a header but no rows")
    return df


def register(
    df: pd.DataFrame,
    source: str,
    name: Optional[str] = None,
    dataset_store: Optional[DatasetStore] = None,
) -> str:
    """Store a frame under a fresh id after enforcing the row limit."""
    if len(df) > settings.max_rows:
        raise ValueError(
            f"Dataset has {len(df)} rows; the limit is {settings.max_rows} (PLOTLAB_MAX_ROWS)"
        )

    target = dataset_store or store
    dataset_id = new_dataset_id()
    target.set(dataset_id, df, {"source": source, "name": name})

    logger.info(
        "Registered dataset %s from %s (%d rows, %d cols)",
        dataset_id, source, len(df), len(df.columns),
    )
    return dataset_id
