"""
Dataset Profiling Module

Analyzes an in-memory DataFrame and creates a profile with schema information,
missing-value rates and a small JSON-safe preview. The profile tells callers
which columns a chart can use: pair plots and heatmaps need numeric columns,
bar charts need a grouping column and a numeric value column.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pandas as pd


def numeric_columns(df: pd.DataFrame) -> List[str]:
    """Columns seaborn treats as numeric (booleans excluded)."""
    return [
        c for c in df.columns
        if pd.api.types.is_numeric_dtype(df[c]) and not pd.api.types.is_bool_dtype(df[c])
    ]


def infer_column_role(series: pd.Series) -> str:
    """
    Classify column into a role.
    Returns: "numeric", "categorical", "datetime", "text"

    Examples:
        float64 with many distinct values -> 'numeric'
        int64 with 3 distinct values in 1000 rows -> 'categorical'
        object with 3 species names -> 'categorical'
        object with long free-form sentences -> 'text'
    """
    if pd.api.types.is_datetime64_any_dtype(series):
        return "datetime"

    if pd.api.types.is_bool_dtype(series):
        return "categorical"

    if isinstance(series.dtype, pd.CategoricalDtype):
        return "categorical"

    if pd.api.types.is_numeric_dtype(series):
        # Low cardinality integers are usually codes, not measurements
        unique_ratio = series.nunique(dropna=True) / max(len(series), 1)
        if unique_ratio < 0.05 and series.nunique() < 20:
            return "categorical"
        return "numeric"

    if pd.api.types.is_string_dtype(series) or pd.api.types.is_object_dtype(series):
        unique_count = series.nunique(dropna=True)
        unique_ratio = unique_count / max(len(series), 1)

        if unique_ratio < 0.05 or unique_count < 20:
            return "categorical"

        avg_length = series.dropna().astype(str).str.len().mean()
        if avg_length > 50:
            return "text"

        return "categorical"

    return "text"


def _json_safe_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # to_json turns NaN into null and timestamps into ISO strings
    return json.loads(df.to_json(orient="records", date_format="iso"))


def profile_dataframe(df: pd.DataFrame, sample_size: int = 5) -> Dict[str, Any]:
    """
    Build a profile of a dataset.

    Returns:
        Dictionary containing:
        - n_rows / n_cols
        - schema: list of {name, dtype, role, missing_pct, unique_count}
        - sample_rows: first `sample_size` rows as JSON-safe dicts
        - numeric_columns / categorical_columns: convenience lists for chart params

    Example:
        {
            "n_rows": 150,
            "n_cols": 5,
            "schema": [
                {"name": "sepal_length", "dtype": "float64", "role": "numeric",
                 "missing_pct": 0.0, "unique_count": 35},
                {"name": "species", "dtype": "object", "role": "categorical",
                 "missing_pct": 0.0, "unique_count": 3}
            ],
            ...
        }
    """
    # =========================================================================
    # STEP 1: Schema and roles
    # =========================================================================
    n_rows = int(len(df))
    schema = []
    for name in df.columns:
        s = df[name]
        missing_pct = float(s.isna().mean()) if n_rows else 0.0
        schema.append({
            "name": str(name),
            "dtype": str(s.dtype),
            "role": infer_column_role(s),
            "missing_pct": round(missing_pct, 4),
            "unique_count": int(s.nunique(dropna=True)),
        })

    # =========================================================================
    # STEP 2: Chart-facing column groups
    # =========================================================================
    numeric = [str(c) for c in numeric_columns(df)]
    categorical = [col["name"] for col in schema if col["role"] == "categorical"]

    # =========================================================================
    # STEP 3: Preview
    # =========================================================================
    sample_rows = _json_safe_records(df.head(sample_size))

    return {
        "n_rows": n_rows,
        "n_cols": int(len(df.columns)),
        "schema": schema,
        "sample_rows": sample_rows,
        "numeric_columns": numeric,
        "categorical_columns": categorical,
    }
