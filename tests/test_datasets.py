"""
Tests for dataset ingest, storage and profiling.
"""
from datetime import datetime, timedelta

import pandas as pd
import pytest
import seaborn

from plotlab.engine import ingest
from plotlab.engine.profiling import infer_column_role, profile_dataframe
from plotlab.errors import DatasetLoadError, DatasetNotFoundError
from plotlab.session_store import DatasetStore


class TestIngest:
    """Tests for building DataFrames from the supported sources."""

    def test_records_and_columns_agree(self):
        rows = ingest.from_records([{"g": "a", "v": 1}, {"g": "b", "v": 2}])
        cols = ingest.from_records({"g": ["a", "b"], "v": [1, 2]})
        assert rows.equals(cols)

    def test_ragged_columns_rejected(self):
        with pytest.raises(ValueError, match="different lengths"):
            ingest.from_records({"g": ["a", "b"], "v": [1]})

    def test_nested_cells_rejected(self):
        with pytest.raises(ValueError, match="nested values"):
            ingest.from_records([{"g": "a", "tags": ["x", "y"]}, {"g": "b", "tags": []}])
        with pytest.raises(ValueError, match="nested values"):
            ingest.from_records({"g": ["a"], "meta": [{"k": 1}]})

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            ingest.from_records([])

    def test_csv_bytes(self):
        df = ingest.from_csv_bytes(b"x,y\n1,2\n3,4\n", "pts.csv")
        assert list(df.columns) == ["x", "y"]
        assert len(df) == 2

    def test_header_only_csv_rejected(self):
        with pytest.raises(ValueError):
            ingest.from_csv_bytes(b"x,y\n")

    def test_builtin_loads_through_seaborn(self, fake_seaborn_datasets):
        df = ingest.load_builtin(" Iris ")
        assert "species" in df.columns
        assert fake_seaborn_datasets == ["iris"]

    def test_builtin_unknown_name(self, fake_seaborn_datasets):
        with pytest.raises(ValueError, match="not one of"):
            ingest.load_builtin("unicorns")

    def test_builtin_rejects_path_like_names(self):
        with pytest.raises(ValueError, match="Invalid dataset name"):
            ingest.load_builtin("../etc/passwd")

    def test_builtin_network_failure(self, monkeypatch):
        def offline(name, **kws):
            raise OSError("network unreachable")

        monkeypatch.setattr(seaborn, "load_dataset", offline)
        with pytest.raises(DatasetLoadError, match="iris"):
            ingest.load_builtin("iris")

    def test_register_enforces_row_limit(self, sales_df, monkeypatch):
        from plotlab.config import settings

        monkeypatch.setattr(settings, "max_rows", 5)
        with pytest.raises(ValueError, match="limit"):
            ingest.register(sales_df, source="inline", dataset_store=DatasetStore())

    def test_register_stores_metadata(self, sales_df):
        target = DatasetStore()
        dataset_id = ingest.register(sales_df, source="inline", name="sales", dataset_store=target)

        assert target.get(dataset_id) is sales_df
        meta = target.get_metadata(dataset_id)
        assert meta["source"] == "inline"
        assert meta["row_count"] == 8


class TestDatasetStore:
    """Tests for the in-memory TTL store."""

    def test_require_missing(self):
        with pytest.raises(DatasetNotFoundError):
            DatasetStore().require("nope")

    def test_expired_entries_evicted(self, sales_df):
        target = DatasetStore(ttl_hours=1)
        target.set("old", sales_df)
        target.set("new", sales_df)
        target.metadata["old"]["last_accessed"] = datetime.now() - timedelta(hours=2)

        assert target.cleanup_expired() == 1
        assert target.list_ids() == ["new"]
        assert target.get("old") is None

    def test_lookups_evict_expired_entries(self, sales_df):
        """exists and get_metadata do not report an entry past its TTL."""
        target = DatasetStore(ttl_hours=1)
        target.set("old", sales_df)
        target.metadata["old"]["last_accessed"] = datetime.now() - timedelta(hours=2)

        assert target.exists("old") is False
        target.set("old", sales_df)
        target.metadata["old"]["last_accessed"] = datetime.now() - timedelta(hours=2)
        assert target.get_metadata("old") is None
        assert target.get_stats()["active_datasets"] == 0

    def test_delete(self, sales_df):
        target = DatasetStore()
        target.set("a", sales_df)
        assert target.delete("a") is True
        assert target.delete("a") is False
        assert target.get_stats()["active_datasets"] == 0


class TestProfiling:
    """Tests for column roles and the profile payload."""

    def test_roles(self):
        n = 200
        df = pd.DataFrame({
            "measure": [i * 0.5 for i in range(n)],
            "code": [i % 3 for i in range(n)],
            "label": ["x", "y"] * (n // 2),
            "when": pd.date_range("2024-01-01", periods=n, freq="D"),
            "flag": [True, False] * (n // 2),
        })
        assert infer_column_role(df["measure"]) == "numeric"
        assert infer_column_role(df["code"]) == "categorical"
        assert infer_column_role(df["label"]) == "categorical"
        assert infer_column_role(df["when"]) == "datetime"
        assert infer_column_role(df["flag"]) == "categorical"

    def test_profile_payload(self, iris_df):
        df = iris_df.copy()
        df.loc[0, "sepal_width"] = float("nan")
        profile = profile_dataframe(df, sample_size=3)

        assert profile["n_rows"] == 60
        assert profile["n_cols"] == 5
        assert profile["numeric_columns"] == ["sepal_length", "sepal_width", "petal_length", "petal_width"]
        assert "species" in profile["categorical_columns"]
        assert len(profile["sample_rows"]) == 3
        assert profile["sample_rows"][0]["sepal_width"] is None

        by_name = {col["name"]: col for col in profile["schema"]}
        assert by_name["sepal_width"]["missing_pct"] == pytest.approx(1 / 60, abs=1e-4)
