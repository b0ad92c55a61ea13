"""
Tests for the HTTP API.

Verifies that:
1. Datasets can be created from inline tables, CSV uploads and seaborn examples
2. Charts render as JSON (base64) or raw image bytes
3. Domain errors map to 400 / 404 / 502
"""
import base64

import pytest
from fastapi.testclient import TestClient

from plotlab.main import create_app
from plotlab.session_store import store


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def sales_id(client, sales_df):
    resp = client.post("/datasets", json={"name": "sales", "columns": sales_df.to_dict(orient="list")})
    assert resp.status_code == 200, resp.text
    dataset_id = resp.json()["dataset_id"]
    yield dataset_id
    store.delete(dataset_id)


class TestDatasetRoutes:
    """Tests for /datasets."""

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True

    def test_inline_profile(self, client, sales_id):
        resp = client.get(f"/datasets/{sales_id}")
        body = resp.json()

        assert resp.status_code == 200
        assert body["n_rows"] == 8
        assert body["numeric_columns"] == ["revenue"]
        assert [c["name"] for c in body["schema"]] == ["region", "product", "revenue"]

    def test_inline_needs_exactly_one_shape(self, client):
        resp = client.post("/datasets", json={"records": [{"a": 1}], "columns": {"a": [1]}})
        assert resp.status_code == 422

    def test_inline_ragged_is_400(self, client):
        resp = client.post("/datasets", json={"columns": {"a": [1, 2], "b": [1]}})
        assert resp.status_code == 400

    def test_nested_cells_are_400_and_not_stored(self, client):
        before = set(store.list_ids())
        resp = client.post("/datasets", json={"records": [{"g": "a", "tags": ["x"]}, {"g": "b", "tags": ["y"]}]})

        assert resp.status_code == 400
        assert "nested" in resp.json()["detail"]
        assert set(store.list_ids()) == before

    def test_upload_csv(self, client):
        resp = client.post(
            "/datasets/upload",
            files={"file": ("pts.csv", b"x,y\n1,2\n2,4\n3,7\n", "text/csv")},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["source"] == "upload"
        assert body["name"] == "pts.csv"
        store.delete(body["dataset_id"])

    def test_builtin(self, client, fake_seaborn_datasets):
        resp = client.post("/datasets/builtin", json={"name": "iris"})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["profile"]["n_rows"] == 60
        store.delete(body["dataset_id"])

    def test_builtin_unknown_is_400(self, client, fake_seaborn_datasets):
        resp = client.post("/datasets/builtin", json={"name": "unicorns"})
        assert resp.status_code == 400

    def test_builtin_offline_is_502(self, client, monkeypatch):
        import seaborn

        def offline(name, **kws):
            raise OSError("no route to host")

        monkeypatch.setattr(seaborn, "load_dataset", offline)
        resp = client.post("/datasets/builtin", json={"name": "iris"})
        assert resp.status_code == 502

    def test_missing_dataset_is_404(self, client):
        assert client.get("/datasets/does-not-exist").status_code == 404
        assert client.delete("/datasets/does-not-exist").status_code == 404

    def test_delete(self, client, sales_df):
        dataset_id = client.post("/datasets", json={"columns": sales_df.to_dict(orient="list")}).json()["dataset_id"]
        assert client.delete(f"/datasets/{dataset_id}").json() == {"ok": True}
        assert client.get(f"/datasets/{dataset_id}").status_code == 404


class TestChartRoutes:
    """Tests for chart rendering endpoints."""

    def test_list_charts(self, client):
        slugs = [c["slug"] for c in client.get("/charts").json()]
        assert slugs == ["bar-chart", "correlation-heatmap", "figure-customization", "pair-plot"]

    def test_chart_json(self, client, sales_id):
        resp = client.post(
            f"/datasets/{sales_id}/charts",
            json={"chart": "bar-chart", "params": {"x": "region", "y": "revenue", "estimator": "sum"}},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()

        assert body["chart"] == "bar-chart"
        assert body["image"]["media_type"] == "image/png"
        assert base64.b64decode(body["image"]["data_base64"]).startswith(b"\x89PNG")
        assert {r["region"]: r["revenue"] for r in body["outputs"]["aggregated"]}["West"] == 240

    def test_chart_raw_svg(self, client, sales_id):
        resp = client.post(
            f"/datasets/{sales_id}/charts/bar-chart/image?format=svg",
            json={"x": "product", "y": "revenue"},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("image/svg+xml")
        assert b"<svg" in resp.content

    def test_bad_format_is_400(self, client, sales_id):
        resp = client.post(f"/datasets/{sales_id}/charts/bar-chart/image?format=gif", json={})
        assert resp.status_code == 400

    def test_bad_params_is_400(self, client, sales_id):
        resp = client.post(
            f"/datasets/{sales_id}/charts",
            json={"chart": "bar-chart", "params": {"x": "region", "y": "product"}},
        )
        assert resp.status_code == 400
        assert "numeric" in resp.json()["detail"]

    def test_unknown_chart_is_404(self, client, sales_id):
        resp = client.post(f"/datasets/{sales_id}/charts", json={"chart": "violin-plot"})
        assert resp.status_code == 404

    def test_chart_on_missing_dataset_is_404(self, client):
        resp = client.post("/datasets/nope/charts", json={"chart": "pair-plot"})
        assert resp.status_code == 404


class TestStatsRoutes:
    """Tests for the figure-free stats endpoints."""

    def test_aggregate(self, client, sales_id):
        resp = client.post(f"/datasets/{sales_id}/aggregate", json={"x": "region", "y": "revenue", "estimator": "sum"})
        assert resp.status_code == 200
        assert resp.json()["rows"][0] == {"region": "North", "revenue": 200}

    def test_correlation_needs_two_numeric_columns(self, client, sales_id):
        resp = client.post(f"/datasets/{sales_id}/correlation", json={})
        assert resp.status_code == 400

    def test_correlation_with_pvalues(self, client, iris_df):
        cols = iris_df.to_dict(orient="list")
        dataset_id = client.post("/datasets", json={"columns": cols}).json()["dataset_id"]

        resp = client.post(f"/datasets/{dataset_id}/correlation", json={"method": "spearman", "pvalues": True})
        body = resp.json()

        assert resp.status_code == 200
        assert body["n"] == 60
        assert body["pvalues"]["sepal_length"]["sepal_length"] == 0.0
        assert len(body["strongest_pairs"]) == 3
        store.delete(dataset_id)
