from __future__ import annotations


class DatasetNotFoundError(KeyError):
    """No dataset is registered under the given id (or it expired)."""

    def __init__(self, dataset_id: str):
        super().__init__(dataset_id)
        self.dataset_id = dataset_id

    def __str__(self) -> str:
        return f"Dataset not found: {self.dataset_id}"


class ChartNotFoundError(KeyError):
    def __init__(self, slug: str):
        super().__init__(slug)
        self.slug = slug

    def __str__(self) -> str:
        return f"Unknown chart: {self.slug}"


class DatasetLoadError(RuntimeError):
    """A built-in example dataset could not be fetched."""
