"""
Shared fixtures: small deterministic stand-ins for seaborn's example datasets,
so no test needs network access.
"""
import numpy as np
import pandas as pd
import pytest
import seaborn

from plotlab.engine import rendering  # noqa: F401  (switches matplotlib to Agg)


@pytest.fixture
def iris_df():
    rng = np.random.default_rng(0)
    frames = []
    for i, species in enumerate(["setosa", "versicolor", "virginica"]):
        n = 20
        sepal_length = rng.normal(5.0 + i, 0.3, n)
        frames.append(pd.DataFrame({
            "sepal_length": sepal_length,
            "sepal_width": rng.normal(3.4 - 0.3 * i, 0.3, n),
            "petal_length": sepal_length * 0.8 + rng.normal(0, 0.1, n),
            "petal_width": rng.normal(0.3 + 0.9 * i, 0.1, n),
            "species": species,
        }))
    return pd.concat(frames, ignore_index=True)


@pytest.fixture
def tips_df():
    rng = np.random.default_rng(1)
    n = 40
    total_bill = rng.uniform(5, 50, n).round(2)
    return pd.DataFrame({
        "total_bill": total_bill,
        "tip": (total_bill * 0.15 + rng.normal(0, 0.5, n)).round(2),
        "time": ["Lunch", "Dinner"] * (n // 2),
        "day": ["Thur", "Fri", "Sat", "Sun"] * (n // 4),
    })


@pytest.fixture
def sales_df():
    return pd.DataFrame({
        "region": ["North", "North", "South", "South", "East", "East", "West", "West"],
        "product": ["A", "B", "A", "B", "A", "B", "A", "B"],
        "revenue": [120, 80, 95, 130, 60, 75, 150, 90],
    })


@pytest.fixture
def fake_seaborn_datasets(monkeypatch, iris_df, tips_df):
    """Replace seaborn.load_dataset with an offline lookup."""
    calls = []

    def fake_load_dataset(name, cache=True, data_home=None, **kws):
        calls.append(name)
        frames = {"iris": iris_df, "tips": tips_df}
        if name not in frames:
            raise ValueError(f"'{name}' is not one of the example datasets.")
        return frames[name].copy()

    monkeypatch.setattr(seaborn, "load_dataset", fake_load_dataset)
    return calls


@pytest.fixture(autouse=True)
def no_leaked_figures():
    """Every test must leave matplotlib without open figures."""
    import matplotlib.pyplot as plt

    yield
    leaked = plt.get_fignums()
    plt.close("all")
    assert leaked == [], f"figures left open: {leaked}"
