from __future__ import annotations

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def small_df() -> pd.DataFrame:
    return pd.DataFrame({"x": np.arange(10), "y": list("abababcdcd")})


@pytest.fixture
def churn_df() -> pd.DataFrame:
    """1000 customers, exactly 20% churned, plus a numeric tenure column."""
    rng = np.random.default_rng(0)
    churn = np.array(["Yes"] * 200 + ["No"] * 800, dtype=object)
    rng.shuffle(churn)
    return pd.DataFrame(
        {
            "churn": churn,
            "tenure": rng.integers(1, 72, size=1000),
            "charges": rng.normal(60.0, 15.0, size=1000),
        }
    )


@pytest.fixture
def rare_df() -> pd.DataFrame:
    """100 rows where category 'C' covers only 5% of the data."""
    return pd.DataFrame(
        {
            "group": ["A"] * 50 + ["B"] * 45 + ["C"] * 5,
            "value": np.arange(100, dtype=float),
        }
    )
