"""
Shared fixtures for learner tests.

Provides:
- Synthetic regression data (30 rows, matching the documented scenario)
- Synthetic binary classification data
- Fast extra-trees configs
"""
from typing import Any, Dict

import numpy as np
import pandas as pd
import pytest


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def regression_data() -> Dict[str, Any]:
    """
    Generate a small regression sample.

    Returns dict with:
        - X: (30, 6) covariate DataFrame
        - y: (30,) continuous outcome Series
        - weights: (30,) observation weights
        - X_new: (10, 6) prediction rows
    """
    np.random.seed(42)
    n, n_new, n_features = 30, 10, 6
    columns = [f"x{i}" for i in range(n_features)]

    X = pd.DataFrame(np.random.randn(n, n_features), columns=columns)
    y = pd.Series(3.0 * X["x0"] - 2.0 * X["x1"] + np.random.randn(n) * 0.5, name="y")
    weights = np.random.uniform(0.5, 1.5, size=n)
    X_new = pd.DataFrame(np.random.randn(n_new, n_features), columns=columns)

    return {"X": X, "y": y, "weights": weights, "X_new": X_new}


@pytest.fixture
def binary_data() -> Dict[str, Any]:
    """
    Generate a balanced binary classification sample.

    Returns dict with:
        - X: (80, 9) covariate array
        - y: (80,) labels in {0, 1}
        - X_new: (20, 9) prediction rows
        - id: (80,) grouping ids, 20 groups of 4 rows
    """
    np.random.seed(7)
    n, n_new, n_features = 80, 20, 9

    X = np.random.randn(n, n_features)
    y = (X[:, 0] + 0.5 * np.random.randn(n) > 0).astype(int)
    y[:2] = [0, 1]
    X_new = np.random.randn(n_new, n_features)
    ids = np.repeat(np.arange(20), 4)

    return {"X": X, "y": y, "X_new": X_new, "id": ids}


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def fast_et_config() -> Dict[str, Any]:
    """Small, seeded extra-trees config for fast deterministic tests."""
    return {"ntree": 25, "random_state": 0}
