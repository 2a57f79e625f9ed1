"""Pytest configuration and fixtures for netfuse tests

Provides synthetic affinity matrices and multi-view data with known structure.
"""
import pytest
import numpy as np
import pandas as pd
from typing import Dict, Tuple

from netfuse.modeling import make_batched_views


# ============================================================================
# Helpers
# ============================================================================

def block_affinity(sizes, within: float = 1.0, between: float = 0.01) -> np.ndarray:
    """Block-diagonal affinity with constant within/between weights"""
    labels = np.repeat(np.arange(len(sizes)), sizes)
    W = np.where(labels[:, None] == labels[None, :], within, between)
    np.fill_diagonal(W, 0.0)
    return W.astype(float)


def random_affinity(n: int, seed: int) -> np.ndarray:
    """Symmetric non-negative matrix with zero diagonal"""
    rng = np.random.default_rng(seed)
    W = rng.random((n, n))
    W = (W + W.T) / 2
    np.fill_diagonal(W, 0.0)
    return W


def assert_valid_affinity(W: np.ndarray) -> None:
    """Symmetric, non-negative, finite, zero diagonal"""
    assert np.isfinite(W).all()
    assert (W >= 0).all()
    np.testing.assert_allclose(W, W.T, atol=1e-12)
    np.testing.assert_array_equal(np.diag(W), 0.0)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def two_blocks():
    """Two dense blocks of 10 objects each"""
    return block_affinity([10, 10])


@pytest.fixture
def three_blocks():
    """Three dense blocks of sizes 12, 10, 8"""
    return block_affinity([12, 10, 8])


@pytest.fixture
def blob_features():
    """Two well-separated Gaussian blobs in 5 dimensions"""
    rng = np.random.default_rng(7)
    X = np.vstack([
        rng.normal(0.0, 1.0, (15, 5)),
        rng.normal(8.0, 1.0, (15, 5)),
    ])
    y = np.repeat([0, 1], 15)
    return X, y


@pytest.fixture(scope="session")
def batched_views() -> Tuple[Dict[str, np.ndarray], np.ndarray]:
    """Two views of 100 + 100 objects confounded by view-specific batches"""
    return make_batched_views(n_per_class=100, random_state=0)


@pytest.fixture
def feature_frame():
    """Small DataFrame with a named, unsorted index"""
    rng = np.random.default_rng(3)
    index = [f"SAMPLE_{i:03d}" for i in [5, 1, 4, 0, 3, 2]]
    return pd.DataFrame(
        rng.normal(size=(6, 3)),
        index=index,
        columns=["feature1", "feature2", "feature3"],
    )
