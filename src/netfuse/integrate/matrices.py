"""Validation and normalisation helpers shared by the network stages

Matrix conventions:
- Affinity matrices are symmetric, non-negative and have a zero diagonal.
- Transition matrices are row-stochastic; rows of isolated nodes are all zero.
"""
from typing import Any

import numpy as np

from ..exceptions import InvalidInput


def as_square_matrix(M: Any, name: str = "matrix") -> np.ndarray:
    """
    Convert to a float64 copy and check it is a finite square matrix

    Args:
        M: Array-like (ndarray or DataFrame)
        name: Argument name used in error messages

    Returns:
        New float64 array; the caller's matrix is never modified
    """
    arr = np.array(M, dtype=np.float64, copy=True)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidInput(f"{name} must be a square 2D matrix, got shape {arr.shape}")
    if arr.shape[0] < 2:
        raise InvalidInput(f"{name} must contain at least 2 objects, got {arr.shape[0]}")
    if not np.isfinite(arr).all():
        raise InvalidInput(f"{name} contains NaN or Inf values")
    return arr


def symmetrize(M: np.ndarray) -> np.ndarray:
    """Average a matrix with its transpose"""
    return (M + M.T) / 2.0


def as_affinity(M: Any, name: str = "affinity") -> np.ndarray:
    """
    Coerce input into a valid affinity matrix

    Negative entries are clipped to 0, the matrix is symmetrized and the
    diagonal is zeroed.
    """
    W = symmetrize(np.clip(as_square_matrix(M, name), 0.0, None))
    np.fill_diagonal(W, 0.0)
    return W


def check_neighbors(k: int, n: int, name: str = "k") -> int:
    """Check that a neighbour count lies in [1, n - 1]"""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidInput(f"{name} must be an integer, got {type(k).__name__}")
    if k < 1 or k >= n:
        raise InvalidInput(f"{name} must be in [1, {n - 1}] for {n} objects, got {k}")
    return int(k)


def row_normalize(M: np.ndarray) -> np.ndarray:
    """Divide each row by its sum; rows summing to 0 stay 0"""
    sums = M.sum(axis=1, keepdims=True)
    out = np.zeros_like(M)
    np.divide(M, sums, out=out, where=sums > 0)
    return out
