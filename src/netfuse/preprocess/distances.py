"""Per-view pairwise distance matrices

Distances are dense (n_samples, n_samples) arrays with an exact zero diagonal
and exact symmetry, which is what the affinity builder expects.
"""
import logging
from typing import Dict, Mapping, Union

import numpy as np
import pandas as pd
from scipy.spatial.distance import pdist, squareform

from ..exceptions import InvalidInput
from .scaling import standard_normalize

logger = logging.getLogger(__name__)

SUPPORTED_METRICS = ("euclidean", "sqeuclidean", "cityblock", "cosine", "correlation")


def distance_matrix(
    X: Union[np.ndarray, pd.DataFrame],
    metric: str = "euclidean",
) -> np.ndarray:
    """
    Compute the dense pairwise distance matrix of one view

    Args:
        X: Feature matrix (n_samples, n_features); row order is preserved
        metric: One of SUPPORTED_METRICS

    Returns:
        Distance matrix (n_samples, n_samples)
    """
    if metric not in SUPPORTED_METRICS:
        raise InvalidInput(
            f"Unknown distance metric: '{metric}'. Supported: {', '.join(SUPPORTED_METRICS)}"
        )

    values = np.asarray(X, dtype=np.float64)
    if values.ndim != 2:
        raise InvalidInput(f"Feature matrix must be 2D, got {values.ndim}D")
    if values.shape[0] < 2:
        raise InvalidInput(f"Need at least 2 samples, got {values.shape[0]}")
    if not np.isfinite(values).all():
        raise InvalidInput("Feature matrix contains NaN or Inf values")

    if metric == "cosine" and (~values.any(axis=1)).any():
        raise InvalidInput("Metric 'cosine' is undefined for all-zero rows")
    if metric == "correlation" and (np.ptp(values, axis=1) == 0).any():
        raise InvalidInput("Metric 'correlation' is undefined for constant rows")

    # squareform writes exact zeros on the diagonal
    dist = squareform(pdist(values, metric=metric))

    if not np.isfinite(dist).all():
        raise InvalidInput(
            f"Metric '{metric}' produced non-finite distances "
            "(constant or all-zero rows?)"
        )

    # float error can leave tiny negatives for cosine/correlation
    return np.clip(dist, 0.0, None)


def view_distances(
    views: Mapping[str, Union[np.ndarray, pd.DataFrame]],
    metric: str = "euclidean",
    normalize: bool = True,
) -> Dict[str, np.ndarray]:
    """
    Compute one distance matrix per view

    Args:
        views: Feature matrices by view name, all with the same row ordering
        metric: Distance metric passed to distance_matrix
        normalize: Z-score features of each view first

    Returns:
        Dictionary of distance matrices in the same view order
    """
    if not views:
        raise InvalidInput("No views supplied")

    n_samples = {name: np.shape(X)[0] for name, X in views.items()}
    if len(set(n_samples.values())) != 1:
        raise InvalidInput(f"Views have different numbers of samples: {n_samples}")

    distances = {}
    for name, X in views.items():
        if normalize:
            X = standard_normalize(X)
        distances[name] = distance_matrix(X, metric=metric)
        logger.debug(f"Distances for view '{name}': shape {distances[name].shape}")

    return distances
