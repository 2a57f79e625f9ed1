"""Synthetic multi-view data with known ground truth

Each view carries the same class signal plus a strong view-specific batch
split that is independent of class. Clustering any single view recovers the
batches; only information shared between views points at the classes, which
is the situation network fusion is meant for.
"""
from typing import Dict, Optional, Tuple

import numpy as np

from ..exceptions import InvalidInput


def _batch_assignment(n_per_class: int, view: int) -> np.ndarray:
    """
    Balanced batch split of one class for a given view

    View v alternates batches in runs of length 2**v, so every pair of views
    splits each class into four equally sized groups.
    """
    return (np.arange(n_per_class) // (2 ** view)) % 2


def make_batched_views(
    n_per_class: int = 100,
    n_features: int = 10,
    class_shift: float = 2.0,
    batch_shift: float = 5.0,
    noise: float = 1.0,
    n_views: int = 2,
    random_state: Optional[int] = 0,
) -> Tuple[Dict[str, np.ndarray], np.ndarray]:
    """
    Generate two-class views confounded by view-specific batches

    Args:
        n_per_class: Objects per class; objects 0..n-1 are class 0, n..2n-1 class 1
        n_features: Features per view
        class_shift: Offset of class 1 in every feature
        batch_shift: Offset of batch 1 in every feature
        noise: Standard deviation of the Gaussian noise
        n_views: Number of views
        random_state: Seed for the noise

    Returns:
        Tuple of (views keyed "view_1", "view_2", ..., true labels)
    """
    if n_per_class < 2 ** n_views:
        raise InvalidInput(
            f"n_per_class must be at least {2 ** n_views} for {n_views} balanced views, "
            f"got {n_per_class}"
        )
    if n_features < 1 or n_views < 1:
        raise InvalidInput("n_features and n_views must be positive")

    rng = np.random.default_rng(random_state)
    labels = np.repeat([0, 1], n_per_class)

    views = {}
    for v in range(n_views):
        batch = np.tile(_batch_assignment(n_per_class, v), 2)
        offset = class_shift * labels + batch_shift * batch
        X = offset[:, None] + noise * rng.standard_normal((2 * n_per_class, n_features))
        views[f"view_{v + 1}"] = X

    return views, labels
