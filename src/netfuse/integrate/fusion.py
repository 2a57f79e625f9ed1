"""Similarity network fusion by iterative cross-diffusion

Every view keeps a working affinity matrix. At each iteration a view's
matrix is replaced by the average transition matrix of the *other* views,
diffused through the view's own sparse k-nearest-neighbour transitions:

    W_v <- S_v @ mean_{u != v} P(W_u) @ S_v.T

so structure shared between views is reinforced while relationships seen by
a single view only fade out. All updates of one iteration read the state of
the previous iteration, which makes the result independent of view order.
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np

from ..exceptions import InvalidInput
from .matrices import as_affinity, check_neighbors, row_normalize, symmetrize

logger = logging.getLogger(__name__)

AffinitySet = Union[Sequence[Any], Mapping[str, Any]]


def full_transition(W: np.ndarray) -> np.ndarray:
    """
    Row-stochastic transition matrix with a fixed self-weight of 1/2

    Off-diagonal entries are W_ij / (2 * sum_{l != i} W_il). Nodes without
    any off-diagonal weight get an all-zero row.
    """
    off = W.copy()
    np.fill_diagonal(off, 0.0)
    P = row_normalize(off) / 2.0
    connected = np.flatnonzero(off.sum(axis=1) > 0)
    P[connected, connected] = 0.5
    return P


def local_transition(W: np.ndarray, k: int) -> np.ndarray:
    """
    Keep the k strongest off-diagonal entries of each row, then row-normalize

    Ties are broken in favour of the lower column index.
    """
    n = W.shape[0]
    ranked = W.copy()
    np.fill_diagonal(ranked, -np.inf)
    # stable sort on negated values keeps equal entries in column order
    order = np.argsort(-ranked, axis=1, kind="stable")[:, :k]

    S = np.zeros_like(W)
    rows = np.arange(n)[:, None]
    S[rows, order] = W[rows, order]
    return row_normalize(S)


def _renormalize(W: np.ndarray) -> np.ndarray:
    """Map a diffused matrix back onto a valid affinity matrix"""
    A = symmetrize(full_transition(np.clip(W, 0.0, None)))
    np.fill_diagonal(A, 0.0)
    return A


def _collect_views(views: AffinitySet) -> List[np.ndarray]:
    if isinstance(views, Mapping):
        items = list(views.items())
    else:
        items = [(f"view {i}", W) for i, W in enumerate(views)]

    if not items:
        raise InvalidInput("At least one affinity matrix is required")

    matrices = [as_affinity(W, name) for name, W in items]
    shapes = {name: W.shape for (name, _), W in zip(items, matrices)}
    if len(set(shapes.values())) != 1:
        raise InvalidInput(f"Affinity matrices differ in dimension: {shapes}")

    return matrices


def fuse_networks(
    views: AffinitySet,
    k: int = 20,
    iterations: int = 20,
    tol: Optional[float] = None,
) -> np.ndarray:
    """
    Fuse several affinity matrices over the same objects into one

    Args:
        views: Affinity matrices (list, or mapping of view name to matrix),
            all aligned on the same object ordering
        k: Size of the local neighbourhood used for diffusion
        iterations: Number of cross-diffusion iterations
        tol: Optional early-stop threshold on the largest absolute change
            of any working matrix between two iterations

    Returns:
        Fused affinity matrix (n, n): the element-wise mean of the final
        working matrices, so symmetric, non-negative with a zero diagonal.
        A single view is returned unchanged.
    """
    matrices = _collect_views(views)
    n = matrices[0].shape[0]
    k = check_neighbors(k, n)

    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
        raise InvalidInput(f"iterations must be an integer, got {type(iterations).__name__}")
    if iterations < 0:
        raise InvalidInput(f"iterations must be non-negative, got {iterations}")
    if tol is not None and not tol > 0:
        raise InvalidInput(f"tol must be positive, got {tol}")

    n_views = len(matrices)
    if n_views == 1:
        logger.info("Single view supplied, skipping cross-diffusion")
        return matrices[0]

    logger.info(f"Fusing {n_views} networks of {n} objects (k={k}, iterations={iterations})")

    isolated = sum(int((W.sum(axis=1) == 0).sum()) for W in matrices)
    if isolated:
        logger.debug(f"{isolated} zero rows across views; they stay zero through normalization")

    local = [local_transition(W, k) for W in matrices]
    working = list(matrices)

    for iteration in range(iterations):
        transitions = [full_transition(W) for W in working]
        total = np.sum(transitions, axis=0)

        updated = []
        for S, P in zip(local, transitions):
            others = (total - P) / (n_views - 1)
            updated.append(_renormalize(S @ others @ S.T))

        change = max(np.abs(new - old).max() for new, old in zip(updated, working))
        working = updated
        logger.debug(f"Iteration {iteration + 1}/{iterations}: max change {change:.3e}")

        if tol is not None and change < tol:
            logger.info(f"Converged after {iteration + 1} iterations (max change {change:.3e})")
            break

    # plain mean; each working matrix is already symmetric with a zero diagonal
    return np.mean(working, axis=0)
