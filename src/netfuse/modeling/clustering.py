"""Spectral clustering of affinity matrices

Convention: the normalized Laplacian L = I - D^-1/2 A D^-1/2 is built on the
connected nodes and the eigenvectors of its num_clusters *smallest*
eigenvalues form the embedding. Rows of the embedding are scaled to unit
length and partitioned with k-means.

Isolated nodes (zero degree) are kept out of the eigenproblem and joined to
the largest cluster afterwards.
"""
import logging
import warnings
from typing import Any, Tuple

import numpy as np
from scipy.linalg import eigh
from sklearn.cluster import KMeans

from ..exceptions import InvalidInput, NumericDegeneracyWarning
from ..integrate.matrices import as_affinity, symmetrize

logger = logging.getLogger(__name__)


def _connected_laplacian(A: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Normalized Laplacian restricted to nodes with positive degree

    Returns:
        Tuple of (laplacian, indices of the connected nodes)
    """
    degree = A.sum(axis=1)
    connected = np.flatnonzero(degree > 0)

    sub = A[np.ix_(connected, connected)]
    d_inv_sqrt = 1.0 / np.sqrt(degree[connected])
    L = np.eye(len(connected)) - d_inv_sqrt[:, None] * sub * d_inv_sqrt[None, :]
    return symmetrize(L), connected


def spectral_embedding(affinity: Any, n_components: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Unit-length spectral embedding of the connected nodes

    Args:
        affinity: Affinity matrix (n, n)
        n_components: Number of eigenvectors to keep

    Returns:
        Tuple of (embedding of shape (n_connected, n_components), connected node indices)
    """
    A = as_affinity(affinity)
    L, connected = _connected_laplacian(A)

    if len(connected) < n_components:
        raise InvalidInput(
            f"Only {len(connected)} of {A.shape[0]} objects have non-zero affinity; "
            f"cannot build {n_components} components"
        )

    _, vectors = eigh(L, subset_by_index=[0, n_components - 1])

    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    embedding = np.zeros_like(vectors)
    np.divide(vectors, norms, out=embedding, where=norms > 0)
    return embedding, connected


def _canonical_labels(labels: np.ndarray) -> np.ndarray:
    """Renumber labels in order of first appearance"""
    _, first = np.unique(labels, return_index=True)
    order = labels[np.sort(first)]
    mapping = {old: new for new, old in enumerate(order)}
    return np.array([mapping[label] for label in labels], dtype=int)


def spectral_cluster(
    affinity: Any,
    num_clusters: int,
    random_state: int = 0,
    n_init: int = 10,
) -> np.ndarray:
    """
    Partition objects into num_clusters groups from an affinity matrix

    Args:
        affinity: Symmetric non-negative affinity matrix (n, n); the diagonal
            is ignored
        num_clusters: Number of clusters, 2 <= num_clusters < n
        random_state: Seed of the k-means initialisation
        n_init: Number of k-means restarts

    Returns:
        Integer labels of shape (n,), numbered by first appearance
    """
    A = as_affinity(affinity)
    n = A.shape[0]

    if isinstance(num_clusters, bool) or not isinstance(num_clusters, (int, np.integer)):
        raise InvalidInput(f"num_clusters must be an integer, got {type(num_clusters).__name__}")
    if num_clusters < 2 or num_clusters >= n:
        raise InvalidInput(f"num_clusters must be in [2, {n - 1}] for {n} objects, got {num_clusters}")

    embedding, connected = spectral_embedding(A, num_clusters)

    kmeans = KMeans(n_clusters=num_clusters, n_init=n_init, random_state=random_state)
    sub_labels = _canonical_labels(kmeans.fit_predict(embedding))

    labels = np.empty(n, dtype=int)
    labels[connected] = sub_labels

    if len(connected) < n:
        isolated = np.setdiff1d(np.arange(n), connected)
        # bincount ties resolve to the lowest label
        largest = int(np.argmax(np.bincount(sub_labels, minlength=num_clusters)))
        labels[isolated] = largest
        warnings.warn(
            f"{len(isolated)} isolated objects assigned to the largest cluster",
            NumericDegeneracyWarning,
        )

    labels = _canonical_labels(labels)
    logger.debug(f"Cluster sizes: {np.bincount(labels).tolist()}")
    return labels


def estimate_n_clusters(affinity: Any, max_clusters: int = 10) -> int:
    """
    Estimate the number of clusters using the eigengap heuristic

    Args:
        affinity: Affinity matrix (n, n)
        max_clusters: Largest number of clusters considered

    Returns:
        Number of clusters in [2, max_clusters]
    """
    if isinstance(max_clusters, bool) or not isinstance(max_clusters, (int, np.integer)):
        raise InvalidInput(f"max_clusters must be an integer, got {type(max_clusters).__name__}")
    if max_clusters < 2:
        raise InvalidInput(f"max_clusters must be at least 2, got {max_clusters}")

    A = as_affinity(affinity)
    L, connected = _connected_laplacian(A)
    if len(connected) < 3:
        raise InvalidInput(f"Need at least 3 connected objects, got {len(connected)}")

    m = min(max_clusters + 1, len(connected))
    eigenvalues = eigh(L, eigvals_only=True, subset_by_index=[0, m - 1])

    # Find largest eigengap
    gaps = np.diff(eigenvalues)
    n_clusters = int(np.argmax(gaps)) + 1

    return max(2, min(n_clusters, max_clusters))
