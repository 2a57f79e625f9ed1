"""Spectral clustering and synthetic benchmarks"""

from .clustering import estimate_n_clusters, spectral_cluster, spectral_embedding
from .simulation import make_batched_views

__all__ = [
    'spectral_cluster',
    'spectral_embedding',
    'estimate_n_clusters',
    'make_batched_views',
]
