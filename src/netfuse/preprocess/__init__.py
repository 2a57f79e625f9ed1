"""Feature scaling and per-view distance computation"""

from .scaling import standard_normalize
from .distances import SUPPORTED_METRICS, distance_matrix, view_distances

__all__ = [
    'standard_normalize',
    'distance_matrix',
    'view_distances',
    'SUPPORTED_METRICS',
]
