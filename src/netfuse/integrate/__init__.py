"""Affinity construction and similarity network fusion"""

from .affinity import BANDWIDTH_FUNCTIONS, build_affinity, local_scales
from .fusion import full_transition, fuse_networks, local_transition

__all__ = [
    'build_affinity',
    'local_scales',
    'BANDWIDTH_FUNCTIONS',
    'fuse_networks',
    'full_transition',
    'local_transition',
]
