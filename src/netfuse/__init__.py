"""
netfuse
Similarity network fusion and spectral clustering of multi-view data
"""

__version__ = "0.1.0"

from .exceptions import InvalidInput, NumericDegeneracyWarning
from .integrate import build_affinity, fuse_networks
from .modeling import estimate_n_clusters, make_batched_views, spectral_cluster
from .pipeline import FusionPipeline, FusionResult, run_pipeline

__all__ = [
    "__version__",
    "InvalidInput",
    "NumericDegeneracyWarning",
    "build_affinity",
    "fuse_networks",
    "spectral_cluster",
    "estimate_n_clusters",
    "make_batched_views",
    # Main API
    "FusionPipeline",
    "FusionResult",
    "run_pipeline",
]
