"""Configuration management with Pydantic validation"""

from .schema import (
    AppConfig,
    AffinityConfig,
    FusionConfig,
    ClusterConfig,
    EvaluateConfig,
)
from .loader import load_config, merge_overrides, read_yaml, save_config

__all__ = [
    "AppConfig",
    "AffinityConfig",
    "FusionConfig",
    "ClusterConfig",
    "EvaluateConfig",
    "load_config",
    "read_yaml",
    "merge_overrides",
    "save_config",
]
