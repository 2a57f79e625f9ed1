"""
Pydantic configuration schemas for type safety and validation
"""
from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, Literal


class AffinityConfig(BaseModel):
    """Per-view affinity construction configuration"""
    model_config = ConfigDict(extra="forbid")

    k: int = Field(
        default=20,
        ge=1,
        description="Neighbours used for the local scale of each object"
    )
    sigma_scale: float = Field(
        default=0.5,
        gt=0,
        description="Multiplier applied to the combined local scale"
    )
    bandwidth: Literal["mean", "geometric", "snf"] = Field(
        default="mean",
        description="How the two local scales and the distance are combined"
    )
    metric: Literal["euclidean", "sqeuclidean", "cityblock", "cosine", "correlation"] = Field(
        default="euclidean",
        description="Distance metric between objects"
    )
    normalize: bool = Field(
        default=True,
        description="Z-score features before computing distances"
    )


class FusionConfig(BaseModel):
    """Network fusion configuration"""
    model_config = ConfigDict(extra="forbid")

    k: int = Field(
        default=20,
        ge=1,
        description="Neighbours kept in each local transition matrix"
    )
    iterations: int = Field(
        default=20,
        ge=0,
        description="Number of cross-diffusion iterations"
    )
    tol: Optional[float] = Field(
        default=None,
        gt=0,
        description="Stop early when the largest change falls below tol"
    )


class ClusterConfig(BaseModel):
    """Spectral clustering configuration"""
    model_config = ConfigDict(extra="forbid")

    n_clusters: Optional[int] = Field(
        default=None,
        ge=2,
        description="Number of clusters, None to estimate from the eigengap"
    )
    max_clusters: int = Field(
        default=10,
        ge=2,
        description="Upper bound for the eigengap estimate"
    )
    n_init: int = Field(
        default=10,
        ge=1,
        description="K-means restarts on the spectral embedding"
    )

    @field_validator("max_clusters")
    @classmethod
    def validate_max_clusters(cls, v: int, info) -> int:
        """max_clusters must not be below a fixed n_clusters"""
        n_clusters = info.data.get("n_clusters")
        if n_clusters is not None and v < n_clusters:
            raise ValueError(
                f"max_clusters ({v}) must be >= n_clusters ({n_clusters})"
            )
        return v


class EvaluateConfig(BaseModel):
    """Evaluation adapter configuration"""
    model_config = ConfigDict(extra="forbid")

    survival: bool = Field(
        default=True,
        description="Run a log-rank test when survival data is given"
    )
    concordance: bool = Field(
        default=True,
        description="Cluster each view alone and compare with the fused labels"
    )


class AppConfig(BaseModel):
    """Root configuration schema"""
    model_config = ConfigDict(extra="forbid")

    # Global settings
    seed: int = Field(
        default=42,
        ge=0,
        description="Random seed for reproducibility"
    )
    verbose: bool = Field(
        default=False,
        description="Verbose output"
    )

    # Sub-configs
    affinity: AffinityConfig = Field(default_factory=AffinityConfig)
    fusion: FusionConfig = Field(default_factory=FusionConfig)
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)
    evaluate: EvaluateConfig = Field(default_factory=EvaluateConfig)
