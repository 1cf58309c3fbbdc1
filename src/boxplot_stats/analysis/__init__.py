"""Statistical analysis: moments, whiskers/outliers and density estimation."""
from .density import KernelDensityEstimator, build_kde, density_grid, nrd_bandwidth
from .descriptive import DescriptiveStats, describe
from .outliers import WhiskerClassifier, WhiskerConfig

__all__ = [
    "KernelDensityEstimator",
    "build_kde",
    "density_grid",
    "nrd_bandwidth",
    "DescriptiveStats",
    "describe",
    "WhiskerClassifier",
    "WhiskerConfig",
]
