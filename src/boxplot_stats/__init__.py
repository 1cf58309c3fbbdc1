"""Boxplot statistics package."""
from .analysis.density import KernelDensityEstimator
from .data.models import BoxplotResult, CleanedSample, QuantileTriple
from .pipeline import BoxplotEngine, BoxplotOptions, boxplot
from .quantiles import (
    QUANTILE_METHODS,
    quantiles_fivenum,
    quantiles_hinges,
    quantiles_higher,
    quantiles_linear,
    quantiles_lower,
    quantiles_midpoint,
    quantiles_nearest,
    quantiles_type7,
)

__all__ = [
    "boxplot",
    "BoxplotEngine",
    "BoxplotOptions",
    "BoxplotResult",
    "CleanedSample",
    "KernelDensityEstimator",
    "QuantileTriple",
    "QUANTILE_METHODS",
    "quantiles_fivenum",
    "quantiles_hinges",
    "quantiles_higher",
    "quantiles_linear",
    "quantiles_lower",
    "quantiles_midpoint",
    "quantiles_nearest",
    "quantiles_type7",
]
