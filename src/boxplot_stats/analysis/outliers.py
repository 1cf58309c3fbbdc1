"""Whisker and outlier classification using Tukey fences.

Values further than ``coef * IQR`` below the lower quartile or above the
upper quartile are reported as outliers; the whiskers end at the most extreme
values still inside the fences.

Fence values are computed from interpolated quartiles and rarely equal a
sample value bit for bit, so every comparison against a fence and between
neighbouring outliers is made with an absolute tolerance ``eps``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..data.models import CleanedSample, FenceBounds, QuantileTriple

WHISKERS_MODES = ("nearest", "exact")


@dataclass
class WhiskerConfig:
    """Configuration for whisker and outlier detection."""

    # Fence multiplier; <= 0 uses min/max as whiskers
    coef: float = 1.5

    # Absolute tolerance for "at the fence" and duplicate outliers
    eps: float = 1e-2

    # "nearest": whiskers snap to the closest sample value inside the fence
    # "exact": whiskers are the fence values themselves
    whiskers_mode: str = "nearest"

    def __post_init__(self) -> None:
        if self.whiskers_mode not in WHISKERS_MODES:
            raise ValueError(
                f"Unknown whiskers mode {self.whiskers_mode!r}, expected one of {WHISKERS_MODES}"
            )


class WhiskerClassifier:
    """Splits a sorted sample into whisker range and outliers.

    Usage:
        classifier = WhiskerClassifier(WhiskerConfig(coef=3.0))
        bounds = classifier.classify(sample, quantiles_type7(sample.items))
    """

    def __init__(self, config: WhiskerConfig | None = None) -> None:
        self.config = config or WhiskerConfig()

    def fences(self, sample: CleanedSample, quantiles: QuantileTriple) -> tuple[float, float]:
        """Candidate low/high fences clipped to the sample range."""
        coef = self.config.coef
        iqr = quantiles.q3 - quantiles.q1
        if coef is not None and coef > 0:
            return (
                max(sample.min, quantiles.q1 - coef * iqr),
                min(sample.max, quantiles.q3 + coef * iqr),
            )
        return sample.min, sample.max

    def classify(self, sample: CleanedSample, quantiles: QuantileTriple) -> FenceBounds:
        """Compute whiskers and outliers.

        Args:
            sample: Cleaned, ascending sample with at least one value
            quantiles: Quartiles of ``sample``

        Returns:
            FenceBounds with outliers ascending (low ones first)
        """
        eps = self.config.eps
        nearest = self.config.whiskers_mode == "nearest"
        items = sample.items
        valid = sample.valid

        def same(a: float, b: float) -> bool:
            return abs(a - b) < eps

        whisker_low, whisker_high = self.fences(sample, quantiles)

        # Ascending scan claims ties before the descending one
        low_outliers: List[float] = []
        for i in range(valid):
            v = float(items[i])
            if v >= whisker_low or same(v, whisker_low):
                if nearest:
                    whisker_low = v
                break
            if not low_outliers or not same(low_outliers[-1], v):
                low_outliers.append(v)

        high_outliers: List[float] = []
        for i in range(valid - 1, -1, -1):
            v = float(items[i])
            if v <= whisker_high or same(v, whisker_high):
                if nearest:
                    whisker_high = v
                break
            if (not high_outliers or not same(high_outliers[-1], v)) and (
                not low_outliers or not same(low_outliers[-1], v)
            ):
                high_outliers.append(v)

        high_outliers.reverse()

        return FenceBounds(
            iqr=quantiles.q3 - quantiles.q1,
            whisker_low=whisker_low,
            whisker_high=whisker_high,
            outlier=tuple(low_outliers + high_outliers),
        )
