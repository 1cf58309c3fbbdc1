"""Mean and population variance of a cleaned sample."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np


@dataclass(frozen=True)
class DescriptiveStats:
    """Arithmetic mean and population variance (``ddof=0``)."""

    mean: float
    variance: float


def describe(items: Union[Sequence[float], np.ndarray]) -> DescriptiveStats:
    """Two-pass mean and variance accumulated in float64.

    Args:
        items: Valid values, no missing entries

    Returns:
        DescriptiveStats; ``mean`` is NaN and ``variance`` 0 for an empty sample
    """
    values = np.asarray(items, dtype=np.float64)
    n = len(values)
    if n == 0:
        return DescriptiveStats(mean=math.nan, variance=0.0)

    with np.errstate(invalid="ignore", over="ignore"):
        mean = float(values.sum() / n)
        deviations = values - mean
        variance = float((deviations * deviations).sum() / n)
    return DescriptiveStats(mean=mean, variance=variance)
