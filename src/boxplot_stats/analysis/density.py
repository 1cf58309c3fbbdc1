"""Gaussian kernel density estimation with a normal-reference bandwidth.

The bandwidth follows the "normal reference distribution" rule of thumb
(``MASS::bandwidth.nrd``), a commonly used variant of Silverman's rule:

    h = 1.06 * min(s, IQR / 1.34) * n ** (-1/5)

with ``s`` the sample (Bessel corrected) standard deviation.
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple, Union

import numpy as np
from scipy.stats import norm

ArrayLike = Union[Sequence[float], np.ndarray]

# Upper bound on kernel terms held in memory by one evaluate() block
BLOCK_ELEMENTS = 1 << 20


def gaussian_kernel(u: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Standard normal density ``exp(-u**2 / 2) / sqrt(2 * pi)``."""
    return norm.pdf(u)


def to_sample_variance(variance: float, n: int) -> float:
    """Bessel-correct a population variance; NaN when ``n <= 1``."""
    if n <= 1:
        return math.nan
    return variance * n / (n - 1)


def nrd_bandwidth(iqr: float, variance: float, n: int) -> float:
    """Normal-reference bandwidth from IQR, population variance and size."""
    if n <= 0:
        return math.nan
    s = math.sqrt(to_sample_variance(variance, n))
    if isinstance(iqr, (int, float)) and math.isfinite(iqr):
        s = min(s, iqr / 1.34)
    return 1.06 * s * n ** -0.2


class KernelDensityEstimator:
    """Density function closed over a sample and a bandwidth.

    Each evaluation is O(n) and nothing is cached between calls. An estimator
    over an empty sample is the constant zero function.
    """

    def __init__(self, items: ArrayLike, bandwidth: float) -> None:
        self._items = np.asarray(items, dtype=np.float64).view()
        self._items.flags.writeable = False
        self.bandwidth = float(bandwidth)

    @classmethod
    def zero(cls) -> "KernelDensityEstimator":
        return cls(np.empty(0), math.nan)

    @property
    def size(self) -> int:
        return len(self._items)

    def __call__(self, x: float) -> float:
        if self.size == 0:
            return 0.0
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            total = gaussian_kernel((x - self._items) / self.bandwidth).sum()
            return float(total / self.bandwidth / self.size)

    def evaluate(self, points: ArrayLike) -> np.ndarray:
        """Vectorised evaluation at several points.

        Points are processed in blocks so that at most ``BLOCK_ELEMENTS``
        kernel terms exist at once, whatever the sample size.
        """
        xs = np.asarray(points, dtype=np.float64)
        if self.size == 0:
            return np.zeros(xs.shape)
        flat = xs.reshape(-1)
        density = np.empty(len(flat))
        step = max(1, BLOCK_ELEMENTS // self.size)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            for start in range(0, len(flat), step):
                block = flat[start:start + step]
                u = (block.reshape(-1, 1) - self._items.reshape(1, -1)) / self.bandwidth
                density[start:start + step] = gaussian_kernel(u).sum(axis=1) / self.bandwidth / self.size
        return density.reshape(xs.shape)

    def __repr__(self) -> str:
        return f"KernelDensityEstimator(size={self.size}, bandwidth={self.bandwidth:.6g})"


def build_kde(items: ArrayLike, iqr: float, variance: float) -> KernelDensityEstimator:
    """Build the density estimator for a cleaned sample.

    Args:
        items: Valid sample values
        iqr: Inter-quartile range of ``items``
        variance: Population variance of ``items``

    Returns:
        KernelDensityEstimator using :func:`nrd_bandwidth`
    """
    n = len(items)
    if n == 0:
        return KernelDensityEstimator.zero()
    return KernelDensityEstimator(items, nrd_bandwidth(iqr, variance, n))


def density_grid(
    kde: KernelDensityEstimator,
    start: float,
    stop: float,
    steps: int = 100,
) -> Tuple[np.ndarray, np.ndarray]:
    """Evaluate ``kde`` on ``steps + 1`` evenly spaced points in ``[start, stop]``.

    Returns:
        ``(xs, ys)`` arrays, e.g. for drawing a violin outline
    """
    xs = np.linspace(start, stop, steps + 1)
    return xs, kde.evaluate(xs)
