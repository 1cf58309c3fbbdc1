"""Quantile estimators for the five-number summary.

Every estimator takes an ascending, missing-free sample and returns the
``(q1, median, q3)`` triple. The interpolating family follows numpy's
``method=`` naming; ``fivenum``/``hinges`` follow R's ``fivenum``.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, Optional, Protocol, Sequence, Union

from .data.models import QuantileTriple

NAN_TRIPLE = QuantileTriple(math.nan, math.nan, math.nan)


class QuantileMethod(Protocol):
    """Protocol for quantile estimators."""

    def __call__(self, arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
        """Return the quartiles of the first ``length`` sorted values."""


def _quantiles_interpolate(
    arr: Sequence[float],
    length: Optional[int],
    interpolate: Callable[[float, float, float], float],
) -> QuantileTriple:
    n = len(arr) if length is None else length
    if n <= 0:
        return NAN_TRIPLE
    n1 = n - 1

    def compute(q: float) -> float:
        index = q * n1
        lo = math.floor(index)
        h = index - lo
        a = float(arr[lo])
        if h == 0:
            return a
        return float(interpolate(a, float(arr[min(lo + 1, n1)]), h))

    return QuantileTriple(q1=compute(0.25), median=compute(0.5), q3=compute(0.75))


def quantiles_type7(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    """R's quantile algorithm type 7 (the numpy/pandas default)."""
    return _quantiles_interpolate(arr, length, lambda a, b, alpha: a + alpha * (b - a))


def quantiles_linear(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    """``a + (b - a) * fraction``; same result as type 7."""
    return _quantiles_interpolate(arr, length, lambda a, b, fraction: a + (b - a) * fraction)


def quantiles_lower(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    return _quantiles_interpolate(arr, length, lambda a, b, fraction: a)


def quantiles_higher(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    return _quantiles_interpolate(arr, length, lambda a, b, fraction: b)


def quantiles_nearest(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    """Whichever neighbour is nearest; an exact half picks the upper one."""
    return _quantiles_interpolate(arr, length, lambda a, b, fraction: a if fraction < 0.5 else b)


def quantiles_midpoint(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    return _quantiles_interpolate(arr, length, lambda a, b, fraction: (a + b) * 0.5)


def quantiles_fivenum(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    """Tukey hinges as computed by R's ``fivenum``.

    The hinges equal the quartiles for odd n and differ for even n. Whereas
    the quartiles only equal observations for ``n % 4 == 1``, the hinges do so
    additionally for ``n % 4 == 2`` and are in the middle of two observations
    otherwise.

    Depths are 1-indexed and clamped to ``[1, n]``.
    """
    n = len(arr) if length is None else length
    if n <= 0:
        return NAN_TRIPLE

    n4 = math.floor((n + 3) / 2) / 2

    def at(depth: int) -> float:
        return float(arr[min(max(depth, 1), n) - 1])

    def compute(d: float) -> float:
        return 0.5 * (at(math.floor(d)) + at(math.ceil(d)))

    return QuantileTriple(q1=compute(n4), median=compute((n + 1) / 2), q3=compute(n + 1 - n4))


def quantiles_hinges(arr: Sequence[float], length: Optional[int] = None) -> QuantileTriple:
    """Alias for :func:`quantiles_fivenum`."""
    return quantiles_fivenum(arr, length)


QUANTILE_METHODS: Dict[str, QuantileMethod] = {
    "type7": quantiles_type7,
    "linear": quantiles_linear,
    "lower": quantiles_lower,
    "higher": quantiles_higher,
    "nearest": quantiles_nearest,
    "midpoint": quantiles_midpoint,
    "fivenum": quantiles_fivenum,
    "hinges": quantiles_hinges,
}

DEFAULT_QUANTILE_METHOD = "type7"


def resolve_quantile_method(method: Union[str, QuantileMethod, None]) -> QuantileMethod:
    """Turn a registry name or a callable into a quantile estimator.

    Args:
        method: One of :data:`QUANTILE_METHODS`, a custom callable, or ``None``
            for the type 7 default.

    Returns:
        The estimator callable
    """
    if method is None:
        return QUANTILE_METHODS[DEFAULT_QUANTILE_METHOD]
    if isinstance(method, str):
        try:
            return QUANTILE_METHODS[method]
        except KeyError:
            raise ValueError(
                f"Unknown quantile method {method!r}, expected one of {sorted(QUANTILE_METHODS)}"
            ) from None
    if not callable(method):
        raise TypeError(f"quantiles must be a method name or callable, got {type(method).__name__}")
    return method
