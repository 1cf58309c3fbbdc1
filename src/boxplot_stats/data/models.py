"""Data models for the boxplot stats package."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, NamedTuple, Optional, Tuple

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from ..analysis.density import KernelDensityEstimator


class QuantileTriple(NamedTuple):
    """Lower quartile, median and upper quartile of a sorted sample."""

    q1: float
    median: float
    q3: float


def _read_only(items: np.ndarray) -> np.ndarray:
    view = items.view()
    view.flags.writeable = False
    return view


@dataclass(frozen=True, eq=False)
class CleanedSample:
    """Ascending, missing-free values ready for the quantile estimators.

    Attributes
    ----------
    items:
        Read-only sorted array of the valid values.
    missing:
        Number of entries dropped because they were missing or NaN.
    min, max:
        First and last value of ``items`` (``NaN`` when empty).
    owned:
        ``True`` when ``items`` is a fresh buffer, ``False`` when it is a
        read-only view over the caller's data.
    """

    items: np.ndarray
    missing: int
    min: float
    max: float
    owned: bool

    @classmethod
    def from_owned(cls, items: np.ndarray, missing: int) -> "CleanedSample":
        """Wrap a freshly allocated, already sorted buffer."""
        return cls._create(items, missing, owned=True)

    @classmethod
    def from_borrowed(cls, items: np.ndarray) -> "CleanedSample":
        """Alias a caller buffer that is asserted to be sorted and valid."""
        return cls._create(items, 0, owned=False)

    @classmethod
    def _create(cls, items: np.ndarray, missing: int, owned: bool) -> "CleanedSample":
        if len(items) == 0:
            lo, hi = math.nan, math.nan
        else:
            lo, hi = float(items[0]), float(items[-1])
        return cls(items=_read_only(items), missing=int(missing), min=lo, max=hi, owned=owned)

    @property
    def valid(self) -> int:
        return len(self.items)

    @property
    def count(self) -> int:
        return self.valid + self.missing


@dataclass(frozen=True)
class FenceBounds:
    """Whiskers and outliers derived from the IQR fences."""

    iqr: float
    whisker_low: float
    whisker_high: float
    outlier: Tuple[float, ...]


@dataclass(frozen=True, eq=False)
class BoxplotResult:
    """Summary statistics of a single numeric sample.

    ``count`` is the length of the original input, ``missing`` the number of
    removed entries and ``items`` the cleaned, sorted sample that ``kde`` was
    built from.
    """

    min: float
    max: float
    mean: float
    variance: float
    median: float
    q1: float
    q3: float
    iqr: float
    whisker_low: float
    whisker_high: float
    outlier: Tuple[float, ...]
    missing: int
    count: int
    items: np.ndarray
    kde: "KernelDensityEstimator"

    @property
    def valid(self) -> int:
        return self.count - self.missing

    def to_dict(self) -> Dict[str, object]:
        """Return the scalar fields as plain Python values (``NaN`` -> ``None``)."""

        def scalar(value: float) -> Optional[float]:
            return None if math.isnan(value) else float(value)

        return {
            "min": scalar(self.min),
            "max": scalar(self.max),
            "mean": scalar(self.mean),
            "variance": scalar(self.variance),
            "median": scalar(self.median),
            "q1": scalar(self.q1),
            "q3": scalar(self.q3),
            "iqr": scalar(self.iqr),
            "whisker_low": scalar(self.whisker_low),
            "whisker_high": scalar(self.whisker_high),
            "outlier": [float(v) for v in self.outlier],
            "missing": self.missing,
            "count": self.count,
        }
