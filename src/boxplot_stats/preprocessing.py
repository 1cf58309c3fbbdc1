"""Preprocessing helpers turning raw samples into sorted, valid arrays."""
from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np
import pandas as pd

from .data.models import CleanedSample

logger = logging.getLogger(__name__)

SampleLike = Union[Sequence[float], np.ndarray, pd.Series]


def _buffer_dtype(data: SampleLike) -> np.dtype:
    """Keep the float width of numpy input, default to float64 otherwise."""
    dtype = getattr(data, "dtype", None)
    if isinstance(dtype, np.dtype) and dtype.kind == "f":
        return dtype
    return np.dtype(np.float64)


def clean_sample(data: SampleLike) -> CleanedSample:
    """Drop missing values and sort the rest ascending.

    ``None``, ``NaN`` and ``pd.NA`` count as missing; infinities are kept.

    Args:
        data: Raw numeric sequence, numpy array or Series

    Returns:
        CleanedSample owning a fresh buffer
    """
    if isinstance(data, pd.Series):
        values = data
    else:
        values = pd.Series(data, dtype=object if len(data) == 0 else None)
    mask = values.notna().to_numpy()
    total = len(values)
    valid = int(mask.sum())
    missing = total - valid

    if valid == 0:
        logger.debug("All %d entries missing", total)
        return CleanedSample.from_owned(np.empty(0, dtype=_buffer_dtype(data)), missing)

    buffer = values[mask].to_numpy(dtype=_buffer_dtype(data))
    # NaN already removed, plain total order
    buffer = np.sort(buffer, kind="mergesort")
    logger.debug("Cleaned sample: %d valid, %d missing", valid, missing)
    return CleanedSample.from_owned(buffer, missing)


def trusted_sample(data: SampleLike) -> CleanedSample:
    """Alias data the caller guarantees to be sorted and free of missing values.

    Nothing is scanned, copied or sorted. Passing unsorted or invalid data
    produces wrong statistics rather than an error.
    """
    if isinstance(data, pd.Series):
        data = data.to_numpy()
    items = np.asarray(data)
    if items.dtype.kind not in "fiu":
        items = items.astype(np.float64)
    logger.debug("Trusted sample of %d entries", len(items))
    return CleanedSample.from_borrowed(items)


def normalize_sample(data: SampleLike, valid_and_sorted: bool = False) -> CleanedSample:
    """Dispatch to :func:`trusted_sample` or :func:`clean_sample`."""
    if valid_and_sorted:
        return trusted_sample(data)
    return clean_sample(data)
