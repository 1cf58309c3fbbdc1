"""High level orchestration of the boxplot statistics."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Union

import pandas as pd

from .analysis.density import KernelDensityEstimator, build_kde
from .analysis.descriptive import describe
from .analysis.outliers import WhiskerClassifier, WhiskerConfig
from .data.models import BoxplotResult, CleanedSample
from .preprocessing import SampleLike, normalize_sample
from .quantiles import DEFAULT_QUANTILE_METHOD, QuantileMethod, resolve_quantile_method

logger = logging.getLogger(__name__)


@dataclass
class BoxplotOptions:
    """Options for :class:`BoxplotEngine`.

    ``quantiles`` is either a name from ``QUANTILE_METHODS`` or a callable
    following the ``QuantileMethod`` protocol. ``valid_and_sorted`` skips
    cleaning and sorting; the caller guarantees the data has no missing values
    and is ascending.
    """

    coef: float = 1.5
    quantiles: Union[str, QuantileMethod] = DEFAULT_QUANTILE_METHOD
    valid_and_sorted: bool = False
    whiskers_mode: str = "nearest"
    eps: float = 1e-2

    def __post_init__(self) -> None:
        if self.coef is None:
            self.coef = 1.5
        if self.quantiles is None:
            self.quantiles = DEFAULT_QUANTILE_METHOD
        resolve_quantile_method(self.quantiles)
        self.whisker_config()

    def whisker_config(self) -> WhiskerConfig:
        return WhiskerConfig(coef=self.coef, eps=self.eps, whiskers_mode=self.whiskers_mode)


class BoxplotEngine:
    """Computes boxplot statistics and a density estimate for numeric samples.

    Usage:
        engine = BoxplotEngine(BoxplotOptions(coef=3.0, quantiles="fivenum"))
        result = engine.compute([1, 2, 3, 4, 5, None, 100])

        result.outlier       # (100.0,)
        result.kde(3.0)      # density at 3
        print(engine.generate_report(result))
    """

    def __init__(self, options: BoxplotOptions | None = None) -> None:
        self.options = options or BoxplotOptions()

    def compute(self, data: SampleLike) -> BoxplotResult:
        """Compute the statistics of one sample.

        Never raises for empty or all-missing input; those produce a result
        with NaN statistics.

        Args:
            data: Numeric sequence, numpy array or Series, may contain missing values

        Returns:
            Immutable BoxplotResult
        """
        quantiles = resolve_quantile_method(self.options.quantiles)
        classifier = WhiskerClassifier(self.options.whisker_config())

        sample = normalize_sample(data, valid_and_sorted=self.options.valid_and_sorted)

        if sample.valid == 0:
            logger.debug("No valid values in sample of %d entries", sample.count)
            return self._invalid_result(sample)

        triple = quantiles(sample.items, sample.valid)
        stats = describe(sample.items)
        bounds = classifier.classify(sample, triple)
        kde = build_kde(sample.items, bounds.iqr, stats.variance)

        logger.debug(
            "Boxplot of %d values: %d outliers, bandwidth %.6g",
            sample.valid,
            len(bounds.outlier),
            kde.bandwidth,
        )

        return BoxplotResult(
            min=sample.min,
            max=sample.max,
            mean=stats.mean,
            variance=stats.variance,
            median=triple.median,
            q1=triple.q1,
            q3=triple.q3,
            iqr=bounds.iqr,
            whisker_low=bounds.whisker_low,
            whisker_high=bounds.whisker_high,
            outlier=bounds.outlier,
            missing=sample.missing,
            count=sample.count,
            items=sample.items,
            kde=kde,
        )

    def compute_columns(self, frame: pd.DataFrame) -> Dict[str, BoxplotResult]:
        """Compute an independent summary for every column of ``frame``.

        Returns:
            Dict mapping column label (as string) to its BoxplotResult
        """
        labels = [str(column) for column in frame.columns]
        if len(set(labels)) != len(labels):
            duplicated = sorted({label for label in labels if labels.count(label) > 1})
            raise ValueError(f"Column labels must be unique, duplicated: {duplicated}")
        return {str(column): self.compute(series) for column, series in frame.items()}

    def _invalid_result(self, sample: CleanedSample) -> BoxplotResult:
        return BoxplotResult(
            min=math.nan,
            max=math.nan,
            mean=math.nan,
            variance=0.0,
            median=math.nan,
            q1=math.nan,
            q3=math.nan,
            iqr=math.nan,
            whisker_low=math.nan,
            whisker_high=math.nan,
            outlier=(),
            missing=sample.count,
            count=sample.count,
            items=sample.items,
            kde=KernelDensityEstimator.zero(),
        )

    def generate_report(self, result: BoxplotResult) -> str:
        """Generate human-readable summary of a boxplot result.

        Args:
            result: Result returned by :meth:`compute`

        Returns:
            Formatted report string
        """
        lines = [
            "=" * 70,
            "BOXPLOT SUMMARY",
            "=" * 70,
            "",
            f"📊 SAMPLE: {result.count} values ({result.valid} valid, {result.missing} missing)",
        ]

        if result.valid == 0:
            lines.append("   ❌ No valid values - statistics undefined")
            lines.append("")
            lines.append("=" * 70)
            return "\n".join(lines)

        lines.extend([
            "",
            f"{'Statistic':<16} {'Value':>14}",
            "-" * 70,
        ])
        for label, value in (
            ("Min", result.min),
            ("Whisker low", result.whisker_low),
            ("Q1", result.q1),
            ("Median", result.median),
            ("Q3", result.q3),
            ("Whisker high", result.whisker_high),
            ("Max", result.max),
            ("Mean", result.mean),
            ("Variance", result.variance),
            ("IQR", result.iqr),
        ):
            lines.append(f"{label:<16} {value:>14.4f}")

        lines.append("")
        lines.append(
            f"🔎 OUTLIERS ({len(result.outlier)}, coef={self.options.coef}, "
            f"whiskers={self.options.whiskers_mode}):"
        )
        if result.outlier:
            shown = ", ".join(f"{v:.4g}" for v in result.outlier[:20])
            suffix = ", ..." if len(result.outlier) > 20 else ""
            lines.append(f"   {shown}{suffix}")
        else:
            lines.append("   ✅ No outliers")

        lines.append("")
        lines.append(f"📈 KDE bandwidth: {result.kde.bandwidth:.4g}")
        lines.append("")
        lines.append("=" * 70)

        return "\n".join(lines)


def boxplot(data: SampleLike, options: BoxplotOptions | None = None, **overrides) -> BoxplotResult:
    """Compute boxplot statistics for ``data``.

    Keyword overrides are the :class:`BoxplotOptions` fields and are only
    accepted when ``options`` is not given, e.g. ``boxplot(values, coef=3)``.
    """
    if options is not None and overrides:
        raise TypeError("Pass either options or keyword overrides, not both")
    if options is None:
        options = BoxplotOptions(**overrides)
    return BoxplotEngine(options).compute(data)
