"""Tests for whisker and outlier classification."""
import numpy as np
import pytest

from boxplot_stats.analysis import WhiskerClassifier, WhiskerConfig
from boxplot_stats.data.models import QuantileTriple
from boxplot_stats.preprocessing import clean_sample
from boxplot_stats.quantiles import QUANTILE_METHODS, quantiles_type7


def classify(values, config=None, quantiles=None):
    sample = clean_sample(values)
    triple = quantiles or quantiles_type7(sample.items)
    return WhiskerClassifier(config).classify(sample, triple)


class TestWhiskerClassifier:
    """Test suite for WhiskerClassifier."""

    @pytest.fixture
    def with_outlier(self):
        """1..8 plus a far high value."""
        return list(range(1, 9)) + [100]

    def test_no_outliers(self):
        """Fences beyond the data clip to min/max."""
        bounds = classify(range(1, 10))

        assert bounds.iqr == 4.0
        assert bounds.whisker_low == 1.0
        assert bounds.whisker_high == 9.0
        assert bounds.outlier == ()

    def test_high_outlier(self, with_outlier):
        """100 lies beyond q3 + 1.5 * IQR = 13."""
        bounds = classify(with_outlier)

        assert bounds.outlier == (100.0,)
        assert bounds.whisker_high == 8.0
        assert bounds.whisker_low == 1.0

    def test_exact_mode_uses_fence(self, with_outlier):
        """Exact whiskers are the fence values, not sample values."""
        bounds = classify(with_outlier, WhiskerConfig(whiskers_mode="exact"))

        assert bounds.whisker_high == pytest.approx(13.0)
        assert bounds.whisker_low == 1.0
        assert bounds.outlier == (100.0,)

    def test_exact_mode_low_fence(self):
        """A real low outlier leaves the low whisker at q1 - 1.5 * IQR."""
        values = [-50] + list(range(1, 10))

        bounds = classify(values, WhiskerConfig(whiskers_mode="exact"))

        # q1 = 2.25, q3 = 6.75, iqr = 4.5
        assert bounds.iqr == pytest.approx(4.5)
        assert bounds.whisker_low == pytest.approx(2.25 - 1.5 * 4.5)
        assert bounds.whisker_low not in values
        assert bounds.whisker_high == 9.0
        assert bounds.outlier == (-50.0,)

    def test_non_positive_coef_disables_fences(self, with_outlier):
        """coef <= 0 falls back to min/max whiskers."""
        for coef in (0, -1.0):
            bounds = classify(with_outlier, WhiskerConfig(coef=coef))

            assert bounds.whisker_low == 1.0
            assert bounds.whisker_high == 100.0
            assert bounds.outlier == ()

    def test_larger_coef_widens_fences(self):
        """With coef=30 even 100 is inside the fence."""
        bounds = classify(list(range(1, 9)) + [100], WhiskerConfig(coef=30))

        assert bounds.outlier == ()
        assert bounds.whisker_high == 100.0

    def test_outliers_on_both_sides_are_deduplicated(self):
        """Repeated outliers are reported once, low side first."""
        values = [100, -50, -50] + list(range(1, 10)) + [100]

        bounds = classify(values)

        assert bounds.outlier == (-50.0, 100.0)
        assert bounds.whisker_low == 1.0
        assert bounds.whisker_high == 9.0

    def test_near_duplicate_outliers_within_eps(self):
        """Outliers closer than eps to the previous one are skipped."""
        values = [-50.0, -49.995] + list(range(1, 10))

        assert classify(values).outlier == (-50.0,)
        assert classify(values, WhiskerConfig(eps=1e-3)).outlier == (-50.0, -49.995)

    def test_value_at_fence_within_eps_is_whisker(self):
        """0.995 sits 0.005 below the fence at 1.0 and counts as inside."""
        quartiles = QuantileTriple(q1=2.0, median=3.0, q3=4.0)
        values = [0.995, 2.0, 3.0, 4.0, 5.0]

        bounds = classify(values, WhiskerConfig(coef=0.5), quartiles)

        assert bounds.outlier == ()
        assert bounds.whisker_low == 0.995
        assert bounds.whisker_high == 5.0

    def test_value_at_fence_outside_tight_eps(self):
        """With a tighter tolerance the same value is an outlier."""
        quartiles = QuantileTriple(q1=2.0, median=3.0, q3=4.0)
        values = [0.995, 2.0, 3.0, 4.0, 5.0]

        bounds = classify(values, WhiskerConfig(coef=0.5, eps=1e-3), quartiles)

        assert bounds.outlier == (0.995,)
        assert bounds.whisker_low == 2.0

    def test_single_value(self):
        """Everything collapses to the single value."""
        bounds = classify([5.0])

        assert bounds.iqr == 0.0
        assert bounds.whisker_low == 5.0
        assert bounds.whisker_high == 5.0
        assert bounds.outlier == ()

    def test_overlapping_scans_do_not_repeat_last_low_outlier(self):
        """A crossed estimator makes both scans see 3; it is reported once."""
        quartiles = QuantileTriple(q1=3.0, median=2.0, q3=1.0)

        bounds = classify([1.0, 2.0, 3.0], quantiles=quartiles)

        assert bounds.outlier[:3] == (1.0, 2.0, 3.0)
        assert bounds.outlier.count(3.0) == 1

    def test_invalid_mode(self):
        with pytest.raises(ValueError, match="Unknown whiskers mode"):
            WhiskerConfig(whiskers_mode="tukey")

    def test_default_config(self):
        classifier = WhiskerClassifier()

        assert classifier.config.coef == 1.5
        assert classifier.config.eps == 1e-2
        assert classifier.config.whiskers_mode == "nearest"


class TestWhiskerProperties:
    """Invariants on random heavy-tailed samples."""

    @pytest.fixture
    def samples(self):
        np.random.seed(42)
        return [np.random.standard_t(df=2, size=60) * 10 for _ in range(20)]

    @pytest.mark.parametrize("name", sorted(QUANTILE_METHODS))
    @pytest.mark.parametrize("mode", ["nearest", "exact"])
    def test_whiskers_bracket_median_and_exclude_outliers(self, samples, name, mode):
        """whisker_low <= median <= whisker_high and outliers lie outside."""
        config = WhiskerConfig(whiskers_mode=mode)
        for values in samples:
            sample = clean_sample(values)
            triple = QUANTILE_METHODS[name](sample.items)
            bounds = WhiskerClassifier(config).classify(sample, triple)

            assert bounds.whisker_low <= triple.median <= bounds.whisker_high
            for v in bounds.outlier:
                assert v < bounds.whisker_low or v > bounds.whisker_high
            assert list(bounds.outlier) == sorted(bounds.outlier)
