"""Example: Boxplot statistics, outliers and density for a skewed sample.

This example demonstrates how to:
1. Compute the five-number summary of data with missing values
2. Compare quantile methods and whisker modes
3. Sample the kernel density estimate for a violin outline
4. Summarise several columns of a DataFrame

Run with:
    python examples/boxplot_example.py
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
import pandas as pd

from boxplot_stats import BoxplotEngine, BoxplotOptions, boxplot
from boxplot_stats.analysis import density_grid


def main():
    """Run boxplot example."""
    print("=" * 70)
    print("BOXPLOT STATS - EXAMPLE")
    print("=" * 70)
    print()

    rng = np.random.default_rng(7)
    values = rng.lognormal(mean=0.0, sigma=0.8, size=500)
    values[rng.random(500) < 0.05] = np.nan

    # =========================================================================
    # STEP 1: Default summary
    # =========================================================================
    print("📋 Step 1: Default options (type 7 quartiles, coef=1.5)...")
    engine = BoxplotEngine()
    result = engine.compute(values)
    print(engine.generate_report(result))
    print()

    # =========================================================================
    # STEP 2: Other quantile methods and whisker modes
    # =========================================================================
    print("📋 Step 2: Comparing quantile methods...")
    for method in ("type7", "fivenum", "lower", "higher", "midpoint"):
        other = boxplot(values, quantiles=method)
        print(f"   {method:<10} q1={other.q1:.4f} median={other.median:.4f} q3={other.q3:.4f}")

    exact = BoxplotEngine(BoxplotOptions(whiskers_mode="exact")).compute(values)
    print(f"   exact whiskers: [{exact.whisker_low:.4f}, {exact.whisker_high:.4f}]")
    print()

    # =========================================================================
    # STEP 3: Density outline
    # =========================================================================
    print("📋 Step 3: Sampling the density estimate...")
    xs, ys = density_grid(result.kde, result.min, result.max, steps=10)
    for x, y in zip(xs, ys):
        print(f"   f({x:7.3f}) = {y:.4f} {'#' * int(y * 60)}")
    print()

    # =========================================================================
    # STEP 4: Several columns at once
    # =========================================================================
    print("📋 Step 4: Per-column summaries...")
    frame = pd.DataFrame({
        "normal": rng.normal(10, 2, size=200),
        "uniform": rng.uniform(0, 20, size=200),
    })
    for column, summary in engine.compute_columns(frame).items():
        print(f"   {column:<8} {summary.to_dict()}")

    print()
    print("✅ Done")


if __name__ == "__main__":
    main()
