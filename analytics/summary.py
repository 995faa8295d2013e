"""
Headline numbers derived from the projection series.

  final_balance   final-year median, nominal or real depending on view_as_real
  final_principal cumulative contributions by the final year
  total_growth    final_balance - final_principal
  lost_to_fees    median gross - median net at the final year (optionally
                  discounted for inflation)
  grind_year      first year whose nominal median reaches the milestone
                  (100,000 by default), or None
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from core.config import GRIND_MILESTONE, MEDIAN_QUANTILE
from core.utils import discount_factor

from .aggregator import YearlyAggregate, band_values


@dataclass(frozen=True)
class SimulationSummary:
    final_balance: float
    final_principal: float
    total_growth: float

    lost_to_fees: float
    lost_to_fees_nominal: float
    lost_to_fees_real: float

    grind_year: Optional[int]
    # share of the horizon spent before the grind year (1.0 when never reached)
    grind_fraction: float

    view_as_real: bool

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {"Metric": "Final Balance", "Value": self.final_balance},
            {"Metric": "Total Invested", "Value": self.final_principal},
            {"Metric": "Real Growth" if self.view_as_real else "Interest Earned",
             "Value": self.total_growth},
            {"Metric": "Lost to Fees", "Value": self.lost_to_fees},
            {"Metric": "Grind Year",
             "Value": self.grind_year if self.grind_year is not None else "none"},
        ]
        return pd.DataFrame(rows)


def find_grind_year(
    series: Sequence[YearlyAggregate],
    milestone: float = GRIND_MILESTONE,
) -> Optional[int]:
    """First year (scanning from year 0) whose unrounded nominal median is >= milestone."""
    for row in series:
        if row.median_unrounded >= milestone:
            return row.year
    return None


def grind_fraction(grind_year: Optional[int], years: int) -> float:
    if grind_year is None:
        return 1.0
    if grind_year == 0 or years <= 0:
        return 0.0
    return grind_year / years


def compute_summary(
    series: Sequence[YearlyAggregate],
    final_gross_samples: np.ndarray,
    *,
    view_as_real: bool = False,
    milestone: float = GRIND_MILESTONE,
) -> SimulationSummary:
    """
    Build the summary from the yearly series and final-year gross samples.

    Parameters
    ----------
    series : sequence of YearlyAggregate
        Ordered by year, as produced by aggregate_yearly()
    final_gross_samples : np.ndarray
        Gross (fee-free) balances of every trial at the final year
    view_as_real : bool
        Select inflation-adjusted values instead of nominal ones
    milestone : float
        Wealth level defining the grind year
    """
    if len(series) == 0:
        raise ValueError("No yearly aggregates to summarize.")
    gross = np.asarray(final_gross_samples, dtype=float)
    if gross.size == 0:
        raise ValueError("No final-year gross samples to summarize.")

    final = series[-1]
    (median_gross,) = band_values(gross, (MEDIAN_QUANTILE,))

    lost_nominal = median_gross - final.median
    lost_real = lost_nominal / discount_factor(final.inflation_rate_percent, final.year)

    final_balance = float(final.median_real if view_as_real else final.median)
    grind = find_grind_year(series, milestone)

    return SimulationSummary(
        final_balance=final_balance,
        final_principal=final.total_principal,
        total_growth=final_balance - final.total_principal,
        lost_to_fees=lost_real if view_as_real else lost_nominal,
        lost_to_fees_nominal=lost_nominal,
        lost_to_fees_real=lost_real,
        grind_year=grind,
        grind_fraction=grind_fraction(grind, final.year),
        view_as_real=bool(view_as_real),
    )
