"""
Aggregate per-year trial samples into the projection cone.

For every year 0..years:
  - sort the net balances of all trials
  - pessimistic / median / optimistic = nearest-rank picks at
    floor(n*0.1), floor(n*0.5), floor(n*0.9)   (n=500 -> 50, 250, 450)
  - real values = nominal / (1 + inflation)^year
  - cone delta = optimistic - pessimistic, nominal and real
  - currency outputs rounded to whole units

Nearest-rank picks are used instead of interpolated percentiles so that the
summary (which also reads these picks) stays reproducible.
Years are independent of each other; no cross-year ordering is needed.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, List, Sequence, Tuple

import numpy as np
import pandas as pd

from core.config import BAND_QUANTILES
from core.schema import YEARLY_AGGREGATE_COLUMNS
from core.utils import discount_factor, nearest_rank_index, round_currency

if TYPE_CHECKING:
    from engine.runner import SimulationSamples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearlyAggregate:
    """One row of the projection: the cone for a single year."""
    year: int

    # nominal net balances
    pessimistic: int
    median: int
    optimistic: int

    # inflation-adjusted
    pessimistic_real: int
    median_real: int
    optimistic_real: int

    cone_delta: int
    cone_delta_real: int

    total_principal: float
    inflation_rate_percent: float

    # nominal median before rounding; the milestone is checked against this
    median_unrounded: float


def band_values(
    samples: np.ndarray,
    quantiles: Tuple[float, ...] = BAND_QUANTILES,
) -> Tuple[float, ...]:
    """Nearest-rank values of `samples` at each quantile (unrounded)."""
    ordered = np.sort(np.asarray(samples, dtype=float))
    n = len(ordered)
    return tuple(float(ordered[nearest_rank_index(n, q)]) for q in quantiles)


def aggregate_year(
    year: int,
    net_samples: np.ndarray,
    *,
    total_principal: float,
    inflation_rate_percent: float,
) -> YearlyAggregate:
    pessimistic, median, optimistic = band_values(net_samples)
    factor = discount_factor(inflation_rate_percent, year)
    spread = optimistic - pessimistic

    return YearlyAggregate(
        year=int(year),
        pessimistic=round_currency(pessimistic),
        median=round_currency(median),
        optimistic=round_currency(optimistic),
        pessimistic_real=round_currency(pessimistic / factor),
        median_real=round_currency(median / factor),
        optimistic_real=round_currency(optimistic / factor),
        cone_delta=round_currency(spread),
        cone_delta_real=round_currency(spread / factor),
        total_principal=float(total_principal),
        inflation_rate_percent=float(inflation_rate_percent),
        median_unrounded=float(median),
    )


def aggregate_yearly(
    samples: SimulationSamples,
    *,
    inflation_rate_percent: float,
) -> List[YearlyAggregate]:
    """
    Reduce trial samples into one YearlyAggregate per year.

    Parameters
    ----------
    samples : SimulationSamples
        Output of engine.runner.run_simulation()
    inflation_rate_percent : float
        Annual inflation in whole percent (3 means 3%)

    Returns
    -------
    List of YearlyAggregate ordered by year, 0..years.
    """
    series = [
        aggregate_year(
            year,
            samples.net_for_year(year),
            total_principal=samples.principal[year],
            inflation_rate_percent=inflation_rate_percent,
        )
        for year in range(samples.years + 1)
    ]
    logger.debug(
        "Aggregated %d years from %d trials; final median %s",
        len(series), samples.n_trials, series[-1].median,
    )
    return series


def aggregates_to_dataframe(series: Sequence[YearlyAggregate]) -> pd.DataFrame:
    """Projection table with one row per year."""
    return pd.DataFrame([asdict(row) for row in series], columns=list(YEARLY_AGGREGATE_COLUMNS))
