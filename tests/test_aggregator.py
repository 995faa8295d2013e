import numpy as np
import pytest

from analytics.aggregator import (
    YearlyAggregate,
    aggregate_year,
    aggregate_yearly,
    aggregates_to_dataframe,
    band_values,
)
from core.schema import YEARLY_AGGREGATE_COLUMNS
from core.utils import nearest_rank_index, round_currency
from engine.runner import SimulationSamples


def _samples(n=500):
    rng = np.random.default_rng(0)
    year_one = rng.permutation(np.arange(n, dtype=float))
    net = np.column_stack([np.full(n, 1000.0), year_one])
    return SimulationSamples(net=net, gross=net.copy(), principal=np.array([1000.0, 2200.0]))


@pytest.mark.parametrize(
    "n, q, expected",
    [(500, 0.1, 50), (500, 0.5, 250), (500, 0.9, 450), (10, 0.9, 9), (1, 0.9, 0), (3, 0.5, 1)],
)
def test_nearest_rank_index(n, q, expected):
    assert nearest_rank_index(n, q) == expected


def test_nearest_rank_index_empty():
    with pytest.raises(ValueError):
        nearest_rank_index(0, 0.5)


@pytest.mark.parametrize(
    "value, expected",
    [(2.5, 3), (-2.5, -2), (-2.6, -3), (2.4999, 2), (-0.4, 0), (0.0, 0), (-0.0, 0)],
)
def test_round_currency_halves_round_up(value, expected):
    assert round_currency(value) == expected


def test_band_values_sort_unordered_input():
    values = np.array([9.0, 1.0, 5.0, 3.0, 7.0, 0.0, 2.0, 8.0, 4.0, 6.0])
    assert band_values(values) == (1.0, 5.0, 9.0)


def test_nearest_rank_picks_for_500_trials():
    series = aggregate_yearly(_samples(), inflation_rate_percent=0)
    year_one = series[1]
    assert (year_one.pessimistic, year_one.median, year_one.optimistic) == (50, 250, 450)
    assert year_one.cone_delta == 400
    assert year_one.median_real == year_one.median


def test_real_values_are_discounted_then_rounded():
    series = aggregate_yearly(_samples(), inflation_rate_percent=10)
    year_one = series[1]
    assert year_one.pessimistic_real == 45   # 50 / 1.1
    assert year_one.median_real == 227      # 250 / 1.1
    assert year_one.optimistic_real == 409  # 450 / 1.1
    assert year_one.cone_delta_real == 364  # 400 / 1.1
    assert year_one.total_principal == 2200.0
    assert year_one.inflation_rate_percent == 10.0


def test_year_zero_has_no_spread():
    year_zero = aggregate_yearly(_samples(), inflation_rate_percent=3)[0]
    assert year_zero.year == 0
    assert year_zero.pessimistic == year_zero.median == year_zero.optimistic == 1000
    assert year_zero.pessimistic_real == year_zero.optimistic_real == 1000
    assert year_zero.cone_delta == 0
    assert year_zero.cone_delta_real == 0


def test_aggregate_year_orders_bands():
    rng = np.random.default_rng(42)
    row = aggregate_year(
        7,
        rng.lognormal(mean=11, sigma=0.6, size=500),
        total_principal=50_000,
        inflation_rate_percent=4,
    )
    assert isinstance(row, YearlyAggregate)
    assert row.pessimistic <= row.median <= row.optimistic
    assert row.pessimistic_real <= row.median_real <= row.optimistic_real


def test_aggregates_to_dataframe():
    series = aggregate_yearly(_samples(), inflation_rate_percent=3)
    df = aggregates_to_dataframe(series)
    assert list(df.columns) == list(YEARLY_AGGREGATE_COLUMNS)
    assert len(df) == 2
    assert df["median"].tolist() == [1000, 250]
