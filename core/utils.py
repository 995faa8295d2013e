from __future__ import annotations

import math


def round_currency(value: float) -> int:
    """
    Round a currency amount to the nearest whole unit.

    Halves round up (toward +inf), so -2.5 becomes -2 and 2.5 becomes 3.
    """
    return int(math.floor(value + 0.5))


def nearest_rank_index(n: int, quantile: float) -> int:
    """
    Zero-based index of the nearest-rank quantile in a sorted sample of size n.

    floor(n * q), clamped to the last element. No interpolation:
    n=500 gives 50, 250, 450 for q=0.1, 0.5, 0.9.
    """
    if n < 1:
        raise ValueError("Cannot take a quantile of an empty sample.")
    return min(int(math.floor(n * quantile)), n - 1)


def discount_factor(inflation_rate_percent: float, year: int) -> float:
    """Cumulative inflation (1 + i)^year used to convert nominal to real values."""
    return (1.0 + inflation_rate_percent / 100.0) ** year
