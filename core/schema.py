from __future__ import annotations

from typing import Tuple

# Column order of the yearly projection table (one row per year, 0..years).
YEARLY_AGGREGATE_COLUMNS: Tuple[str, ...] = (
    "year",
    "pessimistic",
    "median",
    "optimistic",
    "pessimistic_real",
    "median_real",
    "optimistic_real",
    "cone_delta",
    "cone_delta_real",
    "total_principal",
    "inflation_rate_percent",
)
