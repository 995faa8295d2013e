"""
Analytics: percentile cone per year, inflation adjustment, and headline summary.
"""

from .aggregator import YearlyAggregate, aggregate_yearly, aggregates_to_dataframe
from .summary import SimulationSummary, compute_summary, find_grind_year

__all__ = [
    "YearlyAggregate",
    "aggregate_yearly",
    "aggregates_to_dataframe",
    "SimulationSummary",
    "compute_summary",
    "find_grind_year",
]
