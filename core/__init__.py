"""
Core package: configuration, errors, column schema, and shared numeric helpers.
No simulation logic lives here.
"""

from .schema import YEARLY_AGGREGATE_COLUMNS
from .config import EngineConfig, MarketTemperature, SimulationConfig
from .errors import InvalidConfigurationError, ProjectionError, SamplingError
from .utils import discount_factor, nearest_rank_index, round_currency

__all__ = [
    "YEARLY_AGGREGATE_COLUMNS",
    "EngineConfig",
    "MarketTemperature",
    "SimulationConfig",
    "InvalidConfigurationError",
    "ProjectionError",
    "SamplingError",
    "discount_factor",
    "nearest_rank_index",
    "round_currency",
]
