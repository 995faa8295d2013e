"""
Projection configuration.

SimulationConfig holds what the investor controls (amounts, horizon, rates,
scenario switches). EngineConfig holds how the Monte Carlo engine runs
(trial count, seed, volatility, milestone, workers).
Percentages are whole percent everywhere: 8 means 8%.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Engine constants. Tests are calibrated against these defaults.
DEFAULT_TRIALS: int = 500
ANNUAL_VOLATILITY: float = 0.15
GRIND_MILESTONE: float = 100_000.0

# Market temperature tilts the expected return for the first few years
TEMPERATURE_TILT_PERCENT: float = 3.0
TILT_YEARS: int = 5

# Stress test: a fixed single-year loss
STRESS_YEAR: int = 5
STRESS_RETURN: float = -0.30

# Nearest-rank quantiles for the cone
PESSIMISTIC_QUANTILE: float = 0.1
MEDIAN_QUANTILE: float = 0.5
OPTIMISTIC_QUANTILE: float = 0.9
BAND_QUANTILES: Tuple[float, float, float] = (
    PESSIMISTIC_QUANTILE,
    MEDIAN_QUANTILE,
    OPTIMISTIC_QUANTILE,
)

MAX_UNIFORM_RETRIES: int = 64


class MarketTemperature(str, Enum):
    """Where the market sits when investing starts."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"

    @property
    def tilt_percent(self) -> float:
        """Expected-return tilt (percentage points) applied during the tilt years."""
        if self is MarketTemperature.HIGH:
            return -TEMPERATURE_TILT_PERCENT
        if self is MarketTemperature.LOW:
            return TEMPERATURE_TILT_PERCENT
        return 0.0


class SimulationConfig(BaseModel):
    """
    Investor inputs for one projection.

    Accepts snake_case field names or the camelCase aliases used by the
    presentation layer (initialAmount, monthlyContribution, ...).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        allow_inf_nan=False,
    )

    initial_amount: float = Field(10_000.0, ge=0)
    monthly_contribution: float = Field(500.0, ge=0)
    years: int = Field(25, ge=1)
    annual_return_percent: float = 8.0
    inflation_rate_percent: float = Field(3.0, ge=0)
    expense_ratio_percent: float = Field(0.1, ge=0)
    market_temperature: MarketTemperature = MarketTemperature.NORMAL
    stress_test_enabled: bool = False

    @field_validator("market_temperature", mode="before")
    @classmethod
    def _normalize_temperature(cls, value):
        if isinstance(value, str) and not isinstance(value, MarketTemperature):
            for member in MarketTemperature:
                if member.value.lower() == value.strip().lower():
                    return member
        return value

    @property
    def annual_contribution(self) -> float:
        return self.monthly_contribution * 12.0


@dataclass(frozen=True)
class EngineConfig:
    n_trials: int = DEFAULT_TRIALS
    seed: Optional[int] = None

    # return model
    volatility: float = ANNUAL_VOLATILITY

    # summary milestone ("grind" line)
    milestone: float = GRIND_MILESTONE

    # >1 runs trials on a thread pool; output is identical to sequential runs
    n_workers: int = 1

    def __post_init__(self):
        if self.n_trials < 1:
            raise ValueError("n_trials must be at least 1")
        if self.n_workers < 1:
            raise ValueError("n_workers must be at least 1")
        if not math.isfinite(self.volatility) or self.volatility < 0:
            raise ValueError("volatility must be a non-negative finite number")
