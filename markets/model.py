"""
MarketReturnModel: one blended asset class with a fee drag.

For each trial and year:
  1. expected = annual_return_percent
  2. during the first TILT_YEARS years, tilt by market temperature
     (High: -3 points, bought at a peak; Low: +3 points, bought a dip)
  3. gross = expected / 100 + z * volatility
  4. stress test on and year == STRESS_YEAR: gross = STRESS_RETURN, whatever z was

Fees come out of the return before compounding:
    net = gross - expense_ratio_percent / 100
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import (
    ANNUAL_VOLATILITY,
    STRESS_RETURN,
    STRESS_YEAR,
    TILT_YEARS,
    MarketTemperature,
    SimulationConfig,
)

from .base import ReturnModel


@dataclass(frozen=True)
class MarketReturnModel(ReturnModel):
    annual_return_percent: float = 8.0
    expense_ratio_percent: float = 0.0
    market_temperature: MarketTemperature = MarketTemperature.NORMAL
    stress_test_enabled: bool = False
    volatility: float = ANNUAL_VOLATILITY

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        *,
        volatility: float = ANNUAL_VOLATILITY,
    ) -> "MarketReturnModel":
        return cls(
            annual_return_percent=float(config.annual_return_percent),
            expense_ratio_percent=float(config.expense_ratio_percent),
            market_temperature=MarketTemperature(config.market_temperature),
            stress_test_enabled=bool(config.stress_test_enabled),
            volatility=float(volatility),
        )

    @property
    def fee(self) -> float:
        return self.expense_ratio_percent / 100.0

    def expected_return(self, year: int) -> float:
        """Tilted expected return for a year, as a fraction."""
        _check_year(year)
        percent = self.annual_return_percent
        if year <= TILT_YEARS:
            percent += self.market_temperature.tilt_percent
        return percent / 100.0

    def is_stress_year(self, year: int) -> bool:
        return self.stress_test_enabled and year == STRESS_YEAR

    def gross_return(self, year: int, z: float) -> float:
        if self.is_stress_year(year):
            return STRESS_RETURN
        return self.expected_return(year) + z * self.volatility

    def net_return(self, gross: float) -> float:
        return gross - self.fee


def _check_year(year: int) -> None:
    if year < 1:
        raise ValueError(f"Return years are 1-based; got year={year}.")
