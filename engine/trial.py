"""
Single-trial wealth recurrence.

One trial walks year 0..years:

    year 0:  gross = net = initial_amount
    year t:  gross = gross * (1 + g_t)         + monthly_contribution * 12
             net   = net   * (1 + g_t - fee)   + monthly_contribution * 12

where g_t is the trial's gross return for year t from the return model.
A normal deviate is consumed every year, including a stress year whose return
is overridden, so switching the stress test on does not shift later draws.

Principal does not depend on returns at all, so it is not part of a trial:
principal_schedule() computes it once per run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from core.config import SimulationConfig
from markets.base import ReturnModel


@dataclass(frozen=True)
class TrialTrajectory:
    """
    One simulated trial. Arrays are indexed by year.

    gross, net: shape (years + 1,), balances at the end of each year
    returns:    shape (years,), gross return realised in years 1..years
    """
    gross: np.ndarray
    net: np.ndarray
    returns: np.ndarray

    @property
    def years(self) -> int:
        return len(self.returns)


def principal_schedule(config: SimulationConfig) -> np.ndarray:
    """Cumulative contributed principal for years 0..years: initial + monthly*12*year."""
    years = np.arange(config.years + 1, dtype=float)
    return float(config.initial_amount) + config.annual_contribution * years


def simulate_trial(
    config: SimulationConfig,
    model: ReturnModel,
    normals: Iterator[float],
) -> TrialTrajectory:
    """Run one trial, drawing one normal deviate per year from `normals`."""
    n_years = int(config.years)
    contribution = config.annual_contribution

    gross = np.empty(n_years + 1, dtype=float)
    net = np.empty(n_years + 1, dtype=float)
    returns = np.empty(n_years, dtype=float)

    gross_bal = float(config.initial_amount)
    net_bal = float(config.initial_amount)
    gross[0] = gross_bal
    net[0] = net_bal

    for year in range(1, n_years + 1):
        g = model.gross_return(year, next(normals))
        gross_bal = gross_bal * (1.0 + g) + contribution
        net_bal = net_bal * (1.0 + model.net_return(g)) + contribution

        gross[year] = gross_bal
        net[year] = net_bal
        returns[year - 1] = g

    return TrialTrajectory(gross=gross, net=net, returns=returns)
