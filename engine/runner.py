"""
Simulation runner: orchestrates independent Monte Carlo trials.

Each trial gets its own uniform stream (spawned from EngineConfig.seed, or
supplied per trial index by `uniform_factory`) wrapped in its own
NormalSampler. Trials share no mutable state, so they may run sequentially
or on a thread pool. Completed trajectories are folded, in trial order, into
trial × year sample matrices; that merge is the only synchronisation point.

Year 0 is filled from the principal schedule, not from the trials: every
trial starts from the same initial amount.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import numpy as np
import pandas as pd

from core.config import EngineConfig, SimulationConfig
from distributions.sampler import NormalSampler, UniformSource, spawn_uniform_sources
from markets.model import MarketReturnModel

from .trial import TrialTrajectory, principal_schedule, simulate_trial

logger = logging.getLogger(__name__)

UniformFactory = Callable[[int], UniformSource]


@dataclass(frozen=True)
class SimulationSamples:
    """
    Raw per-year samples across all trials.

    net, gross: shape (n_trials, years + 1); column y holds every trial's
                balance at the end of year y
    principal:  shape (years + 1,), identical for every trial
    """
    net: np.ndarray
    gross: np.ndarray
    principal: np.ndarray

    @property
    def n_trials(self) -> int:
        return self.net.shape[0]

    @property
    def years(self) -> int:
        return self.net.shape[1] - 1

    def net_for_year(self, year: int) -> np.ndarray:
        return self.net[:, year]

    def gross_for_year(self, year: int) -> np.ndarray:
        return self.gross[:, year]

    def to_dataframe(self) -> pd.DataFrame:
        """Long table: one row per (trial, year)."""
        n_trials, n_cols = self.net.shape
        return pd.DataFrame({
            "trial": np.repeat(np.arange(n_trials), n_cols),
            "year": np.tile(np.arange(n_cols), n_trials),
            "gross_balance": self.gross.reshape(-1),
            "net_balance": self.net.reshape(-1),
            "total_principal": np.tile(self.principal, n_trials),
        })


def fold_trials(
    trajectories: Iterable[TrialTrajectory],
    principal: np.ndarray,
) -> SimulationSamples:
    """Reduce completed trajectories into per-year sample matrices."""
    net_rows: List[np.ndarray] = []
    gross_rows: List[np.ndarray] = []
    for traj in trajectories:
        net_rows.append(traj.net)
        gross_rows.append(traj.gross)
    if not net_rows:
        raise ValueError("No trials to fold.")

    net = np.vstack(net_rows)
    gross = np.vstack(gross_rows)
    net[:, 0] = principal[0]
    gross[:, 0] = principal[0]
    return SimulationSamples(net=net, gross=gross, principal=principal)


def run_simulation(
    config: SimulationConfig,
    engine_config: Optional[EngineConfig] = None,
    *,
    uniform_factory: Optional[UniformFactory] = None,
) -> SimulationSamples:
    """
    Run engine_config.n_trials independent trials of `config`.

    Parameters
    ----------
    config : SimulationConfig
        Validated investor inputs
    engine_config : EngineConfig, optional
        Trial count, seed, volatility, workers. Defaults to EngineConfig().
    uniform_factory : callable, optional
        trial_index -> uniform source. Overrides the seeded default streams;
        used by tests to feed fixed sequences into specific trials.

    Returns
    -------
    SimulationSamples with net/gross matrices and the principal schedule.
    """
    ecfg = engine_config or EngineConfig()
    n_trials = ecfg.n_trials

    model = MarketReturnModel.from_config(config, volatility=ecfg.volatility)
    principal = principal_schedule(config)

    if uniform_factory is None:
        sources = spawn_uniform_sources(ecfg.seed, n_trials)
        uniform_factory = sources.__getitem__

    def _run_trial(trial: int) -> TrialTrajectory:
        return simulate_trial(config, model, NormalSampler(uniform_factory(trial)))

    logger.info(
        "Simulating %d trials over %d years (workers=%d, seed=%s)",
        n_trials, config.years, ecfg.n_workers, ecfg.seed,
    )

    if ecfg.n_workers > 1:
        # executor.map yields in submission order, so the fold is deterministic
        with ThreadPoolExecutor(max_workers=ecfg.n_workers) as executor:
            trajectories = list(executor.map(_run_trial, range(n_trials)))
    else:
        trajectories = [_run_trial(t) for t in range(n_trials)]

    samples = fold_trials(trajectories, principal)
    logger.debug(
        "Collected samples: net %s, gross %s",
        samples.net.shape, samples.gross.shape,
    )
    return samples
