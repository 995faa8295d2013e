"""
Projection entry point.

    series, summary = project(config)

config → validation → run_simulation (N trials) → aggregate_yearly → compute_summary.

`view_as_real` only selects which pre-computed fields feed the summary; it
never changes the simulation. ProjectionResult.summarize() re-selects for the
other view without re-simulating.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from analytics.aggregator import YearlyAggregate, aggregate_yearly, aggregates_to_dataframe
from analytics.summary import SimulationSummary, compute_summary
from core.config import EngineConfig, SimulationConfig
from inputs.builder import build_config
from inputs.validators import ensure_valid

from .runner import UniformFactory, run_simulation

logger = logging.getLogger(__name__)

ConfigLike = Union[SimulationConfig, Mapping[str, Any]]


@dataclass(frozen=True, eq=False)
class ProjectionResult:
    config: SimulationConfig
    engine_config: EngineConfig
    series: Tuple[YearlyAggregate, ...]
    summary: SimulationSummary
    final_gross: np.ndarray

    def summarize(self, view_as_real: bool) -> SimulationSummary:
        """Summary for the requested display mode, from the stored samples."""
        if bool(view_as_real) == self.summary.view_as_real:
            return self.summary
        return compute_summary(
            self.series,
            self.final_gross,
            view_as_real=view_as_real,
            milestone=self.engine_config.milestone,
        )

    def to_dataframe(self) -> pd.DataFrame:
        return aggregates_to_dataframe(self.series)


def run_projection(
    config: ConfigLike,
    *,
    view_as_real: bool = False,
    engine_config: Optional[EngineConfig] = None,
    uniform_factory: Optional[UniformFactory] = None,
) -> ProjectionResult:
    """
    Run the full projection and keep everything needed to re-summarize.

    Parameters
    ----------
    config : SimulationConfig or mapping
        Investor inputs; mappings are parsed with inputs.build_config()
    view_as_real : bool
        Summary shows inflation-adjusted values
    engine_config : EngineConfig, optional
        Trial count, seed, volatility, milestone, workers
    uniform_factory : callable, optional
        trial_index -> uniform source, for fully scripted randomness

    Raises
    ------
    InvalidConfigurationError
        Before any simulation work, naming the offending field.
    """
    cfg = build_config(config)
    ensure_valid(cfg)
    ecfg = engine_config or EngineConfig()

    samples = run_simulation(cfg, ecfg, uniform_factory=uniform_factory)
    series = tuple(aggregate_yearly(samples, inflation_rate_percent=cfg.inflation_rate_percent))
    final_gross = samples.gross_for_year(samples.years).copy()

    summary = compute_summary(
        series,
        final_gross,
        view_as_real=view_as_real,
        milestone=ecfg.milestone,
    )
    logger.info(
        "Projection done: final median %s, principal %s, grind year %s",
        series[-1].median, summary.final_principal, summary.grind_year,
    )
    return ProjectionResult(
        config=cfg,
        engine_config=ecfg,
        series=series,
        summary=summary,
        final_gross=final_gross,
    )


def project(
    config: ConfigLike,
    *,
    view_as_real: bool = False,
    engine_config: Optional[EngineConfig] = None,
    uniform_factory: Optional[UniformFactory] = None,
) -> Tuple[Tuple[YearlyAggregate, ...], SimulationSummary]:
    """Project `config` and return (yearly series, summary)."""
    result = run_projection(
        config,
        view_as_real=view_as_real,
        engine_config=engine_config,
        uniform_factory=uniform_factory,
    )
    return result.series, result.summary
