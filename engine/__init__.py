"""
Wealth projection engine: single-trial recurrence + Monte Carlo runner + entry point.
"""

from .trial import TrialTrajectory, principal_schedule, simulate_trial
from .runner import SimulationSamples, fold_trials, run_simulation
from .projection import ProjectionResult, project, run_projection

__all__ = [
    "TrialTrajectory",
    "principal_schedule",
    "simulate_trial",
    "SimulationSamples",
    "fold_trials",
    "run_simulation",
    "ProjectionResult",
    "project",
    "run_projection",
]
