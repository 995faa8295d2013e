import math

import pytest

from core.config import EngineConfig, SimulationConfig
from distributions.sampler import SequenceUniformSource

# u = e^-0.5, v = 0.5 gives a Box–Muller deviate of exactly -1 (up to rounding)
MINUS_ONE_UNIFORMS = (math.exp(-0.5), 0.5)


@pytest.fixture
def default_config():
    """The calculator's starting scenario: 10k + 500/month for 25 years at 8%."""
    return SimulationConfig(
        initial_amount=10_000,
        monthly_contribution=500,
        years=25,
        annual_return_percent=8,
        inflation_rate_percent=3,
        expense_ratio_percent=0.1,
        market_temperature="Normal",
        stress_test_enabled=False,
    )


@pytest.fixture
def seeded_engine():
    return EngineConfig(n_trials=200, seed=2024)


@pytest.fixture
def minus_one_factory():
    """Every trial sees z = -1 in every year."""
    return lambda trial: SequenceUniformSource(MINUS_ONE_UNIFORMS, cycle=True)
