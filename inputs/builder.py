"""
Build a SimulationConfig from a plain mapping (e.g. a presentation-layer payload).

Keys may be snake_case or the camelCase aliases
(initialAmount, monthlyContribution, years, annualReturnPercent,
inflationRatePercent, expenseRatioPercent, marketTemperature, stressTestEnabled).
Missing keys fall back to the SimulationConfig defaults.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from core.config import SimulationConfig
from core.errors import InvalidConfigurationError


def _field_name(loc_head: Any) -> Optional[str]:
    """Map a pydantic error location back to the snake_case field name."""
    if loc_head is None:
        return None
    name = str(loc_head)
    if name in SimulationConfig.model_fields:
        return name
    for field_name, info in SimulationConfig.model_fields.items():
        if info.alias == name:
            return field_name
    return name


def build_config(payload: Union[SimulationConfig, Mapping[str, Any]]) -> SimulationConfig:
    """
    Parse and validate `payload` into a SimulationConfig.

    Raises InvalidConfigurationError naming the first offending field.
    """
    if isinstance(payload, SimulationConfig):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidConfigurationError(
            None, f"expected a mapping of configuration values, got {type(payload).__name__}."
        )
    try:
        return SimulationConfig.model_validate(dict(payload))
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or (None,)
        raise InvalidConfigurationError(_field_name(loc[0]), first.get("msg", str(exc))) from exc
