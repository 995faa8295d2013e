"""
Configuration checks before a configuration enters the engine.

Errors block the run:
- horizon shorter than one year
- negative amounts or fee
- negative inflation
- unknown market temperature
- non-finite numbers

Warnings are informational: values outside the ranges the calculator's inputs
offer (horizon up to 50 years, return 1-15%, fee up to 3%, inflation up to
15%, starting amount up to 500,000, monthly contribution up to 10,000).

pydantic already rejects most of these when a SimulationConfig is built;
validate_config() also covers configs created with model_construct().
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from core.config import MarketTemperature, SimulationConfig
from core.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

# field -> (low, high) of the calculator's input ranges
TYPICAL_RANGES = {
    "initial_amount": (0.0, 500_000.0),
    "monthly_contribution": (0.0, 10_000.0),
    "years": (1, 50),
    "annual_return_percent": (1.0, 15.0),
    "expense_ratio_percent": (0.0, 3.0),
    "inflation_rate_percent": (0.0, 15.0),
}

NON_NEGATIVE_FIELDS = (
    "initial_amount",
    "monthly_contribution",
    "expense_ratio_percent",
    "inflation_rate_percent",
)


@dataclass(frozen=True)
class ConfigIssue:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a configuration."""
    errors: List[ConfigIssue] = field(default_factory=list)
    warnings: List[ConfigIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def first_error(self) -> Optional[ConfigIssue]:
        return self.errors[0] if self.errors else None

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_config(config: SimulationConfig) -> ValidationResult:
    """
    Run all validation checks on a simulation configuration.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Numbers must be finite ---
    for name in TYPICAL_RANGES:
        value = getattr(config, name, None)
        try:
            finite = math.isfinite(float(value))
        except (TypeError, ValueError):
            finite = False
        if not finite:
            result.errors.append(ConfigIssue(name, f"must be a finite number, got {value!r}."))
    if result.errors:
        return result  # range checks need numbers

    # --- Horizon ---
    years = config.years
    if isinstance(years, bool) or int(years) != years:
        result.errors.append(ConfigIssue("years", f"must be a whole number, got {years!r}."))
    elif years < 1:
        result.errors.append(ConfigIssue("years", f"must be at least 1, got {years}."))

    # --- Amounts, fee, inflation ---
    for name in NON_NEGATIVE_FIELDS:
        value = getattr(config, name)
        if value < 0:
            result.errors.append(ConfigIssue(name, f"must not be negative, got {value}."))

    # --- Market temperature ---
    try:
        MarketTemperature(config.market_temperature)
    except ValueError:
        result.errors.append(
            ConfigIssue(
                "market_temperature",
                f"unrecognized value {config.market_temperature!r}; "
                f"expected one of {[m.value for m in MarketTemperature]}.",
            )
        )

    # --- Plausibility ---
    for name, (low, high) in TYPICAL_RANGES.items():
        value = getattr(config, name)
        if any(issue.field == name for issue in result.errors):
            continue
        if value < low or value > high:
            result.warnings.append(
                ConfigIssue(name, f"{value} is outside the typical range [{low}, {high}].")
            )

    return result


def ensure_valid(config: SimulationConfig) -> ValidationResult:
    """
    Validate and raise InvalidConfigurationError on the first blocking error.
    Warnings are logged and returned.
    """
    result = validate_config(config)
    if not result.is_valid:
        issue = result.first_error
        raise InvalidConfigurationError(issue.field, issue.message)
    for warning in result.warnings:
        logger.warning("Configuration warning: %s", warning)
    return result
