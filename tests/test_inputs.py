import logging

import pytest
from pydantic import ValidationError

from core.config import MarketTemperature, SimulationConfig
from core.errors import InvalidConfigurationError
from inputs.builder import build_config
from inputs.validators import ensure_valid, validate_config


def test_build_from_camel_case_payload():
    config = build_config({
        "initialAmount": 1_000,
        "monthlyContribution": 50,
        "years": 10,
        "annualReturnPercent": 6,
        "inflationRatePercent": 2,
        "expenseRatioPercent": 0.5,
        "marketTemperature": "Low",
        "stressTestEnabled": True,
    })
    assert config.initial_amount == 1_000
    assert config.annual_contribution == 600
    assert config.market_temperature is MarketTemperature.LOW
    assert config.stress_test_enabled is True


def test_build_from_snake_case_uses_defaults():
    config = build_config({"initial_amount": 2_500, "years": 5})
    assert config.initial_amount == 2_500
    assert config.years == 5
    assert config.monthly_contribution == 500
    assert config.annual_return_percent == 8
    assert config.market_temperature is MarketTemperature.NORMAL


def test_config_instance_passes_through():
    config = SimulationConfig()
    assert build_config(config) is config


def test_temperature_is_case_insensitive():
    assert build_config({"marketTemperature": "HIGH"}).market_temperature is MarketTemperature.HIGH


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"years": 0}, "years"),
        ({"years": -3}, "years"),
        ({"years": 2.5}, "years"),
        ({"initialAmount": -1}, "initial_amount"),
        ({"monthly_contribution": -10}, "monthly_contribution"),
        ({"expenseRatioPercent": -0.5}, "expense_ratio_percent"),
        ({"inflationRatePercent": -1}, "inflation_rate_percent"),
        ({"marketTemperature": "Tepid"}, "market_temperature"),
        ({"initialAmount": float("nan")}, "initial_amount"),
        ({"riskAppetite": 3}, "riskAppetite"),
    ],
)
def test_invalid_payload_names_field(payload, field):
    with pytest.raises(InvalidConfigurationError) as excinfo:
        build_config(payload)
    assert excinfo.value.field == field
    assert isinstance(excinfo.value, ValueError)


def test_non_mapping_payload():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        build_config([("years", 3)])
    assert excinfo.value.field is None


def test_config_is_immutable():
    config = SimulationConfig()
    with pytest.raises(ValidationError):
        config.years = 5


def test_validate_catches_unvalidated_configs():
    result = validate_config(SimulationConfig.model_construct(years=0))
    assert not result.is_valid
    assert result.first_error.field == "years"

    result = validate_config(SimulationConfig.model_construct(market_temperature="Tepid"))
    assert [e.field for e in result.errors] == ["market_temperature"]

    result = validate_config(SimulationConfig.model_construct(initial_amount=float("inf")))
    assert result.first_error.field == "initial_amount"


def test_validate_reports_all_negative_fields():
    config = SimulationConfig.model_construct(initial_amount=-1, expense_ratio_percent=-2)
    fields = {e.field for e in validate_config(config).errors}
    assert fields == {"initial_amount", "expense_ratio_percent"}


def test_out_of_range_values_only_warn():
    result = validate_config(SimulationConfig(years=60, annual_return_percent=20))
    assert result.is_valid
    assert {w.field for w in result.warnings} == {"years", "annual_return_percent"}
    assert "WARNINGS (2)" in result.summary()


def test_clean_config_passes():
    result = validate_config(SimulationConfig())
    assert result.is_valid
    assert result.warnings == []
    assert "All checks passed" in result.summary()


def test_ensure_valid_raises_first_error():
    with pytest.raises(InvalidConfigurationError) as excinfo:
        ensure_valid(SimulationConfig.model_construct(years=0))
    assert excinfo.value.field == "years"


def test_ensure_valid_logs_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger="inputs.validators"):
        ensure_valid(SimulationConfig(expense_ratio_percent=5))
    assert "expense_ratio_percent" in caplog.text
