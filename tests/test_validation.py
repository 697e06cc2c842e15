"""
Tests for model validation rules.
"""

import pytest

from winchdrum.calculator import compute
from winchdrum.calculator.validation import (
    validate_model,
    Severity,
    ValidationMessage,
    ValidationResult,
)


def _codes(result: ValidationResult):
    return {m.code for m in result.messages}


class TestValidationResult:

    def test_severity_filters(self):
        result = ValidationResult(valid=False, messages=[
            ValidationMessage(Severity.ERROR, "A", "a"),
            ValidationMessage(Severity.WARNING, "B", "b"),
            ValidationMessage(Severity.INFO, "C", "c"),
        ])
        assert [m.code for m in result.errors] == ["A"]
        assert [m.code for m in result.warnings] == ["B"]
        assert [m.code for m in result.infos] == ["C"]


class TestValidateModel:

    def test_valid_electric(self, electric_model):
        result = validate_model(electric_model)
        assert result.valid
        assert result.errors == []

    def test_valid_hydraulic(self, hydraulic_model):
        result = validate_model(hydraulic_model)
        assert result.valid, [m.message for m in result.errors]

    def test_capacity_exceeded(self, electric_config_dict):
        electric_config_dict["flange_diameter_in"] = 40.0
        result = validate_model(compute(electric_config_dict))
        assert not result.valid
        assert "CAPACITY_EXCEEDED" in {m.code for m in result.errors}

    def test_no_wraps(self, electric_config_dict):
        electric_config_dict["flange_to_flange_in"] = 0.5
        result = validate_model(compute(electric_config_dict))
        assert "NO_WRAPS" in {m.code for m in result.errors}
        assert "CAPACITY_EXCEEDED" not in _codes(result)

    def test_no_drivetrain(self, electric_config_dict):
        electric_config_dict["electric_enabled"] = False
        result = validate_model(compute(electric_config_dict))
        assert "NO_DRIVETRAIN" in {m.code for m in result.warnings}

    def test_electric_capacity(self, electric_config_dict):
        electric_config_dict["motor_max_torque_nm"] = 1.0
        result = validate_model(compute(electric_config_dict))
        assert "TENSION_EXCEEDS_ELECTRIC_CAPACITY" in {m.code for m in result.errors}

    def test_electric_capacity_skipped_without_max_torque(self, electric_config_dict):
        electric_config_dict["motor_max_torque_nm"] = None
        result = validate_model(compute(electric_config_dict))
        assert "TENSION_EXCEEDS_ELECTRIC_CAPACITY" not in _codes(result)

    def test_hydraulic_capacity_and_pressure(self, hydraulic_config_dict):
        hydraulic_config_dict["max_pressure_psi"] = 50
        result = validate_model(compute(hydraulic_config_dict))
        assert "TENSION_EXCEEDS_HYDRAULIC_CAPACITY" in {m.code for m in result.errors}
        assert "PRESSURE_EXCEEDS_MAX" in {m.code for m in result.warnings}

    def test_gearbox_rating(self, electric_config_dict):
        electric_config_dict["gearbox_max_torque_nm"] = 100.0
        result = validate_model(compute(electric_config_dict))
        assert "GEARBOX_TORQUE_EXCEEDED" in {m.code for m in result.warnings}

    def test_packing_factor_range(self, electric_config_dict):
        electric_config_dict["packing_factor"] = 0.5
        result = validate_model(compute(electric_config_dict))
        assert "PACKING_FACTOR_RANGE" in {m.code for m in result.warnings}

    def test_many_layers(self, electric_config_dict):
        electric_config_dict["flange_to_flange_in"] = 10.5
        result = validate_model(compute(electric_config_dict))
        assert "MANY_LAYERS" in {m.code for m in result.warnings}

    def test_defaulted_inputs_reported(self, electric_config_dict):
        electric_config_dict["gear_ratio_2"] = 0
        result = validate_model(compute(electric_config_dict))
        defaulted = [m for m in result.infos if m.code == "INPUT_DEFAULTED"]
        assert defaulted
        assert "gear_ratio_2" in defaulted[0].message

    def test_minimum_system_hp_info(self, electric_config_dict):
        electric_config_dict.update(rated_speed_mpm=60, rated_swl_kgf=1000)
        result = validate_model(compute(electric_config_dict))
        assert "MINIMUM_SYSTEM_HP" in {m.code for m in result.infos}
