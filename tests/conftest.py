"""
Pytest configuration and shared fixtures for winchdrum tests.
"""

import pytest

from winchdrum.io import Configuration
from winchdrum.calculator import compute


# ─── Raw configuration dicts ─────────────────────────────────────────────


def _base_config() -> dict:
    """1 in cable on a 30 in core, 40 wraps per layer, 1000 m of cable."""
    return {
        "cable_diameter_mm": 25.4,
        "operating_depth_m": 1000.0,
        "dead_end_m": 0.0,
        "core_diameter_in": 30.0,
        "flange_diameter_in": None,
        "flange_to_flange_in": 40.5,
        "lebus_thickness_in": 0.0,
        "packing_factor": 0.877,
        "payload_kg": 500.0,
        "cable_weight_kgpm": 1.2,
        "gear_ratio_1": 10.0,
        "gear_ratio_2": 5.0,
        "motor_count": 2,
    }


def _electric_fields() -> dict:
    return {
        "electric_enabled": True,
        "hydraulic_enabled": False,
        "motor_max_rpm": 1800.0,
        "motor_power_hp": 100.0,
        "motor_efficiency": 0.9,
        "motor_max_torque_nm": 500.0,
        "gearbox_max_torque_nm": 100000.0,
    }


def _hydraulic_fields() -> dict:
    return {
        "electric_enabled": False,
        "hydraulic_enabled": True,
        "pump_strings": 2,
        "pump_motor_power_hp": 150.0,
        "pump_motor_efficiency": 0.9,
        "pump_motor_rpm": 1800.0,
        "pump_displacement_cc": 100.0,
        "max_pressure_psi": 3000.0,
        "hyd_motor_displacement_cc": 500.0,
        "hyd_motor_max_rpm": 2500.0,
    }


@pytest.fixture
def base_config_dict():
    """Geometry/load/gearing fields only (fresh dict per test)."""
    return _base_config()


@pytest.fixture
def electric_config_dict():
    """Electric-drivetrain request body (fresh dict per test)."""
    return {**_base_config(), **_electric_fields()}


@pytest.fixture
def hydraulic_config_dict():
    """Hydraulic-drivetrain request body (fresh dict per test)."""
    return {**_base_config(), **_hydraulic_fields()}


# ─── Typed configurations ────────────────────────────────────────────────


@pytest.fixture
def electric_config(electric_config_dict):
    return Configuration.model_validate(electric_config_dict)


@pytest.fixture
def hydraulic_config(hydraulic_config_dict):
    return Configuration.model_validate(hydraulic_config_dict)


@pytest.fixture
def both_config():
    """Electric and hydraulic drivetrains enabled together."""
    data = {**_base_config(), **_electric_fields(), **_hydraulic_fields()}
    data["electric_enabled"] = True
    data["hydraulic_enabled"] = True
    return Configuration.model_validate(data)


# ─── Module-scoped computed models ───────────────────────────────────────


@pytest.fixture(scope="module")
def electric_model():
    """Module-scoped electric model (computed once)."""
    return compute({**_base_config(), **_electric_fields()})


@pytest.fixture(scope="module")
def hydraulic_model():
    """Module-scoped hydraulic model (computed once)."""
    return compute({**_base_config(), **_hydraulic_fields()})
