"""
Request schema for the calculation boundary.

This defines the contract between a client (web form, HTTP caller, JSON
file) and the calculator: which numeric fields must be present for each
drivetrain type. The calculator itself tolerates any numeric value; these
checks only reject structurally broken requests before computation.
"""

from math import isfinite
from typing import Any, Dict, List

from ..enums import DrivetrainType

SCHEMA_VERSION = "1.0"

# Geometry, load and gearing fields required for every request
REQUIRED_COMMON_FIELDS = (
    "cable_diameter_mm",
    "operating_depth_m",
    "dead_end_m",
    "core_diameter_in",
    "flange_diameter_in",
    "flange_to_flange_in",
    "lebus_thickness_in",
    "packing_factor",
    "payload_kg",
    "cable_weight_kgpm",
    "gear_ratio_1",
    "gear_ratio_2",
    "motor_count",
)

REQUIRED_ELECTRIC_FIELDS = (
    "motor_max_rpm",
    "motor_power_hp",
    "motor_efficiency",
    "motor_max_torque_nm",
    "gearbox_max_torque_nm",
)

REQUIRED_HYDRAULIC_FIELDS = (
    "pump_strings",
    "pump_motor_power_hp",
    "pump_motor_efficiency",
    "pump_motor_rpm",
    "pump_displacement_cc",
    "max_pressure_psi",
    "hyd_motor_displacement_cc",
    "hyd_motor_max_rpm",
)

# Numeric fields accepted but never required
OPTIONAL_NUMERIC_FIELDS = (
    "wraps_per_layer_override",
    "rated_speed_mpm",
    "rated_swl_kgf",
    "system_efficiency",
)


def required_fields(drivetrain: DrivetrainType) -> List[str]:
    """Required numeric fields for a drivetrain selection."""
    fields = list(REQUIRED_COMMON_FIELDS)
    if drivetrain == DrivetrainType.HYDRAULIC:
        fields.extend(REQUIRED_HYDRAULIC_FIELDS)
    else:
        fields.extend(REQUIRED_ELECTRIC_FIELDS)
    return fields


def is_number(value: Any) -> bool:
    """True for finite int/float values; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isfinite(value)


def validate_request_fields(data: Dict[str, Any], drivetrain: DrivetrainType) -> List[Dict[str, str]]:
    """
    Check a request body for missing or non-numeric fields.

    Args:
        data: Decoded JSON request body
        drivetrain: Selected drivetrain type

    Returns:
        List of {"field", "message"} dicts, empty when the request is usable
    """
    errors = []

    for name in required_fields(drivetrain):
        if name not in data or data[name] is None:
            errors.append({"field": name, "message": f'"{name}" is required.'})
        elif not is_number(data[name]):
            errors.append({"field": name, "message": f'"{name}" must be a finite number.'})

    for name in OPTIONAL_NUMERIC_FIELDS:
        value = data.get(name)
        if value is not None and not is_number(value):
            errors.append({"field": name, "message": f'"{name}" must be a finite number when provided.'})

    project_name = data.get("project_name")
    if project_name is not None and not isinstance(project_name, str):
        errors.append({"field": "project_name", "message": '"project_name" must be a string when provided.'})

    return errors
