"""
Winch Drum Calculator - Validation Rules

Engineering checks run over a computed model. The calculator itself never
rejects numeric input; these rules report what a designer should look at:
- drum capacity (cable that does not fit inside the flange)
- drivetrain capacity (required tension above available tension)
- hydraulic pressure above the relief setting
- gearbox torque above its rating
- inputs that were replaced by neutral defaults
"""

from dataclasses import dataclass, field
from enum import Enum
from math import isfinite
from typing import List, Optional

from ..io import ComputationModel
from .constants import (
    PACKING_FACTOR_MIN,
    PACKING_FACTOR_MAX,
    MANY_LAYERS_WARNING,
)
from .units import is_positive_finite


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


def validate_model(model: ComputationModel) -> ValidationResult:
    """
    Validate a computed winch drum model against engineering rules.

    Args:
        model: Result of compute()

    Returns:
        ValidationResult with all findings
    """
    messages: List[ValidationMessage] = []

    messages.extend(_validate_spooling(model))
    messages.extend(_validate_drivetrain_selected(model))
    messages.extend(_validate_electric_capacity(model))
    messages.extend(_validate_hydraulic_capacity(model))
    messages.extend(_validate_gearbox_rating(model))
    messages.extend(_validate_packing_factor(model))
    messages.extend(_validate_defaulted_inputs(model))
    messages.extend(_validate_rating(model))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_spooling(model: ComputationModel) -> List[ValidationMessage]:
    """Check the cable fits on the drum"""
    messages = []
    summary = model.summary

    if summary.cable_len_m > 0 and summary.total_wraps == 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="NO_WRAPS",
            message="No cable could be spooled onto the drum",
            suggestion="Check cable diameter and flange-to-flange width (at least one wrap must fit)"
        ))
    elif summary.capacity_exceeded:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="CAPACITY_EXCEEDED",
            message=(
                f"Drum holds {summary.spooled_len_m:.1f} m of the required "
                f"{summary.cable_len_m:.1f} m ({summary.shortfall_m:.1f} m short)"
            ),
            suggestion="Increase flange diameter or drum width, or reduce operating depth"
        ))

    if summary.total_layers > MANY_LAYERS_WARNING:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="MANY_LAYERS",
            message=f"{summary.total_layers} layers on the drum",
            suggestion="Spooling quality degrades with many layers; consider a wider or larger drum"
        ))

    return messages


def _validate_drivetrain_selected(model: ComputationModel) -> List[ValidationMessage]:
    if model.electric_enabled or model.hydraulic_enabled:
        return []
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="NO_DRIVETRAIN",
        message="No drivetrain enabled; only geometry and tension were computed",
        suggestion="Enable the electric or hydraulic drivetrain"
    )]


def _validate_electric_capacity(model: ComputationModel) -> List[ValidationMessage]:
    """Required tension vs. tension available from the motor torque cap"""
    messages = []
    if not model.electric_enabled or model.drivetrain.electric.motor_max_torque_nm is None:
        return messages

    for layer in model.tables.electric_layers:
        if layer.max_tension_required_kgf > layer.avail_tension_at_start_kgf:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="TENSION_EXCEEDS_ELECTRIC_CAPACITY",
                message=(
                    f"Layer {layer.layer_no}: required tension {layer.max_tension_required_kgf:.1f} kgf "
                    f"exceeds available {layer.avail_tension_at_start_kgf:.1f} kgf"
                ),
                suggestion="Increase motor torque, gear ratio or motor count"
            ))
            break

    return messages


def _validate_hydraulic_capacity(model: ComputationModel) -> List[ValidationMessage]:
    """Required tension and pressure vs. the hydraulic pressure limit"""
    messages = []
    if not model.hydraulic_enabled:
        return messages

    for layer in model.tables.hydraulic_layers:
        if layer.max_tension_required_kgf > layer.avail_tension_at_start_kgf:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="TENSION_EXCEEDS_HYDRAULIC_CAPACITY",
                message=(
                    f"Layer {layer.layer_no}: required tension {layer.max_tension_required_kgf:.1f} kgf "
                    f"exceeds pressure-limited {layer.avail_tension_at_start_kgf:.1f} kgf"
                ),
                suggestion="Increase max pressure, motor displacement, gear ratio or motor count"
            ))
            break

    max_psi = model.drivetrain.hydraulic.max_pressure_psi
    peak_psi = max((r.hydraulic.pressure_required_psi for r in model.rows), default=0.0)
    if max_psi > 0 and peak_psi > max_psi:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="PRESSURE_EXCEEDS_MAX",
            message=f"Required pressure {peak_psi:.0f} psi exceeds max system pressure {max_psi:.0f} psi",
            suggestion="Speed and power results are limited to the max pressure"
        ))

    return messages


def _validate_gearbox_rating(model: ComputationModel) -> List[ValidationMessage]:
    """Per-gearbox torque vs. rating"""
    rating = model.drivetrain.electric.gearbox_max_torque_nm
    if not model.electric_enabled or rating is None:
        return []

    motors = model.drivetrain.motor_count
    peak = max((r.gearbox_torque_nm for r in model.rows), default=0.0) / motors
    if peak > rating:
        return [ValidationMessage(
            severity=Severity.WARNING,
            code="GEARBOX_TORQUE_EXCEEDED",
            message=f"Gearbox torque {peak:.1f} N·m exceeds rating {rating:.1f} N·m",
            suggestion="Select a larger gearbox or add motors"
        )]
    return []


def _validate_packing_factor(model: ComputationModel) -> List[ValidationMessage]:
    packing = model.meta.packing_factor_used
    if PACKING_FACTOR_MIN <= packing <= PACKING_FACTOR_MAX:
        return []
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="PACKING_FACTOR_RANGE",
        message=f"Packing factor {packing:.3f} is outside the usual {PACKING_FACTOR_MIN}-{PACKING_FACTOR_MAX} range",
        suggestion=None
    )]


def _validate_defaulted_inputs(model: ComputationModel) -> List[ValidationMessage]:
    """Report inputs the calculator replaced with neutral defaults"""
    config = model.config
    checked = ['cable_diameter_mm', 'gear_ratio_1', 'gear_ratio_2', 'motor_count', 'packing_factor']
    if model.electric_enabled:
        checked.extend(['motor_power_hp', 'motor_efficiency'])
    if model.hydraulic_enabled:
        checked.extend([
            'pump_strings', 'pump_motor_power_hp', 'pump_motor_efficiency',
            'pump_motor_rpm', 'pump_displacement_cc', 'hyd_motor_displacement_cc',
        ])

    defaulted = [name for name in checked if not is_positive_finite(getattr(config, name))]
    if not defaulted:
        return []
    return [ValidationMessage(
        severity=Severity.INFO,
        code="INPUT_DEFAULTED",
        message=f"Non-positive or non-finite inputs replaced by defaults: {', '.join(defaulted)}",
        suggestion=None
    )]


def _validate_rating(model: ComputationModel) -> List[ValidationMessage]:
    min_hp = model.minimum_system_hp
    if min_hp is None or not isfinite(min_hp):
        return []
    return [ValidationMessage(
        severity=Severity.INFO,
        code="MINIMUM_SYSTEM_HP",
        message=f"Minimum system power for the rated load and speed: {min_hp:.1f} hp",
        suggestion=None
    )]
