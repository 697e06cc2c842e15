"""
Unit conversions and small mechanical formulas.

Pure functions only. Every formula takes plain floats in the units named by
its arguments and returns a float; none of them raise for degenerate input.

Input sanitising goes through two combinators so that an invalid value can
never reach a formula un-checked:

    >>> positive_or(float("nan"), 1.0)
    1.0
    >>> non_negative_or(-3.0, 0.0)
    0.0
"""

from math import floor, isfinite, pi
from typing import Optional

from .constants import (
    G,
    W_PER_HP,
    M_PER_IN,
    IN_PER_MM,
    CC_PER_GAL,
    PSI_TO_PA,
    HYD_HP_CONSTANT,
    TWO_PI,
    RATIO_EPSILON,
    DISPLACEMENT_EPSILON_CC,
    MIN_SYSTEM_HP_MARGIN,
)


# ---------------------------------------------------------------------------
# Sanitising combinators
# ---------------------------------------------------------------------------

def _as_float(value) -> Optional[float]:
    """Return value as float, or None for None/bool/non-numeric input."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def is_positive_finite(value) -> bool:
    """True if value is a finite number strictly greater than zero."""
    number = _as_float(value)
    return number is not None and isfinite(number) and number > 0


def positive_or(value, default: float) -> float:
    """Return value if it is finite and > 0, otherwise the neutral default."""
    if is_positive_finite(value):
        return float(value)
    return default


def non_negative_or(value, default: float) -> float:
    """Return value if it is finite and >= 0, otherwise the neutral default."""
    number = _as_float(value)
    if number is not None and isfinite(number) and number >= 0:
        return number
    return default


def finite_or_zero(value: float) -> float:
    """Coerce NaN/±inf to 0 so a bad intermediate cannot reach formatting."""
    return value if isfinite(value) else 0.0


def round_finite(value: float, digits: int) -> float:
    """Round after coercing non-finite values to 0."""
    return round(finite_or_zero(value), digits)


def truncate_to_whole(value: float) -> int:
    """Floor a positive wrap count to whole wraps (0 for invalid input)."""
    if not isfinite(value) or value <= 0:
        return 0
    return int(floor(value))


# ---------------------------------------------------------------------------
# Length and diameter
# ---------------------------------------------------------------------------

def mm_to_in(value_mm: float) -> float:
    """Millimetres to inches."""
    return value_mm * IN_PER_MM


def in_to_m(value_in: float) -> float:
    """Inches to metres."""
    return value_in * M_PER_IN


def radius_m_from_dia_in(dia_in: float) -> float:
    """Radius in metres from a diameter in inches."""
    return in_to_m(dia_in) / 2


# ---------------------------------------------------------------------------
# Tension and torque
# ---------------------------------------------------------------------------

def tension_kgf(deployed_m: float, payload_kg: float, cable_w_kgpm: float) -> float:
    """
    Theoretical line tension in kgf (unrounded).

    The suspended load is the payload plus the weight of the paid-out cable;
    cable still on the drum contributes nothing.

    Args:
        deployed_m: Deployed (paid-out) cable length (m)
        payload_kg: Payload mass (kg)
        cable_w_kgpm: Cable linear weight (kg/m)

    Returns:
        Tension (kgf)
    """
    return payload_kg + deployed_m * cable_w_kgpm


def drum_torque_nm(tension_kgf_value: float, layer_dia_in: float) -> float:
    """Torque at the drum (N·m) for a line pull at the given layer diameter."""
    return tension_kgf_value * G * radius_m_from_dia_in(layer_dia_in)


def elec_available_tension_kgf(
    motor_tmax_nm: Optional[float],
    gr1: float,
    gr2: float,
    motors: float,
    radius_m: float
) -> float:
    """
    Available line tension from the electric motor torque cap (kgf).

    Motor max torque is per motor; multiplying by both gear stages and the
    motor count gives the drum torque, which divided by the layer radius
    gives line pull.

    Returns:
        Line tension rounded to 0.1 kgf, or 0 for invalid torque/radius
    """
    if not is_positive_finite(motor_tmax_nm) or not is_positive_finite(radius_m):
        return 0.0
    drum_t = motor_tmax_nm * (gr1 or 1) * (gr2 or 1) * (motors or 1)
    line_n = drum_t / radius_m
    return round_finite(line_n / G, 1)


def available_tension_kgf_from_drum_torque(drum_t_nm: float, radius_m: float) -> float:
    """Line pull (kgf) a drum torque sustains at the given radius (unrounded)."""
    if radius_m <= 0:
        return 0.0
    return drum_t_nm / radius_m / G


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------

def line_speed_mpm_from_motor_rpm(
    motor_rpm: float,
    gr1: float,
    gr2: float,
    layer_dia_in: float
) -> float:
    """
    Line speed (m/min) from motor rpm at a given layer diameter.

    Drum rpm = motor rpm / (gr1 × gr2); speed = drum rpm × π × D.
    An infinite motor rpm gives an infinite speed.
    """
    drum_rpm = motor_rpm / (max(gr1, RATIO_EPSILON) * max(gr2, RATIO_EPSILON))
    return pi * in_to_m(layer_dia_in) * drum_rpm


def motor_rpm_from_power_and_torque(power_w: float, torque_nm: float) -> float:
    """
    Power-limited motor rpm from P = T·ω.

    Returns +inf for a positive power at zero torque (no-load), and 0 when
    no power is available.
    """
    if power_w > 0 and torque_nm > 0:
        return (power_w / torque_nm) * 60 / TWO_PI
    if power_w > 0 and torque_nm == 0:
        return float("inf")
    return 0.0


# ---------------------------------------------------------------------------
# Hydraulics
# ---------------------------------------------------------------------------

def gpm_from_cc_rev_and_rpm(cc_rev: float, rpm: float) -> float:
    """Flow (US gpm) delivered by a displacement turning at rpm."""
    return (cc_rev * rpm) / CC_PER_GAL


def rpm_from_gpm_and_disp(gpm: float, cc_rev: float) -> float:
    """Motor rpm produced by a flow through a displacement."""
    return (gpm * CC_PER_GAL) / max(cc_rev, RATIO_EPSILON)


def psi_from_torque_and_disp(torque_nm: float, cc_rev: float) -> float:
    """Differential pressure (psi) needed for a motor torque: ΔP = T·2π / V."""
    volume_m3 = max(cc_rev, DISPLACEMENT_EPSILON_CC) * 1e-6
    dp_pa = (torque_nm * TWO_PI) / volume_m3
    return dp_pa / PSI_TO_PA


def torque_per_motor_from_pressure_pa(dp_pa: float, cc_rev: float) -> float:
    """Torque (N·m) per hydraulic motor at a differential pressure: T = ΔP·V / 2π."""
    volume_m3 = max(cc_rev, DISPLACEMENT_EPSILON_CC) * 1e-6
    return (dp_pa * volume_m3) / TWO_PI


def psi_to_pa(psi: float) -> float:
    return psi * PSI_TO_PA


def hp_from_psi_and_gpm(psi: float, gpm: float) -> float:
    """Hydraulic horsepower."""
    return (psi * gpm) / HYD_HP_CONSTANT


def hp_to_w(hp: float) -> float:
    return hp * W_PER_HP


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------

def minimum_system_hp(
    rated_speed_mpm: Optional[float],
    rated_swl_kgf: Optional[float],
    efficiency: Optional[float] = None
) -> Optional[float]:
    """
    Minimum installed horsepower to lift the rated SWL at the rated speed.

    hp = (SWL · g · v / 60) / 745.7 / η × 1.2

    Args:
        rated_speed_mpm: Rated line speed (m/min)
        rated_swl_kgf: Rated safe working load (kgf)
        efficiency: Overall system efficiency; invalid values use 1.0

    Returns:
        Horsepower rounded to 0.1, or None if speed or SWL is not positive
    """
    if not is_positive_finite(rated_speed_mpm) or not is_positive_finite(rated_swl_kgf):
        return None
    eff = positive_or(efficiency, 1.0)
    base_power_w = rated_swl_kgf * G * (rated_speed_mpm / 60)
    min_hp = base_power_w / W_PER_HP / eff * MIN_SYSTEM_HP_MARGIN
    if not isfinite(min_hp):
        return None
    return round(min_hp, 1)
