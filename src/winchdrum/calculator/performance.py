"""
Drivetrain performance pass - tension, torque, speed and capacity per wrap.

Consumes the geometry rows and augments each one with:
- theoretical and required line tension, drum/gearbox torque
- electric results (power- and gearbox-limited rpm and speed,
  available tension from the motor torque cap)
- hydraulic results (pressure required, power- and flow-limited speed,
  hydraulic power used, pressure-limited available tension)

Each row depends only on its own geometry and the per-call drivetrain
parameters, so the pass is a single forward traversal. Electric and
hydraulic results are independent and may both be populated; a disabled
drivetrain leaves its sub-structure at all zeros.
"""

import logging
from math import inf, isfinite, isinf, pi
from typing import List, Tuple

from ..io.loaders import (
    Configuration,
    WrapRow,
    ElectricWrap,
    HydraulicWrap,
    ElectricDrive,
    HydraulicDrive,
    DrivetrainParams,
)
from .constants import (
    G,
    RATIO_EPSILON,
    RADIUS_EPSILON_M,
    TENSION_DECIMALS,
    TORQUE_DECIMALS,
    MOTOR_TORQUE_DECIMALS,
    RPM_DECIMALS,
    SPEED_DECIMALS,
    POWER_DECIMALS,
    MAX_PRESSURE_TORQUE_DECIMALS,
)
from .units import (
    positive_or,
    non_negative_or,
    finite_or_zero,
    round_finite,
    in_to_m,
    radius_m_from_dia_in,
    tension_kgf,
    drum_torque_nm,
    elec_available_tension_kgf,
    available_tension_kgf_from_drum_torque,
    line_speed_mpm_from_motor_rpm,
    motor_rpm_from_power_and_torque,
    gpm_from_cc_rev_and_rpm,
    rpm_from_gpm_and_disp,
    psi_from_torque_and_disp,
    psi_to_pa,
    torque_per_motor_from_pressure_pa,
    hp_from_psi_and_gpm,
    hp_to_w,
)

logger = logging.getLogger(__name__)


def normalize_drivetrain(config: Configuration) -> DrivetrainParams:
    """
    Substitute neutral defaults for invalid drivetrain inputs.

    Ratios and motor count fall back to 1, powers, efficiencies and
    capacities to 0, and rpm caps to unbounded. Quantities that are the
    same for every wrap (usable power, available flow, max-pressure
    torque) are derived here once.

    Args:
        config: Raw configuration

    Returns:
        DrivetrainParams with every field finite, except rpm caps (+inf)
    """
    gr1 = positive_or(config.gear_ratio_1, 1.0)
    gr2 = positive_or(config.gear_ratio_2, 1.0)
    motors = positive_or(config.motor_count, 1.0)
    mech_denominator = gr1 * gr2 * motors
    gear_product = max(gr1, RATIO_EPSILON) * max(gr2, RATIO_EPSILON)

    # Electric: a configured negative max rpm pins the motor at 0
    max_rpm = config.motor_max_rpm
    if max_rpm is not None and isfinite(max_rpm):
        motor_max_rpm = max(0.0, max_rpm)
    else:
        motor_max_rpm = inf
    motor_hp = positive_or(config.motor_power_hp, 0.0)
    motor_eff = positive_or(config.motor_efficiency, 0.0)

    electric = ElectricDrive(
        motor_max_rpm=motor_max_rpm,
        motor_power_hp=motor_hp,
        motor_efficiency=motor_eff,
        power_per_motor_w=hp_to_w(motor_hp * motor_eff),
        motor_max_torque_nm=positive_or(config.motor_max_torque_nm, None),
        gearbox_max_torque_nm=positive_or(config.gearbox_max_torque_nm, None),
    )

    # Hydraulic
    strings = positive_or(config.pump_strings, 0.0)
    pump_hp = positive_or(config.pump_motor_power_hp, 0.0)
    pump_eff = positive_or(config.pump_motor_efficiency, 0.0)
    pump_rpm = positive_or(config.pump_motor_rpm, 0.0)
    pump_cc = positive_or(config.pump_displacement_cc, 0.0)
    max_psi = positive_or(config.max_pressure_psi, 0.0)
    hmot_cc = positive_or(config.hyd_motor_displacement_cc, 0.0)
    hmot_rpm_cap = positive_or(config.hyd_motor_max_rpm, inf)

    usable_hp_per_string = pump_hp * pump_eff
    flow_per_string_gpm = gpm_from_cc_rev_and_rpm(pump_cc, pump_rpm)
    flow_total_gpm = flow_per_string_gpm * strings

    # A motor without displacement cannot turn on flow
    if hmot_cc > 0:
        flow_rpm_per_motor = min(hmot_rpm_cap, rpm_from_gpm_and_disp(flow_total_gpm / motors, hmot_cc))
    else:
        flow_rpm_per_motor = 0.0

    torque_per_motor_max_pressure = torque_per_motor_from_pressure_pa(psi_to_pa(max_psi), hmot_cc)

    hydraulic = HydraulicDrive(
        pump_strings=strings,
        pump_motor_power_hp=pump_hp,
        pump_motor_efficiency=pump_eff,
        pump_motor_rpm=pump_rpm,
        pump_displacement_cc=pump_cc,
        max_pressure_psi=max_psi,
        hyd_motor_displacement_cc=hmot_cc,
        hyd_motor_rpm_cap=hmot_rpm_cap,
        usable_hp_per_string=usable_hp_per_string,
        usable_hp_total=usable_hp_per_string * strings,
        flow_per_string_gpm=flow_per_string_gpm,
        flow_total_gpm=flow_total_gpm,
        flow_rpm_per_motor=finite_or_zero(flow_rpm_per_motor),
        torque_per_motor_max_pressure_nm=torque_per_motor_max_pressure,
        drum_torque_max_pressure_nm=torque_per_motor_max_pressure * mech_denominator,
    )

    return DrivetrainParams(
        gear_ratio_1=gr1,
        gear_ratio_2=gr2,
        motor_count=motors,
        mech_denominator=mech_denominator,
        gear_product=gear_product,
        electric=electric,
        hydraulic=hydraulic,
    )


def load_terms(config: Configuration) -> Tuple[float, float]:
    """Sanitized (payload_kg, cable_weight_kgpm)."""
    return (
        non_negative_or(config.payload_kg, 0.0),
        non_negative_or(config.cable_weight_kgpm, 0.0),
    )


def _round_limit(value: float, digits: int) -> float:
    """Round a speed/rpm limit, keeping +inf (unbounded) as is."""
    if isinf(value) and value > 0:
        return value
    return round_finite(max(0.0, value), digits)


def base_tension_torque(
    deployed_m: float,
    layer_dia_in: float,
    payload_kg: float,
    cable_w_kgpm: float,
    drive: DrivetrainParams
) -> Tuple[float, float, float, float]:
    """
    Line tension and drum torque at one wrap.

    The drum torque is split per motor and re-aggregated so the hydraulic
    branch can reuse the per-motor value directly.

    Returns:
        Tuple of (theoretical_kgf, required_kgf, torque_per_motor_nm, drum_torque_nm)
        where only required_kgf is rounded
    """
    theoretical = tension_kgf(deployed_m, payload_kg, cable_w_kgpm)
    required = round_finite(theoretical, TENSION_DECIMALS)

    drum_t = drum_torque_nm(required, layer_dia_in)
    motors_safe = max(drive.motor_count, RATIO_EPSILON)
    gear_product_safe = max(drive.gear_product, RATIO_EPSILON)
    torque_per_motor = drum_t / (gear_product_safe * motors_safe)
    drum_torque_required = torque_per_motor * gear_product_safe * motors_safe

    return theoretical, required, torque_per_motor, drum_torque_required


def electric_wrap(torque_nm: float, layer_dia_in: float, drive: DrivetrainParams) -> ElectricWrap:
    """
    Electric drivetrain results at one wrap.

    Motor rpm is the lower of the power limit (P = T·ω) and the motor max
    rpm; line speed is evaluated at both limits and the lower one wins.

    Args:
        torque_nm: Drum torque, already rounded for display (N·m)
        layer_dia_in: Layer pitch diameter (in)
        drive: Normalized drivetrain parameters
    """
    gr1, gr2 = drive.gear_ratio_1, drive.gear_ratio_2
    elec = drive.electric

    motor_torque = torque_nm / (drive.mech_denominator or 1)

    rpm_power = motor_rpm_from_power_and_torque(elec.power_per_motor_w, motor_torque)
    rpm_gearbox = elec.motor_max_rpm
    rpm_capped = min(rpm_power, rpm_gearbox)
    motor_rpm = round_finite(max(0.0, rpm_capped), RPM_DECIMALS)

    speed_power = line_speed_mpm_from_motor_rpm(max(0.0, rpm_power), gr1, gr2, layer_dia_in)
    speed_gearbox = line_speed_mpm_from_motor_rpm(rpm_gearbox, gr1, gr2, layer_dia_in)
    speed_available = min(speed_power, speed_gearbox)
    if not isfinite(speed_available) or speed_available < 0:
        speed_available = 0.0

    return ElectricWrap(
        motor_torque_nm=round_finite(motor_torque, MOTOR_TORQUE_DECIMALS),
        motor_rpm_power=_round_limit(rpm_power, RPM_DECIMALS),
        motor_rpm_gearbox=_round_limit(rpm_gearbox, RPM_DECIMALS),
        motor_rpm=motor_rpm,
        speed_power_mpm=_round_limit(speed_power, SPEED_DECIMALS),
        speed_gearbox_mpm=_round_limit(speed_gearbox, SPEED_DECIMALS),
        speed_available_mpm=round(speed_available, SPEED_DECIMALS),
        avail_tension_kgf=elec_available_tension_kgf(
            elec.motor_max_torque_nm, gr1, gr2, drive.motor_count,
            radius_m_from_dia_in(layer_dia_in)
        ),
    )


def hydraulic_wrap(
    theoretical_kgf: float,
    torque_per_motor_nm: float,
    layer_dia_in: float,
    drive: DrivetrainParams
) -> HydraulicWrap:
    """
    Hydraulic drivetrain results at one wrap.

    Power-limited speed uses the unrounded theoretical tension; the flow
    limit comes from the pump strings' total flow shared across motors.
    Hydraulic power used is back-solved from the flow needed to reach the
    achieved speed, capped by the available flow and the usable power.

    Args:
        theoretical_kgf: Unrounded line tension (kgf)
        torque_per_motor_nm: Required torque per hydraulic motor (N·m)
        layer_dia_in: Layer pitch diameter (in)
        drive: Normalized drivetrain parameters
    """
    gr1, gr2 = drive.gear_ratio_1, drive.gear_ratio_2
    hyd = drive.hydraulic
    gear_product_safe = max(drive.gear_product, RATIO_EPSILON)

    d_m = in_to_m(layer_dia_in)
    circumference = max(pi * max(d_m, RATIO_EPSILON), RATIO_EPSILON)
    radius_m = d_m / 2

    # Pressure needed for the current torque
    if hyd.hyd_motor_displacement_cc > 0:
        p_req_psi = psi_from_torque_and_disp(torque_per_motor_nm, hyd.hyd_motor_displacement_cc)
    else:
        p_req_psi = 0.0
    if not isfinite(p_req_psi) or p_req_psi < 0:
        p_req_psi = 0.0

    # Flow-limited speed
    speed_flow = finite_or_zero(
        line_speed_mpm_from_motor_rpm(hyd.flow_rpm_per_motor, gr1, gr2, layer_dia_in)
    )
    rpm_flow_drum = hyd.flow_rpm_per_motor / gear_product_safe

    # Power-limited speed
    usable_w = hp_to_w(hyd.usable_hp_total)
    speed_power = 0.0
    if usable_w > 0 and theoretical_kgf > 0:
        speed_power = usable_w / (theoretical_kgf * G) * 60
    if not isfinite(speed_power) or speed_power < 0:
        speed_power = 0.0
    rpm_power_drum = speed_power / circumference

    speed_available = min(speed_power, speed_flow)
    if not isfinite(speed_available) or speed_available < 0:
        speed_available = 0.0
    rpm_available_drum = speed_available / circumference

    # Pressure is capped at the relief setting
    p_power_psi = min(p_req_psi, hyd.max_pressure_psi) if p_req_psi > 0 else 0.0

    hp_used = 0.0
    if speed_available > 0 and p_power_psi > 0:
        drum_rpm_needed = speed_available / circumference
        motor_rpm_needed = drum_rpm_needed * gear_product_safe
        gpm_per_motor = gpm_from_cc_rev_and_rpm(hyd.hyd_motor_displacement_cc, motor_rpm_needed)
        gpm_used = min(drive.motor_count * gpm_per_motor, hyd.flow_total_gpm)
        hp_used = min(hp_from_psi_and_gpm(p_power_psi, gpm_used), hyd.usable_hp_total)
    hp_used = round_finite(hp_used, POWER_DECIMALS)

    if hyd.pump_motor_efficiency > 0:
        elec_input_hp = round_finite(hp_used / hyd.pump_motor_efficiency, POWER_DECIMALS)
    else:
        elec_input_hp = 0.0

    avail_tension = available_tension_kgf_from_drum_torque(
        hyd.drum_torque_max_pressure_nm, max(radius_m, RADIUS_EPSILON_M)
    )

    return HydraulicWrap(
        motor_torque_nm=round_finite(torque_per_motor_nm, MOTOR_TORQUE_DECIMALS),
        pressure_required_psi=float(round(p_req_psi)),
        speed_power_mpm=round(speed_power, SPEED_DECIMALS),
        speed_flow_mpm=round(max(0.0, speed_flow), SPEED_DECIMALS),
        speed_available_mpm=round(speed_available, SPEED_DECIMALS),
        drum_rpm_power=round_finite(max(0.0, rpm_power_drum), RPM_DECIMALS),
        drum_rpm_flow=round_finite(max(0.0, rpm_flow_drum), RPM_DECIMALS),
        drum_rpm_available=round_finite(max(0.0, rpm_available_drum), RPM_DECIMALS),
        hp_used_at_available=hp_used,
        elec_input_hp_used=elec_input_hp,
        drum_torque_max_pressure_nm=round_finite(hyd.drum_torque_max_pressure_nm, MAX_PRESSURE_TORQUE_DECIMALS),
        avail_tension_kgf=round_finite(avail_tension, TENSION_DECIMALS),
    )


def apply_performance(
    rows: List[WrapRow],
    config: Configuration,
    drive: DrivetrainParams
) -> List[WrapRow]:
    """
    Augment geometry rows with tension, torque and drivetrain results.

    Args:
        rows: Rows from layer_geometry()
        config: Configuration (drivetrain flags and load terms)
        drive: Parameters from normalize_drivetrain()

    Returns:
        New list of rows; the input rows are not modified
    """
    payload_kg, cable_w_kgpm = load_terms(config)
    electric_enabled = bool(config.electric_enabled)
    hydraulic_enabled = bool(config.hydraulic_enabled)

    augmented = []
    for row in rows:
        theoretical, required, torque_per_motor, drum_torque = base_tension_torque(
            row.deployed_len_m, row.layer_dia_in, payload_kg, cable_w_kgpm, drive
        )
        torque_nm = round_finite(drum_torque, TORQUE_DECIMALS)

        electric = electric_wrap(torque_nm, row.layer_dia_in, drive) if electric_enabled else ElectricWrap()
        hydraulic = (
            hydraulic_wrap(theoretical, torque_per_motor, row.layer_dia_in, drive)
            if hydraulic_enabled else HydraulicWrap()
        )

        augmented.append(row.model_copy(update={
            'tension_theoretical_kgf': finite_or_zero(theoretical),
            'tension_kgf': required,
            'torque_nm': torque_nm,
            'gearbox_torque_nm': torque_nm,
            'electric': electric,
            'hydraulic': hydraulic,
        }))

    logger.debug(
        f"Performance pass over {len(augmented)} wraps "
        f"(electric={electric_enabled}, hydraulic={hydraulic_enabled})"
    )
    return augmented
