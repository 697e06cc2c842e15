"""
Layer aggregation and slim per-wrap projections.

Reduces augmented wrap rows to one summary per layer:
- on-drum / deployed lengths before and after the layer come from its first
  and last wrap
- "at start" dynamic values are copied from the first wrap of the layer
- maximum tension and torque are recomputed from the layer's pre-wrap
  deployed length, so per-wrap rounding is never carried into the layer view
"""

from typing import Dict, List

from ..io.loaders import (
    WrapRow,
    DrivetrainParams,
    ElectricLayer,
    HydraulicLayer,
    ElectricWrapProjection,
    HydraulicWrapProjection,
)
from .constants import LENGTH_DECIMALS, TENSION_DECIMALS, TORQUE_DECIMALS
from .units import round_finite, tension_kgf, drum_torque_nm


def group_rows_by_layer(rows: List[WrapRow]) -> Dict[int, List[WrapRow]]:
    """Rows per layer number, wraps in ascending order, layers ascending."""
    grouped: Dict[int, List[WrapRow]] = {}
    for row in sorted(rows, key=lambda r: r.wrap_no):
        grouped.setdefault(row.layer_no, []).append(row)
    return {layer_no: grouped[layer_no] for layer_no in sorted(grouped)}


def _layer_geometry_fields(layer_rows: List[WrapRow]) -> dict:
    first, last = layer_rows[0], layer_rows[-1]
    total = first.total_cable_len_m
    return {
        'layer_no': first.layer_no,
        'layer_dia_in': first.layer_dia_in,
        'pre_on_drum_m': first.pre_spooled_len_m,
        'pre_deployed_m': round_finite(total - first.pre_spooled_len_m, LENGTH_DECIMALS),
        'post_on_drum_m': last.spooled_len_m,
        'post_deployed_m': round_finite(total - last.spooled_len_m, LENGTH_DECIMALS),
    }


def layer_maxima(
    pre_deployed_m: float,
    layer_dia_in: float,
    payload_kg: float,
    cable_w_kgpm: float,
    drive: DrivetrainParams
) -> dict:
    """
    Peak tension and torque for a layer, evaluated at its start.

    The deepest point of a layer is its first wrap, so the pre-wrap
    deployed length gives the largest suspended load on that layer.
    """
    theoretical = tension_kgf(pre_deployed_m, payload_kg, cable_w_kgpm)
    required = round_finite(theoretical, TENSION_DECIMALS)
    torque = round_finite(drum_torque_nm(required, layer_dia_in), TORQUE_DECIMALS)
    motor_torque = round_finite(torque / (drive.mech_denominator or 1), TORQUE_DECIMALS)
    return {
        'max_tension_theoretical_kgf': round_finite(theoretical, TENSION_DECIMALS),
        'max_tension_required_kgf': required,
        'max_torque_nm': torque,
        'max_motor_torque_nm': motor_torque,
    }


def rows_to_electric_layers(
    rows: List[WrapRow],
    payload_kg: float,
    cable_w_kgpm: float,
    drive: DrivetrainParams
) -> List[ElectricLayer]:
    """
    Per-layer summaries for the electric table.

    Args:
        rows: Augmented wrap rows (any order)
        payload_kg: Sanitized payload mass
        cable_w_kgpm: Sanitized cable linear weight
        drive: Normalized drivetrain parameters

    Returns:
        List of ElectricLayer sorted by layer number
    """
    layers = []
    for layer_rows in group_rows_by_layer(rows).values():
        geometry = _layer_geometry_fields(layer_rows)
        start = layer_rows[0]
        layers.append(ElectricLayer(
            **geometry,
            **layer_maxima(geometry['pre_deployed_m'], geometry['layer_dia_in'],
                           payload_kg, cable_w_kgpm, drive),
            motor_rpm_at_start=start.electric.motor_rpm,
            line_speed_at_start_mpm=start.electric.speed_available_mpm,
            tension_theoretical_at_start_kgf=start.tension_theoretical_kgf,
            tension_required_at_start_kgf=start.tension_kgf,
            avail_tension_at_start_kgf=start.electric.avail_tension_kgf,
        ))
    return layers


def rows_to_hydraulic_layers(
    rows: List[WrapRow],
    payload_kg: float,
    cable_w_kgpm: float,
    drive: DrivetrainParams
) -> List[HydraulicLayer]:
    """Per-layer summaries for the hydraulic table, sorted by layer number."""
    layers = []
    for layer_rows in group_rows_by_layer(rows).values():
        geometry = _layer_geometry_fields(layer_rows)
        start = layer_rows[0]
        hyd = start.hydraulic
        layers.append(HydraulicLayer(
            **geometry,
            **layer_maxima(geometry['pre_deployed_m'], geometry['layer_dia_in'],
                           payload_kg, cable_w_kgpm, drive),
            pressure_required_psi_at_start=hyd.pressure_required_psi,
            speed_power_at_start_mpm=hyd.speed_power_mpm,
            speed_flow_at_start_mpm=hyd.speed_flow_mpm,
            speed_available_at_start_mpm=hyd.speed_available_mpm,
            hp_used_at_start=hyd.hp_used_at_available,
            elec_input_hp_used_at_start=hyd.elec_input_hp_used,
            drum_torque_max_pressure_nm=hyd.drum_torque_max_pressure_nm,
            avail_tension_at_start_kgf=hyd.avail_tension_kgf,
            tension_theoretical_at_start_kgf=start.tension_theoretical_kgf,
            tension_required_at_start_kgf=start.tension_kgf,
        ))
    return layers


def _wrap_geometry(row: WrapRow) -> dict:
    return {
        'wrap_no': row.wrap_no,
        'layer_no': row.layer_no,
        'layer_dia_in': row.layer_dia_in,
        'wrap_len_in': row.wrap_len_in,
        'pre_spooled_len_m': row.pre_spooled_len_m,
        'spooled_len_m': row.spooled_len_m,
        'deployed_len_m': row.deployed_len_m,
    }


def project_electric_wraps(rows: List[WrapRow]) -> List[ElectricWrapProjection]:
    """Reduced electric field set per wrap, in input order."""
    return [
        ElectricWrapProjection(
            **_wrap_geometry(row),
            total_cable_len_m=row.total_cable_len_m,
            tension_required_kgf=row.tension_kgf,
            tension_theoretical_kgf=row.tension_theoretical_kgf,
            torque_nm=row.torque_nm,
            motor_torque_nm=row.electric.motor_torque_nm,
            motor_rpm=row.electric.motor_rpm,
            line_speed_mpm=row.electric.speed_available_mpm,
            avail_tension_kgf=row.electric.avail_tension_kgf,
        )
        for row in rows
    ]


def project_hydraulic_wraps(rows: List[WrapRow]) -> List[HydraulicWrapProjection]:
    """Reduced hydraulic field set per wrap, in input order."""
    return [
        HydraulicWrapProjection(
            **_wrap_geometry(row),
            pressure_required_psi=row.hydraulic.pressure_required_psi,
            speed_power_mpm=row.hydraulic.speed_power_mpm,
            speed_flow_mpm=row.hydraulic.speed_flow_mpm,
            speed_available_mpm=row.hydraulic.speed_available_mpm,
            hp_used_at_available=row.hydraulic.hp_used_at_available,
            elec_input_hp_used=row.hydraulic.elec_input_hp_used,
            drum_torque_max_pressure_nm=row.hydraulic.drum_torque_max_pressure_nm,
            avail_tension_kgf=row.hydraulic.avail_tension_kgf,
        )
        for row in rows
    ]
