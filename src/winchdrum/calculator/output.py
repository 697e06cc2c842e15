"""Output formatters for winch drum models.

Converts a computed ComputationModel to JSON, a Markdown report with the
per-layer tables, or a short plain-text summary.

Uses Pydantic's model_dump(mode='json') for serialization. Unbounded limits
(+inf rpm or speed) have no JSON representation and are written as null.
"""

import json
from math import isfinite
from typing import Any, Optional, TYPE_CHECKING

from ..io import ComputationModel
from ..io.schema import SCHEMA_VERSION

if TYPE_CHECKING:
    from .validation import ValidationResult


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with None, recursively."""
    if isinstance(value, float) and not isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def model_to_dict(model: ComputationModel, include_rows: bool = True) -> dict:
    """Convert a model to a JSON-compatible dict."""
    exclude = None if include_rows else {'rows'}
    return _json_safe(model.model_dump(mode='json', exclude=exclude))


def validation_to_dict(validation: "ValidationResult") -> dict:
    def _messages(messages):
        return [
            {
                'severity': msg.severity.value,
                'code': msg.code,
                'message': msg.message,
                'suggestion': msg.suggestion
            }
            for msg in messages
        ]

    return {
        'valid': validation.valid,
        'errors': _messages(validation.errors),
        'warnings': _messages(validation.warnings),
        'infos': _messages(validation.infos),
    }


def to_json(
    model: ComputationModel,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2,
    include_rows: bool = True
) -> str:
    """Convert a ComputationModel to a JSON string.

    Args:
        model: Result of compute()
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)
        include_rows: Include the full per-wrap rows (large for deep drums)

    Returns:
        JSON string with schema version, model and optional validation
    """
    data = model_to_dict(model, include_rows=include_rows)
    data['schema_version'] = SCHEMA_VERSION

    if validation:
        data['validation'] = validation_to_dict(validation)

    return json.dumps(data, indent=indent)


def _fmt(value: Optional[float], spec: str = ".1f") -> str:
    if value is None:
        return "-"
    if not isfinite(value):
        return "unbounded"
    return format(value, spec)


def to_markdown(
    model: ComputationModel,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Convert a ComputationModel to a Markdown report.

    Args:
        model: Result of compute()
        validation: Optional validation results to include

    Returns:
        Markdown report with spooling summary and layer tables
    """
    summary = model.summary
    meta = model.meta
    config = model.config

    md = "# Winch Drum Report\n\n"

    md += "## Drum & Cable\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Cable Diameter | {config.cable_diameter_mm:.1f} mm ({meta.cable_dia_in:.3f} in) |\n"
    md += f"| Core Diameter | {config.core_diameter_in:.2f} in |\n"
    md += f"| Effective Core Diameter | {meta.effective_core_dia_in:.2f} in |\n"
    md += f"| Flange Diameter | {_fmt(meta.flange_dia_in, '.2f')} in |\n"
    md += f"| Flange to Flange | {config.flange_to_flange_in:.2f} in |\n"
    md += f"| Wraps per Layer | {meta.wraps_per_layer_used}"
    if meta.wraps_per_layer_override is not None:
        md += f" (override; calculated {meta.wraps_per_layer_calc})"
    md += " |\n"
    md += f"| Packing Factor | {meta.packing_factor_used:.3f} |\n"
    md += f"| Payload | {config.payload_kg:.1f} kg |\n"
    md += f"| Cable Weight | {config.cable_weight_kgpm:.3f} kg/m |\n\n"

    md += "## Spooling\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Cable Length | {summary.cable_len_m:.1f} m |\n"
    md += f"| Spooled Length | {summary.spooled_len_m:.1f} m |\n"
    md += f"| Layers | {summary.total_layers} |\n"
    md += f"| Wraps | {summary.total_wraps} |\n"
    md += f"| Full Drum Diameter | {summary.full_drum_dia_in:.2f} in |\n"
    if summary.drum_capacity_m is not None:
        md += f"| Drum Capacity | {summary.drum_capacity_m:.1f} m |\n"
    if summary.capacity_exceeded:
        md += f"| Shortfall | {summary.shortfall_m:.1f} m |\n"
    if model.minimum_system_hp is not None:
        md += f"| Minimum System Power | {model.minimum_system_hp:.1f} hp |\n"
    md += "\n"

    if model.electric_enabled:
        md += "## Electric Drivetrain\n\n"
        md += "| Layer | Dia (in) | Pre Deployed (m) | Max Tension (kgf) | Max Torque (N·m) "
        md += "| Motor Torque (N·m) | Motor rpm | Line Speed (m/min) | Avail Tension (kgf) |\n"
        md += "|---|---|---|---|---|---|---|---|---|\n"
        for layer in model.tables.electric_layers:
            md += (
                f"| {layer.layer_no} | {layer.layer_dia_in:.2f} | {layer.pre_deployed_m:.1f} "
                f"| {layer.max_tension_required_kgf:.1f} | {layer.max_torque_nm:.1f} "
                f"| {layer.max_motor_torque_nm:.1f} | {layer.motor_rpm_at_start:.1f} "
                f"| {layer.line_speed_at_start_mpm:.2f} | {layer.avail_tension_at_start_kgf:.1f} |\n"
            )
        md += "\n"

    if model.hydraulic_enabled:
        md += "## Hydraulic Drivetrain\n\n"
        md += "| Layer | Dia (in) | Pre Deployed (m) | Max Tension (kgf) | Pressure (psi) "
        md += "| Power Speed (m/min) | Flow Speed (m/min) | Speed (m/min) | HP Used | Avail Tension (kgf) |\n"
        md += "|---|---|---|---|---|---|---|---|---|---|\n"
        for layer in model.tables.hydraulic_layers:
            md += (
                f"| {layer.layer_no} | {layer.layer_dia_in:.2f} | {layer.pre_deployed_m:.1f} "
                f"| {layer.max_tension_required_kgf:.1f} | {layer.pressure_required_psi_at_start:.0f} "
                f"| {layer.speed_power_at_start_mpm:.2f} | {layer.speed_flow_at_start_mpm:.2f} "
                f"| {layer.speed_available_at_start_mpm:.2f} | {layer.hp_used_at_start:.2f} "
                f"| {layer.avail_tension_at_start_kgf:.1f} |\n"
            )
        md += "\n"

    if validation:
        md += "## Validation\n\n"

        if validation.valid:
            md += "**Status:** ✅ Configuration is valid\n\n"
        else:
            md += "**Status:** ❌ Configuration has errors\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "## Notes\n\n"
    md += "- Layer values are taken at the start of each layer (deepest point)\n"
    md += "- Maximum tension and torque are recomputed from the pre-layer deployed length\n"
    md += "- Line speed is the lower of the power and gearbox (or flow) limits\n\n"

    md += "---\n"
    md += "*Generated by Winchdrum Calculator*\n"

    return md


def to_summary(model: ComputationModel, validation: Optional["ValidationResult"] = None) -> str:
    """Convert a ComputationModel to a short text summary."""
    summary = model.summary
    meta = model.meta

    lines = [
        "═══ Winch Drum ═══",
        f"Cable: {model.config.cable_diameter_mm:.1f} mm, {summary.cable_len_m:.1f} m required",
        f"Spooled: {summary.spooled_len_m:.1f} m in {summary.total_layers} layers "
        f"({summary.total_wraps} wraps, {meta.wraps_per_layer_used} per layer)",
        f"Full drum diameter: {summary.full_drum_dia_in:.2f} in",
    ]

    if summary.capacity_exceeded:
        lines.append(f"CAPACITY EXCEEDED: {summary.shortfall_m:.1f} m does not fit")

    rows = model.rows
    if rows:
        first, last = rows[0], rows[-1]
        lines.extend([
            "",
            f"Tension: {first.tension_kgf:.1f} kgf (first wrap) → {last.tension_kgf:.1f} kgf (last wrap)",
            f"Drum torque: {first.torque_nm:.1f} → {last.torque_nm:.1f} N·m",
        ])

    if model.electric_enabled and model.tables.electric_layers:
        bottom = model.tables.electric_layers[0]
        lines.extend([
            "",
            "Electric (bottom layer):",
            f"  Motor rpm:         {bottom.motor_rpm_at_start:.1f}",
            f"  Line speed:        {bottom.line_speed_at_start_mpm:.2f} m/min",
            f"  Available tension: {bottom.avail_tension_at_start_kgf:.1f} kgf",
        ])

    if model.hydraulic_enabled and model.tables.hydraulic_layers:
        bottom = model.tables.hydraulic_layers[0]
        lines.extend([
            "",
            "Hydraulic (bottom layer):",
            f"  Pressure required: {bottom.pressure_required_psi_at_start:.0f} psi",
            f"  Line speed:        {bottom.speed_available_at_start_mpm:.2f} m/min",
            f"  Available tension: {bottom.avail_tension_at_start_kgf:.1f} kgf",
        ])

    if model.minimum_system_hp is not None:
        lines.extend(["", f"Minimum system power: {model.minimum_system_hp:.1f} hp"])

    if validation and not validation.valid:
        lines.append("")
        lines.extend(f"ERROR {msg.code}: {msg.message}" for msg in validation.errors)

    return "\n".join(lines)
