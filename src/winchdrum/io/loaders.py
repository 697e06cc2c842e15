"""
Data models and JSON input/output for winch drum calculations.

Configuration files are plain JSON objects with the fields of
`Configuration`, optionally wrapped in a top-level "config" key.

Uses Pydantic for automatic validation and JSON serialization. Numeric
sanity (non-finite or non-positive values) is NOT enforced here: the
calculator substitutes neutral defaults instead of rejecting a
configuration.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Configuration(BaseModel):
    """Drum, cable, load and drivetrain inputs for one computation."""
    model_config = ConfigDict(extra='ignore', frozen=True)

    # Drum and cable geometry
    cable_diameter_mm: float
    operating_depth_m: float
    dead_end_m: float = 0.0
    core_diameter_in: float
    flange_diameter_in: Optional[float] = None  # None = no capacity limit
    flange_to_flange_in: float
    lebus_thickness_in: float = 0.0
    packing_factor: float = 0.877  # matches calculator.constants.DEFAULT_PACKING_FACTOR
    wraps_per_layer_override: Optional[float] = None  # None/0 = auto-calculated

    # Load
    payload_kg: float = 0.0
    cable_weight_kgpm: float = 0.0

    # Shared gearing
    gear_ratio_1: float = 1.0
    gear_ratio_2: float = 1.0
    motor_count: float = 1.0

    electric_enabled: bool = True
    hydraulic_enabled: bool = False

    # Electric drivetrain (per motor)
    motor_max_rpm: Optional[float] = None
    motor_power_hp: float = 0.0
    motor_efficiency: float = 1.0
    motor_max_torque_nm: Optional[float] = None
    gearbox_max_torque_nm: Optional[float] = None

    # Hydraulic drivetrain
    pump_strings: float = 0.0
    pump_motor_power_hp: float = 0.0
    pump_motor_efficiency: float = 0.0
    pump_motor_rpm: float = 0.0
    pump_displacement_cc: float = 0.0
    max_pressure_psi: float = 0.0
    hyd_motor_displacement_cc: float = 0.0
    hyd_motor_max_rpm: Optional[float] = None

    # Rating inputs for the minimum system horsepower estimate
    rated_speed_mpm: Optional[float] = None
    rated_swl_kgf: Optional[float] = None
    system_efficiency: Optional[float] = None

    @field_validator(
        'flange_diameter_in', 'wraps_per_layer_override', 'motor_max_rpm',
        'motor_max_torque_nm', 'gearbox_max_torque_nm', 'hyd_motor_max_rpm',
        'rated_speed_mpm', 'rated_swl_kgf', 'system_efficiency',
        mode='before'
    )
    @classmethod
    def blank_to_none(cls, v):
        # Form inputs send blank optional fields as empty strings
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ============================================================================
# Geometry output
# ============================================================================

class ElectricWrap(BaseModel):
    """Electric drivetrain results for one wrap (all zero when disabled)."""
    model_config = ConfigDict(frozen=True)

    motor_torque_nm: float = 0.0
    motor_rpm_power: float = 0.0     # +inf when unbounded (no-load)
    motor_rpm_gearbox: float = 0.0   # +inf when no max rpm is configured
    motor_rpm: float = 0.0
    speed_power_mpm: float = 0.0
    speed_gearbox_mpm: float = 0.0
    speed_available_mpm: float = 0.0
    avail_tension_kgf: float = 0.0


class HydraulicWrap(BaseModel):
    """Hydraulic drivetrain results for one wrap (all zero when disabled)."""
    model_config = ConfigDict(frozen=True)

    motor_torque_nm: float = 0.0
    pressure_required_psi: float = 0.0
    speed_power_mpm: float = 0.0
    speed_flow_mpm: float = 0.0
    speed_available_mpm: float = 0.0
    drum_rpm_power: float = 0.0
    drum_rpm_flow: float = 0.0
    drum_rpm_available: float = 0.0
    hp_used_at_available: float = 0.0
    elec_input_hp_used: float = 0.0
    drum_torque_max_pressure_nm: float = 0.0
    avail_tension_kgf: float = 0.0


class WrapRow(BaseModel):
    """One cable wrap on the drum."""
    model_config = ConfigDict(frozen=True)

    wrap_no: int
    layer_no: int
    layer_dia_in: float
    wrap_len_in: float
    pre_spooled_len_m: float   # on drum BEFORE this wrap
    spooled_len_m: float       # on drum AFTER this wrap
    deployed_len_m: float      # paid out after this wrap
    total_cable_len_m: float

    # Filled in by the performance pass
    tension_theoretical_kgf: float = 0.0
    tension_kgf: float = 0.0
    torque_nm: float = 0.0
    gearbox_torque_nm: float = 0.0
    electric: ElectricWrap = Field(default_factory=ElectricWrap)
    hydraulic: HydraulicWrap = Field(default_factory=HydraulicWrap)


class SpoolSummary(BaseModel):
    """Capacity summary of a spooling run."""
    model_config = ConfigDict(frozen=True)

    total_layers: int
    full_drum_dia_in: float
    total_wraps: int
    cable_len_m: float          # length the drum must hold
    spooled_len_m: float        # length actually placed on the drum
    shortfall_m: float = 0.0
    capacity_exceeded: bool = False
    drum_capacity_m: Optional[float] = None  # None without a flange limit


class SpoolMeta(BaseModel):
    """Derived geometry parameters echoed back to the caller."""
    model_config = ConfigDict(frozen=True)

    cable_dia_in: float
    effective_core_dia_in: float
    bare_drum_dia_in: float
    wraps_per_layer_calc: int
    wraps_per_layer_override: Optional[float] = None
    wraps_per_layer_used: int
    packing_factor_used: float
    layer_growth_in: float
    flange_dia_in: Optional[float] = None
    capacity_exceeded: bool = False


# ============================================================================
# Normalized drivetrain parameters
# ============================================================================

class ElectricDrive(BaseModel):
    """Electric drivetrain inputs after neutral-default substitution."""
    model_config = ConfigDict(frozen=True)

    motor_max_rpm: float             # +inf when unspecified
    motor_power_hp: float
    motor_efficiency: float
    power_per_motor_w: float
    motor_max_torque_nm: Optional[float] = None
    gearbox_max_torque_nm: Optional[float] = None


class HydraulicDrive(BaseModel):
    """Hydraulic drivetrain inputs and the per-call quantities derived from them."""
    model_config = ConfigDict(frozen=True)

    pump_strings: float
    pump_motor_power_hp: float
    pump_motor_efficiency: float
    pump_motor_rpm: float
    pump_displacement_cc: float
    max_pressure_psi: float
    hyd_motor_displacement_cc: float
    hyd_motor_rpm_cap: float         # +inf when unspecified
    usable_hp_per_string: float
    usable_hp_total: float
    flow_per_string_gpm: float
    flow_total_gpm: float
    flow_rpm_per_motor: float
    torque_per_motor_max_pressure_nm: float
    drum_torque_max_pressure_nm: float


class DrivetrainParams(BaseModel):
    """Shared gearing plus both drivetrain families."""
    model_config = ConfigDict(frozen=True)

    gear_ratio_1: float
    gear_ratio_2: float
    motor_count: float
    mech_denominator: float          # gr1 × gr2 × motors
    gear_product: float              # gr1 × gr2, each floored at epsilon
    electric: ElectricDrive
    hydraulic: HydraulicDrive


# ============================================================================
# Layer tables
# ============================================================================

class LayerGeometry(BaseModel):
    """First/last-wrap projection shared by both layer tables."""
    model_config = ConfigDict(frozen=True)

    layer_no: int
    layer_dia_in: float
    pre_on_drum_m: float
    pre_deployed_m: float
    post_on_drum_m: float
    post_deployed_m: float

    # Recomputed from pre_deployed_m, never copied from a wrap
    max_tension_theoretical_kgf: float = 0.0
    max_tension_required_kgf: float = 0.0
    max_torque_nm: float = 0.0
    max_motor_torque_nm: float = 0.0


class ElectricLayer(LayerGeometry):
    """Electric layer summary; *_at_start fields come from the layer's first wrap."""
    motor_rpm_at_start: float = 0.0
    line_speed_at_start_mpm: float = 0.0
    tension_theoretical_at_start_kgf: float = 0.0
    tension_required_at_start_kgf: float = 0.0
    avail_tension_at_start_kgf: float = 0.0


class HydraulicLayer(LayerGeometry):
    """Hydraulic layer summary; *_at_start fields come from the layer's first wrap."""
    pressure_required_psi_at_start: float = 0.0
    speed_power_at_start_mpm: float = 0.0
    speed_flow_at_start_mpm: float = 0.0
    speed_available_at_start_mpm: float = 0.0
    hp_used_at_start: float = 0.0
    elec_input_hp_used_at_start: float = 0.0
    drum_torque_max_pressure_nm: float = 0.0
    avail_tension_at_start_kgf: float = 0.0
    tension_theoretical_at_start_kgf: float = 0.0
    tension_required_at_start_kgf: float = 0.0


class WrapProjection(BaseModel):
    """Geometry columns common to both wrap tables."""
    model_config = ConfigDict(frozen=True)

    wrap_no: int
    layer_no: int
    layer_dia_in: float
    wrap_len_in: float
    pre_spooled_len_m: float
    spooled_len_m: float
    deployed_len_m: float


class ElectricWrapProjection(WrapProjection):
    total_cable_len_m: float
    tension_required_kgf: float
    tension_theoretical_kgf: float
    torque_nm: float
    motor_torque_nm: float
    motor_rpm: float
    line_speed_mpm: float
    avail_tension_kgf: float


class HydraulicWrapProjection(WrapProjection):
    pressure_required_psi: float
    speed_power_mpm: float
    speed_flow_mpm: float
    speed_available_mpm: float
    hp_used_at_available: float
    elec_input_hp_used: float
    drum_torque_max_pressure_nm: float
    avail_tension_kgf: float


class LayerTables(BaseModel):
    """Layer roll-ups and slim wrap projections (empty for a disabled drivetrain)."""
    model_config = ConfigDict(frozen=True)

    electric_layers: List[ElectricLayer] = Field(default_factory=list)
    hydraulic_layers: List[HydraulicLayer] = Field(default_factory=list)
    electric_wraps: List[ElectricWrapProjection] = Field(default_factory=list)
    hydraulic_wraps: List[HydraulicWrapProjection] = Field(default_factory=list)


class ComputationModel(BaseModel):
    """Complete result of one computation."""
    model_config = ConfigDict(frozen=True)

    config: Configuration
    summary: SpoolSummary
    meta: SpoolMeta
    rows: List[WrapRow]
    electric_enabled: bool
    hydraulic_enabled: bool
    drivetrain: DrivetrainParams
    tables: LayerTables
    minimum_system_hp: Optional[float] = None


# ============================================================================
# Load / save
# ============================================================================

def load_config_json(filepath: Union[str, Path]) -> Configuration:
    """
    Load a Configuration from a JSON file.

    Args:
        filepath: Path to JSON file

    Returns:
        Validated Configuration

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file does not hold a JSON object
        ValidationError: If required fields are missing or mistyped
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    # Some exports wrap the inputs under a 'config' key
    if isinstance(data, dict) and isinstance(data.get('config'), dict):
        data = data['config']

    if not isinstance(data, dict):
        raise ValueError("Invalid configuration JSON - expected an object")

    return Configuration.model_validate(data)


def save_config_json(config: Configuration, filepath: Union[str, Path]) -> None:
    """Save a Configuration as JSON (None fields omitted)."""
    filepath = Path(filepath)
    data = config.model_dump(mode='json', exclude_none=True)
    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)


def save_model_json(model: ComputationModel, filepath: Union[str, Path], indent: int = 2) -> None:
    """Save a full ComputationModel as JSON. Unbounded limits serialize as null."""
    filepath = Path(filepath)
    with open(filepath, 'w') as f:
        f.write(model.model_dump_json(indent=indent))
