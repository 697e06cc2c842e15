"""
Winch Drum Calculator - Model Entry Point

Runs the geometry engine, the drivetrain performance pass and the layer
aggregator in order and returns one immutable ComputationModel.

Each call builds a fresh model from its configuration alone; nothing is
cached between calls, so the same configuration always gives an identical
result and concurrent calls never share state.
"""

import logging
from typing import Any, Dict, Optional, Union

from ..io import Configuration, ComputationModel, LayerTables
from .geometry import layer_geometry
from .performance import normalize_drivetrain, apply_performance, load_terms
from .layers import (
    rows_to_electric_layers,
    rows_to_hydraulic_layers,
    project_electric_wraps,
    project_hydraulic_wraps,
)
from .units import minimum_system_hp

logger = logging.getLogger(__name__)

ConfigInput = Union[Configuration, Dict[str, Any]]


def _as_configuration(config: ConfigInput) -> Configuration:
    if isinstance(config, Configuration):
        return config
    return Configuration.model_validate(config)


def compute(
    config: ConfigInput,
    electric_enabled: Optional[bool] = None,
    hydraulic_enabled: Optional[bool] = None
) -> ComputationModel:
    """
    Compute the full spooling and drivetrain model for a winch drum.

    Args:
        config: Configuration model, or a dict accepted by Configuration
        electric_enabled: Override for the configuration's electric flag
        hydraulic_enabled: Override for the configuration's hydraulic flag

    Returns:
        ComputationModel with wrap rows, layer tables and summaries

    Raises:
        pydantic.ValidationError: If a dict config is structurally invalid
    """
    config = _as_configuration(config)

    updates = {}
    if electric_enabled is not None:
        updates['electric_enabled'] = electric_enabled
    if hydraulic_enabled is not None:
        updates['hydraulic_enabled'] = hydraulic_enabled
    if updates:
        config = config.model_copy(update=updates)

    rows, summary, meta = layer_geometry(config)
    drive = normalize_drivetrain(config)
    rows = apply_performance(rows, config, drive)

    payload_kg, cable_w_kgpm = load_terms(config)
    electric = bool(config.electric_enabled)
    hydraulic = bool(config.hydraulic_enabled)

    tables = LayerTables(
        electric_layers=rows_to_electric_layers(rows, payload_kg, cable_w_kgpm, drive) if electric else [],
        hydraulic_layers=rows_to_hydraulic_layers(rows, payload_kg, cable_w_kgpm, drive) if hydraulic else [],
        electric_wraps=project_electric_wraps(rows) if electric else [],
        hydraulic_wraps=project_hydraulic_wraps(rows) if hydraulic else [],
    )

    logger.info(
        f"Computed {summary.total_wraps} wraps over {summary.total_layers} layers "
        f"for {summary.cable_len_m:.1f} m of cable"
    )

    return ComputationModel(
        config=config,
        summary=summary,
        meta=meta,
        rows=rows,
        electric_enabled=electric,
        hydraulic_enabled=hydraulic,
        drivetrain=drive,
        tables=tables,
        minimum_system_hp=minimum_system_hp(
            config.rated_speed_mpm, config.rated_swl_kgf, config.system_efficiency
        ),
    )
