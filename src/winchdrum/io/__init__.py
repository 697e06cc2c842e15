"""
Winchdrum IO - data models, JSON loaders and the request schema.

Example:
    >>> from winchdrum.io import load_config_json, save_model_json
    >>> from winchdrum.calculator import compute
    >>>
    >>> config = load_config_json("drum.json")
    >>> model = compute(config)
    >>> save_model_json(model, "result.json")
"""

from .loaders import (
    load_config_json,
    save_config_json,
    save_model_json,
    Configuration,
    WrapRow,
    ElectricWrap,
    HydraulicWrap,
    SpoolSummary,
    SpoolMeta,
    ElectricDrive,
    HydraulicDrive,
    DrivetrainParams,
    LayerGeometry,
    ElectricLayer,
    HydraulicLayer,
    WrapProjection,
    ElectricWrapProjection,
    HydraulicWrapProjection,
    LayerTables,
    ComputationModel,
)

from .schema import (
    SCHEMA_VERSION,
    REQUIRED_COMMON_FIELDS,
    REQUIRED_ELECTRIC_FIELDS,
    REQUIRED_HYDRAULIC_FIELDS,
    OPTIONAL_NUMERIC_FIELDS,
    required_fields,
    validate_request_fields,
)

__all__ = [
    # Loaders
    "load_config_json",
    "save_config_json",
    "save_model_json",

    # Inputs
    "Configuration",

    # Geometry and performance rows
    "WrapRow",
    "ElectricWrap",
    "HydraulicWrap",
    "SpoolSummary",
    "SpoolMeta",

    # Drivetrain
    "ElectricDrive",
    "HydraulicDrive",
    "DrivetrainParams",

    # Layer tables
    "LayerGeometry",
    "ElectricLayer",
    "HydraulicLayer",
    "WrapProjection",
    "ElectricWrapProjection",
    "HydraulicWrapProjection",
    "LayerTables",

    # Result
    "ComputationModel",

    # Schema
    "SCHEMA_VERSION",
    "REQUIRED_COMMON_FIELDS",
    "REQUIRED_ELECTRIC_FIELDS",
    "REQUIRED_HYDRAULIC_FIELDS",
    "OPTIONAL_NUMERIC_FIELDS",
    "required_fields",
    "validate_request_fields",
]
