"""
Winch Drum Calculator - spooling geometry and drivetrain performance.

Example:
    >>> from winchdrum.calculator import compute, validate_model, to_summary
    >>>
    >>> model = compute({
    ...     "cable_diameter_mm": 20, "operating_depth_m": 1000,
    ...     "core_diameter_in": 30, "flange_to_flange_in": 40,
    ...     "payload_kg": 1000, "cable_weight_kgpm": 1.5,
    ... })
    >>> print(to_summary(model, validate_model(model)))
"""

from .core import compute

from .geometry import (
    layer_geometry,
    resolve_wraps_per_layer,
    drum_capacity_m,
)

from .performance import (
    normalize_drivetrain,
    apply_performance,
)

from .layers import (
    rows_to_electric_layers,
    rows_to_hydraulic_layers,
    project_electric_wraps,
    project_hydraulic_wraps,
)

from .units import (
    positive_or,
    non_negative_or,
    minimum_system_hp,
)

from .validation import (
    validate_model,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from .output import (
    to_json,
    to_markdown,
    to_summary,
)

from ..enums import DrivetrainType

# Convenience imports
from ..io import Configuration, ComputationModel, WrapRow


__all__ = [
    # Model entry point
    "compute",

    # Pipeline stages
    "layer_geometry",
    "resolve_wraps_per_layer",
    "drum_capacity_m",
    "normalize_drivetrain",
    "apply_performance",
    "rows_to_electric_layers",
    "rows_to_hydraulic_layers",
    "project_electric_wraps",
    "project_hydraulic_wraps",

    # Input sanitising and ratings
    "positive_or",
    "non_negative_or",
    "minimum_system_hp",

    # Enums
    "DrivetrainType",

    # Models
    "Configuration",
    "ComputationModel",
    "WrapRow",

    # Validation
    "validate_model",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "to_json",
    "to_markdown",
    "to_summary",
]
