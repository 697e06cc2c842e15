"""
Winchdrum - winch drum spooling and drivetrain performance calculator.

Example:
    >>> from winchdrum import compute, load_config_json
    >>>
    >>> config = load_config_json("drum.json")
    >>> model = compute(config)
    >>> model.summary.total_layers
    7

Note: All imports are lazy-loaded; importing the package alone does not
import Pydantic.
"""

__version__ = "1.0.0"

# Define which names come from which submodule

_ENUMS = {"DrivetrainType"}

_CALCULATOR = {
    "compute",
    "layer_geometry",
    "normalize_drivetrain",
    "apply_performance",
    "rows_to_electric_layers",
    "rows_to_hydraulic_layers",
    "project_electric_wraps",
    "project_hydraulic_wraps",
    "validate_model",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",
}

_IO = {
    "load_config_json",
    "save_config_json",
    "save_model_json",
    "Configuration",
    "ComputationModel",
    "WrapRow",
    "ElectricLayer",
    "HydraulicLayer",
    "SpoolSummary",
    "SpoolMeta",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    raise AttributeError(f"module 'winchdrum' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "DrivetrainType",

    # Calculator (lazy loaded from calculator)
    "compute",
    "layer_geometry",
    "normalize_drivetrain",
    "apply_performance",
    "rows_to_electric_layers",
    "rows_to_hydraulic_layers",
    "project_electric_wraps",
    "project_hydraulic_wraps",
    "validate_model",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",

    # IO (lazy loaded from io)
    "load_config_json",
    "save_config_json",
    "save_model_json",
    "Configuration",
    "ComputationModel",
    "WrapRow",
    "ElectricLayer",
    "HydraulicLayer",
    "SpoolSummary",
    "SpoolMeta",
]
