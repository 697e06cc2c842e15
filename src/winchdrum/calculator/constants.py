"""
Engineering constants for winch drum calculations.

This module centralizes all numerical constants used by the geometry engine,
the drivetrain performance pass and the validation rules. Each constant is
documented with its source (SI definition, unit convention, or engineering
practice).

MODIFICATION GUIDELINES:
- Never change physical/unit constants; they are exact or defined values
- Engineering practice constants may be adjusted based on experience
- Add new constants here rather than hardcoding in functions
- Always include units in constant names (_IN, _M, _PSI, _HP)

Constants are grouped by category:
- Physical constants and unit conversions
- Numerical guards
- Geometry defaults
- Hydraulics
- Engineering practice (validation thresholds)
"""

from math import pi

# =============================================================================
# Physical Constants and Unit Conversions
# =============================================================================

# Standard gravity, CGPM 1901 definition
G: float = 9.80665                      # m/s²

# Mechanical horsepower
W_PER_HP: float = 745.7                 # W per hp

# Length conversions (exact by definition of the international inch)
MM_PER_IN: float = 25.4
IN_PER_MM: float = 1 / MM_PER_IN
M_PER_IN: float = 0.0254

# Volume conversion, US liquid gallon
CC_PER_GAL: float = 3785.411784         # cc per US gallon

# Pressure conversion
PSI_TO_PA: float = 6894.757293          # Pa per psi

# Hydraulic horsepower constant: hp = psi × gpm / 1714
HYD_HP_CONSTANT: float = 1714.0

TWO_PI: float = 2 * pi

# =============================================================================
# Numerical Guards
# =============================================================================

# Floor applied to gear-ratio products and other denominators
RATIO_EPSILON: float = 1e-9

# Floor applied to displacement before unit inversion (cc/rev)
DISPLACEMENT_EPSILON_CC: float = 1e-12

# Floor applied to radii before dividing torque into line pull (m)
RADIUS_EPSILON_M: float = 1e-12

# Tolerance when comparing accumulated spooled length to the target (m)
SPOOL_TOLERANCE_M: float = 1e-12

# =============================================================================
# Geometry Defaults
# =============================================================================

# Default packing factor: radial growth per layer = cable_dia × packing_factor.
# 0.877 sits just above the ideal hexagonal nesting value cos(30°) ≈ 0.866.
DEFAULT_PACKING_FACTOR: float = 0.877

# Hard cap on generated wrap rows; larger inputs are truncated and flagged
MAX_WRAP_ROWS: int = 200_000

# Cap on layers walked when estimating full-drum capacity
MAX_CAPACITY_LAYERS: int = 10_000

# =============================================================================
# Rounding (display precision of derived row fields)
# =============================================================================

TENSION_DECIMALS: int = 1
TORQUE_DECIMALS: int = 1
MOTOR_TORQUE_DECIMALS: int = 2
RPM_DECIMALS: int = 1
SPEED_DECIMALS: int = 2
POWER_DECIMALS: int = 2
MAX_PRESSURE_TORQUE_DECIMALS: int = 2

# Layer-table lengths (m), rounded to the millimetre
LENGTH_DECIMALS: int = 3

# =============================================================================
# Engineering Practice (validation thresholds)
# =============================================================================

# Margin applied to the minimum system horsepower estimate
MIN_SYSTEM_HP_MARGIN: float = 1.2

# Typical packing factor range for round-strand cable on grooved drums
PACKING_FACTOR_MIN: float = 0.8
PACKING_FACTOR_MAX: float = 1.0

# Layers above which spooling quality is commonly questioned
MANY_LAYERS_WARNING: int = 12
