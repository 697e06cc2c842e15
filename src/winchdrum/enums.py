"""Type-safe enums for the winch drum calculator."""

from enum import Enum


class DrivetrainType(Enum):
    """Drivetrain family selected at the request boundary"""
    ELECTRIC = "electric"    # Electric motor(s) through gear stages
    HYDRAULIC = "hydraulic"  # Electro-hydraulic pump strings driving hydraulic motors

    @classmethod
    def from_value(cls, value) -> "DrivetrainType":
        """Coerce a selector value, falling back to ELECTRIC for anything unrecognised.

        Strings must match a member value exactly; "Hydraulic" or
        " hydraulic" select ELECTRIC.
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if isinstance(value, str) and value == member.value:
                return member
        return cls.ELECTRIC
