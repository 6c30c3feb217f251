"""
core/ - Core Module

Enumerations and default values shared by every layout component.
"""

from seatlayout.core.enums import (
    SpaceType,
    SeatType,
    OmissionPolicy,
    ValidationMode,
)

__all__ = [
    "SpaceType",
    "SeatType",
    "OmissionPolicy",
    "ValidationMode",
]
