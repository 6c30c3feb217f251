"""
seatlayout/ - Vehicle seating layout engine

Generates default seating grids for buses and coaches, validates
hand-edited layouts and reconciles them against stored ones.
"""

__version__ = "1.0.0"

from seatlayout.core.enums import SpaceType, SeatType, OmissionPolicy, ValidationMode
from seatlayout.errors.taxonomy import (
    LayoutError,
    ConfigurationError,
    ValidationError,
    ValidationErrorCode,
)
from seatlayout.layout import (
    FloorSpec,
    LayoutSpec,
    Position,
    PositionKey,
    Space,
    Seat,
    SpaceConfigInput,
    generate_layout,
    validate_space_configs,
    check_space_configs,
    reconcile,
    apply_update,
)

__all__ = [
    "__version__",
    "SpaceType",
    "SeatType",
    "OmissionPolicy",
    "ValidationMode",
    "LayoutError",
    "ConfigurationError",
    "ValidationError",
    "ValidationErrorCode",
    "FloorSpec",
    "LayoutSpec",
    "Position",
    "PositionKey",
    "Space",
    "Seat",
    "SpaceConfigInput",
    "generate_layout",
    "validate_space_configs",
    "check_space_configs",
    "reconcile",
    "apply_update",
]
