"""
layout/ - Layout Module

Seating grid generation, submission validation and reconciliation.
"""

from .models import (
    # Specification
    Position,
    PositionKey,
    FloorSpec,
    LayoutSpec,

    # Spaces
    SpaceMeta,
    SeatMeta,
    Space,
    Seat,
    Hallway,
    Stairs,
    Bathroom,
    Empty,
    space_from_record,
    index_by_key,
)

from .schema import (
    PositionInput,
    SpaceConfigInput,
    coerce_space_configs,
)

from .placement import (
    is_window,
    is_legroom,
    calculate_seat_meta,
)

from .generator import (
    SeatNumberAllocator,
    LayoutGenerator,
    generate_layout,
    summarize_layout,
)

from .validation import (
    ValidationIssue,
    ValidationResult,
    LayoutValidator,
    validate_space_configs,
    check_space_configs,
)

from .reconciliation import (
    SpaceUpdate,
    ReconciliationPlan,
    ReconciliationEngine,
    needs_update,
    build_update,
    build_create,
    apply_update,
    apply_plan,
    temporary_seat_number,
    needs_template_sync,
    reconcile,
)

__all__ = [
    "Position",
    "PositionKey",
    "FloorSpec",
    "LayoutSpec",
    "SpaceMeta",
    "SeatMeta",
    "Space",
    "Seat",
    "Hallway",
    "Stairs",
    "Bathroom",
    "Empty",
    "space_from_record",
    "index_by_key",
    "PositionInput",
    "SpaceConfigInput",
    "coerce_space_configs",
    "is_window",
    "is_legroom",
    "calculate_seat_meta",
    "SeatNumberAllocator",
    "LayoutGenerator",
    "generate_layout",
    "summarize_layout",
    "ValidationIssue",
    "ValidationResult",
    "LayoutValidator",
    "validate_space_configs",
    "check_space_configs",
    "SpaceUpdate",
    "ReconciliationPlan",
    "ReconciliationEngine",
    "needs_update",
    "build_update",
    "build_create",
    "apply_update",
    "apply_plan",
    "temporary_seat_number",
    "needs_template_sync",
    "reconcile",
]
