"""
layout/placement.py - Placement Calculator

Pure functions deriving seat placement flags from a grid position and
its floor specification.

Positions are anything exposing ``x`` (0-indexed column) and ``y``
(1-indexed row): Position, PositionInput, etc.
"""

from __future__ import annotations
from typing import Any

from seatlayout.layout.models import FloorSpec, SeatMeta


def is_window(position: Any, floor_spec: FloorSpec) -> bool:
    """
    Window seats occupy the two outermost columns.

    The rightmost column is seats_left + seats_right, which is the last
    physical column once the aisle is counted.
    """
    return position.x == 0 or position.x == floor_spec.seats_left + floor_spec.seats_right


def is_legroom(position: Any) -> bool:
    """First-row seats get extra legroom."""
    return position.y == 1


def is_legroom_row(row_index: int) -> bool:
    """Same rule as is_legroom, for callers holding a 0-based row index."""
    return row_index == 0


def calculate_seat_meta(position: Any, floor_spec: FloorSpec) -> SeatMeta:
    """Window and legroom flags for a seat at ``position``."""
    return SeatMeta(
        is_window=is_window(position, floor_spec),
        is_legroom=is_legroom(position),
    )


__all__ = [
    "is_window",
    "is_legroom",
    "is_legroom_row",
    "calculate_seat_meta",
]
