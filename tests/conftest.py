"""
seatlayout Test Configuration and Fixtures

Shared layout specs and helpers for unit and integration tests.
"""

import pytest
from typing import Any, Dict

from seatlayout.bootstrap.config import reset_config
from seatlayout.layout.models import FloorSpec, LayoutSpec


def _space_config(floor_number: int, x: int, y: int, **fields) -> Dict[str, Any]:
    data: Dict[str, Any] = {"floorNumber": floor_number, "position": {"x": x, "y": y}}
    data.update(fields)
    return data


@pytest.fixture
def space_config():
    """Builder for submission dicts in the camelCase shape API callers send."""
    return _space_config


@pytest.fixture(autouse=True)
def clean_config():
    """Drop any cached EngineConfig between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def single_floor_spec():
    """One floor, 2 rows, 2+2 seats: 10 cells."""
    return LayoutSpec(
        num_floors=1,
        floors=[FloorSpec(floor_number=1, num_rows=2, seats_left=2, seats_right=2)],
        total_seats=6,
    )


@pytest.fixture
def single_row_double_decker_spec():
    """Double decker whose lower floor is a single row."""
    return LayoutSpec(
        num_floors=2,
        floors=[
            FloorSpec(floor_number=1, num_rows=1, seats_left=1, seats_right=1),
            FloorSpec(floor_number=2, num_rows=2, seats_left=1, seats_right=1),
        ],
    )


@pytest.fixture
def double_decker_spec():
    """Typical double decker: 3 rows downstairs, 2 rows upstairs."""
    return LayoutSpec(
        num_floors=2,
        floors=[
            FloorSpec(floor_number=1, num_rows=3, seats_left=2, seats_right=2),
            FloorSpec(floor_number=2, num_rows=2, seats_left=2, seats_right=1),
        ],
        total_seats=13,
    )


@pytest.fixture
def coach_spec():
    """Full size single-deck coach."""
    return LayoutSpec(
        num_floors=1,
        floors=[FloorSpec(floor_number=1, num_rows=12, seats_left=2, seats_right=2)],
        total_seats=46,
    )
