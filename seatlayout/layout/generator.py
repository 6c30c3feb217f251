"""
layout/generator.py - Default Layout Generator

Walks every floor, row and column of a layout spec and emits the full
grid of spaces: seats either side of the aisle, stairs on the first row
of a double-decker's lower floor, and a bathroom in the last row.

Output is deterministic: the same spec and double-decker flag always
produce the same list in the same order.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging

from seatlayout.bootstrap.config import LayoutConfig
from seatlayout.core.constants import (
    AISLE_DESCRIPTION,
    BATHROOM_AREA_DESCRIPTION,
    BATHROOM_DESCRIPTION,
    INITIAL_SEAT_NUMBER_COUNTER,
    STAIRS_AREA_DESCRIPTION,
    STAIRS_DESCRIPTION,
    WINDOW_AMENITY,
)
from seatlayout.layout.models import (
    Bathroom,
    Empty,
    FloorSpec,
    Hallway,
    LayoutSpec,
    Position,
    Seat,
    SeatMeta,
    Space,
    SpaceMeta,
    Stairs,
)
from seatlayout.layout.placement import is_legroom_row, is_window

logger = logging.getLogger(__name__)


# =============================================================================
# SEAT NUMBER ALLOCATION
# =============================================================================

@dataclass(frozen=True)
class SeatNumberAllocator:
    """
    Immutable seat number counter.

    allocate() returns the number together with the allocator to use for
    the next seat; the counter is shared across floors by passing the
    returned allocator along.
    """
    next_number: int = INITIAL_SEAT_NUMBER_COUNTER

    def allocate(self) -> Tuple[str, "SeatNumberAllocator"]:
        return str(self.next_number), SeatNumberAllocator(self.next_number + 1)

    @property
    def allocated(self) -> int:
        """How many numbers have been handed out."""
        return self.next_number - INITIAL_SEAT_NUMBER_COUNTER


# =============================================================================
# LAYOUT GENERATOR
# =============================================================================

class LayoutGenerator:
    """
    Generates the default layout for a layout spec.

    Cell rules, first match wins:
    1. aisle column -> stairs (first row of a double-decker first floor)
       or hallway
    2. outer columns of that stairs row -> empty (stairwell)
    3. last row, rightmost column -> bathroom
    4. last row, column left of the bathroom -> empty (clearance)
    5. anything else -> seat
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self._config = config or LayoutConfig()

    def generate(
        self,
        layout_spec: LayoutSpec,
        is_double_decker: Optional[bool] = None,
    ) -> List[Space]:
        """
        Generate every space of the layout.

        Args:
            layout_spec: Floors to generate
            is_double_decker: Put stairs on floor 1. Derived from
                num_floors > 1 when None.

        Returns:
            Spaces in floor, row, column order

        Raises:
            ConfigurationError: a floor in [1, num_floors] has no FloorSpec
        """
        if is_double_decker is None:
            is_double_decker = layout_spec.is_double_decker

        spaces: List[Space] = []
        allocator = SeatNumberAllocator()

        for floor_number in range(1, layout_spec.num_floors + 1):
            floor_spec = layout_spec.require_floor(floor_number)
            stairs_floor = is_double_decker and layout_spec.num_floors > 1 and floor_number == 1

            floor_spaces, allocator = self.generate_floor(floor_spec, stairs_floor, allocator)
            spaces.extend(floor_spaces)

        logger.debug(
            f"Generated layout: {layout_spec.num_floors} floor(s), "
            f"{len(spaces)} spaces, {allocator.allocated} seats"
        )

        return spaces

    def generate_floor(
        self,
        floor_spec: FloorSpec,
        is_double_decker_first_floor: bool,
        allocator: SeatNumberAllocator,
    ) -> Tuple[List[Space], SeatNumberAllocator]:
        """Generate one floor; returns its spaces and the advanced allocator."""
        spaces: List[Space] = []
        for row_index in range(floor_spec.num_rows):
            row_spaces, allocator = self._generate_row(
                floor_spec, row_index, is_double_decker_first_floor, allocator
            )
            spaces.extend(row_spaces)
        return spaces, allocator

    def _generate_row(
        self,
        floor_spec: FloorSpec,
        row_index: int,
        is_double_decker_first_floor: bool,
        allocator: SeatNumberAllocator,
    ) -> Tuple[List[Space], SeatNumberAllocator]:
        spaces: List[Space] = []
        for col_index in range(floor_spec.total_columns):
            position = Position.from_indices(row_index, col_index)
            space = self._structural_space(
                floor_spec, position, is_double_decker_first_floor
            )
            if space is None:
                seat_number, allocator = allocator.allocate()
                space = self._seat(floor_spec, position, seat_number)
            spaces.append(space)
        return spaces, allocator

    def _structural_space(
        self,
        floor_spec: FloorSpec,
        position: Position,
        is_double_decker_first_floor: bool,
    ) -> Optional[Space]:
        """Non-seat space for this cell, or None when it holds a seat."""
        row_index = position.row_index
        col_index = position.col_index
        is_first_row = row_index == 0
        is_last_row = row_index == floor_spec.num_rows - 1
        last_column = floor_spec.total_columns - 1
        stairs_row = is_first_row and is_double_decker_first_floor

        def build(space_cls, description):
            return space_cls(
                floor_number=floor_spec.floor_number,
                position=position,
                meta=SpaceMeta.for_position(position, description=description),
            )

        if col_index == floor_spec.aisle_column:
            if stairs_row:
                return build(Stairs, STAIRS_DESCRIPTION)
            return build(Hallway, AISLE_DESCRIPTION)

        if stairs_row and col_index in (0, last_column):
            return build(Empty, STAIRS_AREA_DESCRIPTION)

        if is_last_row and col_index == last_column:
            return build(Bathroom, BATHROOM_DESCRIPTION)

        if is_last_row and col_index == last_column - 1:
            return build(Empty, BATHROOM_AREA_DESCRIPTION)

        return None

    def _seat(self, floor_spec: FloorSpec, position: Position, seat_number: str) -> Seat:
        window = is_window(position, floor_spec)
        amenities = set(self._config.default_amenities)
        if window:
            amenities.add(WINDOW_AMENITY)

        return Seat(
            floor_number=floor_spec.floor_number,
            position=position,
            meta=SpaceMeta.for_position(position),
            seat_number=seat_number,
            seat_type=self._config.default_seat_type,
            amenities=frozenset(amenities),
            reclinement_angle=self._config.generated_reclinement_angle,
            seat_meta=SeatMeta(
                is_window=window,
                is_legroom=is_legroom_row(position.row_index),
            ),
        )


def generate_layout(
    layout_spec: LayoutSpec,
    is_double_decker: Optional[bool] = None,
    config: Optional[LayoutConfig] = None,
) -> List[Space]:
    """Generate the default layout for ``layout_spec``."""
    return LayoutGenerator(config).generate(layout_spec, is_double_decker)


def summarize_layout(spaces: List[Space]) -> Dict[int, Dict[str, int]]:
    """Count space types per floor."""
    counts: Dict[int, Counter] = {}
    for space in spaces:
        counts.setdefault(space.floor_number, Counter())[space.space_type.value] += 1
    return {floor: dict(sorted(c.items())) for floor, c in sorted(counts.items())}


__all__ = [
    "SeatNumberAllocator",
    "LayoutGenerator",
    "generate_layout",
    "summarize_layout",
]
