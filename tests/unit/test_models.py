"""
seatlayout Layout Model Tests

Tests for layout specs, positions and the space variants.
"""

import pytest

from seatlayout.core.enums import SeatType, SpaceType
from seatlayout.errors.taxonomy import ConfigurationError
from seatlayout.layout.models import (
    Bathroom,
    Empty,
    FloorSpec,
    Hallway,
    LayoutSpec,
    Position,
    PositionKey,
    Seat,
    SeatMeta,
    SpaceMeta,
    Stairs,
    index_by_key,
    snake_case_keys,
    space_class,
    space_from_record,
    strip_seat_meta,
)


# =============================================================================
# POSITION TESTS
# =============================================================================

class TestPosition:
    """Tests for Position and PositionKey."""

    def test_indices(self):
        position = Position(x=3, y=2)
        assert position.row_index == 1
        assert position.col_index == 3

    def test_from_indices(self):
        assert Position.from_indices(0, 4) == Position(x=4, y=1)

    def test_dict_round_trip(self):
        assert Position.from_dict({"x": 2, "y": 5}).to_dict() == {"x": 2, "y": 5}

    def test_position_key_string(self):
        key = PositionKey.of(2, Position(x=1, y=3))
        assert key == (2, 1, 3)
        assert str(key) == "2:1:3"

    def test_positions_are_hashable(self):
        assert len({Position(1, 1), Position(1, 1), Position(2, 1)}) == 2


# =============================================================================
# FLOOR SPEC TESTS
# =============================================================================

class TestFloorSpec:
    """Tests for FloorSpec."""

    def test_derived_columns(self):
        floor = FloorSpec(floor_number=1, num_rows=10, seats_left=2, seats_right=1)
        assert floor.total_columns == 4
        assert floor.aisle_column == 2
        assert floor.max_column == 3
        assert floor.cell_count == 40

    def test_rejects_floor_zero(self):
        with pytest.raises(ConfigurationError):
            FloorSpec(floor_number=0, num_rows=1, seats_left=1, seats_right=1)

    def test_rejects_no_rows(self):
        with pytest.raises(ConfigurationError) as exc_info:
            FloorSpec(floor_number=1, num_rows=0, seats_left=1, seats_right=1)
        assert exc_info.value.details["num_rows"] == 0

    def test_rejects_negative_seats(self):
        with pytest.raises(ConfigurationError):
            FloorSpec(floor_number=1, num_rows=2, seats_left=-1, seats_right=1)

    def test_from_camel_case_dict(self):
        floor = FloorSpec.from_dict({"floorNumber": 2, "numRows": 5, "seatsLeft": 2, "seatsRight": 2})
        assert floor == FloorSpec(floor_number=2, num_rows=5, seats_left=2, seats_right=2)

    def test_from_dict_missing_key(self):
        with pytest.raises(ConfigurationError):
            FloorSpec.from_dict({"floor_number": 1, "num_rows": 5})


# =============================================================================
# LAYOUT SPEC TESTS
# =============================================================================

class TestLayoutSpec:
    """Tests for LayoutSpec."""

    def test_double_decker_derived_from_floor_count(self, single_floor_spec, double_decker_spec):
        assert not single_floor_spec.is_double_decker
        assert double_decker_spec.is_double_decker

    def test_floor_lookup(self, double_decker_spec):
        assert double_decker_spec.floor(2).num_rows == 2
        assert double_decker_spec.floor(3) is None

    def test_require_floor_raises(self, single_floor_spec):
        with pytest.raises(ConfigurationError, match="Floor configuration not found for floor 2"):
            single_floor_spec.require_floor(2)

    def test_rejects_zero_floors(self):
        with pytest.raises(ConfigurationError):
            LayoutSpec(num_floors=0)

    def test_check_consistency_missing_floor(self):
        spec = LayoutSpec(
            num_floors=2,
            floors=[FloorSpec(floor_number=1, num_rows=2, seats_left=1, seats_right=1)],
        )
        with pytest.raises(ConfigurationError):
            spec.check_consistency()

    def test_check_consistency_duplicate_floor(self):
        floor = FloorSpec(floor_number=1, num_rows=2, seats_left=1, seats_right=1)
        spec = LayoutSpec(num_floors=1, floors=[floor, floor])
        with pytest.raises(ConfigurationError) as exc_info:
            spec.check_consistency()
        assert exc_info.value.details["floors"] == [1]

    def test_check_consistency_extra_floor(self):
        spec = LayoutSpec(
            num_floors=1,
            floors=[
                FloorSpec(floor_number=1, num_rows=2, seats_left=1, seats_right=1),
                FloorSpec(floor_number=2, num_rows=2, seats_left=1, seats_right=1),
            ],
        )
        with pytest.raises(ConfigurationError):
            spec.check_consistency()

    def test_check_consistency_ok(self, double_decker_spec):
        double_decker_spec.check_consistency()

    def test_from_stored_diagram(self):
        spec = LayoutSpec.from_dict({
            "numFloors": 1,
            "totalSeats": 40,
            "seatsPerFloor": [
                {"floorNumber": 1, "numRows": 10, "seatsLeft": 2, "seatsRight": 2},
            ],
        })
        assert spec.num_floors == 1
        assert spec.total_seats == 40
        assert spec.floor(1).seats_left == 2

    def test_from_dict_requires_num_floors(self):
        with pytest.raises(ConfigurationError):
            LayoutSpec.from_dict({"floors": []})

    def test_to_dict_round_trip(self, double_decker_spec):
        assert LayoutSpec.from_dict(double_decker_spec.to_dict()) == double_decker_spec


# =============================================================================
# SPACE TESTS
# =============================================================================

class TestSpaces:
    """Tests for the space variants."""

    def test_seat_record(self):
        seat = Seat(
            floor_number=1,
            position=Position(x=0, y=1),
            meta=SpaceMeta(row_index=0, col_index=0),
            seat_number="1",
            amenities=["window", "usb"],
            seat_meta=SeatMeta(is_window=True, is_legroom=True),
        )
        record = seat.to_record()
        assert record == {
            "space_type": "seat",
            "floor_number": 1,
            "position": {"x": 0, "y": 1},
            "seat_number": "1",
            "seat_type": "regular",
            "reclinement_angle": 120,
            "amenities": ["usb", "window"],
            "meta": {"row_index": 0, "col_index": 0, "is_window": True, "is_legroom": True},
            "active": True,
        }

    def test_seat_coerces_fields(self):
        seat = Seat(
            floor_number=1,
            position=Position(x=0, y=1),
            meta=SpaceMeta(row_index=0, col_index=0),
            seat_type="vip",
            amenities=["wifi", "wifi"],
        )
        assert seat.seat_type is SeatType.VIP
        assert seat.amenities == frozenset({"wifi"})

    @pytest.mark.parametrize("cls", [Hallway, Stairs, Bathroom, Empty])
    def test_non_seat_record_clears_seat_fields(self, cls):
        space = cls(floor_number=1, position=Position(x=2, y=1),
                    meta=SpaceMeta(row_index=0, col_index=2))
        record = space.to_record()
        assert record["seat_number"] is None
        assert record["seat_type"] is None
        assert record["reclinement_angle"] is None
        assert record["amenities"] == []
        assert "is_window" not in record["meta"]
        assert not space.is_seat

    def test_space_class_lookup(self):
        assert space_class(SpaceType.BATHROOM) is Bathroom
        assert space_class("seat") is Seat


class TestSpaceFromRecord:
    """Tests for loading stored records."""

    def test_camel_case_seat_record(self):
        space = space_from_record({
            "spaceType": "seat",
            "floorNumber": 1,
            "position": {"x": 4, "y": 2},
            "seatNumber": "8",
            "seatType": "premium",
            "amenities": ["window"],
            "reclinementAngle": 140,
            "meta": {"rowIndex": 1, "colIndex": 4, "isWindow": True, "isLegroom": False},
            "active": True,
        })
        assert isinstance(space, Seat)
        assert space.seat_number == "8"
        assert space.seat_type is SeatType.PREMIUM
        assert space.reclinement_angle == 140
        assert space.seat_meta == SeatMeta(is_window=True, is_legroom=False)

    def test_missing_seat_values_use_defaults(self):
        space = space_from_record({
            "space_type": "seat",
            "floor_number": 1,
            "position": {"x": 0, "y": 1},
            "seat_number": "3",
            "seat_type": None,
            "amenities": None,
            "reclinement_angle": None,
        })
        assert space.seat_type is SeatType.REGULAR
        assert space.amenities == frozenset()
        assert space.reclinement_angle == 120
        assert space.active is True

    def test_stale_seat_fields_dropped_on_non_seat(self):
        space = space_from_record({
            "space_type": "hallway",
            "floor_number": 1,
            "position": {"x": 2, "y": 1},
            "seat_number": "12",
            "amenities": ["window"],
            "meta": {"row_index": 0, "col_index": 2, "is_window": True, "description": "Aisle"},
        })
        assert isinstance(space, Hallway)
        record = space.to_record()
        assert record["seat_number"] is None
        assert record["meta"] == {"row_index": 0, "col_index": 2, "description": "Aisle"}

    def test_extra_meta_survives_round_trip(self):
        record = {
            "space_type": "bathroom",
            "floor_number": 1,
            "position": {"x": 4, "y": 2},
            "meta": {"row_index": 1, "col_index": 4, "description": "Bathroom"},
            "active": False,
        }
        assert space_from_record(record).to_record()["meta"] == record["meta"]
        assert space_from_record(record).active is False

    def test_custom_meta_keys_keep_their_spelling(self):
        space = space_from_record({
            "spaceType": "seat",
            "floorNumber": 1,
            "position": {"x": 0, "y": 1},
            "seatNumber": "1",
            "meta": {"rowIndex": 0, "colIndex": 0, "legRoom": "premium", "adjustableHeadrest": True},
        })
        meta = space.to_record()["meta"]
        assert meta["adjustableHeadrest"] is True
        assert meta["legRoom"] == "premium"
        assert "adjustable_headrest" not in meta
        assert (meta["row_index"], meta["col_index"]) == (0, 0)


class TestHelpers:
    """Tests for module helpers."""

    def test_snake_case_keys(self):
        assert snake_case_keys({"seatsPerFloor": 1, "num_rows": 2}) == {
            "seats_per_floor": 1,
            "num_rows": 2,
        }

    def test_index_by_key(self):
        spaces = [
            Hallway(floor_number=1, position=Position(2, 1), meta=SpaceMeta(0, 2)),
            Empty(floor_number=2, position=Position(2, 1), meta=SpaceMeta(0, 2)),
        ]
        index = index_by_key(spaces)
        assert set(index) == {PositionKey(1, 2, 1), PositionKey(2, 2, 1)}

    def test_strip_seat_meta(self):
        meta = {"row_index": 0, "col_index": 1, "is_window": True, "is_legroom": False}
        assert strip_seat_meta(meta) == {"row_index": 0, "col_index": 1}
        assert "is_window" in meta
