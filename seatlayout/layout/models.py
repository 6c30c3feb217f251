"""
layout/models.py - Layout Models

Layout specification and space data structures.

A layout is a per-floor grid of spaces. Each space is one variant of a
tagged union (Seat, Hallway, Stairs, Bathroom, Empty); only Seat carries
seat-specific fields, so a non-seat space can never hold stale seat data.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Type
import logging
import re

from seatlayout.core.constants import (
    DEFAULT_AMENITIES,
    DEFAULT_IS_ACTIVE,
    DEFAULT_RECLINEMENT_ANGLE,
    DEFAULT_SEAT_TYPE,
    SEAT_META_KEYS,
    STRUCTURAL_META_KEYS,
)
from seatlayout.core.enums import SeatType, SpaceType
from seatlayout.errors.taxonomy import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# KEY NORMALIZATION
# =============================================================================

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a shallow copy of ``data`` with camelCase keys in snake_case."""
    return {_CAMEL_BOUNDARY.sub("_", key).lower(): value for key, value in data.items()}


# =============================================================================
# POSITIONS
# =============================================================================

@dataclass(frozen=True)
class Position:
    """
    Grid position of a space.

    x is the column (0-indexed), y is the row (1-indexed).
    """
    x: int
    y: int

    @property
    def row_index(self) -> int:
        """0-based row index."""
        return self.y - 1

    @property
    def col_index(self) -> int:
        """0-based column index."""
        return self.x

    @classmethod
    def from_indices(cls, row_index: int, col_index: int) -> "Position":
        return cls(x=col_index, y=row_index + 1)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Position":
        return cls(x=int(data["x"]), y=int(data["y"]))

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


class PositionKey(NamedTuple):
    """Identity of a space within a layout: floor plus grid position."""
    floor_number: int
    x: int
    y: int

    @classmethod
    def of(cls, floor_number: int, position: Any) -> "PositionKey":
        return cls(floor_number, position.x, position.y)

    def __str__(self) -> str:
        return f"{self.floor_number}:{self.x}:{self.y}"


# =============================================================================
# LAYOUT SPECIFICATION
# =============================================================================

@dataclass(frozen=True)
class FloorSpec:
    """
    One physical floor: rows of seats either side of a central aisle.
    """
    floor_number: int
    num_rows: int
    seats_left: int
    seats_right: int

    def __post_init__(self):
        if self.floor_number < 1:
            raise ConfigurationError(
                f"Floor number must be at least 1, got {self.floor_number}",
                floor_number=self.floor_number,
            )
        if self.num_rows < 1:
            raise ConfigurationError(
                f"Floor {self.floor_number} must have at least one row, got {self.num_rows}",
                floor_number=self.floor_number,
                num_rows=self.num_rows,
            )
        if self.seats_left < 0 or self.seats_right < 0:
            raise ConfigurationError(
                f"Floor {self.floor_number} has a negative seat count "
                f"(left={self.seats_left}, right={self.seats_right})",
                floor_number=self.floor_number,
                seats_left=self.seats_left,
                seats_right=self.seats_right,
            )

    @property
    def total_columns(self) -> int:
        """Seat columns plus the aisle."""
        return self.seats_left + 1 + self.seats_right

    @property
    def aisle_column(self) -> int:
        """0-based index of the aisle column."""
        return self.seats_left

    @property
    def max_column(self) -> int:
        """Largest valid column index."""
        return self.seats_left + self.seats_right

    @property
    def cell_count(self) -> int:
        return self.num_rows * self.total_columns

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FloorSpec":
        data = snake_case_keys(data)
        try:
            return cls(
                floor_number=int(data["floor_number"]),
                num_rows=int(data["num_rows"]),
                seats_left=int(data["seats_left"]),
                seats_right=int(data["seats_right"]),
            )
        except KeyError as e:
            raise ConfigurationError(f"Floor configuration is missing {e.args[0]}") from e

    def to_dict(self) -> Dict[str, int]:
        return {
            "floor_number": self.floor_number,
            "num_rows": self.num_rows,
            "seats_left": self.seats_left,
            "seats_right": self.seats_right,
        }


@dataclass
class LayoutSpec:
    """
    Compact description of a vehicle layout.

    ``floors`` should hold one FloorSpec per floor in [1, num_floors];
    a missing floor is only reported when it is used (or by
    check_consistency). ``total_seats`` is the declared passenger count
    and is never re-derived.
    """
    num_floors: int
    floors: List[FloorSpec] = field(default_factory=list)
    total_seats: int = 0

    def __post_init__(self):
        if self.num_floors < 1:
            raise ConfigurationError(
                f"Layout must have at least one floor, got {self.num_floors}",
                num_floors=self.num_floors,
            )

    @property
    def is_double_decker(self) -> bool:
        return self.num_floors > 1

    def floor(self, floor_number: int) -> Optional[FloorSpec]:
        """Find floor spec by number."""
        for floor_spec in self.floors:
            if floor_spec.floor_number == floor_number:
                return floor_spec
        return None

    def require_floor(self, floor_number: int) -> FloorSpec:
        """Find floor spec by number, raising ConfigurationError if absent."""
        floor_spec = self.floor(floor_number)
        if floor_spec is None:
            raise ConfigurationError(
                f"Floor configuration not found for floor {floor_number}",
                floor_number=floor_number,
            )
        return floor_spec

    def check_consistency(self) -> None:
        """Ensure exactly one floor spec exists per floor in [1, num_floors]."""
        numbers = [f.floor_number for f in self.floors]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ConfigurationError(
                f"Duplicate floor configurations for floors {duplicates}",
                floors=duplicates,
            )
        extra = sorted(n for n in numbers if n > self.num_floors)
        if extra:
            raise ConfigurationError(
                f"Floor configurations {extra} exceed the declared {self.num_floors} floor(s)",
                floors=extra,
            )
        for floor_number in range(1, self.num_floors + 1):
            self.require_floor(floor_number)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutSpec":
        """
        Build from a stored diagram record.

        Accepts snake_case or camelCase keys, with floors under
        ``floors`` or ``seats_per_floor``.
        """
        data = snake_case_keys(data)
        floors_data = data.get("floors", data.get("seats_per_floor", []))
        floors = [FloorSpec.from_dict(f) for f in floors_data]
        if "num_floors" not in data:
            raise ConfigurationError("Layout specification is missing num_floors")
        return cls(
            num_floors=int(data["num_floors"]),
            floors=floors,
            total_seats=int(data.get("total_seats") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_floors": self.num_floors,
            "floors": [f.to_dict() for f in sorted(self.floors, key=lambda f: f.floor_number)],
            "total_seats": self.total_seats,
        }


# =============================================================================
# META
# =============================================================================

@dataclass
class SpaceMeta:
    """
    Structural meta carried by every space.

    ``attributes`` holds any extra stored keys (e.g. a description) so
    they survive load/update round trips.
    """
    row_index: int
    col_index: int
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_position(cls, position: Position, **attributes) -> "SpaceMeta":
        return cls(row_index=position.row_index, col_index=position.col_index,
                   attributes=dict(attributes))

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.attributes)
        data["row_index"] = self.row_index
        data["col_index"] = self.col_index
        return data


@dataclass(frozen=True)
class SeatMeta:
    """Derived placement flags, present on seats only."""
    is_window: bool = False
    is_legroom: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {"is_window": self.is_window, "is_legroom": self.is_legroom}


# =============================================================================
# SPACES
# =============================================================================

@dataclass
class Space:
    """
    One cell in a seating grid.

    Subclasses set ``space_type``; use the variant classes rather than
    instantiating Space directly.
    """
    space_type: ClassVar[SpaceType]

    floor_number: int
    position: Position
    meta: SpaceMeta
    active: bool = DEFAULT_IS_ACTIVE

    @property
    def key(self) -> PositionKey:
        return PositionKey.of(self.floor_number, self.position)

    @property
    def is_seat(self) -> bool:
        return False

    def seat_fields(self) -> Dict[str, Any]:
        """Seat-only columns as stored; cleared for non-seat spaces."""
        return {
            "seat_number": None,
            "seat_type": None,
            "reclinement_angle": None,
            "amenities": [],
        }

    def meta_dict(self) -> Dict[str, Any]:
        return self.meta.to_dict()

    def to_record(self) -> Dict[str, Any]:
        """Flat record handed to the persistence layer."""
        record = {
            "space_type": self.space_type.value,
            "floor_number": self.floor_number,
            "position": self.position.to_dict(),
        }
        record.update(self.seat_fields())
        record["meta"] = self.meta_dict()
        record["active"] = self.active
        return record


@dataclass
class Seat(Space):
    """Passenger seat."""
    space_type: ClassVar[SpaceType] = SpaceType.SEAT

    seat_number: str = ""
    seat_type: SeatType = DEFAULT_SEAT_TYPE
    amenities: FrozenSet[str] = DEFAULT_AMENITIES
    reclinement_angle: int = DEFAULT_RECLINEMENT_ANGLE
    seat_meta: SeatMeta = field(default_factory=SeatMeta)

    def __post_init__(self):
        self.seat_type = SeatType(self.seat_type)
        self.amenities = frozenset(self.amenities)

    @property
    def is_seat(self) -> bool:
        return True

    def seat_fields(self) -> Dict[str, Any]:
        return {
            "seat_number": self.seat_number,
            "seat_type": self.seat_type.value,
            "reclinement_angle": self.reclinement_angle,
            "amenities": sorted(self.amenities),
        }

    def meta_dict(self) -> Dict[str, Any]:
        data = self.meta.to_dict()
        data.update(self.seat_meta.to_dict())
        return data


@dataclass
class Hallway(Space):
    """Aisle cell."""
    space_type: ClassVar[SpaceType] = SpaceType.HALLWAY


@dataclass
class Stairs(Space):
    """Stairwell to the upper floor."""
    space_type: ClassVar[SpaceType] = SpaceType.STAIRS


@dataclass
class Bathroom(Space):
    space_type: ClassVar[SpaceType] = SpaceType.BATHROOM


@dataclass
class Empty(Space):
    """Reserved cell with nothing in it."""
    space_type: ClassVar[SpaceType] = SpaceType.EMPTY


SPACE_CLASSES: Dict[SpaceType, Type[Space]] = {
    SpaceType.SEAT: Seat,
    SpaceType.HALLWAY: Hallway,
    SpaceType.STAIRS: Stairs,
    SpaceType.BATHROOM: Bathroom,
    SpaceType.EMPTY: Empty,
}


def space_class(space_type: SpaceType) -> Type[Space]:
    """Variant class for a space type."""
    return SPACE_CLASSES[SpaceType(space_type)]


# =============================================================================
# RECORD LOADING
# =============================================================================

def _meta_from_record(raw_meta: Optional[Dict[str, Any]], position: Position):
    meta = {STRUCTURAL_META_KEYS.get(key, key): value for key, value in (raw_meta or {}).items()}
    row_index = meta.pop("row_index", position.row_index)
    col_index = meta.pop("col_index", position.col_index)
    is_window = bool(meta.pop("is_window", False))
    is_legroom = bool(meta.pop("is_legroom", False))
    base = SpaceMeta(row_index=int(row_index), col_index=int(col_index), attributes=meta)
    return base, SeatMeta(is_window=is_window, is_legroom=is_legroom)


def space_from_record(record: Dict[str, Any]) -> Space:
    """
    Load a persisted space record into its variant.

    Keys may be snake_case or camelCase. Seat-only values on a non-seat
    record are dropped; missing seat values fall back to the defaults.
    """
    data = snake_case_keys(record)
    space_type = SpaceType(data.get("space_type") or SpaceType.SEAT)
    position = Position.from_dict(data["position"])
    meta, seat_meta = _meta_from_record(data.get("meta"), position)
    active = data.get("active")
    common = dict(
        floor_number=int(data["floor_number"]),
        position=position,
        meta=meta,
        active=DEFAULT_IS_ACTIVE if active is None else bool(active),
    )

    if space_type is not SpaceType.SEAT:
        return space_class(space_type)(**common)

    seat_type = data.get("seat_type")
    amenities = data.get("amenities")
    reclinement_angle = data.get("reclinement_angle")
    return Seat(
        seat_number=str(data.get("seat_number") or ""),
        seat_type=seat_type if seat_type is not None else DEFAULT_SEAT_TYPE,
        amenities=frozenset(amenities) if amenities is not None else DEFAULT_AMENITIES,
        reclinement_angle=(
            int(reclinement_angle) if reclinement_angle is not None else DEFAULT_RECLINEMENT_ANGLE
        ),
        seat_meta=seat_meta,
        **common,
    )


def index_by_key(spaces: Iterable[Space]) -> Dict[PositionKey, Space]:
    """Map spaces by (floor, x, y); a later duplicate replaces an earlier one."""
    return {space.key: space for space in spaces}


def strip_seat_meta(meta: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a meta dict without the seat-only flags."""
    return {k: v for k, v in meta.items() if k not in SEAT_META_KEYS}


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
    "SPACE_CLASSES",
    "space_class",
    "space_from_record",
    "index_by_key",
    "strip_seat_meta",
    "snake_case_keys",
]
