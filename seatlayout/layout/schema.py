"""
layout/schema.py - Pydantic Input Models

Defines the shape of hand-edited space configurations submitted by
callers. Every field is optional at this layer so that missing data is
reported by the configuration validator with its own reason codes
rather than rejected wholesale here.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from seatlayout.core.enums import SeatType, SpaceType
from seatlayout.errors.taxonomy import ValidationError, ValidationErrorCode
from seatlayout.layout.models import PositionKey, Space


class PositionInput(BaseModel):
    """Grid position of a submitted space."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Column, 0-indexed")
    y: int = Field(..., description="Row, 1-indexed")


class SpaceConfigInput(BaseModel):
    """
    One space of a submitted layout.

    ``space_type`` defaults to seat when omitted. Seat fields left as
    None are treated as not supplied, so updates leave the stored value
    untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    floor_number: Optional[int] = Field(None, description="Floor the space is on, 1-indexed")
    position: Optional[PositionInput] = Field(None, description="Grid position")
    space_type: Optional[SpaceType] = Field(None, description="Defaults to seat")
    seat_number: Optional[str] = Field(None, description="Required for seats")
    seat_type: Optional[SeatType] = None
    amenities: Optional[List[str]] = None
    reclinement_angle: Optional[int] = None
    active: Optional[bool] = None

    @field_validator("seat_number", mode="before")
    @classmethod
    def _seat_number_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def resolved_space_type(self) -> SpaceType:
        return self.space_type or SpaceType.SEAT

    @property
    def is_seat(self) -> bool:
        return self.resolved_space_type is SpaceType.SEAT

    @property
    def key(self) -> Optional[PositionKey]:
        """
        (floor, x, y) identity, or None while floor/position are missing.

        Floor numbers start at 1; a floor below that counts as missing.
        """
        if self.floor_number is None or self.floor_number < 1 or self.position is None:
            return None
        return PositionKey.of(self.floor_number, self.position)

    def supplied(self, name: str) -> bool:
        """Whether an optional field carries a value."""
        return getattr(self, name) is not None

    @classmethod
    def from_space(cls, space: Space) -> "SpaceConfigInput":
        """Submission equivalent of a stored space."""
        record = space.to_record()
        data = {
            "floor_number": record["floor_number"],
            "position": record["position"],
            "space_type": record["space_type"],
            "active": record["active"],
        }
        if space.is_seat:
            data.update(
                seat_number=record["seat_number"],
                seat_type=record["seat_type"],
                amenities=record["amenities"],
                reclinement_angle=record["reclinement_angle"],
            )
        return cls.model_validate(data)


def coerce_space_configs(items: Iterable[Any]) -> List[SpaceConfigInput]:
    """
    Convert submitted items (models or plain dicts) to SpaceConfigInput.

    Raises:
        ValidationError: INVALID_PAYLOAD if an item cannot be parsed
    """
    configs = []
    for index, item in enumerate(items):
        if isinstance(item, SpaceConfigInput):
            configs.append(item)
            continue
        try:
            configs.append(SpaceConfigInput.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(
                ValidationErrorCode.INVALID_PAYLOAD,
                f"Invalid space configuration at index {index}",
                index=index,
                errors=e.errors(include_url=False, include_context=False),
            ) from e
    return configs


__all__ = [
    "PositionInput",
    "SpaceConfigInput",
    "coerce_space_configs",
]
