"""
layout/reconciliation.py - Reconciliation Engine

Diffs a submitted layout against the stored one, keyed by
(floor_number, position), and produces the minimal set of creates and
partial updates needed to bring the stored layout in line.

Update payloads use the same flat keys as Space.to_record(); applying a
plan with apply_update() and reconciling the same submission again yields
no creates and no updates.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import logging

from seatlayout.bootstrap.config import LayoutConfig, ReconciliationConfig
from seatlayout.core.constants import DEFAULT_IS_ACTIVE, TEMPORARY_SEAT_NUMBER_PREFIX
from seatlayout.core.enums import OmissionPolicy, SpaceType
from seatlayout.errors.taxonomy import ValidationErrorCode, floor_config_not_found
from seatlayout.layout.models import (
    LayoutSpec,
    Position,
    PositionKey,
    Seat,
    Space,
    SpaceMeta,
    index_by_key,
    space_class,
    space_from_record,
    strip_seat_meta,
)
from seatlayout.layout.placement import calculate_seat_meta
from seatlayout.layout.schema import SpaceConfigInput, coerce_space_configs
from seatlayout.layout.validation import LayoutValidator, ValidationIssue

logger = logging.getLogger(__name__)


# =============================================================================
# PLAN
# =============================================================================

@dataclass
class SpaceUpdate:
    """Partial update for the stored space at ``key``."""

    key: PositionKey
    payload: Dict[str, Any]
    renumbers: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "floor_number": self.key.floor_number,
            "position": {"x": self.key.x, "y": self.key.y},
            "payload": self.payload,
        }


@dataclass
class ReconciliationPlan:
    """
    Outcome of reconciling a submission against stored spaces.

    Attributes:
        create: New spaces, ready to persist
        update: Partial updates for changed spaces
        unchanged: Keys of submitted spaces that already match
        omitted: Keys of stored spaces missing from the submission
        deactivate: {active: False} updates, when the omission policy asks
    """

    create: List[Space] = field(default_factory=list)
    update: List[SpaceUpdate] = field(default_factory=list)
    unchanged: List[PositionKey] = field(default_factory=list)
    omitted: List[PositionKey] = field(default_factory=list)
    deactivate: List[SpaceUpdate] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.create or self.update or self.deactivate)

    @property
    def renumbered_keys(self) -> List[PositionKey]:
        """Keys whose update changes a seat number."""
        return [u.key for u in self.update if u.renumbers]

    def summary(self) -> Dict[str, int]:
        return {
            "create": len(self.create),
            "update": len(self.update),
            "unchanged": len(self.unchanged),
            "omitted": len(self.omitted),
            "deactivate": len(self.deactivate),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "create": [s.to_record() for s in self.create],
            "update": [u.to_dict() for u in self.update],
            "unchanged": [str(k) for k in self.unchanged],
            "omitted": [str(k) for k in self.omitted],
            "deactivate": [u.to_dict() for u in self.deactivate],
        }


# =============================================================================
# DIFFING
# =============================================================================

def needs_update(incoming: SpaceConfigInput, existing: Space) -> bool:
    """
    Whether the submitted space differs from the stored one.

    Seat fields other than seat_number are only compared when the
    submission supplies them.
    """
    if incoming.resolved_space_type is not existing.space_type:
        return True

    if incoming.is_seat and isinstance(existing, Seat):
        if incoming.seat_number != existing.seat_number:
            return True
        if incoming.supplied("seat_type") and incoming.seat_type is not existing.seat_type:
            return True
        if incoming.supplied("amenities") and set(incoming.amenities) != set(existing.amenities):
            return True
        if (incoming.supplied("reclinement_angle")
                and incoming.reclinement_angle != existing.reclinement_angle):
            return True

    if incoming.supplied("active") and incoming.active != existing.active:
        return True

    return False


def build_update(
    incoming: SpaceConfigInput,
    existing: Space,
    layout_spec: LayoutSpec,
) -> Dict[str, Any]:
    """
    Partial update payload turning ``existing`` into ``incoming``.

    Raises:
        ValidationError: FLOOR_CONFIG_NOT_FOUND when a space becomes a seat
            on a floor the layout spec does not describe
    """
    new_type = incoming.resolved_space_type
    payload: Dict[str, Any] = {"space_type": new_type.value}

    if new_type is not existing.space_type:
        if new_type is SpaceType.SEAT:
            floor_spec = layout_spec.floor(existing.floor_number)
            if floor_spec is None:
                raise floor_config_not_found(existing.floor_number)
            meta = existing.meta_dict()
            meta.update(calculate_seat_meta(existing.position, floor_spec).to_dict())
        else:
            meta = strip_seat_meta(existing.meta_dict())
        payload["meta"] = meta

    if new_type is SpaceType.SEAT:
        payload["seat_number"] = incoming.seat_number
        if incoming.supplied("seat_type"):
            payload["seat_type"] = incoming.seat_type.value
        if incoming.supplied("reclinement_angle"):
            payload["reclinement_angle"] = incoming.reclinement_angle
        if incoming.supplied("amenities"):
            payload["amenities"] = sorted(set(incoming.amenities))
    else:
        payload.update(
            seat_number=None,
            seat_type=None,
            reclinement_angle=None,
            amenities=[],
        )

    if incoming.supplied("active"):
        payload["active"] = incoming.active

    return payload


def build_create(
    incoming: SpaceConfigInput,
    layout_spec: LayoutSpec,
    config: Optional[LayoutConfig] = None,
) -> Space:
    """New stored space for a submission with no match."""
    config = config or LayoutConfig()
    position = Position(x=incoming.position.x, y=incoming.position.y)
    common = dict(
        floor_number=incoming.floor_number,
        position=position,
        meta=SpaceMeta.for_position(position),
        active=incoming.active if incoming.supplied("active") else DEFAULT_IS_ACTIVE,
    )

    if not incoming.is_seat:
        return space_class(incoming.resolved_space_type)(**common)

    floor_spec = layout_spec.floor(incoming.floor_number)
    if floor_spec is None:
        raise floor_config_not_found(incoming.floor_number)

    return Seat(
        seat_number=incoming.seat_number,
        seat_type=incoming.seat_type if incoming.supplied("seat_type") else config.default_seat_type,
        amenities=(
            frozenset(incoming.amenities) if incoming.supplied("amenities")
            else frozenset(config.default_amenities)
        ),
        reclinement_angle=(
            incoming.reclinement_angle if incoming.supplied("reclinement_angle")
            else config.default_reclinement_angle
        ),
        seat_meta=calculate_seat_meta(position, floor_spec),
        **common,
    )


def apply_update(space: Space, payload: Dict[str, Any]) -> Space:
    """Stored space after ``payload`` has been written over it."""
    record = space.to_record()
    record.update(payload)
    return space_from_record(record)


def _renumbers(incoming: SpaceConfigInput, existing: Space) -> bool:
    return (
        incoming.is_seat
        and isinstance(existing, Seat)
        and incoming.seat_number != existing.seat_number
    )


def deactivation_update(space: Space) -> SpaceUpdate:
    return SpaceUpdate(key=space.key, payload={"active": False})


# =============================================================================
# RENUMBERING
# =============================================================================

def temporary_seat_number(key: PositionKey) -> str:
    """
    Placeholder seat number unique to a position.

    Persistence layers enforcing unique seat numbers write this first for
    every renumbered seat, then the final numbers.
    """
    return f"{TEMPORARY_SEAT_NUMBER_PREFIX}-{key.floor_number}-{key.x}-{key.y}"


# =============================================================================
# TEMPLATE SYNC
# =============================================================================

def needs_template_sync(space: Space, template: Space) -> bool:
    """Whether a vehicle space has drifted from its template space."""
    if space.space_type is not template.space_type:
        return True
    if space.active != template.active:
        return True
    if space.meta_dict() != template.meta_dict():
        return True
    if isinstance(space, Seat) and isinstance(template, Seat):
        return (
            space.seat_number != template.seat_number
            or space.seat_type is not template.seat_type
            or space.amenities != template.amenities
            or space.reclinement_angle != template.reclinement_angle
        )
    return False


# =============================================================================
# ENGINE
# =============================================================================

class ReconciliationEngine:
    """
    Produces reconciliation plans.

    Submissions are validated against the layout spec before diffing
    unless the reconciliation config turns that off.
    """

    def __init__(
        self,
        config: Optional[ReconciliationConfig] = None,
        layout_config: Optional[LayoutConfig] = None,
        validator: Optional[LayoutValidator] = None,
    ):
        self._config = config or ReconciliationConfig()
        self._layout_config = layout_config or LayoutConfig()
        self._validator = validator or LayoutValidator()

    def reconcile(
        self,
        incoming: Iterable[Any],
        existing: Iterable[Space],
        layout_spec: LayoutSpec,
        omission_policy: Optional[OmissionPolicy] = None,
    ) -> ReconciliationPlan:
        """
        Diff ``incoming`` against ``existing``.

        Args:
            incoming: SpaceConfigInput models or plain dicts
            existing: Stored spaces
            layout_spec: Layout the spaces belong to
            omission_policy: Override the configured policy

        Raises:
            ValidationError: The submission is invalid
        """
        policy = OmissionPolicy(omission_policy or self._config.omission_policy)

        if self._config.validate_incoming:
            configs = self._validator.validate(incoming, layout_spec)
        else:
            configs = coerce_space_configs(incoming)

        stored = index_by_key(existing)
        plan = ReconciliationPlan()
        seen = set()

        for index, config in enumerate(configs):
            key = config.key
            if key is None:
                raise ValidationIssue.create(ValidationErrorCode.MISSING_REQUIRED_FIELDS, index).to_error()
            seen.add(key)
            current = stored.get(key)

            if current is None:
                plan.create.append(build_create(config, layout_spec, self._layout_config))
            elif needs_update(config, current):
                plan.update.append(SpaceUpdate(
                    key=key,
                    payload=build_update(config, current, layout_spec),
                    renumbers=_renumbers(config, current),
                ))
            else:
                plan.unchanged.append(key)

        for key, space in stored.items():
            if key in seen:
                continue
            plan.omitted.append(key)
            if policy is OmissionPolicy.DEACTIVATE and space.active:
                plan.deactivate.append(deactivation_update(space))

        logger.debug(f"Reconciliation plan: {plan.summary()}")
        return plan


def reconcile(
    incoming: Iterable[Any],
    existing: Iterable[Space],
    layout_spec: LayoutSpec,
    *,
    omission_policy: Optional[OmissionPolicy] = None,
    config: Optional[ReconciliationConfig] = None,
    layout_config: Optional[LayoutConfig] = None,
) -> ReconciliationPlan:
    """Diff a submission against stored spaces; see ReconciliationEngine."""
    engine = ReconciliationEngine(config, layout_config)
    return engine.reconcile(incoming, existing, layout_spec, omission_policy)


def apply_plan(existing: Iterable[Space], plan: ReconciliationPlan) -> List[Space]:
    """
    Stored layout after persisting ``plan``.

    Stands in for the persistence layer in tests and dry runs; order is
    the existing order followed by created spaces.
    """
    updates = {u.key: u.payload for u in plan.update}
    for u in plan.deactivate:
        updates[u.key] = {**updates.get(u.key, {}), **u.payload}

    result = []
    for space in existing:
        payload = updates.get(space.key)
        result.append(apply_update(space, payload) if payload else space)
    result.extend(plan.create)
    return result


__all__ = [
    "SpaceUpdate",
    "ReconciliationPlan",
    "ReconciliationEngine",
    "needs_update",
    "build_update",
    "build_create",
    "apply_update",
    "apply_plan",
    "deactivation_update",
    "temporary_seat_number",
    "needs_template_sync",
    "reconcile",
]
