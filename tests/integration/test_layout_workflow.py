"""
Layout Workflow Integration Tests

End-to-end: generate a default layout, edit it the way the diagram
editor does, validate the edit, reconcile it against the stored layout,
apply the plan and confirm a second reconciliation is a no-op.
"""

import pytest

from seatlayout import (
    LayoutSpec,
    SpaceConfigInput,
    ValidationError,
    ValidationErrorCode,
    generate_layout,
    reconcile,
    validate_space_configs,
)
from seatlayout.core.enums import OmissionPolicy, SpaceType
from seatlayout.layout.models import PositionKey, Seat, space_from_record
from seatlayout.layout.reconciliation import apply_plan, temporary_seat_number


@pytest.fixture
def stored_layout(double_decker_spec):
    """Generated layout as it comes back from persistence."""
    return [space_from_record(s.to_record()) for s in generate_layout(double_decker_spec)]


def submission_for(spaces):
    """What the editor sends back for an untouched layout (camelCase JSON)."""
    return [SpaceConfigInput.from_space(s).model_dump(by_alias=True, mode="json") for s in spaces]


class TestLayoutWorkflow:
    """Generate, edit, validate, reconcile, apply."""

    def test_untouched_layout_round_trips(self, double_decker_spec, stored_layout):
        submission = submission_for(stored_layout)
        validate_space_configs(submission, double_decker_spec)

        plan = reconcile(submission, stored_layout, double_decker_spec)

        assert not plan.has_changes
        assert len(plan.unchanged) == len(stored_layout)

    def test_edit_and_apply(self, double_decker_spec, stored_layout):
        submission = submission_for(stored_layout)
        by_key = {
            (item["floorNumber"], item["position"]["x"], item["position"]["y"]): item
            for item in submission
        }

        # Front-left seat on the upper floor becomes a hallway
        upper_front = by_key[(2, 0, 1)]
        upper_front.update(spaceType="hallway", seatNumber=None, seatType=None,
                           amenities=None, reclinementAngle=None)

        # Bathroom clearance downstairs becomes a premium seat
        clearance = by_key[(1, 3, 3)]
        clearance.update(spaceType="seat", seatNumber="50", seatType="premium")

        # Swap two seat numbers downstairs
        by_key[(1, 0, 2)]["seatNumber"], by_key[(1, 1, 2)]["seatNumber"] = (
            by_key[(1, 1, 2)]["seatNumber"], by_key[(1, 0, 2)]["seatNumber"],
        )

        validate_space_configs(submission, double_decker_spec)
        plan = reconcile(submission, stored_layout, double_decker_spec)

        updated = {u.key: u.payload for u in plan.update}
        assert set(updated) == {
            PositionKey(2, 0, 1), PositionKey(1, 3, 3), PositionKey(1, 0, 2), PositionKey(1, 1, 2),
        }
        assert plan.create == []

        hallway_payload = updated[PositionKey(2, 0, 1)]
        assert hallway_payload["seat_number"] is None
        assert hallway_payload["amenities"] == []
        assert "is_window" not in hallway_payload["meta"]
        assert "is_legroom" not in hallway_payload["meta"]

        seat_payload = updated[PositionKey(1, 3, 3)]
        assert seat_payload["meta"]["is_window"] is False
        assert seat_payload["meta"]["is_legroom"] is False
        assert seat_payload["seat_type"] == "premium"

        assert set(plan.renumbered_keys) == {PositionKey(1, 0, 2), PositionKey(1, 1, 2)}
        placeholders = {temporary_seat_number(k) for k in plan.renumbered_keys}
        assert placeholders == {"tmp-1-0-2", "tmp-1-1-2"}

        applied = apply_plan(stored_layout, plan)
        again = reconcile(submission, applied, double_decker_spec)
        assert again.update == []
        assert again.create == []

        new_seat = next(s for s in applied if s.key == PositionKey(1, 3, 3))
        assert isinstance(new_seat, Seat)
        assert new_seat.seat_number == "50"
        assert new_seat.meta.attributes["description"] == "Bathroom area"

    def test_fresh_submission_creates_everything(self, double_decker_spec, stored_layout):
        submission = submission_for(stored_layout)

        first = reconcile(submission, [], double_decker_spec)
        assert len(first.create) == len(stored_layout)

        second = reconcile(submission, first.create, double_decker_spec)
        assert second.create == []
        assert second.update == []
        assert len(second.unchanged) == len(stored_layout)

    def test_removed_row_deactivated(self, double_decker_spec, stored_layout):
        submission = [
            item for item in submission_for(stored_layout)
            if not (item["floorNumber"] == 2 and item["position"]["y"] == 2)
        ]

        plan = reconcile(submission, stored_layout, double_decker_spec,
                         omission_policy=OmissionPolicy.DEACTIVATE)

        assert len(plan.omitted) == 4
        assert len(plan.deactivate) == 4
        applied = apply_plan(stored_layout, plan)
        inactive = [s for s in applied if not s.active]
        assert {(s.floor_number, s.position.y) for s in inactive} == {(2, 2)}

    def test_conflicting_edit_rejected(self, double_decker_spec, stored_layout):
        submission = submission_for(stored_layout)
        seat_numbers = [i["seatNumber"] for i in submission if i["spaceType"] == SpaceType.SEAT.value]
        for item in submission:
            if item["spaceType"] == "empty":
                item.update(spaceType="seat", seatNumber=seat_numbers[0])
                break

        with pytest.raises(ValidationError) as exc_info:
            reconcile(submission, stored_layout, double_decker_spec)
        assert exc_info.value.code is ValidationErrorCode.DUPLICATE_SEAT_NUMBERS

    def test_spec_loaded_from_stored_diagram(self, double_decker_spec):
        stored = {
            "numFloors": 2,
            "totalSeats": 13,
            "seatsPerFloor": [f.to_dict() for f in double_decker_spec.floors],
        }
        spec = LayoutSpec.from_dict(stored)
        seats = [s for s in generate_layout(spec) if s.is_seat]
        assert len(seats) == spec.total_seats
