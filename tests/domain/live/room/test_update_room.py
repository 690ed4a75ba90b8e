"""Tests for room updates in the pure core."""

from app.domain.live.room import (
    EligibilityError,
    ImmutableFieldError,
    Invalid,
    TransitionError,
    update,
)
from app.schemas import Room, RoomStatus, RoomType, RoomVisibility, TransitionTrigger
from tests.fixtures.room_fixtures import lookup_from


class TestThresholdUpdates:
    def test_reaching_threshold_opens_soon(self, interest_room):
        result = update(interest_room, {"current_interest_count": 5000}, TransitionTrigger.THRESHOLD)

        assert isinstance(result, Room)
        assert result.status == RoomStatus.OPENING_SOON
        assert result.current_interest_count == 5000

    def test_below_threshold_keeps_interest(self, interest_room):
        result = update(interest_room, {"current_interest_count": 4999}, TransitionTrigger.THRESHOLD)

        assert result.status == RoomStatus.INTEREST
        assert result.current_interest_count == 4999

    def test_redelivery_is_idempotent(self, interest_room):
        """Applying the same threshold event twice equals applying it once."""
        once = update(interest_room, {"current_interest_count": 5000}, TransitionTrigger.THRESHOLD)
        twice = update(once, {"current_interest_count": 5000}, TransitionTrigger.THRESHOLD)

        assert twice.model_dump() == once.model_dump()

    def test_threshold_never_starts_broadcast(self, interest_room):
        opening = interest_room.model_copy(update={"status": RoomStatus.OPENING_SOON})

        result = update(opening, {"current_interest_count": 9000}, TransitionTrigger.THRESHOLD)

        assert result.status == RoomStatus.OPENING_SOON

    def test_threshold_on_draft_room_keeps_draft(self, interest_room):
        """Threshold transition errors are dropped, the count still applies."""
        draft = interest_room.model_copy(update={"status": RoomStatus.DRAFT})

        result = update(draft, {"current_interest_count": 6000}, TransitionTrigger.THRESHOLD)

        assert isinstance(result, Room)
        assert result.status == RoomStatus.DRAFT
        assert result.current_interest_count == 6000

    def test_threshold_status_request_error_dropped(self, interest_room):
        result = update(interest_room, {"status": RoomStatus.LIVE}, TransitionTrigger.THRESHOLD)

        assert isinstance(result, Room)
        assert result.status == RoomStatus.INTEREST

    def test_manual_count_edit_does_not_transition(self, interest_room):
        result = update(interest_room, {"current_interest_count": 5000})
        assert result.status == RoomStatus.INTEREST


class TestManualUpdates:
    def test_valid_manual_transition(self, interest_room):
        result = update(interest_room, {"status": RoomStatus.OPENING_SOON})
        assert result.status == RoomStatus.OPENING_SOON

    def test_invalid_manual_transition_returned(self, team_room):
        result = update(team_room, {"status": RoomStatus.OPENING_SOON})

        assert isinstance(result, TransitionError)
        assert result.current == RoomStatus.LIVE

    def test_same_status_is_noop(self, team_room):
        result = update(team_room, {"status": RoomStatus.LIVE})
        assert result.status == RoomStatus.LIVE

    def test_room_key_is_immutable(self, interest_room):
        result = update(interest_room, {"room_key": "other-key"})

        assert isinstance(result, ImmutableFieldError)
        assert result.to_app_error().errcode == "E_IMMUTABLE_FIELD"

    def test_same_room_key_is_accepted(self, interest_room):
        result = update(interest_room, {"room_key": interest_room.room_key, "name": "Later Night"})

        assert isinstance(result, Room)
        assert result.name == "Later Night"

    def test_field_edit_is_validated(self, interest_room):
        result = update(interest_room, {"max_participants": 101})

        assert isinstance(result, Invalid)
        assert "max_participants" in result.errors

    def test_unset_fields_untouched(self, interest_room):
        result = update(interest_room, {"subtitle": "After hours"})

        assert result.subtitle == "After hours"
        assert result.interest_threshold == interest_room.interest_threshold
        assert result.id == interest_room.id

    def test_visibility_edit_on_community_room(self, interest_room):
        result = update(interest_room, {"visibility": RoomVisibility.PRIVATE})
        assert result.visibility == RoomVisibility.PRIVATE


class TestTypeChanges:
    def test_team_to_official_clears_team(self, team_room):
        result = update(team_room, {"room_type": RoomType.OFFICIAL})

        assert result.room_type == RoomType.OFFICIAL
        assert result.team_id is None
        assert result.visibility == RoomVisibility.PUBLIC
        assert result.status == RoomStatus.LIVE

    def test_type_default_status_needs_an_edge(self, team_room):
        """LIVE has no manual edge to INTEREST, so status stays."""
        result = update(team_room, {"room_type": RoomType.COMMUNITY})

        assert result.status == RoomStatus.LIVE
        assert result.visibility == RoomVisibility.PUBLIC

    def test_switch_to_team_checks_eligibility(self, interest_room, small_team):
        result = update(
            interest_room,
            {"room_type": RoomType.TEAM, "team_id": small_team.id},
            requester_is_admin=False,
            team_lookup=lookup_from(small_team),
        )

        assert isinstance(result, EligibilityError)

    def test_changing_team_checks_eligibility(self, team_room, small_team):
        result = update(
            team_room,
            {"team_id": small_team.id},
            requester_is_admin=False,
            team_lookup=lookup_from(small_team),
        )

        assert isinstance(result, EligibilityError)

    def test_switch_to_team_admin(self, interest_room, small_team):
        result = update(
            interest_room,
            {"room_type": RoomType.TEAM, "team_id": small_team.id},
            requester_is_admin=True,
            team_lookup=lookup_from(small_team),
        )

        assert isinstance(result, Room)
        assert result.visibility == RoomVisibility.TEAM_ONLY
        assert result.team_id == small_team.id


class TestThresholdStatusRequests:
    def test_early_opening_soon_dropped(self, interest_room):
        """An automated update cannot open a room before the count reaches the threshold."""
        result = update(
            interest_room,
            {"status": RoomStatus.OPENING_SOON, "current_interest_count": 10},
            TransitionTrigger.THRESHOLD,
        )

        assert isinstance(result, Room)
        assert result.status == RoomStatus.INTEREST
        assert result.current_interest_count == 10

    def test_opening_soon_once_reached(self, interest_room):
        result = update(
            interest_room,
            {"status": RoomStatus.OPENING_SOON, "current_interest_count": 5000},
            TransitionTrigger.THRESHOLD,
        )

        assert result.status == RoomStatus.OPENING_SOON

    def test_manual_override_below_threshold(self, interest_room):
        result = update(interest_room, {"status": RoomStatus.OPENING_SOON, "current_interest_count": 10})
        assert result.status == RoomStatus.OPENING_SOON

    def test_display_order_editable(self, interest_room):
        result = update(interest_room, {"display_order": 4})
        assert result.display_order == 4
