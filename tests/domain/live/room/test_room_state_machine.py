"""Tests for RoomStateMachine."""

from app.domain.live.room.room_models import TransitionError
from app.domain.live.room.room_state_machine import (
    RoomStateMachine,
    has_reached_threshold,
    interest_progress,
    transition,
)
from app.schemas import RoomDraft, RoomStatus, TransitionTrigger


class TestCanTransition:
    """Tests for RoomStateMachine.can_transition."""

    def test_draft_to_interest(self):
        """Admin can open a draft room to interest-gauging."""
        assert RoomStateMachine.can_transition(RoomStatus.DRAFT, RoomStatus.INTEREST) is True

    def test_interest_to_opening_soon_manual(self):
        """Admin can force a room past interest-gauging."""
        assert RoomStateMachine.can_transition(RoomStatus.INTEREST, RoomStatus.OPENING_SOON) is True

    def test_opening_soon_to_live(self):
        assert RoomStateMachine.can_transition(RoomStatus.OPENING_SOON, RoomStatus.LIVE) is True

    def test_live_and_paused_both_ways(self):
        assert RoomStateMachine.can_transition(RoomStatus.LIVE, RoomStatus.PAUSED) is True
        assert RoomStateMachine.can_transition(RoomStatus.PAUSED, RoomStatus.LIVE) is True

    def test_every_state_can_reset_to_draft(self):
        """Unpublish is available from every non-draft status."""
        for status in RoomStatus:
            if status == RoomStatus.DRAFT:
                continue
            assert RoomStateMachine.can_transition(status, RoomStatus.DRAFT) is True

    def test_draft_cannot_skip_to_live(self):
        assert RoomStateMachine.can_transition(RoomStatus.DRAFT, RoomStatus.LIVE) is False

    def test_live_cannot_go_back_to_opening_soon(self):
        assert RoomStateMachine.can_transition(RoomStatus.LIVE, RoomStatus.OPENING_SOON) is False

    def test_threshold_only_moves_interest_to_opening_soon(self):
        """A threshold trigger has exactly one edge."""
        threshold = TransitionTrigger.THRESHOLD
        assert RoomStateMachine.can_transition(RoomStatus.INTEREST, RoomStatus.OPENING_SOON, threshold) is True
        assert RoomStateMachine.can_transition(RoomStatus.OPENING_SOON, RoomStatus.LIVE, threshold) is False
        assert RoomStateMachine.can_transition(RoomStatus.DRAFT, RoomStatus.INTEREST, threshold) is False


class TestGetValidTransitions:
    def test_from_interest(self):
        assert RoomStateMachine.get_valid_transitions(RoomStatus.INTEREST) == {
            RoomStatus.OPENING_SOON,
            RoomStatus.DRAFT,
        }

    def test_from_live_threshold_is_empty(self):
        assert RoomStateMachine.get_valid_transitions(RoomStatus.LIVE, TransitionTrigger.THRESHOLD) == set()

    def test_result_is_a_copy(self):
        """Mutating the returned set must not change the transition table."""
        targets = RoomStateMachine.get_valid_transitions(RoomStatus.DRAFT)
        targets.add(RoomStatus.LIVE)
        assert RoomStateMachine.can_transition(RoomStatus.DRAFT, RoomStatus.LIVE) is False


class TestGetValidSources:
    def test_sources_of_live(self):
        assert RoomStateMachine.get_valid_sources(RoomStatus.LIVE) == {
            RoomStatus.OPENING_SOON,
            RoomStatus.PAUSED,
        }

    def test_sources_of_draft(self):
        assert RoomStateMachine.get_valid_sources(RoomStatus.DRAFT) == {
            RoomStatus.INTEREST,
            RoomStatus.OPENING_SOON,
            RoomStatus.LIVE,
            RoomStatus.PAUSED,
        }


class TestTransition:
    """Tests for resolving a status change request."""

    def test_live_to_opening_soon_manual_is_rejected(self):
        """No edge exists from live back to opening_soon."""
        result = transition(RoomStatus.LIVE, RoomStatus.OPENING_SOON, TransitionTrigger.MANUAL)

        assert isinstance(result, TransitionError)
        assert result.current == RoomStatus.LIVE
        assert result.requested == RoomStatus.OPENING_SOON
        assert result.trigger == TransitionTrigger.MANUAL
        assert result.message == "cannot move from live to opening_soon via manual"

    def test_threshold_moves_interest_to_opening_soon(self):
        result = transition(RoomStatus.INTEREST, RoomStatus.OPENING_SOON, TransitionTrigger.THRESHOLD)
        assert result == RoomStatus.OPENING_SOON

    def test_threshold_redelivery_is_noop(self):
        """A repeated threshold event after the room moved on leaves the status alone."""
        for status in (RoomStatus.OPENING_SOON, RoomStatus.LIVE, RoomStatus.PAUSED):
            result = transition(status, RoomStatus.OPENING_SOON, TransitionTrigger.THRESHOLD)
            assert result == status

    def test_threshold_cannot_start_broadcast(self):
        result = transition(RoomStatus.OPENING_SOON, RoomStatus.LIVE, TransitionTrigger.THRESHOLD)
        assert isinstance(result, TransitionError)

    def test_threshold_on_draft_is_rejected(self):
        result = transition(RoomStatus.DRAFT, RoomStatus.OPENING_SOON, TransitionTrigger.THRESHOLD)
        assert isinstance(result, TransitionError)

    def test_manual_same_status_is_noop(self):
        assert transition(RoomStatus.LIVE, RoomStatus.LIVE, TransitionTrigger.MANUAL) == RoomStatus.LIVE

    def test_accepts_raw_values(self):
        result = RoomStateMachine.transition("paused", "live", "manual")
        assert result == RoomStatus.LIVE

    def test_error_converts_to_conflict(self):
        error = transition(RoomStatus.DRAFT, RoomStatus.LIVE, TransitionTrigger.MANUAL)
        app_error = error.to_app_error()

        assert app_error.errcode == "E_INVALID_TRANSITION"
        assert app_error.status_code == 409


class TestInterestProgress:
    def test_below_threshold(self):
        room = RoomDraft(interest_threshold=5000, current_interest_count=1250)

        assert has_reached_threshold(room) is False
        assert interest_progress(room) == 25.0

    def test_at_threshold(self):
        room = RoomDraft(interest_threshold=5000, current_interest_count=5000)

        assert has_reached_threshold(room) is True
        assert interest_progress(room) == 100.0

    def test_progress_is_capped(self):
        room = RoomDraft(interest_threshold=10, current_interest_count=45)
        assert interest_progress(room) == 100.0

    def test_non_positive_threshold_counts_as_full(self):
        room = RoomDraft(interest_threshold=0)
        assert interest_progress(room) == 100.0


class TestRoomStatus:
    def test_labels(self):
        assert RoomStatus.INTEREST.label == "Gauging Interest"
        assert RoomStatus.OPENING_SOON.label == "Opening Soon"

    def test_str_is_value(self):
        assert str(RoomStatus.OPENING_SOON) == "opening_soon"
        assert f"{TransitionTrigger.THRESHOLD}" == "threshold"
