"""Room state machine for managing status transitions."""

from loguru import logger

from app.schemas import RoomDraft, RoomStatus, TransitionTrigger

from .room_models import TransitionError


class RoomStateMachine:
    """State machine for managing room status transitions.

    State flow with triggers:
    - DRAFT -> INTEREST (admin opens the room to interest-gauging)
    - INTEREST -> OPENING_SOON (interest count reached the threshold, or admin override)
    - OPENING_SOON -> LIVE (admin starts broadcast availability)
    - LIVE <-> PAUSED (admin, either direction)
    - any state -> DRAFT (admin unpublish/reset)

    A threshold trigger may only produce OPENING_SOON from INTEREST, so an
    interest-count update can never force-start a broadcast. Re-delivering a
    threshold event after the room already moved past INTEREST is a no-op.
    """

    MANUAL_TRANSITIONS: dict[RoomStatus, set[RoomStatus]] = {
        RoomStatus.DRAFT: {RoomStatus.INTEREST},
        RoomStatus.INTEREST: {RoomStatus.OPENING_SOON, RoomStatus.DRAFT},
        RoomStatus.OPENING_SOON: {RoomStatus.LIVE, RoomStatus.DRAFT},
        RoomStatus.LIVE: {RoomStatus.PAUSED, RoomStatus.DRAFT},
        RoomStatus.PAUSED: {RoomStatus.LIVE, RoomStatus.DRAFT},
    }

    THRESHOLD_TRANSITIONS: dict[RoomStatus, set[RoomStatus]] = {
        RoomStatus.INTEREST: {RoomStatus.OPENING_SOON},
    }

    @classmethod
    def _edges(cls, trigger: TransitionTrigger) -> dict[RoomStatus, set[RoomStatus]]:
        if trigger == TransitionTrigger.THRESHOLD:
            return cls.THRESHOLD_TRANSITIONS
        return cls.MANUAL_TRANSITIONS

    @classmethod
    def can_transition(
        cls,
        current: RoomStatus,
        new: RoomStatus,
        trigger: TransitionTrigger = TransitionTrigger.MANUAL,
    ) -> bool:
        """Check if a transition is a defined edge for the trigger kind.

        Args:
            current: Current room status
            new: Target status
            trigger: What initiated the change

        Returns:
            True if the edge exists, False otherwise
        """
        return new in cls._edges(trigger).get(current, set())

    @classmethod
    def get_valid_transitions(
        cls,
        state: RoomStatus,
        trigger: TransitionTrigger = TransitionTrigger.MANUAL,
    ) -> set[RoomStatus]:
        """Get all statuses reachable from `state` in one step."""
        return set(cls._edges(trigger).get(state, set()))

    @classmethod
    def get_valid_sources(
        cls,
        target: RoomStatus,
        trigger: TransitionTrigger = TransitionTrigger.MANUAL,
    ) -> set[RoomStatus]:
        """Get all statuses that can move to `target` in one step."""
        return {state for state, targets in cls._edges(trigger).items() if target in targets}

    @classmethod
    def transition(
        cls,
        current: RoomStatus,
        requested: RoomStatus,
        trigger: TransitionTrigger,
    ) -> RoomStatus | TransitionError:
        """Resolve a status change request.

        Returns the resulting status, or a TransitionError when `requested`
        is not reachable from `current` via an edge for `trigger`.
        """
        current = RoomStatus(current)
        requested = RoomStatus(requested)
        trigger = TransitionTrigger(trigger)

        if trigger == TransitionTrigger.THRESHOLD:
            if (
                requested == RoomStatus.OPENING_SOON
                and current in RoomStatus.past_interest_states()
            ):
                logger.debug(f"Threshold event for status {current} already applied, skipping")
                return current
        elif current == requested:
            return current

        if not cls.can_transition(current, requested, trigger):
            return TransitionError(current=current, requested=requested, trigger=trigger)

        return requested


def transition(
    current: RoomStatus,
    requested: RoomStatus,
    trigger: TransitionTrigger,
) -> RoomStatus | TransitionError:
    """Module-level shortcut for RoomStateMachine.transition."""
    return RoomStateMachine.transition(current, requested, trigger)


def has_reached_threshold(room: RoomDraft) -> bool:
    return room.current_interest_count >= room.interest_threshold


def interest_progress(room: RoomDraft) -> float:
    """Percentage of the interest threshold reached, capped at 100."""
    if room.interest_threshold <= 0:
        return 100.0
    return min(room.current_interest_count / room.interest_threshold * 100, 100.0)
