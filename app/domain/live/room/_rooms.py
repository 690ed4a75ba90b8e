"""Room aggregate: creation from templates, validated updates and duplication."""

from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from app.domain.utils.timeutils import utc_now
from app.schemas import (
    Room,
    RoomDraft,
    RoomPatch,
    RoomStatus,
    RoomTemplate,
    RoomType,
    RoomVisibility,
    Team,
    TransitionTrigger,
)

from ._eligibility import check_team_eligibility
from ._templates import expand
from ._type_coupler import TEAM_ROOM_VISIBILITIES, apply_type_defaults
from ._validator import validate
from .room_models import (
    CreationError,
    EligibilityError,
    ImmutableFieldError,
    Invalid,
    TeamNotFoundError,
    TransitionError,
    UpdateError,
)
from .room_state_machine import RoomStateMachine, has_reached_threshold

TeamLookup = Callable[[str], Team | None]


def _as_patch(values: RoomPatch | Mapping[str, Any] | None) -> RoomPatch:
    if values is None:
        return RoomPatch()
    if isinstance(values, RoomPatch):
        return values
    return RoomPatch.model_validate(dict(values))


def _check_team(
    team_id: str,
    requester_is_admin: bool,
    team_lookup: TeamLookup | None,
) -> TeamNotFoundError | EligibilityError | None:
    team = team_lookup(team_id) if team_lookup is not None else None
    if team is None:
        logger.warning(f"Team {team_id} not found for team room")
        return TeamNotFoundError(team_id=team_id)

    error = check_team_eligibility(team, requester_is_admin)
    if error:
        logger.info(
            f"Team {team_id} not eligible: {team.approved_member_count} approved members, "
            f"{error.required_members} required"
        )
    return error


def _couple_type(
    draft: RoomDraft,
    requested_visibility: RoomVisibility | None,
) -> tuple[RoomDraft, RoomStatus]:
    """Apply the type table to visibility/team_id; return the coupled status separately."""
    defaults = apply_type_defaults(draft.room_type)
    updates: dict[str, Any] = {"visibility": defaults.visibility}
    if draft.room_type != RoomType.TEAM:
        updates["team_id"] = defaults.team_id
    elif requested_visibility in TEAM_ROOM_VISIBILITIES:
        # Team rooms may opt into public
        updates["visibility"] = requested_visibility
    return draft.model_copy(update=updates), defaults.status


def create(
    template: RoomTemplate | None,
    overrides: RoomPatch | Mapping[str, Any] | None,
    requester_is_admin: bool,
    team_lookup: TeamLookup | None,
) -> Room | CreationError:
    """
    Build a persist-ready room from an optional template and caller overrides.

    Returns the Room (without id/timestamps) or the first blocking error:
    TeamNotFoundError / EligibilityError for the team pick, otherwise
    Invalid with every field error.
    """
    overrides = _as_patch(overrides)
    draft = expand(template, overrides)

    if draft.room_type == RoomType.TEAM and draft.team_id:
        team_error = _check_team(draft.team_id, requester_is_admin, team_lookup)
        if team_error:
            return team_error

    provided = template.default_values() if template is not None else {}
    provided.update(overrides.provided_values())
    draft, status = _couple_type(draft, provided.get("visibility"))
    draft = draft.model_copy(update={"status": status})

    result = validate(draft)
    if isinstance(result, Invalid):
        logger.info(f"Room draft rejected: {result.errors}")
        return result

    room = Room(**result.room.model_dump())
    logger.debug(f"Created room draft {room.room_key}: type={room.room_type} status={room.status}")
    return room


def update(
    existing: Room,
    patch: RoomPatch | Mapping[str, Any] | None,
    trigger: TransitionTrigger = TransitionTrigger.MANUAL,
    *,
    requester_is_admin: bool = False,
    team_lookup: TeamLookup | None = None,
) -> Room | UpdateError:
    """
    Apply a patch to an existing room.

    Status changes go through the state machine for `trigger`. A threshold
    update whose count reaches the room's threshold requests OPENING_SOON;
    threshold transition errors are logged and dropped, manual ones returned.
    A room_type change re-couples visibility and team_id, and moves status to
    the type default only when a manual edge allows it.
    """
    trigger = TransitionTrigger(trigger)
    values = _as_patch(patch).provided_values()

    new_key = values.pop("room_key", None)
    if new_key is not None and new_key != existing.room_key:
        return ImmutableFieldError(field="room_key")

    requested_status = values.pop("status", None)
    candidate = existing.model_copy(update=values)

    coupled_status: RoomStatus | None = None
    type_changed = candidate.room_type != existing.room_type
    if type_changed:
        candidate, coupled_status = _couple_type(candidate, values.get("visibility"))
        logger.info(
            f"Room {existing.room_key} type changed {existing.room_type} -> {candidate.room_type}"
        )

    team_changed = type_changed or candidate.team_id != existing.team_id
    if candidate.room_type == RoomType.TEAM and candidate.team_id and team_changed:
        team_error = _check_team(candidate.team_id, requester_is_admin, team_lookup)
        if team_error:
            return team_error

    status = existing.status
    if (
        requested_status is not None
        and trigger == TransitionTrigger.THRESHOLD
        and not has_reached_threshold(candidate)
    ):
        logger.warning(
            f"Dropping automatic transition for room {existing.room_key}: interest "
            f"{candidate.current_interest_count}/{candidate.interest_threshold} below threshold"
        )
    elif requested_status is not None:
        result = RoomStateMachine.transition(existing.status, requested_status, trigger)
        if isinstance(result, TransitionError):
            if trigger == TransitionTrigger.MANUAL:
                return result
            logger.warning(f"Dropping automatic transition for room {existing.room_key}: {result.message}")
        else:
            status = result
    elif coupled_status is not None:
        if coupled_status == status or RoomStateMachine.can_transition(status, coupled_status):
            status = coupled_status
        else:
            logger.info(
                f"Room {existing.room_key} keeps status {status}: "
                f"no edge to type default {coupled_status}"
            )

    if (
        trigger == TransitionTrigger.THRESHOLD
        and requested_status is None
        and has_reached_threshold(candidate)
    ):
        result = RoomStateMachine.transition(status, RoomStatus.OPENING_SOON, trigger)
        if isinstance(result, TransitionError):
            logger.warning(f"Dropping automatic transition for room {existing.room_key}: {result.message}")
        else:
            if result != status:
                logger.info(
                    f"Room {existing.room_key} reached interest threshold "
                    f"{candidate.current_interest_count}/{candidate.interest_threshold}"
                )
            status = result

    candidate = candidate.model_copy(update={"status": status})

    validation = validate(candidate)
    if isinstance(validation, Invalid):
        logger.info(f"Room {existing.room_key} update rejected: {validation.errors}")
        return validation

    return Room(**validation.room.model_dump())


_DUPLICATE_EXCLUDED_FIELDS = frozenset(
    {"id", "room_key", "name", "status", "current_interest_count", "created_at", "updated_at"}
)


def duplicate(
    room: Room,
    requester_is_admin: bool,
    team_lookup: TeamLookup | None = None,
    *,
    suffix: str | None = None,
) -> Room | CreationError:
    """
    Copy a room's settings into a new unpublished room.

    The copy is keyed `<room_key>-copy-<suffix>` (suffix defaults to the
    current epoch milliseconds), named `<name> (Copy)`, starts in DRAFT with
    no interest, and keeps every other setting. A team room re-checks its
    team for the requester.
    """
    if suffix is None:
        suffix = str(int(utc_now().timestamp() * 1000))

    draft = RoomDraft(
        **room.model_dump(exclude=set(_DUPLICATE_EXCLUDED_FIELDS)),
        room_key=f"{room.room_key}-copy-{suffix}",
        name=f"{room.name} (Copy)",
        status=RoomStatus.DRAFT,
    )

    if draft.room_type == RoomType.TEAM and draft.team_id:
        team_error = _check_team(draft.team_id, requester_is_admin, team_lookup)
        if team_error:
            return team_error

    result = validate(draft)
    if isinstance(result, Invalid):
        logger.info(f"Copy of room {room.room_key} rejected: {result.errors}")
        return result

    copy = Room(**result.room.model_dump())
    logger.debug(f"Duplicated room {room.room_key} as {copy.room_key}")
    return copy
