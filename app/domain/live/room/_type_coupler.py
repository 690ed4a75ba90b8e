"""Fixed coupling between room type and its default status/visibility."""

from dataclasses import dataclass

from app.schemas import RoomStatus, RoomType, RoomVisibility


@dataclass(frozen=True)
class TypeDefaults:
    status: RoomStatus
    visibility: RoomVisibility
    # Always None: non-team types clear the team, team types leave the pick to the caller
    team_id: str | None = None


TYPE_DEFAULTS: dict[RoomType, TypeDefaults] = {
    # Official rooms skip interest-gauging
    RoomType.OFFICIAL: TypeDefaults(status=RoomStatus.LIVE, visibility=RoomVisibility.PUBLIC),
    # Team rooms are live once assigned a team, visible to that team only
    RoomType.TEAM: TypeDefaults(status=RoomStatus.LIVE, visibility=RoomVisibility.TEAM_ONLY),
    # The only type that walks the interest funnel
    RoomType.COMMUNITY: TypeDefaults(status=RoomStatus.INTEREST, visibility=RoomVisibility.PUBLIC),
}

TEAM_ROOM_VISIBILITIES = frozenset({RoomVisibility.TEAM_ONLY, RoomVisibility.PUBLIC})


def apply_type_defaults(room_type: RoomType) -> TypeDefaults:
    return TYPE_DEFAULTS[RoomType(room_type)]
