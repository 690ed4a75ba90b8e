"""Team eligibility for team-scoped rooms."""

from collections.abc import Iterable

from app.app_config import get_app_environ_config
from app.schemas import Team

from .room_models import EligibilityError


def _min_members(min_members: int | None) -> int:
    if min_members is None:
        return get_app_environ_config().TEAM_ROOM_MIN_APPROVED_MEMBERS
    return min_members


def is_team_eligible(
    team: Team,
    requester_is_admin: bool,
    *,
    min_members: int | None = None,
) -> bool:
    """A team may back a team room if the requester is an admin or the team is big enough."""
    if requester_is_admin:
        return True
    return team.approved_member_count >= _min_members(min_members)


def check_team_eligibility(
    team: Team,
    requester_is_admin: bool,
    *,
    min_members: int | None = None,
) -> EligibilityError | None:
    required = _min_members(min_members)
    if is_team_eligible(team, requester_is_admin, min_members=required):
        return None
    return EligibilityError(
        team_id=team.id,
        required_members=required,
        approved_member_count=team.approved_member_count,
    )


def partition_teams(
    teams: Iterable[Team],
    requester_is_admin: bool,
    *,
    min_members: int | None = None,
) -> tuple[list[Team], list[Team]]:
    """Split teams into (eligible, ineligible), keeping input order."""
    required = _min_members(min_members)
    eligible: list[Team] = []
    ineligible: list[Team] = []
    for team in teams:
        if is_team_eligible(team, requester_is_admin, min_members=required):
            eligible.append(team)
        else:
            ineligible.append(team)
    return eligible, ineligible
