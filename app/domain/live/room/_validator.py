"""Room and template validation rules.

Every rule runs on every call; failures accumulate so a form can show all
of them at once. Uniqueness of `room_key` is not checked here.
"""

import re

from app.app_config import get_app_environ_config
from app.schemas import RoomDraft, RoomTemplate, RoomType

from ._templates import expand
from ._type_coupler import TEAM_ROOM_VISIBILITIES
from .room_models import Invalid, Valid, ValidationResult

ROOM_KEY_PATTERN = re.compile(r"^[a-z0-9-]+$")

_OPTIONAL_TEXT_FIELDS = (
    "subtitle",
    "description",
    "special_badge",
    "image_url",
    "background_image",
    "theme_color",
    "disclaimer_text",
)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_max_participants(value: int | None, message: str) -> str | None:
    limit = get_app_environ_config().MAX_PARTICIPANTS_LIMIT
    if value is not None and (value < 1 or value > limit):
        return message.format(limit=limit)
    return None


def normalize_room(candidate: RoomDraft) -> RoomDraft:
    """Trim text fields and turn blank optional text into None."""
    updates: dict = {
        "room_key": candidate.room_key.strip(),
        "name": candidate.name.strip(),
    }
    for field in _OPTIONAL_TEXT_FIELDS:
        value = getattr(candidate, field)
        if value is not None:
            value = value.strip()
        updates[field] = value or None
    return candidate.model_copy(update=updates)


def validate(candidate: RoomDraft) -> ValidationResult:
    """Check a candidate room against structural and business rules.

    Returns Valid with the normalized room, or Invalid with one reason per
    failing field in rule order.
    """
    errors: dict[str, str] = {}

    if _is_blank(candidate.room_key):
        errors["room_key"] = "Room key is required"
    elif not ROOM_KEY_PATTERN.match(candidate.room_key.strip()):
        errors["room_key"] = "Room key must be lowercase letters, numbers, and hyphens only"

    if _is_blank(candidate.name):
        errors["name"] = "Room name is required"

    if candidate.interest_threshold < 1:
        errors["interest_threshold"] = "Threshold must be at least 1"

    reason = _check_max_participants(
        candidate.max_participants, "Max participants must be between 1 and {limit}"
    )
    if reason:
        errors["max_participants"] = reason

    if candidate.disclaimer_required and _is_blank(candidate.disclaimer_text):
        errors["disclaimer_text"] = "Disclaimer text is required when disclaimer is enabled"

    if candidate.room_type == RoomType.TEAM:
        if _is_blank(candidate.team_id):
            errors["team_id"] = "Please select a team"
        if candidate.visibility not in TEAM_ROOM_VISIBILITIES:
            errors["visibility"] = "Team rooms must be team-only or public"
    elif candidate.team_id is not None:
        errors["team_id"] = "Only team rooms can be attached to a team"

    if candidate.current_interest_count < 0:
        errors["current_interest_count"] = "Interest count cannot be negative"

    if errors:
        return Invalid(errors=errors)
    return Valid(room=normalize_room(candidate))


def validate_template(template: RoomTemplate) -> ValidationResult:
    """Apply the template editor rules. A valid result carries an expanded draft."""
    errors: dict[str, str] = {}

    if _is_blank(template.template_name):
        errors["template_name"] = "Template name is required"

    reason = _check_max_participants(template.max_participants, "Must be between 1 and {limit}")
    if reason:
        errors["max_participants"] = reason

    if template.interest_threshold is not None and template.interest_threshold < 1:
        errors["interest_threshold"] = "Threshold must be at least 1"

    if template.disclaimer_required and _is_blank(template.disclaimer_text):
        errors["disclaimer_text"] = "Disclaimer text is required when enabled"

    if errors:
        return Invalid(errors=errors)
    return Valid(room=expand(template, None))
