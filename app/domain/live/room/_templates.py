"""Template expansion: merge template defaults with caller overrides."""

import re
from collections.abc import Mapping
from typing import Any

from app.schemas import RoomDraft, RoomPatch, RoomTemplate


def suggest_room_key(name: str) -> str:
    """Derive a room key from a display name: "Late Night!" -> "late-night"."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def expand(
    template: RoomTemplate | None,
    overrides: RoomPatch | Mapping[str, Any] | None,
) -> RoomDraft:
    """Build the initial room draft for creation.

    Per field, an explicitly provided override wins, then the template's
    value, then the RoomDraft fallback default. When no room key is provided,
    one is suggested from the name; an explicit empty key is kept so the
    validator reports it. Pure, no I/O.
    """
    if overrides is None:
        overrides = RoomPatch()
    elif not isinstance(overrides, RoomPatch):
        overrides = RoomPatch.model_validate(dict(overrides))

    values: dict[str, Any] = {}
    if template is not None:
        values.update(template.default_values())
        values["template_id"] = template.template_id
    values.update(overrides.provided_values())

    if "room_key" not in values and values.get("name"):
        values["room_key"] = suggest_room_key(values["name"])

    return RoomDraft(**values)


def copy_template(template: RoomTemplate) -> RoomTemplate:
    """Unsaved copy of a template named `<name> (Copy)`; storage assigns the new id."""
    return template.model_copy(
        update={
            "template_id": None,
            "template_name": f"{template.template_name or ''} (Copy)".lstrip(),
        }
    )
