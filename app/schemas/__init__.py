"""Pydantic schemas for rooms, templates and teams."""

from .room import NULLABLE_ROOM_FIELDS, Room, RoomDefaults, RoomDraft, RoomPatch, RoomTemplate
from .room_state import (
    FallbackGradient,
    LayoutType,
    RoomCategory,
    RoomStatus,
    RoomType,
    RoomVisibility,
    TransitionTrigger,
)
from .team import Team

__all__ = [
    "NULLABLE_ROOM_FIELDS",
    "FallbackGradient",
    "LayoutType",
    "Room",
    "RoomCategory",
    "RoomDefaults",
    "RoomDraft",
    "RoomPatch",
    "RoomStatus",
    "RoomTemplate",
    "RoomType",
    "RoomVisibility",
    "Team",
    "TransitionTrigger",
]
