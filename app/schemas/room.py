"""Room record schemas.

`RoomDraft` holds every field of a room before the storage collaborator
assigns identity and timestamps; `Room` is the persisted shape. Field
defaults on `RoomDraft` are the fallbacks used by template expansion.
`RoomPatch` and `RoomTemplate` are partial views: every field is optional and
only values that are actually provided take effect.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.app_config import get_app_environ_config

from .room_state import (
    FallbackGradient,
    LayoutType,
    RoomCategory,
    RoomStatus,
    RoomType,
    RoomVisibility,
)


class RoomDraft(BaseModel):
    """A complete, not yet persisted room definition."""

    model_config = ConfigDict(validate_assignment=True)

    room_key: str = ""

    # Descriptive fields
    name: str = ""
    subtitle: str | None = None
    description: str | None = None
    category: RoomCategory = RoomCategory.ENTERTAINMENT
    special_badge: str | None = None

    # Presentation
    image_url: str | None = None
    fallback_gradient: FallbackGradient = FallbackGradient.PURPLE_PINK
    background_image: str | None = None
    theme_color: str | None = None

    # Capacity and features
    max_participants: int = Field(
        default_factory=lambda: get_app_environ_config().DEFAULT_MAX_PARTICIPANTS
    )
    gifts_enabled: bool = True
    chat_enabled: bool = True
    layout_type: LayoutType = LayoutType.GRID

    # Admission
    interest_threshold: int = Field(
        default_factory=lambda: get_app_environ_config().DEFAULT_INTEREST_THRESHOLD
    )
    current_interest_count: int = 0

    # Disclaimer
    disclaimer_required: bool = False
    disclaimer_text: str | None = None

    # Classification
    room_type: RoomType = RoomType.OFFICIAL
    visibility: RoomVisibility = RoomVisibility.PUBLIC
    team_id: str | None = None
    admin_profile_id: str | None = None  # None: owned by the creator's account

    status: RoomStatus = RoomStatus.DRAFT
    display_order: int = 0  # position in room listings, lower first

    template_id: str | None = None


class Room(RoomDraft):
    """Room record as stored; id and timestamps come from the storage collaborator."""

    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RoomDefaults(BaseModel):
    """Optional values for every room field except identity, ordering and bookkeeping."""

    name: str | None = None
    subtitle: str | None = None
    description: str | None = None
    category: RoomCategory | None = None
    special_badge: str | None = None
    image_url: str | None = None
    fallback_gradient: FallbackGradient | None = None
    background_image: str | None = None
    theme_color: str | None = None
    max_participants: int | None = None
    gifts_enabled: bool | None = None
    chat_enabled: bool | None = None
    layout_type: LayoutType | None = None
    interest_threshold: int | None = None
    disclaimer_required: bool | None = None
    disclaimer_text: str | None = None
    room_type: RoomType | None = None
    visibility: RoomVisibility | None = None
    team_id: str | None = None
    admin_profile_id: str | None = None
    status: RoomStatus | None = None


class RoomTemplate(RoomDefaults):
    """Reusable defaults used to pre-fill new rooms."""

    template_id: str | None = None
    template_name: str | None = None
    template_description: str | None = None

    def default_values(self) -> dict:
        """Room field values this template actually provides."""
        return self.model_dump(
            include=set(RoomDefaults.model_fields),
            exclude_none=True,
        )


class RoomPatch(RoomDefaults):
    """Caller-supplied field values: creation overrides or an update patch.

    Only explicitly set fields are applied; setting a nullable field to None
    clears it.
    """

    model_config = ConfigDict(extra="forbid")

    room_key: str | None = None
    current_interest_count: int | None = None
    display_order: int | None = None

    def provided_values(self) -> dict:
        """Explicitly set values, dropping None for fields a room cannot leave empty."""
        values = self.model_dump(exclude_unset=True)
        return {
            field: value
            for field, value in values.items()
            if value is not None or field in NULLABLE_ROOM_FIELDS
        }


NULLABLE_ROOM_FIELDS: frozenset[str] = frozenset(
    name
    for name, info in RoomDraft.model_fields.items()
    if info.default is None and info.default_factory is None
)


__all__ = [
    "NULLABLE_ROOM_FIELDS",
    "Room",
    "RoomDefaults",
    "RoomDraft",
    "RoomPatch",
    "RoomTemplate",
]
