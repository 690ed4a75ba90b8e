"""Common enums used across room schemas."""

from enum import Enum


class RoomStatus(str, Enum):
    """Room lifecycle states.

    State Transition Flow:

    DRAFT → INTEREST → OPENING_SOON → LIVE ⇄ PAUSED
    (any state) → DRAFT

    State Descriptions:
    - DRAFT: Not published. Any state may be reset here by an admin (unpublish).
    - INTEREST: Gauging interest. Only community rooms start here.
    - OPENING_SOON: Interest threshold reached (automatic) or admin override.
    - LIVE: Broadcast available. Official and team rooms start here.
    - PAUSED: Broadcast temporarily unavailable; may return to LIVE.

    There is no terminal state.
    """

    DRAFT = "draft"
    INTEREST = "interest"
    OPENING_SOON = "opening_soon"
    LIVE = "live"
    PAUSED = "paused"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def past_interest_states(cls) -> list["RoomStatus"]:
        """States a room reaches only after leaving the interest funnel."""
        return [RoomStatus.OPENING_SOON, RoomStatus.LIVE, RoomStatus.PAUSED]


_STATUS_LABELS = {
    RoomStatus.DRAFT: "Draft",
    RoomStatus.INTEREST: "Gauging Interest",
    RoomStatus.OPENING_SOON: "Opening Soon",
    RoomStatus.LIVE: "Live",
    RoomStatus.PAUSED: "Paused",
}


class TransitionTrigger(str, Enum):
    """What initiated a status change: an admin action or an interest-count update."""

    MANUAL = "manual"
    THRESHOLD = "threshold"

    def __str__(self) -> str:
        return self.value


class RoomType(str, Enum):
    OFFICIAL = "official"
    TEAM = "team"
    COMMUNITY = "community"

    def __str__(self) -> str:
        return self.value


class RoomVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    TEAM_ONLY = "team_only"

    def __str__(self) -> str:
        return self.value


class LayoutType(str, Enum):
    GRID = "grid"
    VERSUS = "versus"
    PANEL = "panel"

    def __str__(self) -> str:
        return self.value


class RoomCategory(str, Enum):
    GAMING = "gaming"
    MUSIC = "music"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    LIFESTYLE = "lifestyle"
    EDUCATION = "education"

    def __str__(self) -> str:
        return self.value


class FallbackGradient(str, Enum):
    """Palette used for a room card when no banner image is present."""

    PURPLE_PINK = "from-purple-600 to-pink-600"
    BLUE_CYAN = "from-blue-600 to-cyan-500"
    GREEN_EMERALD = "from-green-600 to-emerald-500"
    ORANGE_RED = "from-orange-500 to-red-600"
    VIOLET_INDIGO = "from-violet-600 to-indigo-600"
    ROSE_PINK = "from-rose-500 to-pink-500"
    AMBER_YELLOW = "from-amber-500 to-yellow-400"
    TEAL_CYAN = "from-teal-500 to-cyan-400"

    def __str__(self) -> str:
        return self.value


__all__ = [
    "FallbackGradient",
    "LayoutType",
    "RoomCategory",
    "RoomStatus",
    "RoomType",
    "RoomVisibility",
    "TransitionTrigger",
]
