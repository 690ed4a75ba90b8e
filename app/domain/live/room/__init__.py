"""
Room lifecycle and eligibility.

Pure core (no I/O): expand, validate, is_team_eligible, apply_type_defaults,
transition, create, update, duplicate. RoomService wraps the core with the
storage and team collaborators.
"""

from ._eligibility import check_team_eligibility, is_team_eligible, partition_teams
from ._rooms import TeamLookup, create, duplicate, update
from ._templates import copy_template, expand, suggest_room_key
from ._type_coupler import TYPE_DEFAULTS, TypeDefaults, apply_type_defaults
from ._validator import validate, validate_template
from .room_models import (
    ConflictError,
    CreationError,
    EligibilityError,
    FieldValidationError,
    ImmutableFieldError,
    Invalid,
    RoomDomainError,
    TeamNotFoundError,
    TransitionError,
    UpdateError,
    Valid,
    ValidationResult,
)
from .room_state_machine import (
    RoomStateMachine,
    has_reached_threshold,
    interest_progress,
    transition,
)

__all__ = [
    "ConflictError",
    "CreationError",
    "EligibilityError",
    "FieldValidationError",
    "ImmutableFieldError",
    "Invalid",
    "RoomDomainError",
    "RoomStateMachine",
    "TYPE_DEFAULTS",
    "TeamLookup",
    "TeamNotFoundError",
    "TransitionError",
    "TypeDefaults",
    "UpdateError",
    "Valid",
    "ValidationResult",
    "apply_type_defaults",
    "check_team_eligibility",
    "copy_template",
    "create",
    "duplicate",
    "expand",
    "has_reached_threshold",
    "interest_progress",
    "is_team_eligible",
    "partition_teams",
    "suggest_room_key",
    "transition",
    "update",
    "validate",
    "validate_template",
]
