"""Room domain result and error types.

Business-rule violations are returned as values, not raised, so a caller can
always present a corrective path. Each error converts to an `AppError` via
`to_app_error()` when it has to cross a service boundary.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, TypeAlias

from app.schemas import RoomDraft, RoomStatus, TransitionTrigger
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode


@dataclass(frozen=True)
class RoomDomainError(ABC):
    """Base for typed room errors."""

    errcode: ClassVar[AppErrorCode] = AppErrorCode.E_INVALID_REQUEST
    status_code: ClassVar[HttpStatusCode] = HttpStatusCode.BAD_REQUEST

    @property
    @abstractmethod
    def message(self) -> str: ...

    def detail(self) -> dict:
        return {}

    def to_app_error(self) -> AppError:
        return AppError(
            errcode=self.errcode,
            errmesg=self.message,
            status_code=self.status_code,
            detail=self.detail(),
        )


@dataclass(frozen=True)
class FieldValidationError(RoomDomainError):
    """One invalid field."""

    field: str
    reason: str

    @property
    def message(self) -> str:
        return f"{self.field}: {self.reason}"


@dataclass(frozen=True)
class Invalid(RoomDomainError):
    """Every field error found in one validation pass, in rule order."""

    errors: dict[str, str] = field(default_factory=dict)

    @property
    def field_errors(self) -> list[FieldValidationError]:
        return [FieldValidationError(field=name, reason=reason) for name, reason in self.errors.items()]

    @property
    def message(self) -> str:
        return "; ".join(error.message for error in self.field_errors)

    def detail(self) -> dict:
        return {"fields": dict(self.errors)}


@dataclass(frozen=True)
class Valid:
    """Validation passed; `room` is the normalized candidate."""

    room: RoomDraft


@dataclass(frozen=True)
class EligibilityError(RoomDomainError):
    """The selected team is too small for a non-admin requester."""

    errcode: ClassVar[AppErrorCode] = AppErrorCode.E_TEAM_NOT_ELIGIBLE
    status_code: ClassVar[HttpStatusCode] = HttpStatusCode.FORBIDDEN

    team_id: str
    required_members: int
    approved_member_count: int

    @property
    def message(self) -> str:
        return f"team does not meet the {self.required_members}-member threshold"

    def detail(self) -> dict:
        return {
            "team_id": self.team_id,
            "required_members": self.required_members,
            "approved_member_count": self.approved_member_count,
        }


@dataclass(frozen=True)
class TeamNotFoundError(RoomDomainError):
    errcode: ClassVar[AppErrorCode] = AppErrorCode.E_TEAM_NOT_FOUND
    status_code: ClassVar[HttpStatusCode] = HttpStatusCode.NOT_FOUND

    team_id: str | None

    @property
    def message(self) -> str:
        return f"Team not found: {self.team_id}"


@dataclass(frozen=True)
class TransitionError(RoomDomainError):
    """Requested status is not reachable from the current one for this trigger."""

    errcode: ClassVar[AppErrorCode] = AppErrorCode.E_INVALID_TRANSITION
    status_code: ClassVar[HttpStatusCode] = HttpStatusCode.CONFLICT

    current: RoomStatus
    requested: RoomStatus
    trigger: TransitionTrigger

    @property
    def message(self) -> str:
        return f"cannot move from {self.current} to {self.requested} via {self.trigger}"


@dataclass(frozen=True)
class ImmutableFieldError(RoomDomainError):
    errcode: ClassVar[AppErrorCode] = AppErrorCode.E_IMMUTABLE_FIELD

    field: str

    @property
    def message(self) -> str:
        return f"{self.field} cannot be changed after creation"


@dataclass(frozen=True)
class ConflictError(RoomDomainError):
    """Raised through the service when the uniqueness check finds the key taken."""

    errcode: ClassVar[AppErrorCode] = AppErrorCode.E_ROOM_KEY_CONFLICT
    status_code: ClassVar[HttpStatusCode] = HttpStatusCode.CONFLICT

    room_key: str

    @property
    def message(self) -> str:
        return f"Room key already exists: {self.room_key}"


ValidationResult: TypeAlias = Valid | Invalid
CreationError: TypeAlias = Invalid | EligibilityError | TeamNotFoundError
UpdateError: TypeAlias = CreationError | TransitionError | ImmutableFieldError


__all__ = [
    "ConflictError",
    "CreationError",
    "EligibilityError",
    "FieldValidationError",
    "ImmutableFieldError",
    "Invalid",
    "RoomDomainError",
    "TeamNotFoundError",
    "TransitionError",
    "UpdateError",
    "Valid",
    "ValidationResult",
]
