"""Application error type raised by services and mapped to API failures."""

import inspect
import uuid
from enum import Enum, IntEnum
from typing import Any


class HttpStatusCode(IntEnum):
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL_SERVER_ERROR = 500


class AppErrorCode(str, Enum):
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_IMMUTABLE_FIELD = "E_IMMUTABLE_FIELD"
    E_ROOM_NOT_FOUND = "E_ROOM_NOT_FOUND"
    E_ROOM_KEY_CONFLICT = "E_ROOM_KEY_CONFLICT"
    E_TEMPLATE_NOT_FOUND = "E_TEMPLATE_NOT_FOUND"
    E_TEAM_NOT_FOUND = "E_TEAM_NOT_FOUND"
    E_TEAM_NOT_ELIGIBLE = "E_TEAM_NOT_ELIGIBLE"
    E_INVALID_TRANSITION = "E_INVALID_TRANSITION"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"

    def __str__(self) -> str:
        return self.value


class AppError(Exception):
    """Business error carrying an error code, message and HTTP-like status.

    `erresid` is a short random id that ties a log line to the failure
    reported to the caller; `caller_info` records where the error was raised.
    """

    def __init__(
        self,
        errcode: AppErrorCode | str,
        errmesg: str,
        status_code: int = HttpStatusCode.BAD_REQUEST,
        detail: dict[str, Any] | None = None,
    ):
        super().__init__(errmesg)
        self.errcode = errcode.value if isinstance(errcode, AppErrorCode) else errcode
        self.errmesg = errmesg
        self.status_code = int(status_code)
        self.detail = detail or {}
        self.erresid = uuid.uuid4().hex[:12]

        caller_frame = inspect.stack()[1]
        module = inspect.getmodule(caller_frame.frame)
        module_name = (
            module.__name__ if module and getattr(module, "__name__", None) else caller_frame.filename
        )
        self.caller_info = f"{module_name}:{caller_frame.function}:{caller_frame.lineno}"

    def __repr__(self) -> str:
        return f"AppError(errcode={self.errcode!r}, errmesg={self.errmesg!r}, status_code={self.status_code})"
