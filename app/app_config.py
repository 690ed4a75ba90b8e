from pydantic import BaseModel

from app.shared.config import config


class AppEnvironConfig(BaseModel):
    DEBUG: bool = config.get_bool("DEBUG", False)

    # Team rooms: minimum approved members before a non-admin may attach a team
    TEAM_ROOM_MIN_APPROVED_MEMBERS: int = config.get_int(
        "TEAM_ROOM_MIN_APPROVED_MEMBERS", 100, minimum=1
    )

    # Room defaults used by template expansion when neither overrides nor template set a value
    DEFAULT_INTEREST_THRESHOLD: int = config.get_int("DEFAULT_INTEREST_THRESHOLD", 5000, minimum=1)
    DEFAULT_MAX_PARTICIPANTS: int = config.get_int("DEFAULT_MAX_PARTICIPANTS", 12, minimum=1)

    # Upper bound for max_participants on any room or template
    MAX_PARTICIPANTS_LIMIT: int = config.get_int("MAX_PARTICIPANTS_LIMIT", 100, minimum=1)


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
