"""Storage collaborators used by the room service.

`RoomStore` is the interface the room domain expects from persistence and
team/template lookup. `InMemoryRoomStore` is a process-local implementation
for tests and local runs; production deployments plug in their own store.
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from app.domain.utils.idgen import new_room_id, new_template_id
from app.domain.utils.timeutils import utc_now
from app.schemas import Room, RoomTemplate, Team


class RoomStore(Protocol):
    async def get_team(self, team_id: str) -> Team | None: ...

    async def list_teams(self) -> list[Team]: ...

    async def get_template(self, template_id: str) -> RoomTemplate | None: ...

    async def save_template(self, template: RoomTemplate) -> RoomTemplate: ...

    async def room_key_exists(self, room_key: str) -> bool: ...

    async def get_room(self, room_id: str) -> Room | None: ...

    async def save(self, room: Room) -> Room: ...


class InMemoryRoomStore:
    """Dictionary-backed RoomStore. Assigns ids and timestamps on save."""

    def __init__(
        self,
        teams: list[Team] | None = None,
        templates: list[RoomTemplate] | None = None,
    ):
        self._teams: dict[str, Team] = {}
        self._templates: dict[str, RoomTemplate] = {}
        self._rooms: dict[str, Room] = {}
        self._room_ids_by_key: dict[str, str] = {}

        for team in teams or []:
            self.add_team(team)
        for template in templates or []:
            self.add_template(template)

    def add_team(self, team: Team) -> Team:
        self._teams[team.id] = team
        return team

    def add_template(self, template: RoomTemplate) -> RoomTemplate:
        if not template.template_id:
            template = template.model_copy(update={"template_id": new_template_id()})
        self._templates[template.template_id] = template
        return template

    async def get_team(self, team_id: str) -> Team | None:
        return self._teams.get(team_id)

    async def list_teams(self) -> list[Team]:
        return sorted(self._teams.values(), key=lambda team: team.approved_member_count, reverse=True)

    async def get_template(self, template_id: str) -> RoomTemplate | None:
        return self._templates.get(template_id)

    async def save_template(self, template: RoomTemplate) -> RoomTemplate:
        saved = self.add_template(template)
        logger.debug(f"Saved template {saved.template_id} ({saved.template_name})")
        return saved

    async def room_key_exists(self, room_key: str) -> bool:
        return room_key in self._room_ids_by_key

    async def get_room(self, room_id: str) -> Room | None:
        room = self._rooms.get(room_id)
        return room.model_copy() if room else None

    async def save(self, room: Room) -> Room:
        now = utc_now()
        updates: dict = {"updated_at": now}
        if not room.id:
            updates["id"] = new_room_id()
        if not room.created_at:
            updates["created_at"] = now

        saved = room.model_copy(update=updates)
        self._rooms[saved.id] = saved
        self._room_ids_by_key[saved.room_key] = saved.id
        logger.debug(f"Saved room {saved.id} ({saved.room_key}) status={saved.status}")
        return saved.model_copy()
