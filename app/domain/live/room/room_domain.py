"""Room domain service - coordinates the pure room core with its collaborators."""

import asyncio
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger

from app.schemas import Room, RoomPatch, RoomStatus, RoomTemplate, RoomType, Team, TransitionTrigger
from app.services.room_store import RoomStore
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

from ._eligibility import partition_teams
from ._rooms import create, duplicate, update
from ._templates import copy_template, expand
from ._validator import validate_template
from .room_models import ConflictError, RoomDomainError


class RoomService:
    """Room service over a RoomStore.

    Operations on the same room are serialized with a per-room lock and always
    evaluated against the room as currently stored, so a second request sees
    the result of the first. Concurrent manual edits are last-write-wins.
    """

    def __init__(self, store: RoomStore):
        self._store = store
        self._locks: dict[str, asyncio.Lock] = {}
        # Holders plus waiters per key; the lock is dropped when this reaches zero
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def _lock(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
                del self._locks[key]

    async def _get_room_or_raise(self, room_id: str) -> Room:
        room = await self._store.get_room(room_id)
        if not room:
            logger.warning(f"Room {room_id} not found")
            raise AppError(
                errcode=AppErrorCode.E_ROOM_NOT_FOUND,
                errmesg=f"Room not found: {room_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )
        return room

    async def _get_template_or_raise(self, template_id: str) -> RoomTemplate:
        template = await self._store.get_template(template_id)
        if not template:
            raise AppError(
                errcode=AppErrorCode.E_TEMPLATE_NOT_FOUND,
                errmesg=f"Template not found: {template_id}",
                status_code=HttpStatusCode.NOT_FOUND,
            )
        return template

    async def _save_new_room(self, room: Room) -> Room:
        """Persist a room under a fresh key; raises on a key that already exists."""
        async with self._lock(f"room_key:{room.room_key}"):
            if await self._store.room_key_exists(room.room_key):
                logger.info(f"Room key {room.room_key} already exists")
                raise ConflictError(room_key=room.room_key).to_app_error()

            return await self._store.save(room)

    async def _team_lookup(self, team_id: str | None):
        """Resolve the team up front so the synchronous core can look it up."""
        teams: dict[str, Team] = {}
        if team_id:
            team = await self._store.get_team(team_id)
            if team:
                teams[team.id] = team
        return teams.get

    async def get_room(self, room_id: str) -> Room:
        return await self._get_room_or_raise(room_id)

    async def create_room(
        self,
        overrides: RoomPatch | Mapping[str, Any],
        *,
        requester_is_admin: bool,
        template_id: str | None = None,
    ) -> Room:
        """
        Create and persist a room from an optional template plus overrides.

        Raises AppError for a missing template, a missing or ineligible team,
        field validation errors, or a room key that already exists.
        """
        template = await self._get_template_or_raise(template_id) if template_id else None

        patch = overrides if isinstance(overrides, RoomPatch) else RoomPatch.model_validate(dict(overrides))
        draft = expand(template, patch)
        team_id = draft.team_id if draft.room_type == RoomType.TEAM else None
        team_lookup = await self._team_lookup(team_id)

        result = create(template, patch, requester_is_admin, team_lookup)
        if isinstance(result, RoomDomainError):
            raise result.to_app_error()

        saved = await self._save_new_room(result)
        logger.info(
            f"Created room {saved.id} ({saved.room_key}): type={saved.room_type} "
            f"visibility={saved.visibility} status={saved.status}"
        )
        return saved

    async def update_room(
        self,
        room_id: str,
        patch: RoomPatch | Mapping[str, Any],
        *,
        requester_is_admin: bool,
    ) -> Room:
        """
        Apply an admin edit to a room.

        Status changes are manual transitions; raises AppError on any error.
        """
        patch = patch if isinstance(patch, RoomPatch) else RoomPatch.model_validate(dict(patch))

        async with self._lock(room_id):
            existing = await self._get_room_or_raise(room_id)

            provided = patch.provided_values()
            team_id = provided["team_id"] if "team_id" in provided else existing.team_id
            team_lookup = await self._team_lookup(team_id)

            result = update(
                existing,
                patch,
                TransitionTrigger.MANUAL,
                requester_is_admin=requester_is_admin,
                team_lookup=team_lookup,
            )
            if isinstance(result, RoomDomainError):
                raise result.to_app_error()

            saved = await self._store.save(result)

        logger.info(f"Updated room {room_id}: {sorted(provided)}")
        return saved

    async def transition_room(self, room_id: str, status: RoomStatus) -> Room:
        """Manually move a room to `status` (publish, start, pause, resume, unpublish)."""
        return await self.update_room(
            room_id,
            RoomPatch(status=status),
            requester_is_admin=True,
        )

    async def register_interest(self, room_id: str, current_interest_count: int) -> Room:
        """
        Record the latest interest count for a room.

        Drives the automatic INTEREST -> OPENING_SOON transition. Safe to call
        repeatedly with the same count: once applied, re-delivery changes nothing.
        """
        async with self._lock(room_id):
            existing = await self._get_room_or_raise(room_id)

            result = update(
                existing,
                RoomPatch(current_interest_count=current_interest_count),
                TransitionTrigger.THRESHOLD,
            )
            if isinstance(result, RoomDomainError):
                raise result.to_app_error()

            if result.model_dump() == existing.model_dump():
                logger.debug(f"Interest count for room {room_id} unchanged at {current_interest_count}")
                return existing

            saved = await self._store.save(result)

        if saved.status != existing.status:
            logger.info(f"Room {room_id} moved {existing.status} -> {saved.status} on interest")
        return saved

    async def duplicate_room(self, room_id: str, *, requester_is_admin: bool) -> Room:
        """Save an unpublished copy of a room under a new key."""
        source = await self._get_room_or_raise(room_id)
        team_id = source.team_id if source.room_type == RoomType.TEAM else None
        team_lookup = await self._team_lookup(team_id)

        result = duplicate(source, requester_is_admin, team_lookup)
        if isinstance(result, RoomDomainError):
            raise result.to_app_error()

        saved = await self._save_new_room(result)
        logger.info(f"Duplicated room {room_id} as {saved.id} ({saved.room_key})")
        return saved

    async def duplicate_template(self, template_id: str) -> RoomTemplate:
        template = await self._get_template_or_raise(template_id)

        copy = copy_template(template)
        validation = validate_template(copy)
        if isinstance(validation, RoomDomainError):
            raise validation.to_app_error()

        saved = await self._store.save_template(copy)
        logger.info(f"Duplicated template {template_id} as {saved.template_id}")
        return saved

    async def list_team_options(self, requester_is_admin: bool) -> tuple[list[Team], list[Team]]:
        """Teams the requester may and may not attach to a team room."""
        teams = await self._store.list_teams()
        return partition_teams(teams, requester_is_admin)
