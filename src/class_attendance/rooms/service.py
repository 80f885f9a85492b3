from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_text, parse_int, require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Room, RoomDraft
from .repository import RoomRepository

logger = logging.getLogger(__name__)


class RoomService:
    def __init__(self, rooms: RoomRepository):
        self._rooms = rooms

    @staticmethod
    def parse_draft(payload: dict[str, Any]) -> RoomDraft:
        capacity = parse_int(payload.get("capacity"), "Capacity")
        if capacity is not None and capacity < 0:
            raise ValidationError("Capacity cannot be negative")

        return RoomDraft(
            room_number=require_non_empty(payload.get("room_number"), "Room number"),
            room_type=optional_text(payload.get("room_type")),
            # 0 and blank both mean "unknown"
            capacity=capacity or None,
        )

    def list(self) -> Sequence[Room]:
        return self._rooms.list_all()

    def get(self, room_id: int) -> Room:
        room = self._rooms.get_by_id(int(room_id))
        if not room:
            raise NotFoundError("Room not found")
        return room

    def _ensure_number_free(self, room_number: str, *, room_id: Optional[int] = None) -> None:
        existing = self._rooms.get_by_number(room_number)
        if existing and existing.room_id != room_id:
            raise ConflictError(f"Room {room_number} already exists")

    def create(self, payload: dict[str, Any]) -> Room:
        draft = self.parse_draft(payload)
        self._ensure_number_free(draft.room_number)
        room_id = self._rooms.create(draft)
        logger.info("Created room %s (id=%s)", draft.room_number, room_id)
        return self.get(room_id)

    def update(self, room_id: int, payload: dict[str, Any]) -> Room:
        self.get(room_id)
        draft = self.parse_draft(payload)
        self._ensure_number_free(draft.room_number, room_id=int(room_id))
        self._rooms.update(int(room_id), draft)
        return self.get(room_id)

    def delete(self, room_id: int) -> None:
        if not self._rooms.delete(int(room_id)):
            raise NotFoundError("Room not found")
        logger.info("Deleted room id=%s", room_id)
