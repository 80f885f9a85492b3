from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Room, RoomDraft


class RoomRepository(Protocol):
    def list_all(self) -> Sequence[Room]:
        raise NotImplementedError

    def get_by_id(self, room_id: int) -> Optional[Room]:
        raise NotImplementedError

    def get_by_number(self, room_number: str) -> Optional[Room]:
        raise NotImplementedError

    def create(self, draft: RoomDraft) -> int:
        raise NotImplementedError

    def update(self, room_id: int, draft: RoomDraft) -> None:
        raise NotImplementedError

    def delete(self, room_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
