from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Room:
    room_id: int
    room_number: str
    room_type: Optional[str] = None
    capacity: Optional[int] = None


@dataclass(frozen=True)
class RoomDraft:
    room_number: str
    room_type: Optional[str] = None
    capacity: Optional[int] = None
