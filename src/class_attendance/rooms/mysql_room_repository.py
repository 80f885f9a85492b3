from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Room, RoomDraft
from .repository import RoomRepository


def _row_to_room(r: dict) -> Room:
    capacity = r.get("capacity")
    return Room(
        room_id=int(r["room_id"]),
        room_number=r["room_number"],
        room_type=r.get("room_type"),
        capacity=int(capacity) if capacity is not None else None,
    )


class MySQLRoomRepository(RoomRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT room_id, room_number, room_type, capacity FROM rooms ORDER BY room_number")
            return [_row_to_room(r) for r in fetchall(cur)]

    def get_by_id(self, room_id: int) -> Optional[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT room_id, room_number, room_type, capacity FROM rooms WHERE room_id=%s",
                (int(room_id),),
            )
            r = fetchone(cur)
            return _row_to_room(r) if r else None

    def get_by_number(self, room_number: str) -> Optional[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT room_id, room_number, room_type, capacity FROM rooms WHERE room_number=%s",
                (room_number,),
            )
            r = fetchone(cur)
            return _row_to_room(r) if r else None

    def create(self, draft: RoomDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO rooms(room_number, room_type, capacity) VALUES(%s,%s,%s)",
                (draft.room_number, draft.room_type, draft.capacity),
            )
            return int(cur.lastrowid)

    def update(self, room_id: int, draft: RoomDraft) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE rooms SET room_number=%s, room_type=%s, capacity=%s WHERE room_id=%s",
                (draft.room_number, draft.room_type, draft.capacity, int(room_id)),
            )

    def delete(self, room_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM rooms WHERE room_id=%s", (int(room_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM rooms")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
