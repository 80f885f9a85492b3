from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rooms", methods=["GET"], endpoint="rooms_list")
    @api_errors
    def rooms_list():
        return ok(container.room_service.list())

    @app.route("/api/rooms", methods=["POST"], endpoint="rooms_create")
    @api_errors
    def rooms_create():
        return ok(container.room_service.create(json_body()), status=201)

    @app.route("/api/rooms/<int:room_id>", methods=["GET"], endpoint="rooms_detail")
    @api_errors
    def rooms_detail(room_id: int):
        return ok(container.room_service.get(room_id))

    @app.route("/api/rooms/<int:room_id>", methods=["PUT"], endpoint="rooms_update")
    @api_errors
    def rooms_update(room_id: int):
        return ok(container.room_service.update(room_id, json_body()))

    @app.route("/api/rooms/<int:room_id>", methods=["DELETE"], endpoint="rooms_delete")
    @api_errors
    def rooms_delete(room_id: int):
        container.room_service.delete(room_id)
        return ok(message="Room deleted")
