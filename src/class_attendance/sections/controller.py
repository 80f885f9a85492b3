from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok, serialize
from ..container import Container
from .model import Section


def _section_json(section: Section) -> dict:
    data = serialize(section)
    data["code"] = section.code
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sections", methods=["GET"], endpoint="sections_list")
    @api_errors
    def sections_list():
        return ok([_section_json(s) for s in container.section_service.list()])

    @app.route("/api/sections", methods=["POST"], endpoint="sections_create")
    @api_errors
    def sections_create():
        return ok(_section_json(container.section_service.create(json_body())), status=201)

    @app.route("/api/sections/<int:section_id>", methods=["GET"], endpoint="sections_detail")
    @api_errors
    def sections_detail(section_id: int):
        return ok(_section_json(container.section_service.get(section_id)))

    @app.route("/api/sections/<int:section_id>", methods=["PUT"], endpoint="sections_update")
    @api_errors
    def sections_update(section_id: int):
        return ok(_section_json(container.section_service.update(section_id, json_body())))

    @app.route("/api/sections/<int:section_id>", methods=["DELETE"], endpoint="sections_delete")
    @api_errors
    def sections_delete(section_id: int):
        container.section_service.delete(section_id)
        return ok(message="Section deleted")
