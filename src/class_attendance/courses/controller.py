from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/courses", methods=["GET"], endpoint="courses_list")
    @api_errors
    def courses_list():
        return ok(container.course_service.list())

    @app.route("/api/courses", methods=["POST"], endpoint="courses_create")
    @api_errors
    def courses_create():
        return ok(container.course_service.create(json_body()), status=201)

    @app.route("/api/courses/<int:course_id>", methods=["GET"], endpoint="courses_detail")
    @api_errors
    def courses_detail(course_id: int):
        return ok(container.course_service.get(course_id))

    @app.route("/api/courses/<int:course_id>", methods=["PUT"], endpoint="courses_update")
    @api_errors
    def courses_update(course_id: int):
        return ok(container.course_service.update(course_id, json_body()))

    @app.route("/api/courses/<int:course_id>", methods=["DELETE"], endpoint="courses_delete")
    @api_errors
    def courses_delete(course_id: int):
        container.course_service.delete(course_id)
        return ok(message="Course deleted")
