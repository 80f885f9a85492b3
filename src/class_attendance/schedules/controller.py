from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, json_body, ok
from ..common.validators import optional_id
from ..container import Container
from .model import ScheduleRow


def _row_json(row: ScheduleRow) -> dict:
    sc = row.schedule
    return {
        "schedule_id": sc.schedule_id,
        "course_id": sc.course_id,
        "course": f"{row.course_code} - {row.course_title}" if row.course_code else None,
        "section_id": sc.section_id,
        "section": row.section_name,
        "room_id": sc.room_id,
        "room": row.room_number,
        "day_of_week": sc.day_of_week,
        "start_time": sc.start_time.strftime("%H:%M"),
        "end_time": sc.end_time.strftime("%H:%M"),
        "is_lab": sc.is_lab,
        "semester": sc.semester,
        "school_year": sc.school_year,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    @api_errors
    def schedules_list():
        section_id = optional_id(request.args.get("section_id"), "Section")
        rows = container.schedule_service.list(section_id=section_id)
        return ok([_row_json(r) for r in rows])

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    @api_errors
    def schedules_create():
        return ok(container.schedule_service.create(json_body()), status=201)

    @app.route("/api/schedules/<int:schedule_id>", methods=["GET"], endpoint="schedules_detail")
    @api_errors
    def schedules_detail(schedule_id: int):
        return ok(container.schedule_service.get(schedule_id))

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="schedules_update")
    @api_errors
    def schedules_update(schedule_id: int):
        return ok(container.schedule_service.update(schedule_id, json_body()))

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    @api_errors
    def schedules_delete(schedule_id: int):
        container.schedule_service.delete(schedule_id)
        return ok(message="Schedule deleted")
