from __future__ import annotations

import click
from flask import Flask, Response, request

from ..attendance.model import DeviceInfo, Location
from ..common.http import api_errors, json_body, ok
from ..common.validators import optional_id, optional_text, parse_int
from ..container import Container
from ..core.exceptions import ValidationError
from .model import SessionContext


def _context_json(ctx: SessionContext) -> dict:
    return {
        "session_id": ctx.session.session_id,
        "session_date": ctx.session.session_date.isoformat(),
        "created_at": ctx.session.created_at.isoformat(),
        "expires_at": ctx.session.expires_at.isoformat(),
        "section": {"section_id": ctx.section.section_id, "name": ctx.section.name, "code": ctx.section.code},
        "course": (
            {"course_id": ctx.course.course_id, "code": ctx.course.code, "title": ctx.course.title}
            if ctx.course
            else None
        ),
    }


def _location_from(body: dict) -> Location | None:
    lat, lng = body.get("latitude"), body.get("longitude")
    if lat is None or lng is None:
        return None
    try:
        location = Location(latitude=float(lat), longitude=float(lng))
    except (TypeError, ValueError):
        raise ValidationError("Coordinates are not valid")
    if not (-90 <= location.latitude <= 90 and -180 <= location.longitude <= 180):
        raise ValidationError("Coordinates are out of range")
    return location


def register(app: Flask, container: Container) -> None:
    # ===== INSTRUCTOR =====

    @app.route("/api/sessions", methods=["POST"], endpoint="sessions_create")
    @api_errors
    def sessions_create():
        body = json_body()
        section_id = optional_id(body.get("section_id"), "Section")
        if not section_id:
            raise ValidationError("Section is required")

        generated = container.session_service.create_session(
            section_id,
            instructor_id=optional_text(body.get("instructor_id")),
            ttl_minutes=parse_int(body.get("ttl_minutes"), "Session length"),
        )
        return ok(
            generated.session,
            status=201,
            section=generated.section.name,
            checkin_url=generated.checkin_url,
            qr_url=f"/api/sessions/{generated.session.session_id}/qr.png",
        )

    @app.route("/api/sessions", methods=["GET"], endpoint="sessions_list")
    @api_errors
    def sessions_list():
        section_id = optional_id(request.args.get("section_id"), "Section")
        limit = parse_int(request.args.get("limit"), "Limit", default=20)
        return ok(container.session_service.list_recent(limit=max(1, min(limit, 100)), section_id=section_id))

    @app.route("/api/sessions/<session_id>/qr.png", methods=["GET"], endpoint="sessions_qr")
    @api_errors
    def sessions_qr(session_id: str):
        png = container.session_service.qr_png(session_id)
        return Response(png, mimetype="image/png", headers={"Cache-Control": "no-store"})

    @app.route("/api/sessions/<session_id>/manual", methods=["POST"], endpoint="sessions_manual_mark")
    @api_errors
    def sessions_manual_mark(session_id: str):
        body = json_body()
        record_id = container.attendance_service.mark_manual(
            session_id,
            str(body.get("student_id") or ""),
            str(body.get("status") or ""),
        )
        return ok(record_id=record_id, message="Attendance updated")

    # ===== STUDENT CHECK-IN (QR target) =====

    @app.route("/attendance/<section>/<session_id>", methods=["GET"], endpoint="checkin_verify")
    @api_errors
    def checkin_verify(section: str, session_id: str):
        ctx = container.session_service.verify(session_id, section)
        return ok(_context_json(ctx))

    @app.route("/attendance/<section>/<session_id>/students", methods=["GET"], endpoint="checkin_student_search")
    @api_errors
    def checkin_student_search(section: str, session_id: str):
        students = container.attendance_service.search_students(session_id, section, request.args.get("q", ""))
        return ok(
            [
                {
                    "student_id": s.student_id,
                    "name": s.name,
                    "section": s.section_name,
                    "course": s.course_code,
                }
                for s in students
            ]
        )

    @app.route("/attendance/<section>/<session_id>/checkin", methods=["POST"], endpoint="checkin_submit")
    @api_errors
    def checkin_submit(section: str, session_id: str):
        body = json_body()
        student_id = optional_text(body.get("student_id"))
        if not student_id:
            raise ValidationError("Please select your name first")

        result = container.attendance_service.check_in(
            session_id,
            section,
            student_id,
            location=_location_from(body),
            device=DeviceInfo(ip_address=request.remote_addr, user_agent=request.headers.get("User-Agent")),
        )
        return ok(result, status=201, message="Attendance successfully submitted!")

    # ===== MAINTENANCE =====

    @app.cli.command("expire-sessions")
    def expire_sessions_command():
        """Mark every overdue active session as expired."""
        count = container.session_service.expire_overdue()
        click.echo(f"Expired {count} session(s)")
