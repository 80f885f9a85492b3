from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, fail, json_body, ok
from ..common.validators import parse_bool
from ..container import Container
from ..core.exceptions import ValidationError


def _uploaded_csv_text() -> str:
    """CSV from a multipart `file` field, else the raw request body."""

    upload = request.files.get("file")
    raw = upload.read() if upload else request.get_data()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("CSV file must be UTF-8 encoded")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @api_errors
    def students_list():
        return ok(container.student_service.list())

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @api_errors
    def students_create():
        return ok(container.student_service.create(json_body()), status=201)

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="students_detail")
    @api_errors
    def students_detail(student_id: str):
        return ok(container.student_service.get(student_id))

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="students_update")
    @api_errors
    def students_update(student_id: str):
        return ok(container.student_service.update(student_id, json_body()))

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @api_errors
    def students_delete(student_id: str):
        container.student_service.delete(student_id)
        return ok(message="Student deleted")

    @app.route("/api/students/import", methods=["POST"], endpoint="students_import")
    @api_errors
    def students_import():
        text = _uploaded_csv_text()
        if not text.strip():
            return fail("CSV file is empty", 400)

        if parse_bool(request.args.get("dry_run")):
            plan = container.student_importer.preview(text)
            return ok(
                plan.to_create,
                dry_run=True,
                duplicates=plan.duplicates,
                errors=plan.errors,
            )

        result = container.student_importer.commit(text)
        return ok(
            created=result.created,
            duplicates=result.duplicates,
            errors=result.errors,
            message=f"Imported {result.created} student(s)",
        )
