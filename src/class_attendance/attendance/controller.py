from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_errors, ok
from ..common.validators import optional_id
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _filters() -> tuple[date, int | None]:
        date_s = request.args.get("date")
        try:
            day = parse_iso_date(date_s) if date_s else date.today()
        except ValueError:
            raise ValidationError("Date must be YYYY-MM-DD")
        return day, optional_id(request.args.get("section_id"), "Section")

    @app.route("/api/records", methods=["GET"], endpoint="records_list")
    @api_errors
    def records_list():
        day, section_id = _filters()
        rows = container.attendance_service.list_records(day=day, section_id=section_id)
        return ok(
            rows,
            date=day.isoformat(),
            section_id=section_id,
            summary=container.attendance_service.summarize(rows),
        )

    @app.route("/api/records.csv", methods=["GET"], endpoint="records_csv")
    @api_errors
    def records_csv():
        day, section_id = _filters()
        csv_bytes = container.attendance_service.export_csv(day=day, section_id=section_id)

        suffix = f"_section{section_id}" if section_id else ""
        filename = f"attendance_{day.strftime('%Y%m%d')}{suffix}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/records/<int:record_id>", methods=["DELETE"], endpoint="records_delete")
    @api_errors
    def records_delete(record_id: int):
        container.attendance_service.delete_record(record_id)
        return ok(message="Attendance record deleted")
