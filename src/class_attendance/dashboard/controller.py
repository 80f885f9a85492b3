from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @api_errors
    def admin_stats():
        return ok(container.dashboard_service.stats())
