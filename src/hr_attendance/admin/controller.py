from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_user, json_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/users/get", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        users = container.user_service.list_users()
        return json_response("Users", data=[u.to_public_dict() for u in users])

    @app.route("/api/admin/attendance/get/<int:user_id>", methods=["GET"], endpoint="admin_user_attendance")
    @admin_required
    def admin_user_attendance(user_id: int):
        report = container.attendance_service.monthly_stats(
            acting=current_user(),
            user_id=user_id,
            month=request.args.get("month", ""),
        )
        return json_response("User's monthly attendance stats", data=report.to_dict())
