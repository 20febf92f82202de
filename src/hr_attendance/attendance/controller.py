from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from flask import Flask, request

from ..common.datetime_utils import to_local
from ..common.validators import require_choice, require_non_empty, require_number
from ..common.web import current_user, json_field, json_response, login_required
from ..core.enums import AttendanceAction
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceRecord, DeviceInfo


@dataclass(frozen=True)
class LogAttendancePayload:
    action: AttendanceAction
    timestamp: datetime
    display_date: str
    display_time: Optional[str]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    device: Optional[DeviceInfo] = None
    face_descriptor: Optional[list] = None


def _parse_timestamp(value: Any, container: Container) -> datetime:
    raw = require_non_empty(value, "timestampIso")
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("Invalid timestampIso") from None
    return to_local(parsed, container.tz)


def parse_log_payload(body: dict, container: Container) -> LogAttendancePayload:
    action = AttendanceAction(
        require_choice(body.get("action"), "Action", [a.value for a in AttendanceAction])
    )
    timestamp = _parse_timestamp(body.get("timestampIso"), container)
    display_date = require_non_empty(body.get("displayDate"), "displayDate")

    if action == AttendanceAction.CHECK_OUT:
        return LogAttendancePayload(
            action=action,
            timestamp=timestamp,
            display_date=display_date,
            display_time=body.get("displayTime"),
        )

    display_time = require_non_empty(body.get("displayTime"), "displayTime")

    location = json_field(body.get("location"))
    if not isinstance(location, dict):
        raise ValidationError("location is required for check-in")
    latitude = require_number(location.get("lat"), "location.lat")
    longitude = require_number(location.get("lng"), "location.lng")

    device = json_field(body.get("device"))
    if not isinstance(device, dict):
        raise ValidationError("device is required for check-in")
    user_agent = require_non_empty(device.get("userAgent"), "device.userAgent")

    descriptor = json_field(body.get("faceDescriptor"))

    return LogAttendancePayload(
        action=action,
        timestamp=timestamp,
        display_date=display_date,
        display_time=display_time,
        latitude=latitude,
        longitude=longitude,
        device=DeviceInfo(user_agent=user_agent, camera_device_id=device.get("selectedCameraDeviceId")),
        face_descriptor=descriptor or None,
    )


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "record_id": record.record_id,
        "user_id": record.user_id,
        "display_date": record.display_date,
        "display_time": record.display_time,
        "check_in": record.check_in.isoformat() if record.check_in else None,
        "check_out": record.check_out.isoformat() if record.check_out else None,
        "location": (
            {
                "coordinates": list(record.location.coordinates),
                "distance_from_office_meters": record.location.distance_from_office_meters,
            }
            if record.location
            else None
        ),
        "device": (
            {"user_agent": record.device.user_agent, "camera_device_id": record.device.camera_device_id}
            if record.device
            else None
        ),
        "image": record.image,
        "status": record.status.value,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/log", methods=["POST"], endpoint="log_attendance")
    @login_required
    def log_attendance():
        body = request.form.to_dict() if request.form else (request.get_json(silent=True) or {})
        payload = parse_log_payload(body, container)
        user = current_user()

        if payload.action == AttendanceAction.CHECK_IN:
            media = request.files.get("media")
            record = container.attendance_service.log_check_in(
                user.user_id,
                timestamp=payload.timestamp,
                display_date=payload.display_date,
                display_time=payload.display_time,
                latitude=payload.latitude,
                longitude=payload.longitude,
                device=payload.device,
                photo=media.read() if media else None,
                face_descriptor=payload.face_descriptor,
            )
            return json_response("Check-in logged successfully", data=record_to_dict(record))

        record = container.attendance_service.log_check_out(
            user.user_id,
            timestamp=payload.timestamp,
            display_date=payload.display_date,
        )
        return json_response("Check-out logged successfully", data=record_to_dict(record))

    @app.route("/api/attendance/user/get", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        user = current_user()
        report = container.attendance_service.monthly_stats(
            acting=user,
            user_id=user.user_id,
            month=request.args.get("month", ""),
        )
        return json_response("User's monthly attendance stats", data=report.to_dict())
