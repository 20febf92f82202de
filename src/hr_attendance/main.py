from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from flask import Flask, send_from_directory

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .attendance.service import OfficeGeofence
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.logging_config import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 10 * 1024 * 1024))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    upload_dir = getattr(settings, "UPLOAD_DIR", "uploads")

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        container = build_container(
            db_config=db_config,
            upload_dir=upload_dir,
            public_media_url=getattr(settings, "PUBLIC_MEDIA_URL", "/media"),
            tz=ZoneInfo(getattr(settings, "TIMEZONE", "UTC")),
            geofence=OfficeGeofence(
                latitude=float(getattr(settings, "OFFICE_LAT")),
                longitude=float(getattr(settings, "OFFICE_LNG")),
                max_distance_meters=float(getattr(settings, "MAX_DISTANCE_FROM_OFFICE_METERS")),
            ),
            face_match_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD")),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    @app.route("/media/<path:filename>", endpoint="media")
    def media(filename: str):
        return send_from_directory(Path(upload_dir).resolve(), filename)

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_admin(app, container)

    return app


if __name__ == "__main__":
    create_app().run()
