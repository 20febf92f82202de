from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from hr_attendance.database.bootstrap import apply_schema, list_tables
from hr_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection(db_config)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.user}@{db_config.host}:{db_config.port}/{db_config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
