from __future__ import annotations

from pathlib import Path

from gym_checkin.database.bootstrap import apply_schema, list_tables
from gym_checkin.database.connection import DBConfig
from gym_checkin.settings import load_settings


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {DBConfig.from_dict(db_config).describe()} (tables={sorted(tables)})")


if __name__ == "__main__":
    main()
