"""Create the Timebook database and tables, then report which schema tables are present."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timebook.timebook.database.bootstrap import apply_schema, declared_tables, list_tables

SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"


def main() -> int:
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)

    present = set(list_tables(db_config))
    expected = declared_tables(SCHEMA_PATH)
    print(f"Timebook schema on {db_config.get('user')}@{db_config.get('host')}/{db_config.get('database')}:")
    for table in expected:
        print(f"  {'ok' if table in present else 'MISSING':<8}{table}")

    missing = [t for t in expected if t not in present]
    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
