"""Load the activity catalog and the demo accounts (one per role, each with a 40h schedule)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.timebook.timebook.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users, row_counts

SEED_PATH = REPO_ROOT / "database" / "seed.sql"


def main() -> None:
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_seed_sql(db_config, seed_path=SEED_PATH)
    ensure_demo_users(db_config)

    for table, count in row_counts(db_config).items():
        print(f"  {table:<22}{count}")
    print("Demo sign-ins:")
    for name, email, password, role in DEMO_USERS:
        print(f"  {role.value:<9}{email} / {password}")


if __name__ == "__main__":
    main()
