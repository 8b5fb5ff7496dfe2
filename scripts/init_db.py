"""Create the database and apply database/schema.sql.

Pass --seed to also load the demo offices and the demo admin account.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.geo_attendance.geo_attendance.database.bootstrap import (
    apply_schema,
    apply_seed_sql,
    ensure_demo_admin,
    list_tables,
)
from src.geo_attendance.geo_attendance.database.connection import DBConfig


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", action="store_true", help="also load seed.sql and the demo admin")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_admin(db_config)

    tables = list_tables(db_config)
    print(f"OK: {DBConfig.from_dict(db_config).describe()} -> tables: {', '.join(sorted(tables)) or '-'}")


if __name__ == "__main__":
    main()
