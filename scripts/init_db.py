"""Create the database (if missing) and every table from database/schema.sql.

    APP_ENV=development python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.teamtime.teamtime.database.bootstrap import apply_schema, list_tables
from src.teamtime.teamtime.database.connection import DBConfig

logger = logging.getLogger("teamtime.scripts.init_db")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    tables = sorted(list_tables(db_config))
    logger.info("%s now has %d tables: %s", DBConfig.from_dict(db_config).describe(), len(tables), ", ".join(tables))
    return 0


if __name__ == "__main__":
    sys.exit(main())
