"""Load the demo accounts (one per role) and database/seed.sql.

Run scripts/init_db.py first. Safe to run repeatedly.
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

from src.teamtime.teamtime.database.bootstrap import DEMO_ACCOUNTS, apply_sql_file, ensure_demo_users

logger = logging.getLogger("teamtime.scripts.seed_db")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    ensure_demo_users(db_config)
    apply_sql_file(db_config, path=REPO_ROOT / "database" / "seed.sql")

    for name, email, password, role, _designation, _phone in DEMO_ACCOUNTS:
        logger.info("%-8s %-26s password: %s (%s)", role, email, password, name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
