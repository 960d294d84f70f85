"""Schema creation and demo seeding for local and test databases."""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = [
    # name, email, password, role, designation, phone
    ("Admin Demo", "admin@teamtime.local", "admin123", "Admin", "System Admin", "+10000000001"),
    ("Manager Demo", "manager@teamtime.local", "manager123", "Manager", "Team Lead", "+10000000002"),
    ("Employee Demo", "employee@teamtime.local", "employee123", "Employee", "Member", "+10000000003"),
]

_CREATE_OR_USE_DB = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$", re.IGNORECASE | re.MULTILINE)


def _connect(db_config: dict, *, with_database: bool = True):
    return mysql.connector.connect(**DBConfig.from_dict(db_config).connect_kwargs(with_database=with_database))


def split_sql(sql: str) -> Iterator[str]:
    """Yield the statements of a SQL script.

    Full-line ``--`` comments are dropped and a ';' inside a quoted literal
    does not end a statement. CREATE DATABASE / USE lines are skipped so the
    target database always comes from the config.
    """
    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    sql = _CREATE_OR_USE_DB.sub("", "\n".join(lines))

    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            f"CHARACTER SET {target.charset} COLLATE {target.charset}_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: dict, *, path: str | Path) -> int:
    """Run every statement of ``path``; returns how many were executed."""
    script = Path(path).read_text(encoding="utf-8")

    conn = _connect(db_config)
    executed = 0
    try:
        cur = conn.cursor()
        for stmt in split_sql(script):
            cur.execute(stmt)
            executed += 1
        conn.commit()
    finally:
        conn.close()

    logger.info("Applied %s (%d statements) to %s", Path(path).name, executed, DBConfig.from_dict(db_config).describe())
    return executed


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    apply_sql_file(db_config, path=schema_path)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert one account per role so a fresh install can be explored."""
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for name, email, password, role, designation, phone in DEMO_ACCOUNTS:
            cur.execute(
                """
                INSERT INTO employees (name, email, password_hash, role, status, designation, phone, joining_date)
                VALUES (%s, %s, %s, %s, 'active', %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), password_hash=VALUES(password_hash), role=VALUES(role),
                    designation=VALUES(designation), phone=VALUES(phone), status='active'
                """,
                (name, email, generate_password_hash(password), role, designation, phone, date.today()),
            )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready: %s", ", ".join(a[1] for a in DEMO_ACCOUNTS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
