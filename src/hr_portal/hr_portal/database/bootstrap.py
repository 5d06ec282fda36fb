from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # email, password, full name, role, salary
    ("admin@hrportal.local", "admin123", "Admin Demo", "admin", 0),
    ("karyawan@hrportal.local", "karyawan123", "Budi Santoso", "employee", 5000000),
)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql/seed.sql name a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Splits on ';' outside quotes.
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _run_script(db_config: dict, path: Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, Path(schema_path))
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, Path(seed_path))
    logger.info("Applied seed %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset the password of) the demo admin and employee accounts."""
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        for email, password, full_name, role, salary in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM auth_users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = existing["id"]
                cur.execute("UPDATE auth_users SET password_hash=%s WHERE id=%s", (password_hash, user_id))
            else:
                user_id = str(uuid.uuid4())
                cur.execute(
                    "INSERT INTO auth_users (id, email, password_hash) VALUES (%s, %s, %s)",
                    (user_id, email, password_hash),
                )

            cur.execute("SELECT id FROM profiles WHERE id=%s", (user_id,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE profiles SET role=%s, is_active=1, updated_at=NOW() WHERE id=%s",
                    (role, user_id),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO profiles (id, email, full_name, role, salary, profile_completed)
                    VALUES (%s, %s, %s, %s, %s, 1)
                    """,
                    (user_id, email, full_name, role, salary),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
