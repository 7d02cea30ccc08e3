"""SQLite connection + schema initialisation."""
from __future__ import annotations
import logging
import os
import sqlite3
import uuid
from datetime import datetime, timezone

import bcrypt

from academy.core.config import DATABASE_PATH, DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD, MIGRATIONS_DIR

logger = logging.getLogger(__name__)


def get_connection() -> sqlite3.Connection:
    conn = sqlite3.connect(DATABASE_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_db() -> None:
    """Run all migration SQL files against the database."""
    directory = os.path.dirname(DATABASE_PATH)
    if directory:
        os.makedirs(directory, exist_ok=True)
    conn = get_connection()
    try:
        for name in sorted(os.listdir(MIGRATIONS_DIR)):
            if not name.endswith(".sql"):
                continue
            with open(os.path.join(MIGRATIONS_DIR, name), "r", encoding="utf-8") as f:
                conn.executescript(f.read())
            logger.debug("Applied migration %s", name)
        conn.commit()
    finally:
        conn.close()
    logger.info("Database ready at %s", DATABASE_PATH)
    _seed_default_admin()


def _seed_default_admin() -> None:
    """Insert the first super admin when the users table is empty."""
    conn = get_connection()
    try:
        count = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        if count:
            return
        hashed = bcrypt.hashpw(DEFAULT_ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        conn.execute(
            """
            INSERT INTO users (id, email, password_hash, display_name, role, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                str(uuid.uuid4()),
                DEFAULT_ADMIN_EMAIL,
                hashed,
                "Super Admin User",
                "super_admin",
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        conn.commit()
        logger.info("Seeded default super admin %s", DEFAULT_ADMIN_EMAIL)
    finally:
        conn.close()
