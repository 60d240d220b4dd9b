"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and the per-request ``get_db`` dependency used by the
API layer.  Repositories receive the connection handed out by
``get_db`` so that every request runs inside one transaction.  Write
handlers commit it before returning; it is rolled back on error.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import settings


logger = logging.getLogger(__name__)


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            user_id TEXT PRIMARY KEY,
            login TEXT NOT NULL UNIQUE,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            name TEXT,
            state INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS titles (
            title_id TEXT PRIMARY KEY,
            tmdb_id TEXT NOT NULL UNIQUE,
            title_name TEXT,
            overview TEXT,
            keywords TEXT,
            genres TEXT,
            actors TEXT,
            director TEXT,
            release_year INTEGER,
            rating REAL,
            image_url TEXT
        );

        CREATE TABLE IF NOT EXISTS comments (
            comment_id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title_id TEXT NOT NULL,
            rating INTEGER NOT NULL,
            info TEXT,
            creation_date TIMESTAMP NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(user_id),
            FOREIGN KEY(title_id) REFERENCES titles(title_id)
        );

        -- No UNIQUE(user_id, title_id): a title may be favourited twice.
        CREATE TABLE IF NOT EXISTS favourite_titles (
            fav_id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title_id TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(user_id),
            FOREIGN KEY(title_id) REFERENCES titles(title_id)
        );
        """,
    ),
    # Migration 2: indices for per-parent listings
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_comments_user_id ON comments(user_id);
        CREATE INDEX IF NOT EXISTS idx_comments_title_id ON comments(title_id);
        CREATE INDEX IF NOT EXISTS idx_favourite_titles_user_id ON favourite_titles(user_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path (or the special
    ``:memory:`` name), use it directly.  Otherwise resolve it relative
    to the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  The connection may be used from a thread other than the one
    that opened it: FastAPI resolves sync dependencies in a worker
    thread and runs async handlers on the event loop thread.
    """
    conn = sqlite3.connect(path or get_database_path(), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # Foreign key enforcement is off by default in SQLite and must be
    # enabled per connection.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def apply_migrations(conn: sqlite3.Connection) -> int:
    """Apply pending migrations on ``conn`` and return the schema version."""
    cursor = conn.cursor()
    cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
    current_version = row["version"] if row and row["version"] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current_version:
            logger.info("Applying migration %s", version)
            cursor.executescript(sql)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version
    conn.commit()
    return current_version


def init_db() -> None:
    """Create the database file if needed and bring the schema up to date."""
    conn = get_connection()
    try:
        version = apply_migrations(conn)
        logger.info("Database ready at schema version %s", version)
    finally:
        conn.close()


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding one connection per request.

    Handlers that write call ``conn.commit()`` themselves before
    returning: code after ``yield`` only runs once the response has
    been sent, too late to report a failed commit to the client.
    Work left uncommitted is rolled back if the handler raises and
    discarded when the connection is closed.
    """
    conn = get_connection()
    try:
        yield conn
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
