"""Database connection management."""

import sqlite3
from pathlib import Path

import structlog

from nhl_stats.utils.config import get_settings

logger = structlog.get_logger(__name__)


def get_db_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """
    Open the games database.

    Args:
        db_path: Path to the database file. If None, uses default from settings.

    Returns:
        SQLite connection in autocommit mode with ``sqlite3.Row`` rows.

    Raises:
        RuntimeError: If the database directory cannot be created or the database
            cannot be opened.
    """
    settings = get_settings()
    db_path = db_path or Path(settings.db_path)

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(f"Cannot create database directory '{db_path.parent}': {e}") from e

    try:
        # Autocommit: each inserted game is durable as soon as it is written,
        # so a sync that stops early keeps everything fetched so far.
        conn = sqlite3.connect(str(db_path), isolation_level=None)
    except sqlite3.OperationalError as e:
        raise RuntimeError(f"Cannot open database at '{db_path}': {e}") from e

    conn.row_factory = sqlite3.Row

    try:
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
    except sqlite3.Error as e:
        conn.close()
        raise RuntimeError(f"Failed to configure database pragmas for '{db_path}': {e}") from e

    logger.debug("Database connection established", db_path=str(db_path))
    return conn


def init_database(db_path: Path | None = None) -> None:
    """
    Create the ``games`` table if it does not exist yet.

    Safe to call on every start; already-applied migrations are skipped.

    Args:
        db_path: Path to the database file. If None, uses default from settings.

    Raises:
        RuntimeError: If the database cannot be opened or migrations fail.
    """
    from nhl_stats.schema.migrations import run_migrations  # noqa: PLC0415

    conn = get_db_connection(db_path)
    conn.close()
    try:
        run_migrations(db_path)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize database: {e}") from e
    logger.debug("Database initialized", db_path=str(db_path or get_settings().db_path))


def open_database(db_path: Path | None = None) -> sqlite3.Connection:
    """Create the schema if needed and return a connection to it."""
    init_database(db_path)
    return get_db_connection(db_path)
