"""Row access for the ``games`` table."""

import json
import sqlite3
from typing import Any

from nhl_stats.exceptions import DatabaseError


def get_stored_game_ids(conn: sqlite3.Connection) -> set[str]:
    """Return every game id currently stored."""
    rows = conn.execute("SELECT game_id FROM games").fetchall()
    return {row[0] for row in rows}


def insert_game(conn: sqlite3.Connection, game_id: str, payload: dict[str, Any]) -> int:
    """
    Store a raw game feed under ``game_id``.

    Existing rows are never overwritten.

    Returns:
        1 if a row was inserted, 0 if ``game_id`` was already present.

    Raises:
        DatabaseError: If the insert fails.
    """
    try:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO games (game_id, game_data) VALUES (?, ?)",
            (game_id, json.dumps(payload)),
        )
    except sqlite3.Error as e:
        raise DatabaseError(f"Failed to insert game {game_id}: {e}") from e
    return cursor.rowcount


def get_all_game_rows(conn: sqlite3.Connection) -> list[tuple[str, str]]:
    """Return ``(game_id, game_data)`` for every stored game, ordered by id."""
    rows = conn.execute("SELECT game_id, game_data FROM games ORDER BY game_id").fetchall()
    return [(row[0], row[1]) for row in rows]


def count_games(conn: sqlite3.Connection) -> int:
    """Return the number of stored games."""
    return conn.execute("SELECT COUNT(*) FROM games").fetchone()[0]
