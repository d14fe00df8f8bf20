"""Database schema and migrations."""

from nhl_stats.schema.connection import get_db_connection, init_database, open_database

__all__ = ["get_db_connection", "init_database", "open_database"]
