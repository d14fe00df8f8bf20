"""Ingestor for single game feeds."""

import sqlite3
from typing import Any

import pydantic
import structlog

from nhl_stats.ingestion.client import FetchResult, FetchStatus, StatsAPIClient
from nhl_stats.models.game import GameFeed
from nhl_stats.schema.games import insert_game

logger = structlog.get_logger(__name__)


class GameFeedIngestor:
    """
    Fetch, validate and store one game feed.

    ``ingest`` returns a status dict in the same shape for every outcome:
    ``SUCCESS`` (row stored), ``NOT_FOUND``, ``TRANSIENT_ERROR`` or
    ``INVALID``. Database errors propagate.

    Usage:
        ingestor = GameFeedIngestor(StatsAPIClient())
        result = ingestor.ingest("2023020001", conn)
    """

    entity_type = "game_feed"

    def __init__(self, client: StatsAPIClient | None = None):
        self.client = client or StatsAPIClient()
        self.logger = logger.bind(entity_type=self.entity_type)

    def fetch(self, game_id: str) -> FetchResult:
        return self.client.fetch_game(game_id)

    def validate(self, raw: dict[str, Any]) -> GameFeed:
        """
        Check that the feed carries the fields we read.

        Raises:
            pydantic.ValidationError: If ``gameData`` or its game/teams entries are missing.
        """
        return GameFeed.model_validate(raw)

    def upsert(self, game_id: str, raw: dict[str, Any], conn: sqlite3.Connection) -> int:
        """Store the untouched feed. Returns rows inserted (0 if already present)."""
        return insert_game(conn, game_id, raw)

    def ingest(self, game_id: str, conn: sqlite3.Connection) -> dict[str, Any]:
        """
        Complete pipeline for one game id.

        Args:
            game_id: Ten-character game id.
            conn: SQLite database connection.

        Returns:
            Dictionary with ``status``, ``game_id``, ``rows_affected`` and, on
            success, the validated ``feed``; on failure, ``error_message``.
        """
        fetched = self.fetch(game_id)
        if fetched.status is not FetchStatus.SUCCESS:
            return {
                "status": fetched.status.value,
                "game_id": game_id,
                "rows_affected": 0,
                "error_message": fetched.error,
            }

        raw = fetched.payload or {}
        try:
            feed = self.validate(raw)
        except pydantic.ValidationError as e:
            self.logger.error("Validation failed", game_id=game_id, errors=str(e))
            return {
                "status": "INVALID",
                "game_id": game_id,
                "rows_affected": 0,
                "error_message": str(e),
            }

        rows_affected = self.upsert(game_id, raw, conn)
        self.logger.info(
            "Stored game feed",
            game_id=game_id,
            pk=feed.game_data.game.pk,
            start=feed.game_data.datetime.date_time,
            matchup=feed.matchup,
            rows_affected=rows_affected,
        )
        return {
            "status": "SUCCESS",
            "game_id": game_id,
            "rows_affected": rows_affected,
            "feed": feed,
        }
