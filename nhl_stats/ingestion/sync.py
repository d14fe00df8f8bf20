"""Incremental season sync.

Walks game numbers 1, 2, 3, ... for a season and game type, skipping ids
already stored and inserting the rest, until the API has no game for the
next number. The API has no "list games" endpoint, so the first 404 is
taken as the end of the season.

A network failure, non-404 error status or malformed body also stops the
loop (nothing is retried), but is reported as ``FETCH_ERROR`` so callers can
tell an interrupted sync from a finished one. Re-running picks up where it
stopped.
"""

import sqlite3
from dataclasses import dataclass
from enum import Enum

import structlog

from nhl_stats.ingestion.client import StatsAPIClient
from nhl_stats.ingestion.game_ids import build_game_id
from nhl_stats.ingestion.games import GameFeedIngestor
from nhl_stats.models.game import GameType
from nhl_stats.schema.games import get_stored_game_ids
from nhl_stats.utils.logging import clear_log_context, log_context

logger = structlog.get_logger(__name__)


class StopReason(str, Enum):
    EXHAUSTED = "EXHAUSTED"
    FETCH_ERROR = "FETCH_ERROR"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"


@dataclass
class SyncResult:
    """Summary of one sync run."""

    season: str
    game_type: GameType
    inserted: int
    skipped: int
    last_game_number: int
    stop_reason: StopReason
    error: str | None = None

    @property
    def completed(self) -> bool:
        """True when the loop ran until the API reported no further games."""
        return self.stop_reason is StopReason.EXHAUSTED


_STOP_REASONS = {
    "NOT_FOUND": StopReason.EXHAUSTED,
    "TRANSIENT_ERROR": StopReason.FETCH_ERROR,
    "INVALID": StopReason.INVALID_PAYLOAD,
}


def sync_season(
    conn: sqlite3.Connection,
    season: str,
    client: StatsAPIClient | None = None,
    game_type: GameType = GameType.REGULAR,
    start_number: int = 1,
) -> SyncResult:
    """
    Fetch and store every game of a season not already in the database.

    Args:
        conn: Open connection to a database with the ``games`` table.
        season: Season start year, e.g. "2023".
        client: Stats API client. If None, creates one from settings.
        game_type: Which series of game numbers to walk.
        start_number: First game number to probe.

    Returns:
        SyncResult; ``last_game_number`` is the number that stopped the loop.
    """
    ingestor = GameFeedIngestor(client)
    stored_ids = get_stored_game_ids(conn)
    inserted = skipped = 0
    game_number = start_number

    log_context(season=season, game_type=game_type.name)
    logger.info("Starting season sync", stored_games=len(stored_ids))

    try:
        while True:
            game_id = build_game_id(season, game_type, game_number)

            if game_id in stored_ids:
                logger.debug("Skipping stored game", game_id=game_id)
                skipped += 1
                game_number += 1
                continue

            result = ingestor.ingest(game_id, conn)
            if result["status"] != "SUCCESS":
                stop_reason = _STOP_REASONS[result["status"]]
                break

            inserted += result["rows_affected"]
            stored_ids.add(game_id)
            game_number += 1

        outcome = SyncResult(
            season=season,
            game_type=game_type,
            inserted=inserted,
            skipped=skipped,
            last_game_number=game_number,
            stop_reason=stop_reason,
            error=None if stop_reason is StopReason.EXHAUSTED else result.get("error_message"),
        )

        if outcome.completed:
            logger.info(
                "Season sync complete",
                inserted=inserted,
                skipped=skipped,
                last_game_id=game_id,
            )
        else:
            logger.error(
                "Season sync stopped early",
                stop_reason=stop_reason.value,
                game_id=game_id,
                inserted=inserted,
                skipped=skipped,
                error=outcome.error,
            )
        return outcome
    finally:
        clear_log_context("season", "game_type")
