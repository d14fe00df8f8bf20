"""Game feed ingestion: id codec, API client, per-game ingestor and season sync."""

from nhl_stats.ingestion.client import FetchResult, FetchStatus, StatsAPIClient
from nhl_stats.ingestion.game_ids import ParsedGameId, build_game_id, parse_game_id
from nhl_stats.ingestion.games import GameFeedIngestor
from nhl_stats.ingestion.sync import StopReason, SyncResult, sync_season

__all__ = [
    "FetchResult",
    "FetchStatus",
    "GameFeedIngestor",
    "ParsedGameId",
    "StatsAPIClient",
    "StopReason",
    "SyncResult",
    "build_game_id",
    "parse_game_id",
    "sync_season",
]
