"""Filter stored game feeds and export them."""

import json
import sqlite3
from enum import Enum
from pathlib import Path
from typing import Any

import pydantic
import structlog
from pydantic import BaseModel, Field

from nhl_stats.exceptions import UnsupportedOutputFormatError, ValidationError
from nhl_stats.models.game import GameFeed, GameType
from nhl_stats.schema.games import get_all_game_rows

logger = structlog.get_logger(__name__)


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


class GameQuery(BaseModel):
    """Filters for ``get``. Every filter left as None matches all games."""

    season: str | None = Field(None, description="Prefix of gameData.game.season, e.g. '2023'")
    game_type: GameType | None = Field(None, description="Game type")
    game_number: int | None = Field(None, description="Exact gameData.game.pk")
    team: str | None = Field(None, description="Case-sensitive substring of a team name")
    output: OutputFormat = Field(OutputFormat.JSON, description="Export format")

    @property
    def has_filters(self) -> bool:
        return any(
            value is not None
            for value in (self.season, self.game_type, self.game_number, self.team)
        )


def load_games(conn: sqlite3.Connection) -> list[dict[str, Any]]:
    """Decode every stored game feed, in game id order."""
    return [json.loads(game_data) for _, game_data in get_all_game_rows(conn)]


def _matches(feed: GameFeed, query: GameQuery) -> bool:
    game = feed.game_data.game
    teams = feed.game_data.teams

    if query.game_number is not None and game.pk != query.game_number:
        return False
    if query.game_type is not None and game.type not in (
        query.game_type.value,
        query.game_type.api_code,
    ):
        return False
    if query.season is not None and not game.season.startswith(query.season):
        return False
    if query.team is not None and not (
        query.team in teams.home.name or query.team in teams.away.name
    ):
        return False
    return True


def filter_games(records: list[dict[str, Any]], query: GameQuery) -> list[dict[str, Any]]:
    """
    Keep the records matching every filter set on ``query``.

    Raises:
        ValidationError: If a filter is set and a record lacks the fields it reads.
    """
    if not query.has_filters:
        return list(records)

    kept = []
    for record in records:
        try:
            feed = GameFeed.model_validate(record)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Stored game feed is missing required fields: {e}") from e
        if _matches(feed, query):
            kept.append(record)
    return kept


def query_games(conn: sqlite3.Connection, query: GameQuery) -> list[dict[str, Any]]:
    """Load all stored games and apply ``query``."""
    records = load_games(conn)
    matched = filter_games(records, query)
    logger.info(
        "Filtered games",
        total=len(records),
        matched=len(matched),
        filters=query.model_dump(exclude_none=True, exclude={"output"}, mode="json"),
    )
    return matched


def export_games(
    records: list[dict[str, Any]],
    output_path: Path,
    output: OutputFormat = OutputFormat.JSON,
) -> Path:
    """
    Write ``records`` to ``output_path`` as a JSON array, replacing the file.

    Raises:
        UnsupportedOutputFormatError: For CSV, which is not implemented. The
            output file is left untouched.
    """
    if output is OutputFormat.CSV:
        raise UnsupportedOutputFormatError("CSV output not yet implemented!")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)

    logger.info(
        "JSON export complete",
        output_path=str(output_path),
        games=len(records),
        file_size_bytes=output_path.stat().st_size,
    )
    return output_path
