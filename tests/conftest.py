"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Any

import pytest

from nhl_stats.ingestion.client import FetchResult, FetchStatus


def build_feed(
    pk: int = 2023020001,
    season: str = "20232024",
    game_type: str = "R",
    home: str = "Boston Bruins",
    away: str = "Chicago Blackhawks",
    date_time: str = "2023-10-11T23:30:00Z",
) -> dict[str, Any]:
    """Minimal live feed with the fields we read plus some we pass through."""
    return {
        "copyright": "NHL and the NHL Shield are registered trademarks",
        "gamePk": pk,
        "link": f"/api/v1/game/{pk}/feed/live",
        "metaData": {"wait": 10, "timeStamp": "20231012_024415"},
        "gameData": {
            "game": {"pk": pk, "season": season, "type": game_type},
            "datetime": {"dateTime": date_time, "endDateTime": "2023-10-12T02:10:00Z"},
            "status": {"abstractGameState": "Final"},
            "teams": {
                "away": {"id": 16, "name": away, "abbreviation": "CHI", "active": True},
                "home": {"id": 6, "name": home, "abbreviation": "BOS", "active": True},
            },
        },
        "liveData": {
            "plays": {"allPlays": [], "scoringPlays": [], "penaltyPlays": []},
            "linescore": {"currentPeriod": 3, "hasShootout": False},
            "boxscore": {"teams": {}, "officials": []},
            "decisions": {},
        },
    }


class FakeStatsClient:
    """Stands in for StatsAPIClient: serves feeds from a dict, 404 for anything else."""

    def __init__(
        self,
        feeds: dict[str, dict[str, Any]] | None = None,
        errors: dict[str, str] | None = None,
    ):
        self.feeds = feeds or {}
        self.errors = errors or {}
        self.requested: list[str] = []

    def fetch_game(self, game_id: str) -> FetchResult:
        self.requested.append(game_id)
        if game_id in self.errors:
            return FetchResult(FetchStatus.TRANSIENT_ERROR, game_id, error=self.errors[game_id])
        if game_id in self.feeds:
            return FetchResult(FetchStatus.SUCCESS, game_id, payload=self.feeds[game_id])
        return FetchResult(FetchStatus.NOT_FOUND, game_id, error="404 Not Found", status_code=404)


@pytest.fixture
def make_feed():
    """Factory for live feed payloads."""
    return build_feed


@pytest.fixture
def season_feeds():
    """Three regular-season 2023 games keyed by game id."""
    return {
        "2023020001": build_feed(2023020001, home="Boston Bruins", away="Chicago Blackhawks"),
        "2023020002": build_feed(2023020002, home="Vegas Golden Knights", away="Seattle Kraken"),
        "2023020003": build_feed(2023020003, home="Pittsburgh Penguins", away="Boston Bruins"),
    }


@pytest.fixture
def fake_client():
    """Factory for FakeStatsClient."""
    return FakeStatsClient


@pytest.fixture
def temp_db_path(tmp_path) -> Path:
    """Path for a fresh database file."""
    return tmp_path / "nhl-stats.sqlite"


@pytest.fixture
def db_connection(temp_db_path):
    """Connection to a freshly migrated database."""
    from nhl_stats.schema.connection import open_database

    conn = open_database(temp_db_path)
    yield conn
    conn.close()


@pytest.fixture
def sample_settings(tmp_path):
    """Settings pointing every path into tmp_path."""
    from nhl_stats.utils.config import Settings

    return Settings(
        db_path=str(tmp_path / "nhl-stats.sqlite"),
        output_path=str(tmp_path / "out" / "stats.json"),
        log_dir=str(tmp_path / "logs"),
        api_base_url="https://statsapi.example.test/api/v1",
        request_timeout=5,
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def patch_settings(sample_settings):
    """Patch get_settings for the CLI command modules."""
    from unittest.mock import patch

    with (
        patch("nhl_stats.cli.ingestion.get_settings", return_value=sample_settings),
        patch("nhl_stats.cli.export.get_settings", return_value=sample_settings),
    ):
        yield sample_settings
