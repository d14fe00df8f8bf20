"""Pydantic models for data validation."""

from nhl_stats.models.game import (
    GameData,
    GameDateTime,
    GameFeed,
    GameInfo,
    GameType,
    TeamInfo,
    Teams,
)

__all__ = [
    "GameData",
    "GameDateTime",
    "GameFeed",
    "GameInfo",
    "GameType",
    "TeamInfo",
    "Teams",
]
