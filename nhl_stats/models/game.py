"""Game types and typed views over the stats API live feed.

Only the fields this project reads are modelled. The rest of the feed
(plays, linescore, boxscore, venue, franchise data, ...) is stored and
exported untouched; the views ignore it rather than describing the
third-party schema.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GameType(str, Enum):
    """Two-digit game-type code embedded in a game id."""

    PRESEASON = "01"
    REGULAR = "02"
    PLAYOFFS = "03"
    ALL_STAR = "04"

    @property
    def api_code(self) -> str:
        """Letter code the feed reports in ``gameData.game.type``."""
        return _API_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "GameType":
        """Resolve either the two-digit code or the feed's letter code."""
        for member in cls:
            if code in (member.value, member.api_code):
                return member
        raise ValueError(f"Unknown game type code: {code!r}")


_API_CODES: dict[GameType, str] = {
    GameType.PRESEASON: "PR",
    GameType.REGULAR: "R",
    GameType.PLAYOFFS: "P",
    GameType.ALL_STAR: "A",
}


class _FeedModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TeamInfo(_FeedModel):
    """One side of ``gameData.teams``."""

    id: int | None = Field(None, description="Stats API team ID")
    name: str = Field(..., description="Full team name, e.g. 'Boston Bruins'")
    abbreviation: str | None = Field(None, description="Three-letter abbreviation")


class Teams(_FeedModel):
    away: TeamInfo
    home: TeamInfo


class GameInfo(_FeedModel):
    pk: int = Field(..., description="Stats API primary key, e.g. 2023020001")
    season: str = Field(..., description="Season span, e.g. '20232024'")
    type: str = Field(..., description="Game type as reported by the feed")


class GameDateTime(_FeedModel):
    date_time: str | None = Field(None, alias="dateTime")
    end_date_time: str | None = Field(None, alias="endDateTime")


class GameData(_FeedModel):
    game: GameInfo
    datetime: GameDateTime = Field(default_factory=GameDateTime)
    teams: Teams


class GameFeed(_FeedModel):
    """Typed view of ``/game/{id}/feed/live``."""

    game_pk: int | None = Field(None, alias="gamePk")
    game_data: GameData = Field(..., alias="gameData")

    @property
    def matchup(self) -> str:
        teams = self.game_data.teams
        return f"{teams.away.name} @ {teams.home.name}"

    def summary(self) -> str:
        """One-line description: ``pk (start): away @ home``."""
        return f"{self.game_data.game.pk} ({self.game_data.datetime.date_time}): {self.matchup}"
