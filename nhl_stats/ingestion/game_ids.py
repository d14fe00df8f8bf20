"""Stats API game ids.

A game id is ``SSSSTTNNNN``: the four-digit season start year, the two-digit
game-type code, and the game number zero-padded to four digits, e.g.
``2023020001`` for the first regular-season game of 2023-24.

Game numbers of 10000 or more are not rejected; they render with five digits
and the resulting id no longer parses.
"""

from typing import NamedTuple

from nhl_stats.models.game import GameType

GAME_ID_LENGTH = 10
GAME_NUMBER_WIDTH = 4


class ParsedGameId(NamedTuple):
    season: str
    game_type: GameType
    game_number: int


def build_game_id(season: str, game_type: GameType, game_number: int) -> str:
    """
    Build a game id from its parts.

    Args:
        season: Season start year, e.g. "2023".
        game_type: Game type.
        game_number: Sequence number within the season and type, from 1.

    Returns:
        The game id, e.g. ``build_game_id("2023", GameType.REGULAR, 10) == "2023020010"``.
    """
    return f"{season}{game_type.value}{game_number:0{GAME_NUMBER_WIDTH}d}"


def parse_game_id(game_id: str) -> ParsedGameId:
    """
    Split a game id back into season, type and number.

    Raises:
        ValueError: If ``game_id`` is not ten digits or has an unknown type code.
    """
    if len(game_id) != GAME_ID_LENGTH or not game_id.isdigit():
        raise ValueError(f"Game id must be {GAME_ID_LENGTH} digits, got {game_id!r}")

    season, type_code, number = game_id[:4], game_id[4:6], game_id[6:]
    try:
        game_type = GameType(type_code)
    except ValueError as e:
        raise ValueError(f"Unknown game type {type_code!r} in game id {game_id!r}") from e
    return ParsedGameId(season, game_type, int(number))
