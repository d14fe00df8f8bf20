"""Ingestion command: update-db."""

from pathlib import Path

import structlog
import typer

from nhl_stats.ingestion.client import StatsAPIClient
from nhl_stats.ingestion.sync import sync_season
from nhl_stats.models.game import GameType
from nhl_stats.schema.connection import open_database
from nhl_stats.schema.games import count_games
from nhl_stats.utils.config import get_settings

logger = structlog.get_logger(__name__)


def update_db(
    season: str = typer.Option(
        None,
        "--season",
        "-s",
        help="Season start year, e.g. 2023 for 2023-24.",
    ),
    game_type: str = typer.Option(
        GameType.REGULAR.value,
        "--type",
        "-t",
        help="Game type code: 01 preseason, 02 regular, 03 playoffs, 04 all-star.",
    ),
) -> None:
    """
    Fetch every game of a season that is not stored yet.

    Probes game numbers 0001, 0002, ... until the stats API has no game for
    the next number.
    """
    if not season:
        typer.echo("[FAIL] No season argument found!", err=True)
        raise typer.Exit(code=1)

    try:
        selected_type = GameType.from_code(game_type)
    except ValueError as e:
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e

    settings = get_settings()
    try:
        conn = open_database(Path(settings.db_path))
    except RuntimeError as e:
        logger.error("Cannot open database", error=str(e))
        typer.echo(f"[FAIL] Cannot open database: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Parsing data for {season} season...")
    try:
        typer.echo("Current data found!" if count_games(conn) else "No current data found!")
        client = StatsAPIClient(base_url=settings.api_base_url, timeout=settings.request_timeout)
        result = sync_season(conn, season, client=client, game_type=selected_type)
    except Exception as e:
        logger.exception("Season sync failed", season=season)
        typer.echo(f"[FAIL] Sync failed: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        conn.close()

    summary = f"{result.inserted} new game(s), {result.skipped} already stored"
    if not result.completed:
        typer.echo(
            f"[FAIL] Sync of {season} stopped at game {result.last_game_number} "
            f"({result.stop_reason.value}): {result.error}; {summary}",
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo(f"[OK] Season {season}: {summary}")
