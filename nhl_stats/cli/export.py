"""Export command: get."""

from pathlib import Path

import structlog
import typer

from nhl_stats.exceptions import StatsVaultError, UnsupportedOutputFormatError
from nhl_stats.models.game import GameType
from nhl_stats.query import GameQuery, OutputFormat, export_games, query_games
from nhl_stats.schema.connection import open_database
from nhl_stats.schema.games import count_games
from nhl_stats.utils.config import get_settings

logger = structlog.get_logger(__name__)


def get(
    season: str = typer.Option(
        None,
        "--season",
        "-s",
        help="Keep games whose season starts with this, e.g. 2023.",
    ),
    game_type: str = typer.Option(
        None,
        "--type",
        "-t",
        help="Keep games of this type: 01, 02, 03, 04 (or PR, R, P, A).",
    ),
    game_number: int = typer.Option(
        None,
        "--game-number",
        "-g",
        help="Keep the game with this primary key, e.g. 2023020001.",
    ),
    team: str = typer.Option(
        None,
        "--team",
        help="Keep games where the home or away team name contains this (case-sensitive).",
    ),
    output: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--output",
        "-o",
        help="Output format. Only json is implemented.",
    ),
) -> None:
    """
    Filter stored games and write them to the export file (out/stats.json).

    Filters combine with AND; omitted filters match every game.
    """
    try:
        selected_type = GameType.from_code(game_type) if game_type else None
    except ValueError as e:
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e

    query = GameQuery(
        season=season,
        game_type=selected_type,
        # 0 is never a primary key; treat it as "no filter"
        game_number=game_number or None,
        team=team,
        output=output,
    )

    settings = get_settings()
    try:
        conn = open_database(Path(settings.db_path))
    except RuntimeError as e:
        logger.error("Cannot open database", error=str(e))
        typer.echo(f"[FAIL] Cannot open database: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo("Getting stats...")
    try:
        if count_games(conn) == 0:
            records = None
        else:
            records = query_games(conn, query)
    except StatsVaultError as e:
        logger.error("Query failed", error=str(e))
        typer.echo(f"[FAIL] Query failed: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        conn.close()

    if records is None:
        typer.echo("[FAIL] No data found!", err=True)
        raise typer.Exit(code=1)

    output_path = Path(settings.output_path)
    try:
        export_games(records, output_path, query.output)
    except UnsupportedOutputFormatError as e:
        logger.warning("Export skipped", output=query.output.value, reason=str(e))
        typer.echo(f"[FAIL] {e}", err=True)
        raise typer.Exit(code=1) from e
    except OSError as e:
        logger.error("Export failed", output_path=str(output_path), error=str(e))
        typer.echo(f"[FAIL] Export failed: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"[OK] Wrote {len(records)} game(s) to {output_path}")
