"""Command-line interface for NHL Stats."""

import typer

from nhl_stats.utils.config import ensure_directories
from nhl_stats.utils.logging import setup_logging

from .export import get
from .ingestion import update_db

ensure_directories()
setup_logging()

app = typer.Typer(
    name="nhl-stats",
    help="NHL Stats - local store of NHL game feeds",
    add_completion=False,
    no_args_is_help=True,
)

app.command(name="update-db")(update_db)
app.command(name="get")(get)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
