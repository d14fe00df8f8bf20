"""Database schema migrations using yoyo-migrations."""

from pathlib import Path

import structlog
from yoyo import get_backend, read_migrations

from nhl_stats.utils.config import get_settings

logger = structlog.get_logger(__name__)


def get_migrations_dir() -> Path:
    """Get the path to the bundled SQL migrations."""
    return Path(__file__).parent / "sql"


def _get_db_uri(db_path: Path | None = None) -> str:
    """Build the yoyo-compatible SQLite URI for the given path."""
    settings = get_settings()
    resolved = db_path or Path(settings.db_path)
    return f"sqlite:///{resolved.resolve()}"


def run_migrations(db_path: Path | None = None, migrations_dir: Path | None = None) -> int:
    """
    Apply pending migrations.

    Args:
        db_path: Path to the SQLite database file. If None, uses default from settings.
        migrations_dir: Path to migrations directory. If None, uses the bundled one.

    Returns:
        Number of migrations applied.
    """
    migrations_dir = migrations_dir or get_migrations_dir()

    if not migrations_dir.exists():
        raise FileNotFoundError(f"Migrations directory not found: {migrations_dir}")

    backend = get_backend(_get_db_uri(db_path))
    migrations = read_migrations(str(migrations_dir))

    with backend.lock():
        migrations_to_apply = backend.to_apply(migrations)
        for migration in migrations_to_apply:
            logger.info("Applying migration", migration=migration.id)
            backend.apply_one(migration)

    return len(migrations_to_apply)
