"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from nhl_stats.utils.config import get_settings

_active_log_file: Path | None = None


def get_active_log_file() -> Path | None:
    """Return the JSON log file opened by this process, if any."""
    return _active_log_file


def _open_file_handler(log_dir: Path, level: int) -> logging.FileHandler | None:
    """Open ``nhl_stats_YYYYMMDD_HHMMSS.log`` in ``log_dir``; None if the disk refuses."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"nhl_stats_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        print(
            f"Warning: Could not open a log file in '{log_dir}': {e}. "
            "Logging to stdout only.",
            file=sys.stderr,
        )
        return None

    handler.setLevel(level)
    return handler


def setup_logging() -> None:
    """Configure structlog on top of the stdlib root logger.

    Records go to stdout (console or JSON renderer, per ``log_format``) and,
    when the log directory is writable, to a per-run JSON-lines file. The
    file keeps a record of every sync run: which ids were skipped, inserted,
    and why the loop stopped.
    """
    global _active_log_file  # noqa: PLW0603

    settings = get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    # pytest and repeated CLI invocations call this more than once
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console_renderer: Processor = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=console_renderer))
    root.addHandler(console_handler)

    file_handler = _open_file_handler(Path(settings.log_dir), level)
    if file_handler is not None:
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
        )
        root.addHandler(file_handler)
        _active_log_file = Path(file_handler.baseFilename)
    else:
        _active_log_file = None

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        # Must precede wrap_for_formatter so tracebacks are rendered once
        structlog.processors.ExceptionRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _active_log_file is not None:
        structlog.get_logger(__name__).debug("logging_initialized", log_file=str(_active_log_file))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured bound logger.
    """
    return structlog.get_logger(name).bind(logger=name)


def log_context(**kwargs: Any) -> None:
    """Bind key-value pairs into every subsequent log record."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context(*keys: str) -> None:
    """Remove the given keys from the log context, or all keys if none are given."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
