"""Domain-specific exceptions."""


class StatsVaultError(Exception):
    """Base exception for nhl-stats failures."""

    pass


class ValidationError(StatsVaultError):
    """Raised when a stored game feed lacks the fields a filter reads."""

    pass


class DatabaseError(StatsVaultError):
    """Raised when a database operation fails."""

    pass


class UnsupportedOutputFormatError(StatsVaultError):
    """Raised when an export format is declared but not implemented."""

    pass
