"""
Error types for sqldumper.

Every error raised by the dump engine itself carries a stable ``kind`` so that
automated callers can branch on it. Errors coming from the MySQL driver are
never wrapped and reach the caller unchanged.
"""

from enum import Enum


class ErrorKind(Enum):
    """Stable error kinds. The value is the message (or message template)."""
    MISSING_CONNECTION_CONFIG = "Expected to be given `connection` options."
    MISSING_CONNECTION_HOST = "Expected to be given `host` connection option."
    MISSING_CONNECTION_DATABASE = "Expected to be given `database` connection option."
    MISSING_CONNECTION_USER = "Expected to be given `user` connection option."
    MISSING_CONNECTION_PASSWORD = "Expected to be given `password` connection option."
    INVALID_OPTION = "Invalid value {value!r} for option '{option}'"
    INVALID_MODIFY_COLUMN_PATTERN = "Invalid match pattern {pattern!r} for modified column '{column}': {reason}"
    TABLE_VANISHED = "Table '{table}' no longer exists in the database"
    NO_COLUMNS = "Table '{table}' reported no columns"


class DumpError(Exception):
    """Base class for errors raised by the dump engine."""

    def __init__(self, kind: ErrorKind, **details):
        self.kind = kind
        self.details = details
        super().__init__(kind.value.format(**details) if details else kind.value)


class ConfigurationError(DumpError, ValueError):
    """Raised when the supplied configuration is missing or invalid."""


class ConsistencyError(DumpError):
    """Raised when the database changes underneath a running dump."""
