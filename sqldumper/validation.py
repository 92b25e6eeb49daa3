"""
Connection configuration validation for sqldumper.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import ConfigurationError, ErrorKind


@dataclass(frozen=True)
class ConnectionOptions:
    """Validated MySQL connection settings."""
    host: str
    database: str
    user: str
    password: str
    port: int = 3306
    charset: str = 'utf8mb4'

    def __repr__(self) -> str:
        return (
            f"ConnectionOptions(host={self.host!r}, port={self.port}, "
            f"database={self.database!r}, user={self.user!r})"
        )


# Checked in this order; the first missing field wins.
REQUIRED_FIELDS = (
    ('host', ErrorKind.MISSING_CONNECTION_HOST),
    ('database', ErrorKind.MISSING_CONNECTION_DATABASE),
    ('user', ErrorKind.MISSING_CONNECTION_USER),
)


def validate_connection(connection: Optional[Mapping[str, Any]]) -> ConnectionOptions:
    """
    Validate a connection configuration without touching the network.

    An empty password is accepted, only a missing one is an error.

    Raises:
        ConfigurationError: with the kind of the first missing field.
    """
    if not connection:
        raise ConfigurationError(ErrorKind.MISSING_CONNECTION_CONFIG)
    if not isinstance(connection, Mapping):
        raise ConfigurationError(ErrorKind.INVALID_OPTION, option='connection', value=connection)

    for name, kind in REQUIRED_FIELDS:
        if not connection.get(name):
            raise ConfigurationError(kind)

    if connection.get('password') is None:
        raise ConfigurationError(ErrorKind.MISSING_CONNECTION_PASSWORD)

    port = connection.get('port') or ConnectionOptions.port
    try:
        port = int(port)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(ErrorKind.INVALID_OPTION, option='connection.port', value=port) from e

    return ConnectionOptions(
        host=str(connection['host']),
        database=str(connection['database']),
        user=str(connection['user']),
        password=str(connection['password']),
        port=port,
        charset=connection.get('charset') or ConnectionOptions.charset,
    )
