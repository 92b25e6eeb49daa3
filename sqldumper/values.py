"""
SQL literal formatting for sqldumper.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable

GEOMETRY_TYPES = frozenset({
    'geometry', 'point', 'linestring', 'polygon', 'multipoint',
    'multilinestring', 'multipolygon', 'geometrycollection', 'geomcollection',
})

# Characters MySQL needs escaped inside a single quoted string literal.
_ESCAPES = str.maketrans({
    '\\': '\\\\',
    "'": "\\'",
    '"': '\\"',
    '\0': '\\0',
    '\n': '\\n',
    '\r': '\\r',
    '\x1a': '\\Z',
})


def quote_identifier(name: str) -> str:
    """Quote a table or column name with backticks."""
    return '`' + name.replace('`', '``') + '`'


def escape_string(value: str) -> str:
    """Quote and escape a string literal."""
    return f"'{value.translate(_ESCAPES)}'"


def is_geometry_type(column_type: str) -> bool:
    words = column_type.lower().replace('(', ' ').split()
    return bool(words) and words[0] in GEOMETRY_TYPES


def _format_datetime(value: datetime) -> str:
    if value.microsecond:
        return f"'{value.strftime('%Y-%m-%d %H:%M:%S.%f')}'"
    return f"'{value.strftime('%Y-%m-%d %H:%M:%S')}'"


def _format_time(value: time) -> str:
    if value.microsecond:
        return f"'{value.strftime('%H:%M:%S.%f')}'"
    return f"'{value.strftime('%H:%M:%S')}'"


def _format_timedelta(value: timedelta) -> str:
    """TIME columns come back as timedelta and may exceed 24 hours or be negative."""
    sign = '-' if value < timedelta(0) else ''
    value = abs(value)
    hours, remainder = divmod(value.days * 86400 + value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return f"'{text}'"


def _format_geometry(value: bytes) -> str:
    """MySQL stores geometry as a 4 byte little endian SRID followed by WKB."""
    if len(value) < 5:
        return f"X'{value.hex()}'"
    srid = int.from_bytes(value[:4], 'little')
    wkb = value[4:].hex()
    if srid:
        return f"ST_GeomFromWKB(X'{wkb}', {srid})"
    return f"ST_GeomFromWKB(X'{wkb}')"


class ValueFormatter:
    """Formats Python values returned by the driver as SQL literals."""

    def __init__(self):
        # Pre-build type formatters for faster dispatch
        self._type_formatters: dict[type, Callable[[Any], str]] = {
            type(None): lambda v: 'NULL',
            bool: lambda v: '1' if v else '0',
            int: str,
            float: repr,
            Decimal: str,
            bytes: lambda v: f"X'{v.hex()}'",
            bytearray: lambda v: f"X'{v.hex()}'",
            datetime: _format_datetime,
            date: lambda v: f"'{v.isoformat()}'",
            time: _format_time,
            timedelta: _format_timedelta,
            set: lambda v: escape_string(','.join(sorted(v))),
        }

    def format(self, value: Any, column_type: str = '') -> str:
        """Format a value for an INSERT statement.

        Uses type-based dispatch for common types to avoid isinstance() overhead.
        """
        if isinstance(value, (bytes, bytearray)) and is_geometry_type(column_type):
            return _format_geometry(bytes(value))

        # Fast path: direct type lookup
        formatter = self._type_formatters.get(type(value))
        if formatter:
            return formatter(value)

        # Slow path: string conversion with escaping
        return escape_string(str(value))
