"""
Database connection management for sqldumper.

``DatabaseConnection`` is the MySQL implementation of the query executor the
dump engine consumes. Anything providing the ``QueryExecutor`` methods can be
passed to the dumper instead.
"""

import logging
from typing import Any, Iterator, Optional, Protocol

import mysql.connector
from mysql.connector import Error as MySQLError
from mysql.connector import errorcode

from .errors import ConsistencyError, ErrorKind
from .models import ColumnInfo, TableEntry
from .values import quote_identifier


class QueryExecutor(Protocol):
    """Queries the dump engine needs answered by the database."""

    def list_tables(self) -> list[TableEntry]: ...

    def list_columns(self, table: str) -> list[ColumnInfo]: ...

    def list_triggers(self, table: str) -> list[str]: ...

    def get_create_statement(self, table: str) -> str: ...

    def stream_rows(
        self,
        table: str,
        columns: list[str],
        where: Optional[str] = None
    ) -> Iterator[dict[str, Any]]: ...


def _to_text(value: Any) -> Any:
    """Catalog queries can return bytes depending on the server version."""
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8')
    return value


class DatabaseConnection:
    """Manages MySQL database connections with context manager support."""

    DEFAULT_PORT = 3306
    DEFAULT_CHARSET = 'utf8mb4'

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None,
        charset: str = DEFAULT_CHARSET
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.charset = charset
        self.connection = None

    @classmethod
    def from_options(cls, options) -> "DatabaseConnection":
        """Create a connection from validated ``ConnectionOptions``."""
        return cls(
            host=options.host,
            port=options.port,
            user=options.user,
            password=options.password,
            database=options.database,
            charset=options.charset
        )

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                charset=self.charset,
                use_unicode=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return results."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def get_cursor(self, buffered: bool = False):
        """Get a cursor for streaming large results.

        Args:
            buffered: If False (default), uses server-side cursor for memory-efficient
                     streaming of large result sets. If True, uses buffered cursor.
        """
        return self.connection.cursor(buffered=buffered)

    def list_tables(self) -> list[TableEntry]:
        """List tables and views of the current database in server order."""
        results = self.execute_query("SHOW FULL TABLES")
        return [
            TableEntry(name=_to_text(row[0]), is_view=_to_text(row[1]) == 'VIEW')
            for row in results
        ]

    def list_columns(self, table: str) -> list[ColumnInfo]:
        """Get column information for a table, in definition order."""
        try:
            results = self.execute_query(f"SHOW COLUMNS FROM {quote_identifier(table)}")
        except MySQLError as e:
            if e.errno == errorcode.ER_NO_SUCH_TABLE:
                raise ConsistencyError(ErrorKind.TABLE_VANISHED, table=table) from e
            raise
        return [
            ColumnInfo(
                name=_to_text(row[0]),
                type=_to_text(row[1]),
                nullable=_to_text(row[2]) == 'YES',
                default=_to_text(row[4]),
                extra=_to_text(row[5]) or ''
            )
            for row in results
        ]

    def list_triggers(self, table: str) -> list[str]:
        """Get the CREATE TRIGGER statements of every trigger on a table."""
        results = self.execute_query("SHOW TRIGGERS WHERE `Table` = %s", (table,))
        statements = []
        for row in results:
            name = _to_text(row[0])
            create = self.execute_query(f"SHOW CREATE TRIGGER {quote_identifier(name)}")
            # Columns: Trigger, sql_mode, SQL Original Statement, ...
            statements.append(_to_text(create[0][2]))
        return statements

    def get_create_statement(self, table: str) -> str:
        """Get the CREATE statement of a table or view."""
        results = self.execute_query(f"SHOW CREATE TABLE {quote_identifier(table)}")
        return _to_text(results[0][1])

    def stream_rows(
        self,
        table: str,
        columns: list[str],
        where: Optional[str] = None
    ) -> Iterator[dict[str, Any]]:
        """Yield the rows of a table as column name to value mappings."""
        query = self._build_select_query(table, columns, where)
        logging.debug(f"Streaming rows of '{table}' with query: {query[:200]}")

        cursor = self.get_cursor()
        try:
            cursor.execute(query)
            for row in cursor:
                yield dict(zip(columns, row))
        finally:
            cursor.close()

    def _build_select_query(
        self,
        table: str,
        columns: list[str],
        where: Optional[str] = None
    ) -> str:
        """Build SELECT query with options."""
        quoted_columns = ', '.join(quote_identifier(col) for col in columns)
        query = f"SELECT {quoted_columns} FROM {quote_identifier(table)}"

        if where:
            query += f" WHERE {where}"

        return query
