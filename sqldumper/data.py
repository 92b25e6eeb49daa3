"""
Data rendering for sqldumper.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from .models import Table
from .modify_columns import ModifyColumnResolver
from .options import DataOptions
from .values import ValueFormatter, quote_identifier


class DataRenderer:
    """Renders the rows of a table as batched INSERT statements."""

    def __init__(self, options: DataOptions):
        self.options = options
        self.formatter = ValueFormatter()

    def render(self, executor, table: Table) -> tuple[str, int]:
        """
        Dump the rows of a table.

        Args:
            executor: Query executor the rows are streamed from.
            table: Table with its columns already introspected.

        Returns:
            The INSERT statements joined by newlines (empty for an empty
            table) and the number of rows rendered.
        """
        where = self.options.where.get(table.name)
        resolver = ModifyColumnResolver(table.modify_columns)
        rows = executor.stream_rows(table.name, table.columns_ordered, where)

        row_count = 0

        def value_tuples() -> Iterator[str]:
            nonlocal row_count
            for row in rows:
                row_count += 1
                yield self._format_row(table, MappingProxyType(row), resolver)

        statements = list(self._build_statements(table, value_tuples()))
        logging.debug(f"Rendered {row_count} row(s) of '{table.name}' in {len(statements)} statement(s)")
        return '\n'.join(statements), row_count

    def _format_row(
        self,
        table: Table,
        row: Mapping[str, Any],
        resolver: ModifyColumnResolver
    ) -> str:
        """Format one row as a value tuple aligned with ``columns_ordered``."""
        values = []
        for column in table.columns_ordered:
            replacement = resolver.resolve(row, column) if resolver else None
            if replacement is not None:
                values.append(replacement)
            else:
                values.append(self.formatter.format(row.get(column), table.columns[column].type))

        separator = ', ' if self.options.format else ','
        return f"({separator.join(values)})"

    def _statement_parts(self, table: Table) -> tuple[str, str]:
        """Return the INSERT header and the separator placed between value tuples."""
        if self.options.format:
            columns = ', '.join(quote_identifier(col) for col in table.columns_ordered)
            header = f"INSERT INTO\n  {quote_identifier(table.name)} ({columns})\nVALUES\n  "
            return header, ",\n  "

        columns = ','.join(quote_identifier(col) for col in table.columns_ordered)
        return f"INSERT INTO {quote_identifier(table.name)} ({columns}) VALUES ", ","

    def _build_statements(self, table: Table, value_tuples: Iterable[str]) -> Iterator[str]:
        """Group value tuples into INSERT statements bounded by row count and length."""
        header, separator = self._statement_parts(table)
        max_rows = self.options.max_rows_per_insert_statement
        max_length = self.options.max_statement_length
        empty_length = len(header) + 1  # trailing semicolon

        batch: list[str] = []
        length = empty_length

        for values in value_tuples:
            added = len(values) + (len(separator) if batch else 0)
            if batch and (len(batch) >= max_rows or (max_length and length + added > max_length)):
                yield header + separator.join(batch) + ';'
                batch = []
                length = empty_length
                added = len(values)

            batch.append(values)
            length += added

        # Write remaining rows
        if batch:
            yield header + separator.join(batch) + ';'
