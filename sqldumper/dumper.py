"""
Dump orchestration for sqldumper.
"""

import logging
from typing import Any, Mapping, Optional

from .columns import introspect_columns
from .connection import DatabaseConnection, QueryExecutor
from .data import DataRenderer
from .models import DumpOutput, DumpResult, Table, TableEntry
from .options import Options
from .schema import render_schema
from .tables import discover_tables
from .triggers import render_triggers


class DatabaseDumper:
    """Produces the schema, data and trigger dump of one database."""

    def __init__(self, options: Options):
        self.options = options
        self.dump_options = options.dump
        self.data_renderer = (
            DataRenderer(self.dump_options.data) if self.dump_options.data is not None else None
        )

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "DatabaseDumper":
        """Resolve a raw configuration mapping. Fails before any connection is made."""
        return cls(Options.from_config(config))

    def run(self, executor: Optional[QueryExecutor] = None) -> DumpResult:
        """Run the dump.

        Args:
            executor: Query executor to read from. When omitted a
                DatabaseConnection is opened from the connection options.

        Any error aborts the whole dump, no partial result is returned.
        """
        if executor is not None:
            return self._dump(executor)

        with DatabaseConnection.from_options(self.options.connection) as conn:
            return self._dump(conn)

    def _dump(self, executor: QueryExecutor) -> DumpResult:
        entries = discover_tables(
            executor,
            tables=self.dump_options.tables,
            exclude_tables=self.dump_options.exclude_tables
        )
        logging.info(f"Dumping {len(entries)} table(s) from '{self.options.connection.database}'")

        # One slot per discovered table, filled in discovery order
        tables: list[Optional[Table]] = [None] * len(entries)
        for index, entry in enumerate(entries):
            tables[index] = self._dump_table(executor, entry)
            self._log_table_result(tables[index])

        return DumpResult(dump=self._assemble(tables), tables=tables)

    def _dump_table(self, executor: QueryExecutor, entry: TableEntry) -> Table:
        """Introspect and render a single table or view."""
        columns, columns_ordered = introspect_columns(executor, entry.name)
        table = Table(
            name=entry.name,
            is_view=entry.is_view,
            columns=columns,
            columns_ordered=columns_ordered,
        )

        schema_options = self.dump_options.schema
        if schema_options is not None:
            create_statement = executor.get_create_statement(entry.name)
            table.schema = render_schema(entry, create_statement, schema_options)

        trigger_options = self.dump_options.trigger
        if trigger_options is not None and not entry.is_view:
            table.triggers = render_triggers(executor.list_triggers(entry.name), trigger_options)

        if self.data_renderer is not None and not entry.is_view:
            table.modify_columns = self.dump_options.data.rules_for(entry.name)
            self._warn_unknown_modify_columns(table)
            table.data, table.row_count = self.data_renderer.render(executor, table)

        return table

    def _assemble(self, tables: list[Table]) -> DumpOutput:
        """Concatenate the per-table fragments in discovery order."""
        output = DumpOutput()
        if self.dump_options.schema is not None:
            output.schema = _join_fragments(t.schema for t in tables)
        if self.dump_options.data is not None:
            output.data = _join_fragments(t.data for t in tables)
        if self.dump_options.trigger is not None:
            output.trigger = _join_fragments('\n\n'.join(t.triggers) for t in tables)
        return output

    def _warn_unknown_modify_columns(self, table: Table) -> None:
        for column in table.modify_columns:
            if column not in table.columns:
                logging.warning(f"Table '{table.name}': modified column '{column}' does not exist")

    def _log_table_result(self, table: Table) -> None:
        """Log the result of a table dump."""
        if table.is_view:
            logging.info(f"  ✓ {table.name}: view")
        elif table.data is not None:
            logging.info(f"  ✓ {table.name}: {table.row_count} rows")
        else:
            logging.info(f"  ✓ {table.name}")


def _join_fragments(fragments) -> str:
    """Join the non-empty fragments, separated by a blank line."""
    return '\n\n'.join(fragment for fragment in fragments if fragment)


def dump(config: Optional[Mapping[str, Any]], executor: Optional[QueryExecutor] = None) -> DumpResult:
    """
    Dump a database.

    Args:
        config: Mapping with ``connection`` and optional ``dump`` settings.
        executor: Optional query executor used instead of a new connection.
    """
    return DatabaseDumper.from_config(config).run(executor)
