"""
Table discovery for sqldumper.
"""

import logging
from typing import Optional

from .models import TableEntry


def discover_tables(
    executor,
    tables: Optional[list[str]] = None,
    exclude_tables: bool = False
) -> list[TableEntry]:
    """
    List the tables and views taking part in a dump.

    Args:
        executor: Query executor used to list the database's tables.
        tables: Names to include, or to exclude when ``exclude_tables`` is set.
            No names means every table and view.
        exclude_tables: Treat ``tables`` as a blacklist instead of a whitelist.

    Returns:
        Base tables followed by views, each group in the order the database
        lists them. This is the order every category of the assembled dump
        follows, so a replayed dump creates tables before the views that
        select from them.
    """
    available = executor.list_tables()

    if tables:
        wanted = set(tables)
        unknown = wanted - {entry.name for entry in available}
        if unknown:
            logging.debug(f"Ignoring unknown table(s) in filter: {', '.join(sorted(unknown))}")

        if exclude_tables:
            selected = [entry for entry in available if entry.name not in wanted]
        else:
            selected = [entry for entry in available if entry.name in wanted]

        excluded_count = len(available) - len(selected)
        if excluded_count > 0:
            logging.info(f"Filtered out {excluded_count} table(s)")
    else:
        selected = list(available)

    return [e for e in selected if not e.is_view] + [e for e in selected if e.is_view]
