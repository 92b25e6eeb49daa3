"""
Column introspection for sqldumper.
"""

import logging

from .errors import ConsistencyError, ErrorKind
from .models import Column


def introspect_columns(executor, table: str) -> tuple[dict[str, Column], list[str]]:
    """
    Get the columns of a table together with their definition order.

    The order is the one reported by the column catalog. INSERT value tuples
    are aligned with it.

    Raises:
        ConsistencyError: if the table reports no columns.
    """
    infos = executor.list_columns(table)
    if not infos:
        raise ConsistencyError(ErrorKind.NO_COLUMNS, table=table)

    columns = {info.name: Column(type=info.type, nullable=info.nullable) for info in infos}
    columns_ordered = [info.name for info in infos]

    logging.debug(f"Table '{table}' has {len(columns_ordered)} column(s)")
    return columns, columns_ordered
