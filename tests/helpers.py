"""
Shared test data: CREATE statements for a small shop database and a mocked
query executor built from a catalog mapping.
"""

from unittest import mock

from sqldumper.models import TableEntry

USERS_CREATE = (
    "CREATE TABLE `users` (\n"
    "  `id` int NOT NULL AUTO_INCREMENT,\n"
    "  `name` varchar(255) DEFAULT NULL,\n"
    "  `role` varchar(32) NOT NULL,\n"
    "  PRIMARY KEY (`id`)\n"
    ") ENGINE=InnoDB AUTO_INCREMENT=3 DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_0900_ai_ci"
)

ORDERS_CREATE = (
    "CREATE TABLE `orders` (\n"
    "  `id` int NOT NULL,\n"
    "  `user_id` int NOT NULL,\n"
    "  `total` decimal(10,2) DEFAULT NULL,\n"
    "  PRIMARY KEY (`id`)\n"
    ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4"
)

VIEW_CREATE = (
    "CREATE ALGORITHM=UNDEFINED DEFINER=`root`@`localhost` SQL SECURITY DEFINER "
    "VIEW `user_orders` AS select `users`.`name` AS `name`,`orders`.`total` AS `total` "
    "from (`users` join `orders` on((`users`.`id` = `orders`.`user_id`)))"
)

USERS_TRIGGER = (
    "CREATE DEFINER=`root`@`localhost` TRIGGER `users_bi` BEFORE INSERT ON `users` "
    "FOR EACH ROW BEGIN\n  SET NEW.role = LOWER(NEW.role);\nEND"
)


def build_executor(catalog: dict) -> mock.MagicMock:
    """
    Build a mock query executor from a catalog mapping.

    ``catalog`` maps a table name to a dict with ``is_view``, ``columns``
    (list of ColumnInfo), ``create``, ``triggers`` and ``rows``.
    """
    executor = mock.MagicMock()
    executor.list_tables.return_value = [
        TableEntry(name=name, is_view=info.get('is_view', False))
        for name, info in catalog.items()
    ]
    executor.list_columns.side_effect = lambda table: list(catalog[table]['columns'])
    executor.get_create_statement.side_effect = lambda table: catalog[table]['create']
    executor.list_triggers.side_effect = lambda table: list(catalog[table].get('triggers', []))
    executor.stream_rows.side_effect = (
        lambda table, columns, where=None: iter([dict(r) for r in catalog[table].get('rows', [])])
    )
    return executor
