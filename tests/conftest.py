"""
Shared fixtures: a mocked query executor describing a small shop database.
"""

import pytest
from helpers import ORDERS_CREATE, USERS_CREATE, USERS_TRIGGER, VIEW_CREATE, build_executor

from sqldumper.models import ColumnInfo


@pytest.fixture
def shop_catalog():
    """Two tables and a view."""
    return {
        'users': {
            'columns': [
                ColumnInfo("id", "int", False, None, "auto_increment"),
                ColumnInfo("name", "varchar(255)", True),
                ColumnInfo("role", "varchar(32)", False),
            ],
            'create': USERS_CREATE,
            'triggers': [USERS_TRIGGER],
            'rows': [
                {"id": 1, "name": "Alice", "role": "admin"},
                {"id": 2, "name": "O'Brien", "role": "member"},
            ],
        },
        'orders': {
            'columns': [
                ColumnInfo("id", "int", False),
                ColumnInfo("user_id", "int", False),
                ColumnInfo("total", "decimal(10,2)", True),
            ],
            'create': ORDERS_CREATE,
            'rows': [
                {"id": 10, "user_id": 1, "total": None},
            ],
        },
        'user_orders': {
            'is_view': True,
            'columns': [
                ColumnInfo("name", "varchar(255)", True),
                ColumnInfo("total", "decimal(10,2)", True),
            ],
            'create': VIEW_CREATE,
        },
    }


@pytest.fixture
def shop_executor(shop_catalog):
    return build_executor(shop_catalog)


@pytest.fixture
def connection_config():
    return {
        "host": "localhost",
        "database": "shop",
        "user": "root",
        "password": "secret",
    }
