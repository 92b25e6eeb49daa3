"""
sqldumper
=========
Dumps a MySQL database as replayable SQL:
- CREATE TABLE / CREATE OR REPLACE VIEW statements
- Batched INSERT statements with per-type value encoding
- Trigger definitions
- Table whitelists and blacklists
- Per-column value substitution rules for the data dump
"""

from .config import ConfigLoader
from .connection import DatabaseConnection, QueryExecutor
from .dumper import DatabaseDumper, dump
from .errors import ConfigurationError, ConsistencyError, DumpError, ErrorKind
from .main import main
from .models import (
    Column,
    ColumnInfo,
    DumpOutput,
    DumpResult,
    MatchGroup,
    MatchOperator,
    ModifyColumnRule,
    Table,
    TableEntry,
)
from .modify_columns import ModifyColumnResolver
from .options import (
    DataOptions,
    DumpOptions,
    Options,
    SchemaOptions,
    TriggerOptions,
)
from .output import write_dump
from .utils import setup_logging
from .validation import ConnectionOptions, validate_connection

__version__ = "1.0.0"

__all__ = [
    # Main entry points
    "dump",
    "main",
    # Core classes
    "ConfigLoader",
    "DatabaseConnection",
    "DatabaseDumper",
    "ModifyColumnResolver",
    "QueryExecutor",
    # Options
    "ConnectionOptions",
    "DataOptions",
    "DumpOptions",
    "Options",
    "SchemaOptions",
    "TriggerOptions",
    # Models
    "Column",
    "ColumnInfo",
    "DumpOutput",
    "DumpResult",
    "MatchGroup",
    "MatchOperator",
    "ModifyColumnRule",
    "Table",
    "TableEntry",
    # Errors
    "ConfigurationError",
    "ConsistencyError",
    "DumpError",
    "ErrorKind",
    # Utilities
    "setup_logging",
    "validate_connection",
    "write_dump",
]
