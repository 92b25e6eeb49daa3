"""
Utility functions for sqldumper.
"""

import logging
import sys
from pathlib import Path
from typing import Any

from .options import DumpOptions


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def print_dry_run_info(connection: dict[str, Any], options: DumpOptions) -> None:
    """Print information about what would be dumped in dry-run mode."""
    connection = connection or {}
    logging.info(
        f"Would dump database: {connection.get('database')} "
        f"from {connection.get('host')}:{connection.get('port', 3306)}"
    )

    if not options.tables:
        logging.info("  - All tables and views")
    elif options.exclude_tables:
        logging.info(f"  - All tables and views except: {', '.join(options.tables)}")
    else:
        for name in options.tables:
            logging.info(f"  - {name}")

    logging.info(f"  Dumping: {', '.join(format_categories_display(options)) or 'nothing'}")

    if options.data is not None:
        for table, rules in options.data.modify_columns.items():
            logging.info(f"  Modified columns in {table}: {', '.join(rules)}")


def format_categories_display(options: DumpOptions) -> list[str]:
    """Format the enabled dump categories for display in dry-run mode."""
    parts = []
    if options.schema is not None:
        parts.append("schema")
    if options.data is not None:
        data = options.data
        settings = [f"rows/insert={data.max_rows_per_insert_statement}"]
        if data.max_statement_length:
            settings.append(f"max_length={data.max_statement_length}")
        if data.where:
            settings.append(f"where on {len(data.where)} table(s)")
        parts.append(f"data ({', '.join(settings)})")
    if options.trigger is not None:
        parts.append("triggers")
    return parts
