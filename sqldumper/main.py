#!/usr/bin/env python3
"""
sqldumper - CLI Entry Point
===========================
Dumps the schema, data and triggers of a MySQL database to a SQL file that
can be replayed to rebuild it.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .config import ConfigLoader
from .dumper import DatabaseDumper
from .errors import ConfigurationError
from .options import DumpOptions
from .output import write_dump
from .utils import print_dry_run_info, setup_logging


def _output_path(output_settings: dict, database: str) -> Path:
    """Resolve the dump file path from the output settings."""
    if output_settings.get('file'):
        return Path(output_settings['file'])

    output_dir = Path(output_settings.get('directory', './dumps'))
    if output_settings.get('timestamp_suffix', True):
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        return output_dir / f"{database}_{timestamp}.sql"
    return output_dir / f"{database}.sql"


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='sqldumper - Dump a MySQL database as replayable SQL'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be dumped without actually dumping'
    )
    parser.add_argument(
        '-o', '--output',
        help='Write the dump to this file instead of the configured one'
    )

    args = parser.parse_args()

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}")
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    output_settings = config.get_output_settings()
    if args.output:
        output_settings['file'] = args.output

    # Dry run mode
    if args.dry_run:
        logging.info("DRY RUN MODE - No data will be dumped")
        try:
            options = DumpOptions.from_config(config.get_dump_settings())
        except ConfigurationError as e:
            logging.error(f"Invalid configuration: {e}")
            sys.exit(1)
        print_dry_run_info(config.get_connection(), options)
        sys.exit(0)

    # Run dump
    try:
        dumper = DatabaseDumper.from_config(config.as_dump_config())
        result = dumper.run()

        database = dumper.options.connection.database
        output_path = write_dump(
            result,
            _output_path(output_settings, database),
            compress=output_settings.get('compress', False),
            database=database
        )

        # Print summary
        views = sum(1 for t in result.tables if t.is_view)
        logging.info("=" * 50)
        logging.info("DUMP COMPLETE")
        logging.info(f"Tables: {len(result.tables) - views}")
        logging.info(f"Views: {views}")
        logging.info(f"Total Rows: {result.total_rows}")
        logging.info(f"Output: {output_path}")

    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
