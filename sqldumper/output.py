"""
Dump file output for sqldumper.
"""

import gzip
import logging
from datetime import datetime
from pathlib import Path
from typing import TextIO, Union

from .models import DumpResult

SECTION_RULE = "-- -------------------------------------------------"


def _open_output_file(output_path: Path, compress: bool) -> tuple[Path, TextIO]:
    """Open output file with optional compression."""
    if compress:
        output_path = Path(str(output_path) + '.gz')
        file_handle = gzip.open(output_path, 'wt', encoding='utf-8')
    else:
        file_handle = open(output_path, 'w', encoding='utf-8')

    return output_path, file_handle


def _write_section(file_handle: TextIO, title: str, sql: str) -> None:
    file_handle.write(f"{SECTION_RULE}\n")
    file_handle.write(f"-- {title}\n")
    file_handle.write(f"{SECTION_RULE}\n\n")
    if sql:
        file_handle.write(sql)
        file_handle.write("\n\n")


def write_dump(
    result: DumpResult,
    output_path: Union[str, Path],
    compress: bool = False,
    database: str = ""
) -> Path:
    """
    Write a dump to file.

    Args:
        result: The dump to write.
        output_path: Path for the output file.
        compress: Write gzip compressed output and add a ``.gz`` suffix.
        database: Database name shown in the file header.

    Returns:
        The path actually written.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path, file_handle = _open_output_file(output_path, compress)
    try:
        # Write header
        file_handle.write("-- MySQL Dump\n")
        if database:
            file_handle.write(f"-- Database: {database}\n")
        file_handle.write(f"-- Generated: {datetime.now().isoformat()}\n")
        file_handle.write(f"-- Tables: {', '.join(t.name for t in result.tables)}\n\n")

        if result.dump.schema is not None:
            _write_section(file_handle, "SCHEMA", result.dump.schema)
        if result.dump.data is not None:
            _write_section(file_handle, "DATA", result.dump.data)
        if result.dump.trigger is not None:
            _write_section(file_handle, "TRIGGERS", result.dump.trigger)

        file_handle.write(f"-- Dump complete. {result.total_rows} rows.\n")
    finally:
        file_handle.close()

    logging.info(f"Dump written to {output_path}")
    return output_path
