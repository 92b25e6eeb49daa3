"""
Schema rendering for sqldumper.

Turns the CREATE statements reported by MySQL into the statements written to
the dump, applying the schema options.
"""

import re

from .models import TableEntry
from .options import SchemaOptions, TableSchemaOptions, ViewSchemaOptions
from .values import quote_identifier

AUTO_INCREMENT_PATTERN = re.compile(r' AUTO_INCREMENT=\d+')
ENGINE_PATTERN = re.compile(r' ENGINE=\w+')
CHARSET_PATTERN = re.compile(r' DEFAULT CHARSET=\w+(?: COLLATE=\w+)?')
CREATE_TABLE_PATTERN = re.compile(r'^\s*CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?', re.IGNORECASE)
CREATE_VIEW_PATTERN = re.compile(
    r'^\s*CREATE\s+(?:OR\s+REPLACE\s+)?'
    r'(?:ALGORITHM\s*=\s*(?P<algorithm>\w+)\s+)?'
    r'(?:DEFINER\s*=\s*(?P<definer>\S+)\s+)?'
    r'(?:SQL\s+SECURITY\s+(?P<sql_security>\w+)\s+)?'
    r'VIEW\s+(?P<body>.*)$',
    re.IGNORECASE | re.DOTALL
)


def render_schema(entry: TableEntry, create_statement: str, options: SchemaOptions) -> str:
    """Render the schema statement(s) of a table or view."""
    if entry.is_view:
        return render_view(create_statement, options.view)
    return render_table(entry.name, create_statement, options)


def render_table(name: str, create_statement: str, options: SchemaOptions) -> str:
    """Render a CREATE TABLE statement."""
    table_options: TableSchemaOptions = options.table
    sql = create_statement.strip().rstrip(';')

    if not options.auto_increment:
        sql = AUTO_INCREMENT_PATTERN.sub('', sql)
    if not options.engine:
        sql = ENGINE_PATTERN.sub('', sql)
    if not table_options.charset:
        sql = CHARSET_PATTERN.sub('', sql)

    prefix = 'CREATE TABLE IF NOT EXISTS ' if table_options.if_not_exist else 'CREATE TABLE '
    sql = CREATE_TABLE_PATTERN.sub(prefix, sql, count=1)
    sql += ';'

    if table_options.drop_if_exist:
        sql = f"DROP TABLE IF EXISTS {quote_identifier(name)};\n{sql}"
    return sql


def render_view(create_statement: str, options: ViewSchemaOptions) -> str:
    """Rebuild a CREATE VIEW statement, keeping only the clauses asked for."""
    sql = create_statement.strip().rstrip(';')
    match = CREATE_VIEW_PATTERN.match(sql)
    if match is None:
        return f"{sql};"

    parts = ['CREATE']
    if options.create_or_replace:
        parts.append('OR REPLACE')
    if options.algorithm and match.group('algorithm'):
        parts.append(f"ALGORITHM={match.group('algorithm')}")
    if options.definer and match.group('definer'):
        parts.append(f"DEFINER={match.group('definer')}")
    if options.sql_security and match.group('sql_security'):
        parts.append(f"SQL SECURITY {match.group('sql_security')}")
    parts.append('VIEW')
    parts.append(match.group('body'))
    return ' '.join(parts) + ';'
