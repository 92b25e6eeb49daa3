"""
Trigger rendering for sqldumper.
"""

import re
from typing import Optional

from .options import TriggerOptions

DEFINER_PATTERN = re.compile(r'\s+DEFINER\s*=\s*\S+(?=\s+TRIGGER\b)', re.IGNORECASE)
TRIGGER_NAME_PATTERN = re.compile(r'\bTRIGGER\s+(`(?:[^`]|``)+`|\S+)', re.IGNORECASE)


def trigger_name(statement: str) -> Optional[str]:
    """Extract the (possibly quoted) trigger name from a CREATE TRIGGER statement."""
    match = TRIGGER_NAME_PATTERN.search(statement)
    return match.group(1) if match else None


def render_trigger(statement: str, options: TriggerOptions) -> str:
    """Render one CREATE TRIGGER statement."""
    sql = statement.strip().rstrip(';').rstrip()

    if not options.definer:
        sql = DEFINER_PATTERN.sub('', sql)

    lines = []
    if options.drop_if_exist:
        name = trigger_name(sql)
        if name:
            lines.append(f"DROP TRIGGER IF EXISTS {name};")

    if options.delimiter:
        lines.append(f"DELIMITER {options.delimiter}")
        lines.append(f"{sql}{options.delimiter}")
        lines.append("DELIMITER ;")
    else:
        lines.append(f"{sql};")
    return '\n'.join(lines)


def render_triggers(statements: list[str], options: TriggerOptions) -> list[str]:
    """Render the triggers of a table, keeping their order."""
    return [render_trigger(statement, options) for statement in statements]
