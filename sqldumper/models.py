"""
Data models for sqldumper.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import ConfigurationError, ErrorKind


@dataclass
class TableEntry:
    """A table or view as listed by the database."""
    name: str
    is_view: bool = False


@dataclass
class ColumnInfo:
    """Database column metadata, one row of the column catalog."""
    name: str
    type: str
    nullable: bool
    default: Any = None
    extra: str = ""


@dataclass
class Column:
    """Column definition as exposed on a dumped table."""
    type: str
    nullable: bool


@dataclass
class MatchOperator:
    """
    Tests one column of a row against a regular expression.

    The pattern must match the whole value. ``behaviour`` inverts the result.
    """
    column: str
    pattern: str
    behaviour: bool = False
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            self.regex = re.compile(self.pattern)
        except re.error as e:
            raise ConfigurationError(
                ErrorKind.INVALID_MODIFY_COLUMN_PATTERN,
                pattern=self.pattern,
                column=self.column,
                reason=str(e),
            ) from e


@dataclass
class MatchGroup:
    """Operators that must all be satisfied for the group to match."""
    operators: list[MatchOperator] = field(default_factory=list)


@dataclass
class ModifyColumnRule:
    """
    Replaces a column's value in the data dump.

    ``value`` is written into the INSERT statement exactly as given, it is
    not quoted or escaped. It must already be a valid SQL literal such as
    ``NULL``, ``0`` or ``'redacted'``.

    The rule applies to a row when any of the ``match`` groups matches it, or
    to every row when ``match`` is empty.
    """
    value: str
    match: list[MatchGroup] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: Any, option: str = 'modify_columns') -> "ModifyColumnRule":
        """
        Build a rule from its configuration.

        A bare scalar is shorthand for ``{value: <scalar>}`` and an empty
        entry replaces the column with ``NULL`` on every row.

        Raises:
            ConfigurationError: if the rule, a match group or an operator has
                the wrong shape. ``option`` names the rule in the message.
        """
        if config is None:
            config = {}
        elif isinstance(config, (str, int, float)):
            config = {'value': config}
        elif not isinstance(config, Mapping):
            raise ConfigurationError(ErrorKind.INVALID_OPTION, option=option, value=config)

        groups = []
        for index, group in enumerate(_config_list(config.get('match'), f"{option}.match")):
            group_option = f"{option}.match[{index}]"
            if not isinstance(group, Mapping):
                raise ConfigurationError(ErrorKind.INVALID_OPTION, option=group_option, value=group)

            operators = []
            for op in _config_list(group.get('operators'), f"{group_option}.operators"):
                if not isinstance(op, Mapping) or op.get('column') is None or op.get('pattern') is None:
                    raise ConfigurationError(
                        ErrorKind.INVALID_OPTION, option=f"{group_option}.operators", value=op
                    )
                operators.append(MatchOperator(
                    column=str(op['column']),
                    pattern=str(op['pattern']),
                    behaviour=bool(op.get('behaviour', False))
                ))
            groups.append(MatchGroup(operators=operators))

        value = config.get('value')
        if value is None:
            value = 'NULL'
        return cls(value=str(value), match=groups)


def _config_list(value: Any, option: str) -> list:
    """A missing list setting is empty; anything other than a list is an error."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(ErrorKind.INVALID_OPTION, option=option, value=value)
    return value


@dataclass
class Table:
    """Everything dumped for a single table or view."""
    name: str
    is_view: bool = False
    columns: dict[str, Column] = field(default_factory=dict)
    columns_ordered: list[str] = field(default_factory=list)
    modify_columns: dict[str, ModifyColumnRule] = field(default_factory=dict)
    schema: Optional[str] = None
    data: Optional[str] = None
    triggers: list[str] = field(default_factory=list)
    row_count: int = 0


@dataclass
class DumpOutput:
    """Whole-database SQL text. A category is None when it was not dumped."""
    schema: Optional[str] = None
    data: Optional[str] = None
    trigger: Optional[str] = None


@dataclass
class DumpResult:
    """Result of a dump run."""
    dump: DumpOutput = field(default_factory=DumpOutput)
    tables: list[Table] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(t.row_count for t in self.tables)
