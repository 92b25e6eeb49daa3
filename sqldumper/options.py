"""
Resolved dump options for sqldumper.

The raw configuration mapping is turned into fully populated option objects
once, at the start of a dump. Renderers only ever read these objects.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from .errors import ConfigurationError, ErrorKind
from .models import ModifyColumnRule
from .validation import ConnectionOptions, validate_connection


@dataclass
class TableSchemaOptions:
    """Options for CREATE TABLE statements."""
    if_not_exist: bool = True
    drop_if_exist: bool = False
    charset: bool = True


@dataclass
class ViewSchemaOptions:
    """Options for CREATE VIEW statements."""
    create_or_replace: bool = True
    algorithm: bool = False
    definer: bool = False
    sql_security: bool = False


@dataclass
class SchemaOptions:
    """Schema dump options."""
    auto_increment: bool = True
    engine: bool = True
    table: TableSchemaOptions = field(default_factory=TableSchemaOptions)
    view: ViewSchemaOptions = field(default_factory=ViewSchemaOptions)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "SchemaOptions":
        settings = _known_settings(cls, config, 'dump.schema')
        table = _mapping(config.get('table'), 'dump.schema.table')
        view = _mapping(config.get('view'), 'dump.schema.view')
        settings['table'] = TableSchemaOptions(**_known_settings(TableSchemaOptions, table, 'dump.schema.table'))
        settings['view'] = ViewSchemaOptions(**_known_settings(ViewSchemaOptions, view, 'dump.schema.view'))
        return cls(**settings)


@dataclass
class DataOptions:
    """Data dump options."""
    format: bool = True
    where: dict[str, str] = field(default_factory=dict)
    max_rows_per_insert_statement: int = 1000
    max_statement_length: Optional[int] = None
    modify_columns: dict[str, dict[str, ModifyColumnRule]] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "DataOptions":
        settings = _known_settings(cls, config, 'dump.data')
        settings['where'] = dict(_mapping(config.get('where'), 'dump.data.where'))
        settings['modify_columns'] = {
            table: {
                column: ModifyColumnRule.from_config(
                    rule, option=f'dump.data.modify_columns.{table}.{column}'
                )
                for column, rule in _mapping(columns, f'dump.data.modify_columns.{table}').items()
            }
            for table, columns in _mapping(config.get('modify_columns'), 'dump.data.modify_columns').items()
        }

        max_rows = settings.get('max_rows_per_insert_statement', cls.max_rows_per_insert_statement)
        if not _is_positive_int(max_rows):
            raise ConfigurationError(
                ErrorKind.INVALID_OPTION,
                option='dump.data.max_rows_per_insert_statement',
                value=max_rows
            )

        max_length = settings.get('max_statement_length')
        if max_length is not None and not _is_positive_int(max_length):
            raise ConfigurationError(
                ErrorKind.INVALID_OPTION,
                option='dump.data.max_statement_length',
                value=max_length
            )
        return cls(**settings)

    def rules_for(self, table: str) -> dict[str, ModifyColumnRule]:
        """Get the modified column rules of a table, keyed by column name."""
        return self.modify_columns.get(table, {})


@dataclass
class TriggerOptions:
    """Trigger dump options. A falsy delimiter disables DELIMITER wrapping."""
    delimiter: Optional[str] = ';;'
    drop_if_exist: bool = False
    definer: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "TriggerOptions":
        settings = _known_settings(cls, config, 'dump.trigger')
        if 'delimiter' in settings and not settings['delimiter']:
            settings['delimiter'] = None
        return cls(**settings)


@dataclass
class DumpOptions:
    """What to dump. A disabled category is None."""
    tables: list[str] = field(default_factory=list)
    exclude_tables: bool = False
    schema: Optional[SchemaOptions] = field(default_factory=SchemaOptions)
    data: Optional[DataOptions] = field(default_factory=DataOptions)
    trigger: Optional[TriggerOptions] = field(default_factory=TriggerOptions)

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "DumpOptions":
        config = _mapping(config, 'dump')
        schema = _section(config, 'schema')
        data = _section(config, 'data')
        trigger = _section(config, 'trigger')

        return cls(
            tables=_table_names(config.get('tables')),
            exclude_tables=bool(config.get('exclude_tables', False)),
            schema=SchemaOptions.from_config(schema) if schema is not None else None,
            data=DataOptions.from_config(data) if data is not None else None,
            trigger=TriggerOptions.from_config(trigger) if trigger is not None else None,
        )


@dataclass
class Options:
    """Fully resolved options for one dump run."""
    connection: ConnectionOptions
    dump: DumpOptions

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "Options":
        """
        Resolve a ``{connection: ..., dump: ...}`` mapping.

        The connection settings are validated first so that a missing field
        is reported before any other problem in the configuration.
        """
        config = config or {}
        connection = validate_connection(config.get('connection'))
        return cls(connection=connection, dump=DumpOptions.from_config(config.get('dump')))


def _section(config: Mapping[str, Any], name: str) -> Optional[Mapping[str, Any]]:
    """
    Normalize a dump category setting.

    Missing or true means enabled with defaults, false disables the category,
    a mapping enables it with the given overrides.
    """
    value = config.get(name, True)
    if value is False:
        return None
    if value is True or value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    raise ConfigurationError(ErrorKind.INVALID_OPTION, option=f'dump.{name}', value=value)


def _mapping(value: Any, option: str) -> Mapping[str, Any]:
    """A missing nested setting is empty; anything other than a mapping is an error."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(ErrorKind.INVALID_OPTION, option=option, value=value)
    return value


def _table_names(value: Any) -> list[str]:
    """A single table name is accepted in place of a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
        raise ConfigurationError(ErrorKind.INVALID_OPTION, option='dump.tables', value=value)
    return list(value)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _known_settings(cls, config: Mapping[str, Any], prefix: str) -> dict[str, Any]:
    """Pick the scalar settings ``cls`` knows about, warning about the rest."""
    known = {f.name for f in fields(cls)}
    nested = {'table', 'view', 'where', 'modify_columns'}
    settings = {}
    for key, value in config.items():
        if key not in known:
            logging.warning(f"Ignoring unknown option '{prefix}.{key}'")
        elif key not in nested:
            settings[key] = value
    return settings
