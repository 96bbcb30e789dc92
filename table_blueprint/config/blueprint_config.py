"""
Configuration of the table_blueprint package

Classes
-------
BlueprintConfig:
    Settings shared by every `TableDeclaration`
    - default lengths of VARCHAR / INT / TEXT columns
    - strict mode (fail fast on input the builder would otherwise accept)
    - rendering choices (DECIMAL parameters, keying of table-level constraints)
    - log settings

Functions
---------
- `load_config`: Load the `[blueprint]` table of a TOML file
- `parse_config_data`: Parse the `[blueprint]` table of a TOML string
- `config_from_table`: Build a `BlueprintConfig` from an already parsed table

Enums
-----
LogLevel: Log level

Examples
--------
```toml
[blueprint]
default_string_length = 255
strict = true
decimal_parameters = true
constraint_keying = "sequence"
log_path = "logs/blueprint.log"
log_level = "INFO"
```
"""
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional

import tomlkit as toml

from table_blueprint.schema._core import (
    ConstraintKeying,
    DEFAULT_STRING_LENGTH, DEFAULT_INT_LENGTH, DEFAULT_TEXT_LENGTH
)
from table_blueprint.status.errors import ConfigError



CONFIG_TABLE_NAME = "blueprint"
"""Name of the TOML table holding the configuration"""


# ログレベル
class LogLevel(Enum):
    """
    Log level
    """
    INFO = 1
    WARNING = 2
    ERROR = 3
MAX_LOG_LEVEL_LENGTH = max([len(s.name) for s in LogLevel])


@dataclass(frozen=True)
class BlueprintConfig:
    """Settings shared by every `TableDeclaration`"""
    default_string_length: int = DEFAULT_STRING_LENGTH
    """Length of `string()` columns when no length is given"""
    default_int_length: int = DEFAULT_INT_LENGTH
    """Display width of `int()` columns when no length is given"""
    default_text_length: int = DEFAULT_TEXT_LENGTH
    """Length of `text()` columns when no length is given"""

    strict: bool = False
    """Raise `BlueprintError` on empty table names, empty ENUM values,
    negative lengths and constraints declared before any column"""
    decimal_parameters: bool = False
    """Render `DECIMAL(length, decimals)` instead of a bare `DECIMAL`"""
    constraint_keying: ConstraintKeying = ConstraintKeying.TEXT
    """Keying of table-level constraints

    Notes
    -----
    - `TEXT` keeps the historical behaviour where two constraints rendering
      to the same text overwrite each other"""

    log_path: Optional[str] = None
    """Log file. Nothing is written to a file when None"""
    log_level: LogLevel = LogLevel.WARNING
    """Minimum level of the messages to log"""
    logging_to_console: bool = False
    """Echo log messages to the console"""


def load_config(file_path:str) -> BlueprintConfig:
    """Load the `[blueprint]` table of a TOML file

    Parameters
    ----------
    file_path : str
        Path to the TOML file

    Returns
    -------
    BlueprintConfig
        Configuration. Defaults are used when the file has no `[blueprint]` table.
    """
    with open(file_path, 'r', encoding="utf-8") as f:
        data = f.read()

    return parse_config_data(data)

def parse_config_data(data:str) -> BlueprintConfig:
    """Parse the `[blueprint]` table of a TOML string

    Parameters
    ----------
    data : str
        TOML data

    Returns
    -------
    BlueprintConfig
        Configuration. Defaults are used when the data has no `[blueprint]` table.

    Raises
    ------
    ConfigError
        If a key is unknown or a value has the wrong type
    """
    toml_data = toml.loads(data).unwrap()
    return config_from_table(toml_data.get(CONFIG_TABLE_NAME))

def config_from_table(table:Optional[dict[str, Any]]) -> BlueprintConfig:
    """Build a `BlueprintConfig` from a parsed `[blueprint]` table

    Parameters
    ----------
    table : dict[str, Any] | None
        Contents of the `[blueprint]` table (plain Python values)

    Returns
    -------
    BlueprintConfig
        Configuration
    """
    if table is None:
        return BlueprintConfig()
    if not isinstance(table, dict):
        raise ConfigError(f"'{CONFIG_TABLE_NAME}' must be a table")

    known = {f.name for f in fields(BlueprintConfig)}
    if unknown := sorted(set(table) - known):
        raise ConfigError(f"unknown key(s): {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for key, value in table.items():
        if key in ("default_string_length", "default_int_length", "default_text_length"):
            # bool is a subclass of int
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"'{key}' must be a non-negative integer")
            kwargs[key] = value
        elif key in ("strict", "decimal_parameters", "logging_to_console"):
            if not isinstance(value, bool):
                raise ConfigError(f"'{key}' must be a boolean")
            kwargs[key] = value
        elif key == "constraint_keying":
            kwargs[key] = _parse_enum(ConstraintKeying, key, value)
        elif key == "log_level":
            kwargs[key] = _parse_enum(LogLevel, key, value)
        elif key == "log_path":
            if not isinstance(value, str) or not value:
                raise ConfigError(f"'{key}' must be a non-empty string")
            kwargs[key] = value

    return BlueprintConfig(**kwargs)

def _parse_enum(enum_type:type[Enum], key:str, value:Any) -> Any:
    """Look up an enum member by its (case-insensitive) name"""
    if isinstance(value, str) and value.upper() in enum_type.__members__:
        return enum_type[value.upper()]

    choices = ", ".join(f"'{m.lower()}'" for m in enum_type.__members__)
    raise ConfigError(f"'{key}' must be one of {choices}")
