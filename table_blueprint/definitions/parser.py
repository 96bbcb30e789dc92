"""
This module provides functions such as `parse_toml` to obtain
`TableDeclaration` instances from TOML files.

Functions
---------
- parse_toml: Parse a TOML file and return the declared tables
- parse_toml_data: Parse a TOML string and return the declared tables
- build_table: Build a single `TableDeclaration` from a `[[tables]]` entry
- render_all: Render several tables into one SQL string

Examples
--------
The TOML files that can be loaded using `parse_toml` and `parse_toml_data`
have the following structure:

- `[blueprint]`: Optional configuration (see `table_blueprint.config`)
- `[[tables]]`: One entry per table
  - `name`: Table name
  - `if_not_exists`: Render `IF NOT EXISTS` (default true)
  - `columns`: Column definitions, in order
    - `name`, `type` (`string`, `int`, `text`, `json`, `enum`,
      `timestamp`, `decimal`)
    - `length`, `values`, `fsp`, `decimals` depending on the type
    - `constraints`: Constraint names (`not_null`, `null`, `primary`,
      `unique`, `auto_increment`, `index`, `unsigned`) or inline tables
      such as `{ type = "default", value = "0" }`
  - `constraints`: Table-level constraints, each with `type` and
    `columns` (and `value` for `default`)

```toml
[[tables]]
name = "users"
columns = [
    { name = "id", type = "int", constraints = ["auto_increment", "primary"] },
    { name = "name", type = "string", length = 100, constraints = ["not_null"] },
    { name = "role", type = "enum", values = ["admin", "user"] },
]
constraints = [
    { type = "unique", columns = ["name"] },
]
```

```python
from table_blueprint.definitions import parse_toml, render_all

tables = parse_toml('tables.toml')
print(render_all(tables))
```
"""
from typing import Any, Final, Optional

import tomlkit as toml

from table_blueprint._logger import Logger
from table_blueprint.config import BlueprintConfig, config_from_table
from table_blueprint.config.blueprint_config import CONFIG_TABLE_NAME
from table_blueprint.schema import TableDeclaration
from table_blueprint.status.errors import DefinitionError



TABLES_KEY: Final[str] = "tables"
"""Key of the array of table definitions"""

COLUMN_TYPES: Final[dict[str, tuple[str, ...]]] = {
    "string": ("length",),
    "int": ("length",),
    "text": ("length",),
    "json": (),
    "enum": ("values",),
    "timestamp": ("fsp",),
    "decimal": ("length", "decimals"),
}
"""Column types and the optional keys each of them accepts"""

CONSTRAINT_TYPES: Final[tuple[str, ...]] = (
    "not_null", "null", "primary", "unique",
    "auto_increment", "default", "index", "unsigned",
)
"""Constraint names, equal to the `TableDeclaration` method names"""


def parse_toml(file_path:str, config:Optional[BlueprintConfig]=None,
               logger:Optional[Logger]=None) -> list[TableDeclaration]:
    """Parse a TOML file and return the declared tables

    Parameters
    ----------
    file_path : str
        Path to the TOML file
    config : BlueprintConfig | None
        Configuration. The `[blueprint]` table of the file is used when None.
    logger : Logger | None
        Logger passed to every `TableDeclaration`

    Returns
    -------
    list[TableDeclaration]
        Tables, in file order
    """
    with open(file_path, 'r', encoding="utf-8") as f:
        data = f.read()

    return parse_toml_data(data, config, logger)

def parse_toml_data(data:str, config:Optional[BlueprintConfig]=None,
                    logger:Optional[Logger]=None) -> list[TableDeclaration]:
    """Parse a TOML string and return the declared tables

    Parameters
    ----------
    data : str
        TOML data
    config : BlueprintConfig | None
        Configuration. The `[blueprint]` table of the data is used when None.
    logger : Logger | None
        Logger passed to every `TableDeclaration`

    Returns
    -------
    list[TableDeclaration]
        Tables, in file order. Empty if the data has no `tables` key.

    Raises
    ------
    DefinitionError
        If a table definition is malformed
    ConfigError
        If `config` is None and the `[blueprint]` table is malformed
    """
    toml_data = toml.loads(data).unwrap()

    if config is None:
        config = config_from_table(toml_data.get(CONFIG_TABLE_NAME))

    entries = toml_data.get(TABLES_KEY, [])
    if not isinstance(entries, list):
        raise DefinitionError(None, f"'{TABLES_KEY}' must be an array of tables")

    return [build_table(entry, config, logger) for entry in entries]

def build_table(entry:dict[str, Any], config:Optional[BlueprintConfig]=None,
                logger:Optional[Logger]=None) -> TableDeclaration:
    """Build a `TableDeclaration` from a `[[tables]]` entry

    Parameters
    ----------
    entry : dict[str, Any]
        Table definition (plain Python values)
    config : BlueprintConfig | None
        Configuration
    logger : Logger | None
        Logger

    Returns
    -------
    TableDeclaration
        Table declaration with every column and constraint of the entry applied
    """
    if not isinstance(entry, dict):
        raise DefinitionError(None, "each table definition must be a table")

    table_name = entry.get("name")
    if not isinstance(table_name, str):
        raise DefinitionError(None, "'name' of a table must be a string")

    if_not_exists = entry.get("if_not_exists", True)
    if not isinstance(if_not_exists, bool):
        raise DefinitionError(table_name, "'if_not_exists' must be a boolean")

    table = TableDeclaration(table_name, if_not_exists, config=config, logger=logger)

    for column in _get_list(entry, "columns", table_name):
        _apply_column(table, column)

    for constraint in _get_list(entry, "constraints", table_name):
        if not isinstance(constraint, dict):
            raise DefinitionError(table_name, "table-level constraints must be tables")
        if unknown := sorted(set(constraint) - {"type", "columns", "value"}):
            raise DefinitionError(
                table_name,
                f"unknown key(s) of a table-level constraint: {', '.join(unknown)}")
        columns = constraint.get("columns")
        if not isinstance(columns, (str, list)) \
                or (isinstance(columns, list) and not all(isinstance(c, str) for c in columns)):
            raise DefinitionError(
                table_name, "'columns' of a table-level constraint must be "
                "a string or an array of strings")
        _apply_constraint(table, constraint, columns)

    return table

def render_all(tables:list[TableDeclaration]) -> str:
    """Render several tables into one SQL string

    Parameters
    ----------
    tables : list[TableDeclaration]
        Tables

    Returns
    -------
    str
        `CREATE TABLE` statements separated by a blank line
    """
    return "\n\n".join(t.render() for t in tables)



#
# Helper Functions
#

def _get_list(entry:dict[str, Any], key:str, table_name:str) -> list[Any]:
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise DefinitionError(table_name, f"'{key}' must be an array")
    return value

def _apply_column(table:TableDeclaration, column:Any) -> None:
    """Declare a column and its column-attached constraints"""
    if not isinstance(column, dict):
        raise DefinitionError(table.table_name, "columns must be tables")

    name = column.get("name")
    if not isinstance(name, str):
        raise DefinitionError(table.table_name, "'name' of a column must be a string")

    column_type = column.get("type")
    if not isinstance(column_type, str) or column_type not in COLUMN_TYPES:
        raise DefinitionError(
            table.table_name, f"unknown type of column '{name}': {column_type!r}")

    allowed = {"name", "type", "constraints"} | set(COLUMN_TYPES[column_type])
    if unknown := sorted(set(column) - allowed):
        raise DefinitionError(
            table.table_name,
            f"unknown key(s) of {column_type} column '{name}': {', '.join(unknown)}")

    kwargs = {k: column[k] for k in COLUMN_TYPES[column_type] if k in column}
    if column_type == "enum":
        values = kwargs.get("values")
        if not isinstance(values, list):
            raise DefinitionError(
                table.table_name, f"'values' of enum column '{name}' must be an array")
    elif column_type == "decimal" and "length" not in kwargs:
        raise DefinitionError(
            table.table_name, f"'length' of decimal column '{name}' is required")
    for key in ("length", "fsp", "decimals"):
        if key in kwargs and (not isinstance(kwargs[key], int) or isinstance(kwargs[key], bool)):
            raise DefinitionError(
                table.table_name, f"'{key}' of column '{name}' must be an integer")

    getattr(table, column_type)(name, **kwargs)

    for constraint in _get_list(column, "constraints", table.table_name):
        if isinstance(constraint, str):
            constraint = {"type": constraint}
        if not isinstance(constraint, dict):
            raise DefinitionError(
                table.table_name,
                f"constraints of column '{name}' must be strings or tables")
        if unknown := sorted(set(constraint) - {"type", "value"}):
            raise DefinitionError(
                table.table_name,
                f"{', '.join(repr(k) for k in unknown)} not allowed in constraints "
                f"of column '{name}'")
        _apply_constraint(table, constraint, None)

def _apply_constraint(table:TableDeclaration, constraint:dict[str, Any],
                      columns:Optional[Any]) -> None:
    """Declare a constraint on the given columns or on the most recent column"""
    constraint_type = constraint.get("type")
    if not isinstance(constraint_type, str) or constraint_type not in CONSTRAINT_TYPES:
        raise DefinitionError(
            table.table_name, f"unknown constraint: {constraint_type!r}")

    if constraint_type == "default":
        if "value" not in constraint:
            raise DefinitionError(table.table_name, "'default' needs a 'value'")
        table.default(_format_value(constraint["value"]), columns)
    else:
        getattr(table, constraint_type)(columns)

def _format_value(value:Any) -> str:
    """Format a TOML value as it is written in SQL

    Strings are kept verbatim, booleans become `TRUE` / `FALSE`.
    """
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)
