"""
This module defines `TableDeclaration`, a fluent builder that accumulates
column and constraint declarations and renders them into a single
`CREATE TABLE` statement.

## Column Types

| Method      | Rendered type                                |
|-------------|----------------------------------------------|
| `string`    | `VARCHAR(length)`, length defaults to 50     |
| `int`       | `INT(length)`, length defaults to 11         |
| `text`      | `TEXT(length)`, length defaults to 65535     |
| `json`      | `JSON`                                       |
| `enum`      | `ENUM('v1', 'v2', ...)`                      |
| `timestamp` | `TIMESTAMP` or `TIMESTAMP(fsp)`              |
| `decimal`   | `DECIMAL` (see `BlueprintConfig.decimal_parameters`) |

## Constraints

`not_null`, `null`, `primary`, `unique`, `auto_increment`, `default`,
`index` and `unsigned`. Without `column_names` a constraint is appended to
the line of the most recently declared column; with `column_names` it is
rendered as a table-level constraint on its own line.

## Notes

- Enum values and default values are inserted verbatim. No quoting or
  escaping is performed, so callers must pass SQL-safe values.
- Nothing is validated unless `BlueprintConfig.strict` is enabled.

## Example

```python
table = (TableDeclaration("users")
         .int("id").auto_increment().primary()
         .string("name", 100).not_null()
         .enum("role", ["admin", "user"])
         .unique("name"))
print(table)
```

prints

```
CREATE TABLE IF NOT EXISTS `users` (
	`id` INT(11) AUTO_INCREMENT PRIMARY KEY, 
	`name` VARCHAR(100) NOT NULL, 
	`role` ENUM('admin', 'user'), 
	UNIQUE (`name`)
);
```
"""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Optional, Sequence, Union

from table_blueprint._logger import Logger
from table_blueprint.config import BlueprintConfig, LogLevel
from table_blueprint.status import errors as be
from table_blueprint.status import warnings as bw
from ._core import (
    BaseType, ConstraintKind, ConstraintKeying,
    ColumnType, Constraint, ColumnDeclaration, TableConstraint
)



ColumnNames = Union[str, Sequence[str], None]
"""A single column name, a list of column names, or None"""


class TableDeclaration:
    """Builder of a `CREATE TABLE` statement"""

    def __init__(self, table_name:str, if_not_exists:bool=True, *,
                 config:Optional[BlueprintConfig]=None,
                 logger:Optional[Logger]=None):
        """
        Parameters
        ----------
        table_name : str
            Table name
        if_not_exists : bool, default True
            Render `IF NOT EXISTS`
        config : BlueprintConfig | None
            Configuration. The defaults of `BlueprintConfig` are used when None.
        logger : Logger | None
            Logger that receives the warnings of this builder

        Raises
        ------
        EmptyTableNameError
            If `table_name` is empty (strict mode only)
        """
        self._config = config or BlueprintConfig()
        if self._config.strict and not table_name:
            raise be.EmptyTableNameError()

        self._table_name = table_name
        self._if_not_exists = if_not_exists
        self._logger = logger

        self._most_recent_column: Optional[str] = None
        self._columns: dict[str, ColumnDeclaration] = {}
        self._constraints: dict[Union[str, int], TableConstraint] = {}
        self._warnings: list[bw.BlueprintWarningData] = []

    @property
    def table_name(self) -> str:
        """Table name"""
        return self._table_name

    @property
    def if_not_exists(self) -> bool:
        """True if `IF NOT EXISTS` is rendered"""
        return self._if_not_exists

    @property
    def config(self) -> BlueprintConfig:
        """Configuration"""
        return self._config

    @property
    def most_recent_column(self) -> Optional[str]:
        """Name of the most recently declared column, None if no column exists"""
        return self._most_recent_column

    @property
    def columns(self) -> dict[str, ColumnDeclaration]:
        """Copy of the column declarations, in declaration order

        Changing the returned declarations does not affect the builder.
        """
        return deepcopy(self._columns)

    @property
    def constraints(self) -> list[TableConstraint]:
        """Table-level constraints, in declaration order"""
        return list(self._constraints.values())

    @property
    def warnings(self) -> list[bw.BlueprintWarningData]:
        """Warnings recorded while declaring"""
        return list(self._warnings)

    #
    # Data Types
    #

    def string(self, column_name:str, length:Optional[int]=None) -> "TableDeclaration":
        """Declare a `VARCHAR(length)` column

        Parameters
        ----------
        column_name : str
            Column name
        length : int | None
            Length. `BlueprintConfig.default_string_length` (50) when None.
        """
        if length is None:
            length = self._config.default_string_length
        self._check_non_negative(column_name, "length", length)
        return self._declare_column(column_name, ColumnType(BaseType.STRING, (length,)))

    def int(self, column_name:str, length:Optional[int]=None) -> "TableDeclaration":
        """Declare an `INT(length)` column

        Parameters
        ----------
        column_name : str
            Column name
        length : int | None
            Display width. `BlueprintConfig.default_int_length` (11) when None.
        """
        if length is None:
            length = self._config.default_int_length
        self._check_non_negative(column_name, "length", length)
        return self._declare_column(column_name, ColumnType(BaseType.INT, (length,)))

    def text(self, column_name:str, length:Optional[int]=None) -> "TableDeclaration":
        """Declare a `TEXT(length)` column

        Parameters
        ----------
        column_name : str
            Column name
        length : int | None
            Length. `BlueprintConfig.default_text_length` (65535) when None.
        """
        if length is None:
            length = self._config.default_text_length
        self._check_non_negative(column_name, "length", length)
        return self._declare_column(column_name, ColumnType(BaseType.TEXT, (length,)))

    def json(self, column_name:str) -> "TableDeclaration":
        """Declare a `JSON` column"""
        return self._declare_column(column_name, ColumnType(BaseType.JSON))

    def enum(self, column_name:str, values:Sequence[str]) -> "TableDeclaration":
        """Declare an `ENUM('v1', 'v2', ...)` column

        Parameters
        ----------
        column_name : str
            Column name
        values : Sequence[str]
            Allowed values. They are placed between single quotes verbatim,
            without escaping.

        Raises
        ------
        EmptyEnumValuesError
            If `values` is empty (strict mode only)
        """
        if self._config.strict and not values:
            raise be.EmptyEnumValuesError(self._table_name, column_name)
        return self._declare_column(
            column_name, ColumnType(BaseType.ENUM, values=tuple(str(v) for v in values)))

    def timestamp(self, column_name:str, fsp:Optional[int]=None) -> "TableDeclaration":
        """Declare a `TIMESTAMP` column

        Parameters
        ----------
        column_name : str
            Column name
        fsp : int | None
            Fractional seconds precision. `TIMESTAMP(fsp)` is rendered if given.
        """
        if fsp is None:
            return self._declare_column(column_name, ColumnType(BaseType.TIMESTAMP))

        self._check_non_negative(column_name, "fsp", fsp)
        return self._declare_column(column_name, ColumnType(BaseType.TIMESTAMP, (fsp,)))

    def decimal(self, column_name:str, length:int,
                decimals:Optional[int]=None) -> "TableDeclaration":
        """Declare a `DECIMAL` column

        Parameters
        ----------
        column_name : str
            Column name
        length : int
            Precision
        decimals : int | None
            Scale

        Notes
        -----
        - `length` and `decimals` are rendered (`DECIMAL(length, decimals)`)
          only when `BlueprintConfig.decimal_parameters` is enabled.
          Otherwise a bare `DECIMAL` is rendered.
        """
        self._check_non_negative(column_name, "length", length)
        if decimals is not None:
            self._check_non_negative(column_name, "decimals", decimals)

        if not self._config.decimal_parameters:
            self._log(f"DECIMAL parameters of column '{column_name}' are not rendered.",
                      LogLevel.INFO)
            return self._declare_column(column_name, ColumnType(BaseType.DECIMAL))

        params = (length,) if decimals is None else (length, decimals)
        return self._declare_column(column_name, ColumnType(BaseType.DECIMAL, params))

    #
    # Constraints
    #

    def not_null(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `NOT NULL`

        Parameters
        ----------
        column_names : str | Sequence[str] | None
            Columns of a table-level constraint.
            The most recently declared column when None.
        """
        return self._declare_constraint(Constraint(ConstraintKind.NOT_NULL), column_names)

    def null(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `NULL`"""
        return self._declare_constraint(Constraint(ConstraintKind.NULL), column_names)

    def primary(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `PRIMARY KEY`"""
        return self._declare_constraint(Constraint(ConstraintKind.PRIMARY_KEY), column_names)

    def unique(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `UNIQUE`"""
        return self._declare_constraint(Constraint(ConstraintKind.UNIQUE), column_names)

    def auto_increment(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `AUTO_INCREMENT`"""
        return self._declare_constraint(Constraint(ConstraintKind.AUTO_INCREMENT), column_names)

    def default(self, value:Any, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `DEFAULT(value)`

        Parameters
        ----------
        value : Any
            Default value. `str(value)` is inserted verbatim, without quoting
            or escaping (pass `"'abc'"` for a string literal).
        column_names : str | Sequence[str] | None
            Columns of a table-level constraint.
            The most recently declared column when None.
        """
        return self._declare_constraint(
            Constraint(ConstraintKind.DEFAULT, str(value)), column_names)

    def index(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `INDEX`"""
        return self._declare_constraint(Constraint(ConstraintKind.INDEX), column_names)

    def unsigned(self, column_names:ColumnNames=None) -> "TableDeclaration":
        """Set `UNSIGNED`"""
        return self._declare_constraint(Constraint(ConstraintKind.UNSIGNED), column_names)

    #
    # Rendering
    #

    def render(self) -> str:
        """Render the `CREATE TABLE` statement

        Returns
        -------
        str
            `CREATE TABLE` statement terminated by a semicolon
        """
        query = "CREATE TABLE "
        if self._if_not_exists:
            query += "IF NOT EXISTS "
        query += f"`{self._table_name}` (\n"
        query += self._render_columns()
        query += self._render_constraints()
        query += "\n);"
        return query

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"TableDeclaration({self._table_name!r}, if_not_exists={self._if_not_exists!r}, " \
               f"columns={list(self._columns)!r})"

    def _render_columns(self) -> str:
        return ", \n".join(d.render(name) for name, d in self._columns.items())

    def _render_constraints(self) -> str:
        if not self._constraints:
            return ""
        return ", \n" + ", \n".join(c.render() for c in self._constraints.values())

    #
    # Helper Functions
    #

    def _declare_column(self, column_name:str, column_type:ColumnType) -> "TableDeclaration":
        """Declare or replace a column and make it the most recent column"""
        self._most_recent_column = column_name

        if (old := self._columns.get(column_name)) is not None:
            self._warn(bw.ColumnRedeclaredWarning(
                self._table_name, column_name,
                " ".join(old.fragments()), column_type.render()))

        self._columns[column_name] = ColumnDeclaration(column_type)
        return self

    def _declare_constraint(self, constraint:Constraint,
                            column_names:ColumnNames) -> "TableDeclaration":
        """Attach a constraint to the given columns or to the most recent column"""
        if column_names is not None:
            if not isinstance(column_names, str):
                column_names = tuple(column_names)
            self._add_table_constraint(TableConstraint(constraint, column_names))
        elif self._most_recent_column is not None:
            self._columns[self._most_recent_column].constraints.append(constraint)
        elif self._config.strict:
            raise be.DanglingConstraintError(self._table_name, constraint.render())
        else:
            self._warn(bw.DanglingConstraintWarning(self._table_name, constraint.render()))

        return self

    def _add_table_constraint(self, table_constraint:TableConstraint) -> None:
        if self._config.constraint_keying is ConstraintKeying.SEQUENCE:
            self._constraints[len(self._constraints)] = table_constraint
            return

        key = table_constraint.constraint.render()
        if (old := self._constraints.get(key)) is not None:
            self._warn(bw.ConstraintOverwrittenWarning(
                self._table_name, key, old.column_names, table_constraint.column_names))
        self._constraints[key] = table_constraint

    def _check_non_negative(self, column_name:str, parameter:str, value:int) -> None:
        if self._config.strict and value < 0:
            raise be.NegativeLengthError(self._table_name, column_name, parameter, value)

    def _warn(self, warning:bw.BlueprintWarningData) -> None:
        self._warnings.append(warning)
        self._log(warning.warning_message(), LogLevel.WARNING)

    def _log(self, message:str, level:LogLevel) -> None:
        if self._logger is not None:
            self._logger.log(self._table_name, message, level)
