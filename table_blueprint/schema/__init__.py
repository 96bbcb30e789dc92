"""Module for declaring tables and rendering them as `CREATE TABLE` statements.

Classes
-------
- Builder
  - `TableDeclaration`: Fluent builder of a `CREATE TABLE` statement
- Enums for SQL keywords
  - `BaseType`: Column base types
  - `ConstraintKind`: Constraint kinds
  - `ConstraintKeying`: Keying of table-level constraints
- Classes for representing declarations
  - `ColumnType`: Base type of a column
  - `Constraint`: Constraint
  - `ColumnDeclaration`: Column type and column-attached constraints
  - `TableConstraint`: Table-level constraint
"""
from ._core import (
    BaseType, ConstraintKind, ConstraintKeying,
    ColumnType, Constraint, ColumnDeclaration, TableConstraint,
    DEFAULT_STRING_LENGTH, DEFAULT_INT_LENGTH, DEFAULT_TEXT_LENGTH
)

from .blueprint import TableDeclaration
