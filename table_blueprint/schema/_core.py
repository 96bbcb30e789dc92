"""
Core data structures for the schema package.

This module defines the SQL keywords and the value objects that
`TableDeclaration` accumulates and renders.

Classes
-------
- `BaseType`: Column base types and their SQL keywords
- `ConstraintKind`: Constraint kinds and their SQL keywords
- `ConstraintKeying`: How table-level constraints are keyed
- `ColumnType`: Base type of a column with its parameters
- `Constraint`: Constraint with its optional value
- `ColumnDeclaration`: Column type followed by column-attached constraints
- `TableConstraint`: Constraint applied to an explicit list of columns

Constants
---------
- `DEFAULT_STRING_LENGTH`: Default length of VARCHAR columns
- `DEFAULT_INT_LENGTH`: Default display width of INT columns
- `DEFAULT_TEXT_LENGTH`: Default length of TEXT columns
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Final, Optional, Union



DEFAULT_STRING_LENGTH: Final[int] = 50
"""Default length of VARCHAR columns"""
DEFAULT_INT_LENGTH: Final[int] = 11
"""Default display width of INT columns"""
DEFAULT_TEXT_LENGTH: Final[int] = 65535
"""Default length of TEXT columns"""


class BaseType(Enum):
    """Column base types. The value of each member is its SQL keyword."""
    STRING = 'VARCHAR'
    INT = 'INT'
    TEXT = 'TEXT'
    JSON = 'JSON'
    ENUM = 'ENUM'
    TIMESTAMP = 'TIMESTAMP'
    DECIMAL = 'DECIMAL'

class ConstraintKind(Enum):
    """Constraint kinds. The value of each member is its SQL keyword."""
    NOT_NULL = 'NOT NULL'
    NULL = 'NULL'
    PRIMARY_KEY = 'PRIMARY KEY'
    UNIQUE = 'UNIQUE'
    AUTO_INCREMENT = 'AUTO_INCREMENT'
    DEFAULT = 'DEFAULT'
    INDEX = 'INDEX'
    UNSIGNED = 'UNSIGNED'

    @property
    def takes_value(self) -> bool:
        """True if the constraint is rendered with a value (e.g. `DEFAULT(0)`)"""
        return self is ConstraintKind.DEFAULT

class ConstraintKeying(Enum):
    """How table-level constraints are keyed inside `TableDeclaration`.

    - `TEXT`: keyed by the rendered constraint text. Two declarations that
      render to the same text share one slot, and the later one overwrites
      the column list of the earlier one.
    - `SEQUENCE`: every declaration gets its own slot.
    """
    TEXT = auto()
    SEQUENCE = auto()


@dataclass(frozen=True)
class ColumnType:
    """Base type of a column

    Attributes
    ----------
    base_type : BaseType
        Base type
    params : tuple[int, ...]
        Parameters rendered in parentheses after the keyword
        (e.g. `(100,)` for `VARCHAR(100)`, `()` for `JSON`)
    values : tuple[str, ...]
        Allowed values of an ENUM column, inserted verbatim
    """
    base_type: BaseType
    """Base type"""
    params: tuple[int, ...] = ()
    """Parameters rendered after the keyword"""
    values: tuple[str, ...] = ()
    """Allowed values of an ENUM column"""

    def render(self) -> str:
        """Render the type fragment.

        Examples
        --------
        >>> ColumnType(BaseType.STRING, (100,)).render()
        'VARCHAR(100)'
        >>> ColumnType(BaseType.ENUM, values=('admin', 'user')).render()
        "ENUM('admin', 'user')"
        >>> ColumnType(BaseType.JSON).render()
        'JSON'
        """
        if self.base_type is BaseType.ENUM:
            return f"{self.base_type.value}('" + "', '".join(self.values) + "')"

        if self.params:
            return f"{self.base_type.value}({', '.join(str(p) for p in self.params)})"

        return self.base_type.value

@dataclass(frozen=True)
class Constraint:
    """Constraint

    Attributes
    ----------
    kind : ConstraintKind
        Constraint kind
    value : Optional[str]
        Value of the constraint, only used by `ConstraintKind.DEFAULT`.
        Inserted verbatim, no quoting or escaping is performed.
    """
    kind: ConstraintKind
    """Constraint kind"""
    value: Optional[str] = None
    """Value of the constraint (DEFAULT only)"""

    def render(self) -> str:
        """Render the constraint text (e.g. `NOT NULL`, `DEFAULT(0)`)"""
        if self.kind.takes_value:
            return f"{self.kind.value}({self.value})"
        return self.kind.value

@dataclass
class ColumnDeclaration:
    """Column type followed by the constraints attached to the column

    Attributes
    ----------
    column_type : ColumnType
        Base type of the column
    constraints : list[Constraint]
        Column-attached constraints, in call order
    """
    column_type: ColumnType
    """Base type of the column"""
    constraints: list[Constraint] = field(default_factory=list)
    """Column-attached constraints, in call order"""

    def fragments(self) -> list[str]:
        """Type fragment followed by the constraint fragments"""
        return [self.column_type.render()] + [c.render() for c in self.constraints]

    def render(self, column_name: str) -> str:
        """Render the column line

        Examples
        --------
        >>> ColumnDeclaration(ColumnType(BaseType.INT, (11,)),
        ...                   [Constraint(ConstraintKind.NOT_NULL)]).render('id')
        '\\t`id` INT(11) NOT NULL'
        """
        return f"\t`{column_name}` " + " ".join(self.fragments())

@dataclass(frozen=True)
class TableConstraint:
    """Constraint applied to an explicit list of columns

    Attributes
    ----------
    constraint : Constraint
        Constraint
    column_names : Union[str, tuple[str, ...]]
        A single column name or a tuple of column names, as given by the caller
    """
    constraint: Constraint
    """Constraint"""
    column_names: Union[str, tuple[str, ...]]
    """Column name(s) the constraint applies to"""

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names as a tuple"""
        if isinstance(self.column_names, str):
            return (self.column_names,)
        return self.column_names

    def render(self) -> str:
        """Render the constraint line

        Examples
        --------
        >>> TableConstraint(Constraint(ConstraintKind.UNIQUE), ('a', 'b')).render()
        '\\tUNIQUE (`a`, `b`)'
        """
        return f"\t{self.constraint.render()} (`" + "`, `".join(self.columns) + "`)"
