"""
table_blueprint.status.warnings

Warnings recorded by `TableDeclaration` while declarations are accumulated.
None of them changes the rendered SQL; they only report input that the
builder accepted silently.

Classes
-------
- `BlueprintWarningData` : Warning (abstract)
- `DanglingConstraintWarning` : A constraint without columns was declared
  before any column and was dropped
- `ColumnRedeclaredWarning` : A column was declared again and its previous
  declaration was replaced
- `ConstraintOverwrittenWarning` : A table-level constraint rendered to the
  same text as an earlier one and replaced its column list
"""
from abc import ABCMeta, abstractmethod
from typing import Union



class BlueprintWarningData(metaclass=ABCMeta):
    """Warning"""
    def __init__(self, table_name:str):
        """
        Parameters
        ----------
        table_name : str
            Name of the table the warning relates to
        """
        self.table_name = table_name

    @abstractmethod
    def warning_message(self) -> str:
        """Warning message

        Returns
        -------
        str
            Warning message
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.table_name!r}: {self.warning_message()!r})"

class DanglingConstraintWarning(BlueprintWarningData):
    """A constraint without columns was declared before any column"""
    def __init__(self, table_name:str, constraint_text:str):
        super().__init__(table_name)
        self.constraint_text = constraint_text

    def warning_message(self) -> str:
        return f"Constraint '{self.constraint_text}' was declared before " \
               "any column and has been ignored."

class ColumnRedeclaredWarning(BlueprintWarningData):
    """A column was declared again"""
    def __init__(self, table_name:str, column_name:str,
                 old_fragment:str, new_fragment:str):
        super().__init__(table_name)
        self.column_name = column_name
        self.old_fragment = old_fragment
        self.new_fragment = new_fragment

    def warning_message(self) -> str:
        return f"Column '{self.column_name}' was redeclared: " \
               f"'{self.old_fragment}' has been replaced by '{self.new_fragment}'."

class ConstraintOverwrittenWarning(BlueprintWarningData):
    """A table-level constraint replaced an earlier one with the same text"""
    def __init__(self, table_name:str, constraint_text:str,
                 old_columns:Union[str, tuple[str, ...]],
                 new_columns:Union[str, tuple[str, ...]]):
        super().__init__(table_name)
        self.constraint_text = constraint_text
        self.old_columns = old_columns
        self.new_columns = new_columns

    def warning_message(self) -> str:
        return f"Constraint '{self.constraint_text}' on {_format(self.old_columns)} " \
               f"has been overwritten by the one on {_format(self.new_columns)}."

def _format(columns:Union[str, tuple[str, ...]]) -> str:
    if isinstance(columns, str):
        columns = (columns,)
    return ", ".join(f"'{c}'" for c in columns)
