"""
table_blueprint.status.errors
Exceptions raised by the table_blueprint package

Classes
-------
- `BlueprintError` : Base exception (abstract)

Classes (strict mode)
---------------------
Raised only when `BlueprintConfig.strict` is enabled. Without it the builder
accepts these inputs and renders them as given.

- `EmptyTableNameError` : The table name is empty
- `EmptyEnumValuesError` : An ENUM column has no allowed values
- `NegativeLengthError` : A length, precision or scale is negative
- `DanglingConstraintError` : A constraint without columns was declared
  before any column

Classes (files)
---------------
- `ConfigError` : A configuration file is malformed
- `DefinitionError` : A table definition file is malformed
"""
from abc import ABCMeta, abstractmethod
from typing import Optional



class BlueprintError(ValueError, metaclass=ABCMeta):
    """Base exception of the table_blueprint package"""
    def __init__(self, table_name:Optional[str]=None):
        """
        Parameters
        ----------
        table_name : str | None
            Name of the table the error relates to
        """
        super().__init__(self.error_message() if table_name is None
                         else f"{table_name}: {self.error_message()}")
        self.table_name = table_name

    @abstractmethod
    def error_message(self) -> str:
        """Error message

        Returns
        -------
        str
            Error message without the table name prefix
        """



#
# Strict mode
#

class EmptyTableNameError(BlueprintError):
    """The table name is empty"""
    def error_message(self) -> str:
        return "Table name must not be empty."

class EmptyEnumValuesError(BlueprintError):
    """An ENUM column has no allowed values"""
    def __init__(self, table_name:Optional[str], column_name:str):
        self.column_name = column_name
        super().__init__(table_name)

    def error_message(self) -> str:
        return f"ENUM column '{self.column_name}' needs at least one value."

class NegativeLengthError(BlueprintError):
    """A length, precision or scale is negative"""
    def __init__(self, table_name:Optional[str], column_name:str,
                 parameter:str, value:int):
        self.column_name = column_name
        self.parameter = parameter
        self.value = value
        super().__init__(table_name)

    def error_message(self) -> str:
        return f"Column '{self.column_name}': {self.parameter} must not be " \
               f"negative (got {self.value})."

class DanglingConstraintError(BlueprintError):
    """A constraint without columns was declared before any column"""
    def __init__(self, table_name:Optional[str], constraint_text:str):
        self.constraint_text = constraint_text
        super().__init__(table_name)

    def error_message(self) -> str:
        return f"Constraint '{self.constraint_text}' was declared " \
               "before any column."



#
# Files
#

class ConfigError(BlueprintError):
    """A configuration file is malformed"""
    def __init__(self, message:str):
        self.message = message
        super().__init__(None)

    def error_message(self) -> str:
        return f"Invalid configuration: {self.message}"

class DefinitionError(BlueprintError):
    """A table definition file is malformed"""
    def __init__(self, table_name:Optional[str], message:str):
        self.message = message
        super().__init__(table_name)

    def error_message(self) -> str:
        return f"Invalid table definition: {self.message}"
