"""
status
------
　Exceptions and warnings of the table_blueprint package.

Modules
-------
- errors: Exceptions (`BlueprintError` and its subclasses)
- warnings: Warning records kept by `TableDeclaration`
"""
from . import errors
from . import warnings
