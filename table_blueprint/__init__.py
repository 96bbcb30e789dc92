"""
table_blueprint
---------------
　A fluent builder that turns column and constraint declarations into a
single `CREATE TABLE` statement.

Subpackages
-----------
- schema: `TableDeclaration` and the SQL keyword enums
- config: `BlueprintConfig`, loaded from TOML
- definitions: Declaring tables in TOML files
- status: Exceptions and warnings

Examples
--------
```python
from table_blueprint import TableDeclaration

table = (TableDeclaration("users")
         .int("id").auto_increment().primary()
         .string("name", 100).not_null())
print(table.render())
```
"""
from .schema import TableDeclaration
from .config import BlueprintConfig, LogLevel, load_config
from ._logger import Logger
