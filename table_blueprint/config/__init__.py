"""
config
------
　Configuration of the table_blueprint package, read from TOML files.

Classes
-------
- BlueprintConfig: Settings shared by every `TableDeclaration`
- LogLevel: Log level

Functions
---------
- load_config: Load the `[blueprint]` table of a TOML file
- parse_config_data: Parse the `[blueprint]` table of a TOML string
"""
from .blueprint_config import (
    BlueprintConfig, LogLevel, MAX_LOG_LEVEL_LENGTH,
    load_config, parse_config_data, config_from_table
)
