"""
definitions
-----------
　Package for declaring tables in TOML files instead of Python code.

Functions
---------
- parse_toml: Parse a TOML file and return the declared tables
- parse_toml_data: Parse a TOML string and return the declared tables
- build_table: Build a `TableDeclaration` from a `[[tables]]` entry
- render_all: Render several tables into one SQL string
"""
from .parser import parse_toml, parse_toml_data, build_table, render_all
