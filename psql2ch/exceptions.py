"""
Custom Exceptions Module

Exception types raised by the schema converter.
- MappingError: a source column cannot be represented in ClickHouse
- ConfigError: caller configuration (columns file, column dictionaries) is invalid
"""

from typing import List, Optional


class Psql2ChError(Exception):
    """Base exception for all converter errors."""
    pass


# =============================================================================
# Mapping Errors
# =============================================================================

class MappingError(Psql2ChError):
    """Base exception for type mapping errors."""
    pass


class UnsupportedSourceTypeError(MappingError):
    """Raised when a PostgreSQL type has no entry in the type map."""

    def __init__(self, psql_type: str, column_name: Optional[str] = None):
        self.psql_type = psql_type
        self.column_name = column_name
        message = f"Type {psql_type} not implemented yet"
        if column_name:
            message += f" (column '{column_name}')"
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigError(Psql2ChError):
    """Base exception for caller configuration errors."""
    pass


class ColumnsFileNotFoundError(ConfigError):
    """Raised when the columns JSON file cannot be found."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"Columns file not found: '{file_path}'")


class ColumnsParseError(ConfigError):
    """Raised when the columns JSON file cannot be parsed."""

    def __init__(self, file_path: str, parse_error: str):
        self.file_path = file_path
        self.parse_error = parse_error
        message = (
            f"Failed to parse columns file: '{file_path}'\n"
            f"Parse error: {parse_error}"
        )
        super().__init__(message)


class ColumnValidationError(ConfigError):
    """Raised when column definitions fail validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = (
            f"Column validation failed with {len(errors)} error(s):\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
        super().__init__(message)
