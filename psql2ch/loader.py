"""
Column configuration loader.

Decodes caller configuration (dictionaries or a JSON file) into SourceColumn
records and encodes a SchemaResult back into the attribute dictionary of
the psql2ch data source:

    {
        "id": "...",
        "postgres_columns": [...],
        "clickhouse_primarykey": [...],
        "clickhouse_guessed_primarykey": [...],
        "clickhouse_columns": [{"name": ..., "type": ...}],
        "clickhouse_kafkaengine_columns": [{"name": ..., "type": ...}],
        "clickhouse_kafkaengine_columns_mapping": [...],
        "athena_columns": [{"name": ..., "type": ...}]
    }
"""

import json
import os
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Union

from .exceptions import ColumnsFileNotFoundError, ColumnsParseError, ColumnValidationError
from .logging_utils import loader_logger
from .models import DerivedColumn, SchemaResult, SourceColumn

REQUIRED_FIELDS = {
    'name': str,
    'type': str,
    'is_primary_key': bool,
    'is_nullable': bool,
}

OPTIONAL_INT_FIELDS = (
    'numeric_precision',
    'numeric_scale',
    'character_maximum_length',
    'datetime_precision',
)


def _validate_column(data: Any, index: int) -> List[str]:
    """Collect validation errors for one column dictionary."""
    prefix = f"postgres_columns[{index}]"
    if not isinstance(data, Mapping):
        return [f"{prefix} must be an object, got: {type(data).__name__}"]

    errors = []
    for key, expected in REQUIRED_FIELDS.items():
        if data.get(key) is None:
            errors.append(f"Missing {prefix}.{key}")
        elif not isinstance(data[key], expected):
            errors.append(
                f"{prefix}.{key} must be {expected.__name__}, got: {type(data[key]).__name__}"
            )

    if isinstance(data.get('name'), str) and not data['name']:
        errors.append(f"{prefix}.name must not be empty")

    for key in OPTIONAL_INT_FIELDS:
        value = data.get(key)
        # bool is an int subclass
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            errors.append(f"{prefix}.{key} must be int, got: {type(value).__name__}")
        elif value is not None and value < 0:
            errors.append(f"{prefix}.{key} must not be negative, got: {value}")

    return errors


def column_from_dict(data: Mapping[str, Any], index: int = 0) -> SourceColumn:
    """
    Build a SourceColumn from a column dictionary.

    Args:
        data: Column dictionary (name, type, is_primary_key, is_nullable and
              optional numeric_precision, numeric_scale,
              character_maximum_length, datetime_precision)
        index: Position of the column, used in error messages

    Returns:
        SourceColumn, with missing or null optional fields set to 0

    Raises:
        ColumnValidationError: If the dictionary is invalid
    """
    errors = _validate_column(data, index)
    if errors:
        raise ColumnValidationError(errors=errors)
    return _build_column(data)


def _build_column(data: Mapping[str, Any]) -> SourceColumn:
    return SourceColumn(
        name=data['name'],
        data_type=data['type'],
        is_primary_key=data['is_primary_key'],
        is_nullable=data['is_nullable'],
        numeric_precision=data.get('numeric_precision') or 0,
        numeric_scale=data.get('numeric_scale') or 0,
        datetime_precision=data.get('datetime_precision') or 0,
        character_maximum_length=data.get('character_maximum_length') or 0,
    )


def columns_from_config(config: Union[Sequence[Any], Mapping[str, Any]]) -> List[SourceColumn]:
    """
    Build the SourceColumn list from caller configuration.

    Args:
        config: List of column dictionaries, or a mapping holding that list
                under 'postgres_columns'

    Returns:
        List of SourceColumn, in configuration order

    Raises:
        ColumnValidationError: With every error found across all columns
    """
    if isinstance(config, Mapping):
        if 'postgres_columns' not in config:
            raise ColumnValidationError(errors=["Missing postgres_columns"])
        config = config['postgres_columns']

    if isinstance(config, (str, bytes)) or not isinstance(config, Sequence):
        raise ColumnValidationError(
            errors=[f"postgres_columns must be a list, got: {type(config).__name__}"]
        )

    errors = []
    for index, data in enumerate(config):
        errors.extend(_validate_column(data, index))
    if errors:
        raise ColumnValidationError(errors=errors)

    columns = [_build_column(data) for data in config]
    loader_logger.debug(f"Decoded {len(columns)} column(s)")
    return columns


def load_columns(file_path: str) -> List[SourceColumn]:
    """
    Load the SourceColumn list from a JSON file.

    Raises:
        ColumnsFileNotFoundError: If the file does not exist
        ColumnsParseError: If the file is not valid UTF-8 encoded JSON
        ColumnValidationError: If the column definitions are invalid
    """
    if not os.path.exists(file_path):
        raise ColumnsFileNotFoundError(file_path=file_path)

    loader_logger.info(f"Loading columns from: {file_path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ColumnsParseError(file_path=file_path, parse_error=str(e))
    except UnicodeDecodeError as e:
        raise ColumnsParseError(file_path=file_path, parse_error=f"Encoding error: {str(e)}")
    except IOError as e:
        raise ColumnsParseError(file_path=file_path, parse_error=f"IO Error: {str(e)}")

    return columns_from_config(config)


def _column_to_dict(column: SourceColumn) -> Dict[str, Any]:
    return {
        'name': column.name,
        'type': column.data_type,
        'is_primary_key': column.is_primary_key,
        'numeric_precision': column.numeric_precision,
        'numeric_scale': column.numeric_scale,
        'character_maximum_length': column.character_maximum_length,
        'datetime_precision': column.datetime_precision,
        'is_nullable': column.is_nullable,
    }


def _derived_to_dicts(columns: Sequence[DerivedColumn]) -> List[Dict[str, str]]:
    return [{'name': c.name, 'type': c.type} for c in columns]


def result_to_dict(result: SchemaResult) -> Dict[str, Any]:
    """Encode a SchemaResult with the data source attribute names."""
    return {
        'id': result.id,
        'postgres_columns': [_column_to_dict(c) for c in result.source_columns],
        'clickhouse_primarykey': list(result.primary_key),
        'clickhouse_guessed_primarykey': list(result.guessed_primary_key),
        'clickhouse_columns': _derived_to_dicts(result.clickhouse_columns),
        'clickhouse_kafkaengine_columns': _derived_to_dicts(result.kafka_engine_columns),
        'clickhouse_kafkaengine_columns_mapping': list(result.kafka_engine_columns_mapping),
        'athena_columns': _derived_to_dicts(result.athena_columns),
    }
