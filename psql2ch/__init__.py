"""
PostgreSQL column schema conversion.

Derives, from a PostgreSQL column list:
- ClickHouse columns (authoritative, fails on unsupported types)
- ClickHouse Kafka engine columns and their projection expressions
- Athena columns
plus the declared and guessed primary keys.
"""

from .models import SourceColumn, DerivedColumn, SchemaResult
from .exceptions import (
    Psql2ChError,
    MappingError,
    UnsupportedSourceTypeError,
    ConfigError,
    ColumnsFileNotFoundError,
    ColumnsParseError,
    ColumnValidationError,
)
from .type_maps import POSTGRESQL_TYPE_MAP, map_type
from .primary_keys import PrimaryKeyResolution, resolve_primary_keys
from .adapters import (
    AthenaTargetAdapter,
    BaseTargetAdapter,
    ClickHouseTargetAdapter,
    KafkaEngineTargetAdapter,
)
from .converter import (
    build_kafka_engine_mapping,
    clickhouse_to_athena_type,
    convert_columns,
    postgres_to_clickhouse_type,
    postgres_to_kafka_engine_type,
)
from .loader import column_from_dict, columns_from_config, load_columns, result_to_dict

__all__ = [
    'SourceColumn',
    'DerivedColumn',
    'SchemaResult',
    'Psql2ChError',
    'MappingError',
    'UnsupportedSourceTypeError',
    'ConfigError',
    'ColumnsFileNotFoundError',
    'ColumnsParseError',
    'ColumnValidationError',
    'POSTGRESQL_TYPE_MAP',
    'map_type',
    'PrimaryKeyResolution',
    'resolve_primary_keys',
    'BaseTargetAdapter',
    'ClickHouseTargetAdapter',
    'KafkaEngineTargetAdapter',
    'AthenaTargetAdapter',
    'convert_columns',
    'postgres_to_clickhouse_type',
    'postgres_to_kafka_engine_type',
    'clickhouse_to_athena_type',
    'build_kafka_engine_mapping',
    'column_from_dict',
    'columns_from_config',
    'load_columns',
    'result_to_dict',
]
