"""
PostgreSQL to ClickHouse schema converter.

Flow:
1. Resolve the declared and guessed primary keys of the column list
2. For each column, derive the ClickHouse type, the Kafka engine type and
   the Kafka engine projection
3. Derive the Athena columns from the ClickHouse columns

The ClickHouse pass fails on the first unsupported source type; the Kafka
engine and Athena derivations emit NOT_IMPLEMENTED_TYPE instead.
"""

import logging
from typing import Iterable, List

from .adapters import AthenaTargetAdapter, ClickHouseTargetAdapter, KafkaEngineTargetAdapter
from .config import CONVERTER_CONFIG
from .logging_utils import converter_logger, log_operation, log_with_context
from .models import DerivedColumn, SchemaResult, SourceColumn
from .primary_keys import resolve_primary_keys

logger = logging.getLogger(__name__)

_clickhouse = ClickHouseTargetAdapter()
_kafka_engine = KafkaEngineTargetAdapter()
_athena = AthenaTargetAdapter()


def postgres_to_clickhouse_type(
    psql_type: str,
    numeric_precision: int = 0,
    numeric_scale: int = 0,
    datetime_precision: int = 0,
    is_nullable: bool = False,
    is_primary_key: bool = False,
    is_guessed_primary_key: bool = False
) -> str:
    """
    Convert a PostgreSQL type to a ClickHouse type string.

    Args:
        psql_type: PostgreSQL udt name
        numeric_precision: Precision for numeric (0 = Decimal(38, 19))
        numeric_scale: Scale for numeric
        datetime_precision: Precision for timestamps
        is_nullable: Whether the source column is nullable
        is_primary_key: Whether the column is part of the declared primary key
        is_guessed_primary_key: Whether the column is the guessed primary key

    Returns:
        ClickHouse type string (e.g., 'Nullable(Decimal(38, 19))')

    Raises:
        UnsupportedSourceTypeError: If psql_type is not supported
    """
    column = SourceColumn(
        name='',
        data_type=psql_type,
        is_primary_key=is_primary_key,
        is_nullable=is_nullable,
        numeric_precision=numeric_precision,
        numeric_scale=numeric_scale,
        datetime_precision=datetime_precision,
    )
    return _clickhouse.column_type(column, is_guessed_primary_key)


def postgres_to_kafka_engine_type(
    psql_type: str,
    datetime_precision: int = 0,
    is_nullable: bool = False,
    is_primary_key: bool = False,
    is_guessed_primary_key: bool = False
) -> str:
    """
    Convert a PostgreSQL type to a ClickHouse Kafka engine type string.

    Never raises: unsupported types yield NOT_IMPLEMENTED_TYPE.
    """
    column = SourceColumn(
        name='',
        data_type=psql_type,
        is_primary_key=is_primary_key,
        is_nullable=is_nullable,
        datetime_precision=datetime_precision,
    )
    return _kafka_engine.column_type(column, is_guessed_primary_key)


def clickhouse_to_athena_type(clickhouse_type: str) -> str:
    """Convert a ClickHouse type string to an Athena type string."""
    return _athena.from_clickhouse_type(clickhouse_type)


def build_kafka_engine_mapping(name: str, psql_type: str) -> str:
    """Build the Kafka engine projection expression of a column."""
    return _kafka_engine.build_mapping(name, psql_type)


def convert_columns(columns: Iterable[SourceColumn]) -> SchemaResult:
    """
    Convert a PostgreSQL column list to ClickHouse, Kafka engine and Athena schemas.

    Every derived list has one entry per source column, in input order.

    Args:
        columns: Source columns, in table order

    Returns:
        SchemaResult

    Raises:
        UnsupportedSourceTypeError: On the first column whose type has no
            ClickHouse mapping

    Example:
        >>> result = convert_columns([SourceColumn('key', 'int4', is_primary_key=True)])
        >>> result.clickhouse_columns[0].type
        'Int32'
    """
    columns = list(columns)
    separator = CONVERTER_CONFIG.get('ID_SEPARATOR', '_')

    with log_operation(converter_logger, 'schema_conversion', column_count=len(columns)):
        keys = resolve_primary_keys(columns)

        clickhouse_columns: List[DerivedColumn] = []
        kafka_engine_columns: List[DerivedColumn] = []
        kafka_engine_columns_mapping: List[str] = []

        for column in columns:
            is_guessed = keys.is_guessed(column)

            clickhouse_column = _clickhouse.derive_column(column, is_guessed)
            kafka_engine_column = _kafka_engine.derive_column(column, is_guessed)

            clickhouse_columns.append(clickhouse_column)
            kafka_engine_columns.append(kafka_engine_column)
            kafka_engine_columns_mapping.append(_kafka_engine.column_mapping(column))

            log_with_context(
                converter_logger,
                'DEBUG',
                f"Mapped {column.name} ({column.data_type}) -> "
                f"{clickhouse_column.type} / {kafka_engine_column.type}",
                column=column.name,
                psql_type=column.data_type,
            )

        athena_columns = [_athena.from_clickhouse_column(c) for c in clickhouse_columns]

        result = SchemaResult(
            id=separator.join(column.name for column in columns),
            source_columns=columns,
            primary_key=keys.primary_key,
            guessed_primary_key=keys.guessed_primary_keys,
            clickhouse_columns=clickhouse_columns,
            kafka_engine_columns=kafka_engine_columns,
            kafka_engine_columns_mapping=kafka_engine_columns_mapping,
            athena_columns=athena_columns,
        )

    logger.debug(
        f"Converted {result.id}: primary key {result.primary_key}, "
        f"guessed {result.guessed_primary_key}"
    )
    return result
