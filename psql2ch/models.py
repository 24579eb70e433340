"""
Data model for schema conversion.

Provides:
- SourceColumn: a PostgreSQL column description supplied by the caller
- DerivedColumn: a column of one of the derived schemas
- SchemaResult: everything produced by one conversion
"""

from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.types import TypeEngine


@dataclass(frozen=True)
class SourceColumn:
    """
    PostgreSQL column as described by information_schema.

    Attributes:
        name: Column name, unique within a table
        data_type: PostgreSQL udt name (int4, numeric, timestamptz, ...)
        is_primary_key: Whether the column belongs to the declared primary key
        is_nullable: Whether the column accepts NULL
        numeric_precision: Precision for numeric columns (0 = unspecified)
        numeric_scale: Scale for numeric columns
        datetime_precision: Fractional seconds precision for timestamps
        character_maximum_length: Length for character columns (not used by mappings)
    """
    name: str
    data_type: str
    is_primary_key: bool = False
    is_nullable: bool = False
    numeric_precision: int = 0
    numeric_scale: int = 0
    datetime_precision: int = 0
    character_maximum_length: int = 0


@dataclass(frozen=True)
class DerivedColumn:
    """
    Column of a derived schema.

    Attributes:
        name: Column name, copied from the source column
        type: Type expression in the target grammar
        sql_type: Resolved SQLAlchemy type the expression was rendered from, if known
    """
    name: str
    type: str
    sql_type: Optional[TypeEngine] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class SchemaResult:
    """
    Result of converting a PostgreSQL column list.

    All column lists have the length of source_columns and keep its order.
    """
    id: str
    source_columns: List[SourceColumn]
    primary_key: List[str]
    guessed_primary_key: List[str]
    clickhouse_columns: List[DerivedColumn]
    kafka_engine_columns: List[DerivedColumn]
    kafka_engine_columns_mapping: List[str]
    athena_columns: List[DerivedColumn]
