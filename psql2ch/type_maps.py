"""
Type mappings for PostgreSQL source columns to SQLAlchemy types.

The SQLAlchemy type instance returned by map_type() is the resolved
semantic type of a column: every target adapter renders its own type
grammar from it, so precision and scale are decided once here.
"""

from typing import Dict, Type

from sqlalchemy.dialects.postgresql import DOUBLE_PRECISION, TIMESTAMP
from sqlalchemy.types import (
    BIGINT, BOOLEAN, CHAR, DATE, INTEGER, NUMERIC, REAL, SMALLINT, TEXT,
    VARCHAR, TypeEngine,
)

from .config import CONVERTER_CONFIG
from .exceptions import UnsupportedSourceTypeError


# PostgreSQL udt names -> SQLAlchemy types
POSTGRESQL_TYPE_MAP: Dict[str, Type[TypeEngine]] = {
    # Integer types
    'int2': SMALLINT,
    'int4': INTEGER,
    'int8': BIGINT,

    # Fixed-point types
    'numeric': NUMERIC,

    # String types
    'varchar': VARCHAR,
    'bpchar': CHAR,
    'text': TEXT,

    # Date/Time types
    'timestamp': TIMESTAMP,
    'timestamptz': TIMESTAMP,
    'date': DATE,

    # Floating point types
    'float4': REAL,
    'float8': DOUBLE_PRECISION,

    # Boolean
    'bool': BOOLEAN,
}

# Types carrying a time zone
TIMEZONE_AWARE_TYPES = frozenset({'timestamptz'})


def is_supported_type(psql_type: str) -> bool:
    """Return True if the PostgreSQL type has an entry in the type map."""
    return psql_type in POSTGRESQL_TYPE_MAP


def map_type(
    psql_type: str,
    numeric_precision: int = 0,
    numeric_scale: int = 0,
    datetime_precision: int = 0
) -> TypeEngine:
    """
    Map a PostgreSQL type to a SQLAlchemy type with parameters.

    Lookup is an exact, case-sensitive match on the udt name.

    Args:
        psql_type: PostgreSQL udt name (e.g., 'int4', 'numeric', 'timestamptz')
        numeric_precision: Precision for numeric; 0 means unspecified
        numeric_scale: Scale for numeric
        datetime_precision: Fractional seconds precision for timestamps

    Returns:
        SQLAlchemy type instance

    Raises:
        UnsupportedSourceTypeError: If psql_type is not in POSTGRESQL_TYPE_MAP

    Examples:
        >>> map_type('numeric')
        NUMERIC(precision=38, scale=19)
        >>> map_type('timestamptz', datetime_precision=6)
        TIMESTAMP(timezone=True, precision=6)
    """
    type_class = POSTGRESQL_TYPE_MAP.get(psql_type)
    if type_class is None:
        raise UnsupportedSourceTypeError(psql_type)

    if type_class is NUMERIC:
        if not numeric_precision:
            numeric_precision = CONVERTER_CONFIG.get('DEFAULT_DECIMAL_PRECISION', 38)
            numeric_scale = CONVERTER_CONFIG.get('DEFAULT_DECIMAL_SCALE', 19)
        return NUMERIC(precision=numeric_precision, scale=numeric_scale or 0)

    if type_class is TIMESTAMP:
        return TIMESTAMP(
            timezone=psql_type in TIMEZONE_AWARE_TYPES,
            precision=datetime_precision or 0
        )

    return type_class()
