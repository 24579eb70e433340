"""
Athena target adapter.

Athena has no nullable wrapper and coarser numeric types. Types are
rendered from the resolved SQLAlchemy type when it is known, or decomposed
from an already rendered ClickHouse type string otherwise.
"""

import logging
import re
from typing import Optional

from sqlalchemy.dialects.postgresql import DOUBLE_PRECISION, TIMESTAMP
from sqlalchemy.types import (
    BIGINT, BOOLEAN, CHAR, DATE, INTEGER, NUMERIC, REAL, SMALLINT, TEXT,
    VARCHAR, TypeEngine,
)

from .base_adapter import BaseTargetAdapter
from ..config import NOT_IMPLEMENTED_TYPE
from ..models import DerivedColumn

logger = logging.getLogger(__name__)

NULLABLE_PATTERN = re.compile(r'Nullable\((?P<type>.+)\)')
DECIMAL_PS_PATTERN = re.compile(r'Decimal\((?P<precision>\d+), (?P<scale>\d+)\)')
DECIMAL_P_PATTERN = re.compile(r'Decimal\((?P<precision>\d+)\)')
DATETIME64_PATTERN = re.compile(r'DateTime64\(\d+\)')

# ClickHouse base type -> Athena type
CLICKHOUSE_TO_ATHENA = {
    'Int16': 'int',
    'Int32': 'int',
    'Int64': 'int',
    'String': 'string',
    'Float32': 'float',
    'Float64': 'float',
    'Bool': 'boolean',
}


class AthenaTargetAdapter(BaseTargetAdapter):
    """Athena-specific type rendering."""

    TYPE_NAMES = {
        SMALLINT: 'int',
        INTEGER: 'int',
        BIGINT: 'int',
        VARCHAR: 'string',
        CHAR: 'string',
        TEXT: 'string',
        DATE: 'date',
        REAL: 'float',
        DOUBLE_PRECISION: 'float',
        BOOLEAN: 'boolean',
    }

    supports_nullable = False
    strict = False

    @property
    def db_type(self) -> str:
        return 'athena'

    def render_type(self, sql_type: TypeEngine) -> str:
        """Render a SQLAlchemy type as an Athena type."""
        type_name = self._type_name(sql_type)
        if type_name is not None:
            return type_name

        # Negative parameters render ClickHouse types the decomposer rejects
        if isinstance(sql_type, NUMERIC):
            if sql_type.precision >= 0 and sql_type.scale >= 0:
                return f"decimal({sql_type.precision},{sql_type.scale})"
        elif isinstance(sql_type, TIMESTAMP) and (sql_type.precision or 0) >= 0:
            return 'timestamp'

        logger.warning(f"No Athena rendering for {sql_type!r}")
        return NOT_IMPLEMENTED_TYPE

    def from_clickhouse_type(self, clickhouse_type: str) -> str:
        """
        Decompose a rendered ClickHouse type into an Athena type.

        Nullable(...) is unwrapped first; then base names, two-parameter
        decimals, one-parameter decimals, DateTime64 and Date are matched
        in that order.

        Args:
            clickhouse_type: ClickHouse type expression (e.g., 'Nullable(Decimal(38, 19))')

        Returns:
            Athena type, or NOT_IMPLEMENTED_TYPE when nothing matches

        Examples:
            >>> AthenaTargetAdapter().from_clickhouse_type('Nullable(Int32)')
            'int'
            >>> AthenaTargetAdapter().from_clickhouse_type('Decimal(32, 0)')
            'decimal(32,0)'
        """
        match = NULLABLE_PATTERN.search(clickhouse_type)
        if match:
            clickhouse_type = match.group('type')

        athena_type = CLICKHOUSE_TO_ATHENA.get(clickhouse_type)
        if athena_type is not None:
            return athena_type

        match = DECIMAL_PS_PATTERN.search(clickhouse_type)
        if match:
            return f"decimal({match.group('precision')},{match.group('scale')})"

        match = DECIMAL_P_PATTERN.search(clickhouse_type)
        if match:
            return f"decimal({match.group('precision')})"

        if DATETIME64_PATTERN.search(clickhouse_type):
            return 'timestamp'

        if clickhouse_type == 'Date':
            return 'date'

        logger.warning(f"No Athena type for ClickHouse type {clickhouse_type}")
        return NOT_IMPLEMENTED_TYPE

    def from_clickhouse_column(self, column: DerivedColumn) -> DerivedColumn:
        """
        Derive the Athena column of a ClickHouse column.

        Uses the resolved SQLAlchemy type carried by the ClickHouse column
        when present, and decomposes its type string otherwise.
        """
        sql_type: Optional[TypeEngine] = column.sql_type
        if sql_type is not None:
            athena_type = self.render_type(sql_type)
        else:
            athena_type = self.from_clickhouse_type(column.type)
        return DerivedColumn(name=column.name, type=athena_type, sql_type=sql_type)
