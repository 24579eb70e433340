"""
ClickHouse target adapter.

Renders the authoritative ClickHouse column types. Unmapped source types
are an error: a ClickHouse schema with an unknown column is not usable.
"""

import logging

from sqlalchemy.dialects.postgresql import DOUBLE_PRECISION, TIMESTAMP
from sqlalchemy.types import (
    BIGINT, BOOLEAN, CHAR, DATE, INTEGER, NUMERIC, REAL, SMALLINT, TEXT,
    VARCHAR, TypeEngine,
)

from .base_adapter import BaseTargetAdapter
from ..exceptions import MappingError

logger = logging.getLogger(__name__)


class ClickHouseTargetAdapter(BaseTargetAdapter):
    """ClickHouse-specific type rendering."""

    TYPE_NAMES = {
        SMALLINT: 'Int16',
        INTEGER: 'Int32',
        BIGINT: 'Int64',
        VARCHAR: 'String',
        CHAR: 'String',
        TEXT: 'String',
        DATE: 'Date',
        REAL: 'Float32',
        DOUBLE_PRECISION: 'Float64',
        BOOLEAN: 'Bool',
    }

    @property
    def db_type(self) -> str:
        return 'clickhouse'

    def render_type(self, sql_type: TypeEngine) -> str:
        """Render a SQLAlchemy type as a ClickHouse type."""
        type_name = self._type_name(sql_type)
        if type_name is not None:
            return type_name

        if isinstance(sql_type, NUMERIC):
            return self._render_decimal(sql_type)

        if isinstance(sql_type, TIMESTAMP):
            return self._render_datetime(sql_type)

        raise MappingError(f"No ClickHouse rendering for {type(sql_type).__name__}")

    def _render_decimal(self, sql_type: NUMERIC) -> str:
        return f"Decimal({sql_type.precision}, {sql_type.scale or 0})"

    def _render_datetime(self, sql_type: TIMESTAMP) -> str:
        return f"DateTime64({sql_type.precision or 0})"
