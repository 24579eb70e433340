"""
ClickHouse Kafka engine target adapter.

The Kafka engine table reads AvroConfluent messages, so its columns use the
subset of ClickHouse types the decoder can carry. Unmapped source types do
not fail the schema: the column gets the NOT_IMPLEMENTED_TYPE sentinel.
"""

import logging

from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.types import NUMERIC, TypeEngine

from .clickhouse_adapter import ClickHouseTargetAdapter
from ..models import SourceColumn

logger = logging.getLogger(__name__)

# Best-effort parse applied to zone-aware timestamps delivered as strings
DATETIME_PARSE_FUNCTION = 'parseDateTime64BestEffortOrNull'


class KafkaEngineTargetAdapter(ClickHouseTargetAdapter):
    """
    Kafka engine column types and the projections feeding the target table.

    Differences from ClickHouseTargetAdapter:
    - numeric is delivered as String (precision is not preserved)
    - timestamptz is delivered as String and parsed by the projection
    """

    strict = False

    @property
    def db_type(self) -> str:
        return 'clickhouse_kafka_engine'

    def _render_decimal(self, sql_type: NUMERIC) -> str:
        return 'String'

    def _render_datetime(self, sql_type: TIMESTAMP) -> str:
        if sql_type.timezone:
            return 'String'
        return super()._render_datetime(sql_type)

    def _quote_identifier(self, name: str) -> str:
        """Quote identifier for ClickHouse (uses backticks)."""
        escaped = name.replace('\\', '\\\\').replace('`', '\\`')
        return f"`{escaped}`"

    def column_mapping(self, column: SourceColumn) -> str:
        """
        Build the projection reading one column from the Kafka engine table.

        Zone-aware timestamps arrive as strings and are parsed back to
        DateTime64, aliased to the column name; every other column is
        selected as is.

        Args:
            column: Source column

        Returns:
            ClickHouse SELECT expression for the column
        """
        return self.build_mapping(column.name, column.data_type)

    def build_mapping(self, name: str, psql_type: str) -> str:
        """Build the projection from a column name and its PostgreSQL type."""
        quoted = self._quote_identifier(name)
        if psql_type == 'timestamptz':
            return f"{DATETIME_PARSE_FUNCTION}({quoted}) as {quoted}"
        return quoted
