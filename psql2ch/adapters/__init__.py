"""
Target adapters rendering column types for each derived schema.
"""

from .base_adapter import BaseTargetAdapter, should_wrap_nullable
from .clickhouse_adapter import ClickHouseTargetAdapter
from .kafka_engine_adapter import KafkaEngineTargetAdapter
from .athena_adapter import AthenaTargetAdapter

__all__ = [
    'BaseTargetAdapter',
    'ClickHouseTargetAdapter',
    'KafkaEngineTargetAdapter',
    'AthenaTargetAdapter',
    'should_wrap_nullable',
]
