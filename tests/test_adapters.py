# Tests for adapters - ClickHouse, Kafka engine and Athena type rendering
# Run with: pytest tests/test_adapters.py -v

import logging

import pytest
from sqlalchemy.types import JSON

from psql2ch.adapters import (
    AthenaTargetAdapter,
    ClickHouseTargetAdapter,
    KafkaEngineTargetAdapter,
    should_wrap_nullable,
)
from psql2ch.config import NOT_IMPLEMENTED_TYPE
from psql2ch.exceptions import MappingError, UnsupportedSourceTypeError
from psql2ch.models import DerivedColumn, SourceColumn
from psql2ch.type_maps import map_type


@pytest.fixture
def clickhouse():
    return ClickHouseTargetAdapter()


@pytest.fixture
def kafka_engine():
    return KafkaEngineTargetAdapter()


@pytest.fixture
def athena():
    return AthenaTargetAdapter()


def make_column(data_type, **kwargs):
    """Build a non-key, non-nullable column of the given type."""
    kwargs.setdefault("name", "value")
    return SourceColumn(data_type=data_type, **kwargs)


class TestNullabilityPolicy:
    """Test should_wrap_nullable."""

    @pytest.mark.parametrize("is_nullable,is_primary_key,is_guessed,expected", [
        (True, False, False, True),
        (True, True, False, False),
        (True, False, True, False),
        (True, True, True, False),
        (False, False, False, False),
        (False, True, False, False),
        (False, False, True, False),
    ])
    def test_wrap_only_nullable_non_key_columns(self, is_nullable, is_primary_key, is_guessed, expected):
        """Only nullable columns that are neither declared nor guessed keys are wrapped."""
        assert should_wrap_nullable(is_nullable, is_primary_key, is_guessed) is expected


class TestClickHouseTargetAdapter:
    """Test ClickHouse type rendering."""

    @pytest.mark.parametrize("psql_type,expected", [
        ("int2", "Int16"),
        ("int4", "Int32"),
        ("int8", "Int64"),
        ("varchar", "String"),
        ("bpchar", "String"),
        ("text", "String"),
        ("date", "Date"),
        ("float4", "Float32"),
        ("float8", "Float64"),
        ("bool", "Bool"),
    ])
    def test_base_types(self, clickhouse, psql_type, expected):
        """Parameterless types render to their ClickHouse names."""
        assert clickhouse.column_type(make_column(psql_type)) == expected

    def test_decimal_with_precision(self, clickhouse):
        """numeric(32, 0) renders as Decimal(32, 0)."""
        column = make_column("numeric", numeric_precision=32, numeric_scale=0)
        assert clickhouse.column_type(column) == "Decimal(32, 0)"

    def test_decimal_default_precision(self, clickhouse):
        """numeric without precision renders as Decimal(38, 19)."""
        assert clickhouse.column_type(make_column("numeric")) == "Decimal(38, 19)"

    @pytest.mark.parametrize("psql_type", ["timestamp", "timestamptz"])
    def test_timestamps(self, clickhouse, psql_type):
        """Both timestamp variants render as DateTime64 with the datetime precision."""
        column = make_column(psql_type, datetime_precision=6)
        assert clickhouse.column_type(column) == "DateTime64(6)"

    def test_nullable_column_is_wrapped(self, clickhouse):
        """A nullable ordinary column is wrapped in Nullable(...)."""
        column = make_column("numeric", is_nullable=True)
        assert clickhouse.column_type(column) == "Nullable(Decimal(38, 19))"

    def test_nullable_primary_key_is_not_wrapped(self, clickhouse):
        """A declared primary key is never nullable."""
        column = make_column("int4", is_nullable=True, is_primary_key=True)
        assert clickhouse.column_type(column) == "Int32"

    def test_nullable_guessed_key_is_not_wrapped(self, clickhouse):
        """The guessed primary key is never nullable."""
        column = make_column("int8", name="phc_id", is_nullable=True)
        assert clickhouse.column_type(column, is_guessed_primary_key=True) == "Int64"

    def test_unsupported_type_raises_with_column_name(self, clickhouse):
        """Unsupported types fail, naming the type and the column."""
        with pytest.raises(UnsupportedSourceTypeError) as exc_info:
            clickhouse.column_type(make_column("jsonb", name="payload"))
        assert exc_info.value.psql_type == "jsonb"
        assert exc_info.value.column_name == "payload"
        assert "payload" in str(exc_info.value)

    def test_derive_column_keeps_sql_type(self, clickhouse):
        """derive_column carries the resolved SQLAlchemy type."""
        column = make_column("numeric", name="amount", numeric_precision=10, numeric_scale=2)
        derived = clickhouse.derive_column(column)
        assert derived.name == "amount"
        assert derived.type == "Decimal(10, 2)"
        assert derived.sql_type.precision == 10
        assert derived.sql_type.scale == 2

    def test_render_type_rejects_unrendered_sql_type(self, clickhouse):
        """A SQLAlchemy type outside the type map has no ClickHouse rendering."""
        with pytest.raises(MappingError) as exc_info:
            clickhouse.render_type(JSON())
        assert "JSON" in str(exc_info.value)


class TestKafkaEngineTargetAdapter:
    """Test Kafka engine type rendering and projections."""

    @pytest.mark.parametrize("psql_type,expected", [
        ("int2", "Int16"),
        ("int4", "Int32"),
        ("int8", "Int64"),
        ("numeric", "String"),
        ("varchar", "String"),
        ("bpchar", "String"),
        ("text", "String"),
        ("timestamptz", "String"),
        ("date", "Date"),
        ("float4", "Float32"),
        ("float8", "Float64"),
        ("bool", "Bool"),
    ])
    def test_types(self, kafka_engine, psql_type, expected):
        """Kafka engine types follow ClickHouse except numeric and timestamptz."""
        assert kafka_engine.column_type(make_column(psql_type)) == expected

    def test_numeric_ignores_precision(self, kafka_engine):
        """numeric is a String whatever its precision."""
        column = make_column("numeric", numeric_precision=12, numeric_scale=4)
        assert kafka_engine.column_type(column) == "String"

    def test_timestamp_without_time_zone_keeps_precision(self, kafka_engine):
        """timestamp stays DateTime64 with its precision."""
        column = make_column("timestamp", datetime_precision=6)
        assert kafka_engine.column_type(column) == "DateTime64(6)"

    def test_nullability_policy(self, kafka_engine):
        """Kafka engine types use the same nullability policy as ClickHouse."""
        assert kafka_engine.column_type(make_column("timestamptz", is_nullable=True)) == "Nullable(String)"
        assert kafka_engine.column_type(
            make_column("timestamptz", is_nullable=True, is_primary_key=True)
        ) == "String"

    def test_unsupported_type_yields_sentinel(self, kafka_engine, caplog):
        """Unsupported types yield the sentinel and log a warning instead of failing."""
        with caplog.at_level(logging.WARNING, logger="psql2ch"):
            result = kafka_engine.column_type(make_column("jsonb"))
        assert result == NOT_IMPLEMENTED_TYPE
        assert "jsonb" in caplog.text

    def test_unsupported_nullable_sentinel_is_wrapped(self, kafka_engine):
        """The sentinel is wrapped as nullable under the usual policy."""
        column = make_column("jsonb", is_nullable=True)
        assert kafka_engine.column_type(column) == "Nullable(NotImplementedType!)"

    def test_mapping_timestamptz(self, kafka_engine):
        """timestamptz columns are parsed best-effort and aliased to their name."""
        column = make_column("timestamptz", name="created_at")
        assert kafka_engine.column_mapping(column) == (
            "parseDateTime64BestEffortOrNull(`created_at`) as `created_at`"
        )

    @pytest.mark.parametrize("psql_type", ["int4", "numeric", "timestamp", "text", "jsonb"])
    def test_mapping_other_types(self, kafka_engine, psql_type):
        """Every other column is selected by its quoted name."""
        assert kafka_engine.column_mapping(make_column(psql_type, name="col")) == "`col`"

    def test_mapping_escapes_backticks(self, kafka_engine):
        """Backticks inside a name are escaped."""
        assert kafka_engine.build_mapping("we`ird", "int4") == "`we\\`ird`"


class TestAthenaTargetAdapter:
    """Test Athena type rendering and ClickHouse type decomposition."""

    @pytest.mark.parametrize("clickhouse_type,expected", [
        ("Int16", "int"),
        ("Int32", "int"),
        ("Int64", "int"),
        ("String", "string"),
        ("Float32", "float"),
        ("Float64", "float"),
        ("Bool", "boolean"),
        ("Decimal(32, 0)", "decimal(32,0)"),
        ("Decimal(38, 19)", "decimal(38,19)"),
        ("Decimal(10)", "decimal(10)"),
        ("DateTime64(0)", "timestamp"),
        ("DateTime64(6)", "timestamp"),
        ("Date", "date"),
    ])
    def test_from_clickhouse_type(self, athena, clickhouse_type, expected):
        """Each ClickHouse type decomposes to its Athena counterpart."""
        assert athena.from_clickhouse_type(clickhouse_type) == expected

    @pytest.mark.parametrize("clickhouse_type", [
        "Int32", "String", "Decimal(38, 19)", "DateTime64(3)", "Date", "Bool",
    ])
    def test_nullable_is_unwrapped(self, athena, clickhouse_type):
        """Nullable(X) decomposes like X."""
        assert athena.from_clickhouse_type(f"Nullable({clickhouse_type})") == (
            athena.from_clickhouse_type(clickhouse_type)
        )

    @pytest.mark.parametrize("clickhouse_type", ["UUID", "Array(String)", "", NOT_IMPLEMENTED_TYPE])
    def test_unknown_type_yields_sentinel(self, athena, clickhouse_type):
        """Unknown ClickHouse types yield the sentinel."""
        assert athena.from_clickhouse_type(clickhouse_type) == NOT_IMPLEMENTED_TYPE

    def test_column_type_is_never_nullable(self, athena):
        """Athena has no nullable wrapper."""
        assert athena.column_type(make_column("int4", is_nullable=True)) == "int"

    def test_column_type_unsupported_yields_sentinel(self, athena):
        """Unsupported source types yield the sentinel."""
        assert athena.column_type(make_column("jsonb")) == NOT_IMPLEMENTED_TYPE

    @pytest.mark.parametrize("psql_type,kwargs", [
        ("int2", {}),
        ("int4", {}),
        ("int8", {}),
        ("numeric", {}),
        ("numeric", {"numeric_precision": 32, "numeric_scale": 0}),
        ("varchar", {}),
        ("bpchar", {}),
        ("text", {}),
        ("timestamp", {"datetime_precision": 6}),
        ("timestamptz", {"datetime_precision": 0}),
        ("date", {}),
        ("float4", {}),
        ("float8", {}),
        ("bool", {}),
    ])
    def test_structured_and_textual_paths_agree(self, clickhouse, athena, psql_type, kwargs):
        """Rendering the SQLAlchemy type gives the same result as decomposing the ClickHouse text."""
        column = make_column(psql_type, is_nullable=True, **kwargs)
        clickhouse_column = clickhouse.derive_column(column)
        textual = DerivedColumn(name=clickhouse_column.name, type=clickhouse_column.type)

        assert athena.from_clickhouse_column(clickhouse_column).type == (
            athena.from_clickhouse_column(textual).type
        )

    def test_from_clickhouse_column_keeps_name(self, athena):
        """The Athena column keeps the ClickHouse column name."""
        derived = athena.from_clickhouse_column(DerivedColumn(name="key3_id", type="Decimal(32, 0)"))
        assert derived == DerivedColumn(name="key3_id", type="decimal(32,0)")

    def test_render_type_from_sql_type(self, athena):
        """render_type works directly on a resolved type."""
        assert athena.render_type(map_type("numeric", 12, 4)) == "decimal(12,4)"

    @pytest.mark.parametrize("sql_type", [
        map_type("numeric", -5, 0),
        map_type("numeric", 10, -2),
        map_type("timestamp", datetime_precision=-1),
        JSON(),
    ])
    def test_render_type_without_athena_type_yields_sentinel(self, athena, sql_type):
        """Negative parameters and unknown types yield the sentinel."""
        assert athena.render_type(sql_type) == NOT_IMPLEMENTED_TYPE

    @pytest.mark.parametrize("psql_type,kwargs", [
        ("numeric", {"numeric_precision": -5, "numeric_scale": 0}),
        ("numeric", {"numeric_precision": 10, "numeric_scale": -2}),
        ("timestamp", {"datetime_precision": -1}),
        ("timestamptz", {"datetime_precision": -1}),
    ])
    def test_negative_parameters_agree_with_textual_path(self, clickhouse, athena, psql_type, kwargs):
        """Both Athena paths yield the sentinel for ClickHouse types with negative parameters."""
        clickhouse_column = clickhouse.derive_column(make_column(psql_type, **kwargs))
        textual = DerivedColumn(name=clickhouse_column.name, type=clickhouse_column.type)

        assert athena.from_clickhouse_column(clickhouse_column).type == NOT_IMPLEMENTED_TYPE
        assert athena.from_clickhouse_column(textual).type == NOT_IMPLEMENTED_TYPE
