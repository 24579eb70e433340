"""
Base adapter for target type rendering.

Provides abstract interface for target-specific type grammars and the
nullability policy shared by the ClickHouse based targets.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from sqlalchemy.types import TypeEngine

from ..config import NOT_IMPLEMENTED_TYPE
from ..exceptions import UnsupportedSourceTypeError
from ..models import DerivedColumn, SourceColumn
from ..type_maps import map_type

logger = logging.getLogger(__name__)


def should_wrap_nullable(
    is_nullable: bool,
    is_primary_key: bool,
    is_guessed_primary_key: bool
) -> bool:
    """
    Decide whether a rendered type must be wrapped as nullable.

    Declared and guessed primary keys are never nullable.
    """
    return is_nullable and not is_primary_key and not is_guessed_primary_key


class BaseTargetAdapter(ABC):
    """
    Abstract base class for target type rendering.

    Implementations handle ClickHouse, Kafka engine and Athena type grammars.
    Subclasses list the parameterless types in TYPE_NAMES and implement
    render_type() for the rest.

    A strict adapter raises UnsupportedSourceTypeError for unmapped source
    types; a best-effort adapter renders NOT_IMPLEMENTED_TYPE instead and
    keeps going.
    """

    # Exact SQLAlchemy type class -> target type name
    TYPE_NAMES: Dict[Type[TypeEngine], str] = {}

    # Whether the grammar has a Nullable(...) wrapper
    supports_nullable: bool = True

    strict: bool = True

    @property
    @abstractmethod
    def db_type(self) -> str:
        """Return target type identifier."""
        pass

    @abstractmethod
    def render_type(self, sql_type: TypeEngine) -> str:
        """
        Render a resolved SQLAlchemy type in the target grammar.

        Args:
            sql_type: Type returned by map_type()

        Returns:
            Target type expression, without nullable wrapping
        """
        pass

    def _type_name(self, sql_type: TypeEngine) -> Optional[str]:
        """Look up a parameterless type by its exact class."""
        return self.TYPE_NAMES.get(type(sql_type))

    def wrap_nullable(self, type_expression: str) -> str:
        """Wrap a type expression as nullable."""
        return f"Nullable({type_expression})"

    def resolve(self, column: SourceColumn) -> TypeEngine:
        """
        Resolve the SQLAlchemy type of a source column.

        Raises:
            UnsupportedSourceTypeError: If the column type is not mapped
        """
        try:
            return map_type(
                column.data_type,
                column.numeric_precision,
                column.numeric_scale,
                column.datetime_precision
            )
        except UnsupportedSourceTypeError as e:
            raise UnsupportedSourceTypeError(e.psql_type, column_name=column.name) from e

    def derive_column(self, column: SourceColumn, is_guessed_primary_key: bool = False) -> DerivedColumn:
        """
        Build the derived column for a source column.

        Args:
            column: Source column
            is_guessed_primary_key: Whether the column is the guessed primary key

        Returns:
            DerivedColumn with the target type expression, wrapped as nullable
            when the policy says so, and the resolved SQLAlchemy type

        Raises:
            UnsupportedSourceTypeError: If the adapter is strict and the
                column type is not mapped
        """
        sql_type: Optional[TypeEngine] = None
        try:
            sql_type = self.resolve(column)
        except UnsupportedSourceTypeError:
            if self.strict:
                raise
            logger.warning(
                f"[{self.db_type}] Column {column.name}: type {column.data_type} "
                f"not implemented, using {NOT_IMPLEMENTED_TYPE}"
            )
            type_expression = NOT_IMPLEMENTED_TYPE
        else:
            type_expression = self.render_type(sql_type)

        if self.supports_nullable and should_wrap_nullable(
            column.is_nullable, column.is_primary_key, is_guessed_primary_key
        ):
            type_expression = self.wrap_nullable(type_expression)

        return DerivedColumn(name=column.name, type=type_expression, sql_type=sql_type)

    def column_type(self, column: SourceColumn, is_guessed_primary_key: bool = False) -> str:
        """Get the target type expression of a source column."""
        return self.derive_column(column, is_guessed_primary_key).type
