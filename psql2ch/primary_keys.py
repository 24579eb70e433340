"""
Primary key resolution.

The declared primary key is every column flagged is_primary_key, in input
order. Independently of it, the first column whose name ends with the
identifier suffix ('_id') is guessed as the key: such columns are treated
as non-nullable even when the source schema does not declare them.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import CONVERTER_CONFIG
from .models import SourceColumn

logger = logging.getLogger(__name__)


def is_guessed_primary_key_name(name: str, suffix: Optional[str] = None) -> bool:
    """Return True if the column name follows the identifier naming convention."""
    if suffix is None:
        suffix = CONVERTER_CONFIG.get('GUESSED_PRIMARY_KEY_SUFFIX', '_id')
    return name.endswith(suffix)


@dataclass(frozen=True)
class PrimaryKeyResolution:
    """
    Declared and guessed primary key of a column list.

    Attributes:
        primary_key: Names of the declared primary key columns, in input order
        guessed_primary_key: Name of the guessed key column, if any
    """
    primary_key: List[str] = field(default_factory=list)
    guessed_primary_key: Optional[str] = None

    def is_guessed(self, column: SourceColumn) -> bool:
        """Return True if the column is the guessed primary key."""
        return self.guessed_primary_key is not None and column.name == self.guessed_primary_key

    @property
    def guessed_primary_keys(self) -> List[str]:
        """Guessed key as a list of zero or one name."""
        if self.guessed_primary_key is None:
            return []
        return [self.guessed_primary_key]


def resolve_primary_keys(
    columns: Iterable[SourceColumn],
    suffix: Optional[str] = None
) -> PrimaryKeyResolution:
    """
    Resolve declared and guessed primary keys in a single pass.

    Args:
        columns: Source columns, in table order
        suffix: Identifier suffix (defaults to GUESSED_PRIMARY_KEY_SUFFIX)

    Returns:
        PrimaryKeyResolution
    """
    primary_key: List[str] = []
    guessed: Optional[str] = None

    for column in columns:
        if column.is_primary_key:
            primary_key.append(column.name)
        if guessed is None and is_guessed_primary_key_name(column.name, suffix):
            guessed = column.name

    logger.debug(f"Resolved primary key {primary_key}, guessed {guessed}")
    return PrimaryKeyResolution(primary_key=primary_key, guessed_primary_key=guessed)
