"""Standard (expected) schema definitions.

A standard project groups tables into categories. Each table lists the
columns a conforming file must carry. A file is bound to its table by
case-insensitive equality of the table id and the file's base name.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple, Union

from geoqc.lib.errors import ConfigurationError
from geoqc.lib.length import parse_length
from geoqc.lib.reconcile import StandardType, resolve_standard_type

logger = logging.getLogger(__name__)

__all__ = [
    "ColumnDefinition",
    "StandardCategory",
    "StandardProject",
    "TableDefinition",
    "file_base_name",
]


def file_base_name(path: Union[str, os.PathLike]) -> str:
    """Return a file's name without directory or final extension.

    Both ``/`` and ``\\`` are treated as separators so paths recorded on
    Windows resolve the same way everywhere.

    Example:
        >>> file_base_name("C:\\\\gis\\\\ROADS.shp")
        'ROADS'
    """
    name = re.split(r"[\\/]", os.fspath(path))[-1]
    return os.path.splitext(name)[0]


@dataclass(frozen=True)
class ColumnDefinition:
    """One expected column of a standard table.

    ``column_id`` is the key used to find the field in the file;
    ``column_name`` is only a human label.
    """

    column_id: str
    column_name: str = ""
    declared_type: str = ""
    declared_length: str = ""
    required: bool = False
    key_role: str = ""
    standard_type: StandardType = field(init=False, repr=False, compare=False)
    declared_size: Tuple[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.column_id or not str(self.column_id).strip():
            raise ConfigurationError("Column id is required", field="column_id", value=self.column_id)
        object.__setattr__(self, "standard_type", resolve_standard_type(self.declared_type))
        object.__setattr__(self, "declared_size", parse_length(self.declared_length))


@dataclass(frozen=True)
class TableDefinition:
    """A standard table: an ordered tuple of expected columns."""

    table_id: str
    table_name: str = ""
    columns: Tuple[ColumnDefinition, ...] = ()

    def __post_init__(self) -> None:
        if not self.table_id or not str(self.table_id).strip():
            raise ConfigurationError("Table id is required", field="table_id", value=self.table_id)
        object.__setattr__(self, "columns", tuple(self.columns))

        seen = {}
        for column in self.columns:
            key = column.column_id.lower()
            if key in seen:
                raise ConfigurationError(
                    f"Duplicate column id '{column.column_id}'",
                    table=self.table_id,
                    field="column_id",
                    value=column.column_id,
                    suggestion=f"Column ids are compared case-insensitively; '{seen[key]}' already exists",
                )
            seen[key] = column.column_id

    def matches(self, name: str) -> bool:
        """Case-insensitive exact comparison of the table id with ``name``."""
        return self.table_id.lower() == str(name).lower()

    def __len__(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class StandardCategory:
    """A named group of standard tables."""

    name: str
    tables: Tuple[TableDefinition, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", tuple(self.tables))


@dataclass(frozen=True)
class StandardProject:
    """All standard tables a project validates files against.

    Table ids are unique across the project, across categories.
    """

    name: str
    categories: Tuple[StandardCategory, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))

        seen = {}
        for category in self.categories:
            for table in category.tables:
                key = table.table_id.lower()
                if key in seen:
                    raise ConfigurationError(
                        f"Duplicate table id '{table.table_id}' in category '{category.name}'",
                        field="table_id",
                        value=table.table_id,
                        suggestion=f"Already defined in category '{seen[key]}'",
                    )
                seen[key] = category.name

    @classmethod
    def from_tables(cls, name: str, tables: Sequence[TableDefinition], category: str = "default") -> "StandardProject":
        """Build a single-category project."""
        return cls(name=name, categories=(StandardCategory(category, tuple(tables)),))

    @property
    def tables(self) -> Iterator[TableDefinition]:
        """Every table in category order."""
        for category in self.categories:
            yield from category.tables

    def find_table(self, table_id: str) -> Optional[TableDefinition]:
        """Find a table by id, case-insensitively. Never a fuzzy match."""
        for table in self.tables:
            if table.matches(table_id):
                return table
        return None

    def find_table_for_file(self, path: Union[str, os.PathLike]) -> Optional[TableDefinition]:
        """Find the table whose id equals the file's base name."""
        base_name = file_base_name(path)
        table = self.find_table(base_name)
        if table is None:
            logger.debug("No standard table for file %s (base name %s)", path, base_name)
        return table
