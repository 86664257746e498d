"""Validation engine: compare a file's attribute schema with a standard table.

Produces exactly one verdict per standard column, in the table's column
order. Data problems (missing field, wrong type, wrong width, unreadable
field metadata) become Error rows; only a missing table or an unusable
schema aborts the run.

The engine is pure: no I/O and no shared state, so independent
(table, schema) pairs can be validated concurrently.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from geoqc.lib.errors import StandardNotFoundError, StructuralError
from geoqc.lib.length import render_length
from geoqc.lib.reconcile import is_length_correct, is_type_correct
from geoqc.lib.schema import AttributeSchema, FieldInfo
from geoqc.lib.standard import (
    ColumnDefinition,
    StandardProject,
    TableDefinition,
    file_base_name,
)

logger = logging.getLogger(__name__)

__all__ = [
    "FIELD_ERROR",
    "NOT_FOUND",
    "ColumnValidationResult",
    "ValidationStatus",
    "validate_column",
    "validate_file",
    "validate_table",
]

NOT_FOUND = "NOT FOUND"
FIELD_ERROR = "ERROR"


class ValidationStatus(Enum):
    """Verdict for one standard column."""

    NORMAL = "Normal"
    ERROR = "Error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ColumnValidationResult:
    """One verdict row."""

    std_column_id: str
    std_column_name: str
    std_type: str
    std_length: str
    found_field_name: str
    field_found: bool
    cur_type: str
    cur_length: str
    type_correct: bool
    length_correct: bool
    status: ValidationStatus

    @property
    def is_normal(self) -> bool:
        return self.status == ValidationStatus.NORMAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serializable dictionary."""
        data = asdict(self)
        data["status"] = self.status.value
        return data


def _missing(column: ColumnDefinition) -> ColumnValidationResult:
    return ColumnValidationResult(
        std_column_id=column.column_id,
        std_column_name=column.column_name,
        std_type=column.declared_type,
        std_length=column.declared_length,
        found_field_name=NOT_FOUND,
        field_found=False,
        cur_type=NOT_FOUND,
        cur_length=NOT_FOUND,
        type_correct=False,
        length_correct=False,
        status=ValidationStatus.ERROR,
    )


def _unreadable(column: ColumnDefinition) -> ColumnValidationResult:
    return ColumnValidationResult(
        std_column_id=column.column_id,
        std_column_name=column.column_name,
        std_type=column.declared_type,
        std_length=column.declared_length,
        found_field_name=column.column_id,
        field_found=True,
        cur_type=FIELD_ERROR,
        cur_length=render_length(0, 0),
        type_correct=False,
        length_correct=False,
        status=ValidationStatus.ERROR,
    )


def validate_column(column: ColumnDefinition, schema: AttributeSchema) -> ColumnValidationResult:
    """Validate one standard column against the file's schema.

    The field is looked up by ``column_id``, never by the display name.
    """
    if column.column_id not in schema:
        return _missing(column)

    try:
        info = FieldInfo.from_value(schema[column.column_id])
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning("Field %s has unreadable metadata: %s", column.column_id, e)
        return _unreadable(column)

    type_correct = is_type_correct(column.standard_type, info.category)
    length_correct = type_correct and is_length_correct(
        column.standard_type, column.declared_size, info
    )

    return ColumnValidationResult(
        std_column_id=column.column_id,
        std_column_name=column.column_name,
        std_type=column.declared_type,
        std_length=column.declared_length,
        found_field_name=column.column_id,
        field_found=True,
        cur_type=info.category.value,
        cur_length=render_length(info.length, info.decimal_count),
        type_correct=type_correct,
        length_correct=length_correct,
        status=ValidationStatus.NORMAL if type_correct and length_correct else ValidationStatus.ERROR,
    )


def _as_schema(schema: Any) -> AttributeSchema:
    if isinstance(schema, AttributeSchema):
        return schema
    if isinstance(schema, Mapping):
        return AttributeSchema(schema)
    raise StructuralError(
        f"Attribute schema must be a mapping of field name to field info, got {type(schema).__name__}",
        suggestion="Build an AttributeSchema from the file reader's field list.",
    )


def validate_table(
    table: Optional[TableDefinition],
    schema: Optional[Union[AttributeSchema, Mapping]],
) -> List[ColumnValidationResult]:
    """Validate every column of ``table`` against ``schema``.

    Args:
        table: Standard table to check against
        schema: Attribute schema of the file (a plain mapping is accepted
            and given case-insensitive lookup)

    Returns:
        One result per standard column, in the table's column order

    Raises:
        StructuralError: If the table or schema is missing or unusable

    Example:
        >>> results = validate_table(roads_table, schema)
        >>> [r.status.value for r in results]
        ['Normal', 'Error']
    """
    if table is None:
        raise StructuralError("No standard table supplied for validation")
    if schema is None:
        raise StructuralError("No attribute schema supplied for validation", table=table.table_id)

    attribute_schema = _as_schema(schema)
    results = [validate_column(column, attribute_schema) for column in table.columns]

    errors = sum(1 for r in results if not r.is_normal)
    logger.info(
        "Validated table %s: %d columns, %d normal, %d errors",
        table.table_id,
        len(results),
        len(results) - errors,
        errors,
        extra={"table_id": table.table_id, "error_count": errors},
    )
    return results


def validate_file(
    project: StandardProject,
    path: Union[str, os.PathLike],
    schema: Optional[Union[AttributeSchema, Mapping]],
) -> List[ColumnValidationResult]:
    """Resolve the standard table for ``path`` and validate ``schema``.

    Raises:
        StandardNotFoundError: If no table id equals the file's base name
        StructuralError: If the schema is missing or unusable
    """
    table = project.find_table_for_file(path)
    if table is None:
        raise StandardNotFoundError(
            f"No standard table matches file '{file_base_name(path)}'",
            file_name=os.fspath(path),
            project=project.name,
        )
    return validate_table(table, schema)
