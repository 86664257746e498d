"""Type and length reconciliation between standard and file.

Declared standard types are open-ended strings. Two carry fixed meaning:
``VARCHAR2`` only accepts Character fields and ``NUMBER`` only accepts
Numeric fields. Any other declared type must literally equal the field's
category name. Comparisons are case-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from geoqc.lib.schema import FieldCategory, FieldInfo

__all__ = [
    "StandardType",
    "TypeFamily",
    "is_length_correct",
    "is_type_correct",
    "resolve_standard_type",
]

CHARACTER_TYPE = "VARCHAR2"
NUMERIC_TYPE = "NUMBER"


class TypeFamily(Enum):
    """How a declared standard type is matched against a field."""

    CHARACTER_LIKE = "character_like"  # width must match
    NUMERIC_LIKE = "numeric_like"  # precision and scale must match
    OTHER = "other"  # literal category match, no width rule


@dataclass(frozen=True)
class StandardType:
    """A declared standard type resolved into its matching family."""

    name: str
    family: TypeFamily

    def accepts(self, category: Union[FieldCategory, str]) -> bool:
        """Whether a field of ``category`` has the right type."""
        category = FieldCategory.from_name(category)
        if self.family == TypeFamily.CHARACTER_LIKE:
            return category == FieldCategory.CHARACTER
        if self.family == TypeFamily.NUMERIC_LIKE:
            return category == FieldCategory.NUMERIC
        return self.name.strip().lower() == category.value.lower()

    def __str__(self) -> str:
        return self.name


def resolve_standard_type(name: str) -> StandardType:
    """Resolve a declared type string once, at definition load time.

    Example:
        >>> resolve_standard_type("varchar2").family
        <TypeFamily.CHARACTER_LIKE: 'character_like'>
    """
    normalized = (name or "").strip().upper()
    if normalized == CHARACTER_TYPE:
        return StandardType(name, TypeFamily.CHARACTER_LIKE)
    if normalized == NUMERIC_TYPE:
        return StandardType(name, TypeFamily.NUMERIC_LIKE)
    return StandardType(name or "", TypeFamily.OTHER)


def is_type_correct(
    std_type: Union[StandardType, str],
    category: Union[FieldCategory, str],
) -> bool:
    """Check a field category against a declared standard type."""
    if not isinstance(std_type, StandardType):
        std_type = resolve_standard_type(std_type)
    return std_type.accepts(category)


def is_length_correct(
    std_type: Union[StandardType, str],
    declared: Tuple[int, int],
    field: FieldInfo,
) -> bool:
    """Check a field's width against the declared ``(precision, scale)``.

    Only meaningful once the type is known to be correct; a wrong type
    always yields False here.
    """
    if not isinstance(std_type, StandardType):
        std_type = resolve_standard_type(std_type)
    if not std_type.accepts(field.category):
        return False

    precision, scale = declared
    if std_type.family == TypeFamily.CHARACTER_LIKE:
        return precision == field.length
    if std_type.family == TypeFamily.NUMERIC_LIKE:
        return precision == field.length and scale == field.decimal_count
    return True
