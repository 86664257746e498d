"""Attribute schema of a loaded vector file.

The file reader collaborator turns the file's attribute storage into an
``AttributeSchema``: an ordered, case-insensitive mapping from field name to
``FieldInfo``. Mapping native storage types onto the five runtime categories
is the reader's job; this module only holds the result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

import pandas as pd

from geoqc.lib.length import parse_length

logger = logging.getLogger(__name__)

__all__ = [
    "AttributeSchema",
    "FieldCategory",
    "FieldInfo",
    "schema_from_dataframe",
]

# dBASE stores dates as YYYYMMDD and logicals as a single character
DATE_WIDTH = 8
LOGICAL_WIDTH = 1


class FieldCategory(Enum):
    """Runtime type category of an attribute field."""

    CHARACTER = "Character"
    NUMERIC = "Numeric"
    DATE = "Date"
    LOGICAL = "Logical"
    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, value: Union[str, "FieldCategory", None]) -> "FieldCategory":
        """Case-insensitive lookup; unrecognized names map to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNKNOWN
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == normalized or member.name.lower() == normalized:
                return member
        logger.warning("Unrecognized field category %r treated as %s", value, cls.UNKNOWN.value)
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldInfo:
    """Metadata of one attribute field as stored in the file."""

    category: FieldCategory
    length: int = 0
    decimal_count: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.category, FieldCategory):
            object.__setattr__(self, "category", FieldCategory.from_name(self.category))
        if int(self.length) < 0:
            raise ValueError(f"length must be >= 0, got {self.length}")
        if int(self.decimal_count) < 0:
            raise ValueError(f"decimal_count must be >= 0, got {self.decimal_count}")
        object.__setattr__(self, "length", int(self.length))
        object.__setattr__(self, "decimal_count", int(self.decimal_count))

    @classmethod
    def from_value(cls, value: Any) -> "FieldInfo":
        """Coerce a FieldInfo, a dict, or an object with matching attributes.

        Dicts may use ``type``/``category``, ``length`` and
        ``decimals``/``decimal_count`` keys.

        Raises:
            TypeError: If the value has no category information
            ValueError: If length or decimal count is negative or not a number
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            category = value.get("category", value.get("type"))
            if category is None:
                raise TypeError("field metadata has no category or type")
            return cls(
                category=FieldCategory.from_name(category),
                length=value.get("length", 0) or 0,
                decimal_count=value.get("decimal_count", value.get("decimals", 0)) or 0,
            )
        if hasattr(value, "category"):
            return cls(
                category=FieldCategory.from_name(value.category),
                length=getattr(value, "length", 0),
                decimal_count=getattr(value, "decimal_count", 0),
            )
        raise TypeError(f"cannot read field metadata from {type(value).__name__}")


class AttributeSchema(Mapping):
    """Ordered field name -> FieldInfo mapping with case-insensitive lookup.

    Iteration yields field names as the file spells them, in file order.

    Example:
        >>> schema = AttributeSchema([("NAME", FieldInfo(FieldCategory.CHARACTER, 50))])
        >>> schema["name"].length
        50
    """

    def __init__(
        self,
        fields: Union[Mapping, Iterable[Tuple[str, Any]], None] = None,
    ) -> None:
        self._fields: Dict[str, Tuple[str, Any]] = {}
        if fields is None:
            return
        items = fields.items() if isinstance(fields, Mapping) else fields
        for name, info in items:
            key = str(name).lower()
            if key in self._fields:
                logger.warning(
                    "Duplicate field %r (already have %r); keeping the first",
                    name,
                    self._fields[key][0],
                )
                continue
            self._fields[key] = (str(name), info)

    def __getitem__(self, name: str) -> Any:
        return self._fields[str(name).lower()][1]

    def __contains__(self, name: object) -> bool:
        return str(name).lower() in self._fields

    def __iter__(self) -> Iterator[str]:
        return (stored for stored, _ in self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def field_name(self, name: str) -> str:
        """Return the field name as stored in the file."""
        return self._fields[str(name).lower()][0]

    def __repr__(self) -> str:
        return f"AttributeSchema({list(self)!r})"


def _category_for_dtype(dtype: Any) -> FieldCategory:
    if pd.api.types.is_bool_dtype(dtype):
        return FieldCategory.LOGICAL
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return FieldCategory.DATE
    if pd.api.types.is_numeric_dtype(dtype):
        return FieldCategory.NUMERIC
    if pd.api.types.is_string_dtype(dtype) or pd.api.types.is_object_dtype(dtype):
        return FieldCategory.CHARACTER
    return FieldCategory.UNKNOWN


def schema_from_dataframe(
    df: pd.DataFrame,
    widths: Optional[Mapping] = None,
) -> AttributeSchema:
    """Build an AttributeSchema from a pandas DataFrame.

    Frames carry no declared widths, so pass ``widths`` (column name ->
    length text such as ``"9,2"``) where they are known. Otherwise character
    widths are measured from the data, numeric widths are 0, and dates and
    logicals get their dBASE widths.

    Args:
        df: Attribute table as a DataFrame
        widths: Optional declared widths keyed by column name

    Returns:
        AttributeSchema in DataFrame column order
    """
    declared = {str(k).lower(): v for k, v in (widths or {}).items()}
    fields = []

    for column in df.columns:
        series = df[column]
        category = _category_for_dtype(series.dtype)

        key = str(column).lower()
        if key in declared:
            length, decimals = parse_length(str(declared[key]))
        elif category == FieldCategory.CHARACTER:
            measured = series.dropna().astype(str).str.len().max()
            length, decimals = (0 if pd.isna(measured) else int(measured)), 0
        elif category == FieldCategory.DATE:
            length, decimals = DATE_WIDTH, 0
        elif category == FieldCategory.LOGICAL:
            length, decimals = LOGICAL_WIDTH, 0
        else:
            length, decimals = 0, 0

        fields.append((str(column), FieldInfo(category, length, decimals)))

    logger.debug("Built attribute schema with %d fields from DataFrame", len(fields))
    return AttributeSchema(fields)
