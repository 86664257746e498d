"""YAML loaders for standards and attribute manifests.

Standards are authored as YAML so they can live next to the data they
describe:

    project: Road survey 2025
    categories:
      - name: Transport
        tables:
          - id: ROADS
            name: Road centerlines
            columns:
              - {id: NAME, name: Road name, type: VARCHAR2, length: 50}
              - {id: AREA, name: Paved area, type: NUMBER, length: "9,2"}

A single-category file may list ``tables`` at the top level instead of
``categories``.

An attribute manifest is the field list a file reader captured from a
vector file:

    file: ROADS.shp
    fields:
      - {name: NAME, type: Character, length: 50}
      - {name: AREA, type: Numeric, length: 9, decimals: 2}

JSON is accepted for both since it parses as YAML.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from geoqc.lib.errors import StandardsConfigError
from geoqc.lib.length import parse_length
from geoqc.lib.schema import AttributeSchema, FieldCategory, FieldInfo
from geoqc.lib.standard import (
    ColumnDefinition,
    StandardCategory,
    StandardProject,
    TableDefinition,
)

logger = logging.getLogger(__name__)

__all__ = [
    "AttributeManifest",
    "load_attribute_manifest",
    "load_standards",
    "manifest_from_dict",
    "parse_column_rows",
    "standards_from_dict",
]

DEFAULT_CATEGORY = "default"
DEFAULT_TYPE = "VARCHAR2"
DEFAULT_LENGTH = "50"


# ============================================
# Pydantic Configuration Models
# ============================================


class _StrictModel(BaseModel):
    """Unknown keys are rejected so a misspelled key names its location."""

    model_config = ConfigDict(extra="forbid")


class ColumnConfig(_StrictModel):
    """One column entry of a standards file."""

    id: str = Field(..., min_length=1, description="Column id, the field name in the file")
    name: str = Field(default="", description="Display name")
    type: str = Field(default=DEFAULT_TYPE, description="Declared type (VARCHAR2, NUMBER, ...)")
    length: str = Field(default="", description="Declared length, '50' or '9,2'")
    required: bool = Field(default=False, description="Not-null flag")
    key: str = Field(default="", description="Key marker (PK, FK, ...)")

    @field_validator("id", "length", "key", "name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """YAML reads 50 or 2024 as an int; ids and lengths are text."""
        if v is None:
            return ""
        return str(v).strip()

    @model_validator(mode="after")
    def warn_unparsable_length(self) -> "ColumnConfig":
        """Unparsable lengths are allowed but never match a width."""
        if self.length not in ("", "0", "0,0") and parse_length(self.length) == (0, 0):
            logger.warning("Column %s has unparsable length %r; no width will be enforced", self.id, self.length)
        return self


class TableConfig(_StrictModel):
    """One table entry of a standards file."""

    id: str = Field(..., min_length=1, description="Table id, matched against file base names")
    name: str = Field(default="", description="Display name")
    columns: List[ColumnConfig] = Field(default_factory=list)

    @field_validator("id", "name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """A file named 2024.shp reads as the int 2024."""
        if v is None:
            return ""
        return str(v).strip()

    @model_validator(mode="after")
    def validate_unique_columns(self) -> "TableConfig":
        """Column ids must be unique, ignoring case."""
        seen = set()
        for column in self.columns:
            key = column.id.lower()
            if key in seen:
                raise ValueError(f"duplicate column id '{column.id}' in table '{self.id}'")
            seen.add(key)
        return self


class CategoryConfig(_StrictModel):
    """A named group of tables."""

    name: str = Field(..., min_length=1)
    tables: List[TableConfig] = Field(default_factory=list)


class ProjectConfig(_StrictModel):
    """Top level of a standards file."""

    project: str = Field(default="", description="Project name")
    categories: List[CategoryConfig] = Field(default_factory=list)
    tables: List[TableConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_tables(self) -> "ProjectConfig":
        """Table ids must be unique across the whole project, ignoring case."""
        seen = set()
        all_tables = list(self.tables) + [t for c in self.categories for t in c.tables]
        for table in all_tables:
            key = table.id.lower()
            if key in seen:
                raise ValueError(f"duplicate table id '{table.id}'")
            seen.add(key)
        return self


class FieldConfig(_StrictModel):
    """One field entry of an attribute manifest."""

    name: str = Field(..., min_length=1)
    type: str = Field(default=FieldCategory.UNKNOWN.value, description="Character, Numeric, Date, Logical")
    length: int = Field(default=0, ge=0)
    decimals: int = Field(default=0, ge=0)


class ManifestConfig(_StrictModel):
    """Top level of an attribute manifest."""

    file: str = Field(..., min_length=1, description="Name of the vector file the fields came from")
    fields: List[FieldConfig] = Field(default_factory=list)


@dataclass(frozen=True)
class AttributeManifest:
    """A captured attribute schema together with its source file name."""

    file_name: str
    schema: AttributeSchema


# ============================================
# Loading
# ============================================


def _format_issues(error: ValidationError) -> List[str]:
    issues = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        issues.append(f"{location}: {err.get('msg', '')}" if location else err.get("msg", ""))
    return issues


def _read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise StandardsConfigError(f"File not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StandardsConfigError(f"Invalid YAML: {e}", path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise StandardsConfigError(f"Cannot read {path}: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise StandardsConfigError("Expected a mapping at the top level", path=str(path))
    return data


def _to_table(config: TableConfig) -> TableDefinition:
    return TableDefinition(
        table_id=config.id,
        table_name=config.name,
        columns=tuple(
            ColumnDefinition(
                column_id=c.id,
                column_name=c.name,
                declared_type=c.type,
                declared_length=c.length,
                required=c.required,
                key_role=c.key,
            )
            for c in config.columns
        ),
    )


def standards_from_dict(config: Dict[str, Any], source: Optional[str] = None) -> StandardProject:
    """Create a StandardProject from a parsed standards mapping.

    Args:
        config: Parsed YAML/JSON content
        source: Where the mapping came from, for error messages

    Raises:
        StandardsConfigError: If the mapping is not a valid standards file
    """
    try:
        parsed = ProjectConfig.model_validate(config)
    except ValidationError as e:
        raise StandardsConfigError(
            "Invalid standards configuration",
            path=source,
            issues=_format_issues(e),
        ) from e

    categories = [
        StandardCategory(name=c.name, tables=tuple(_to_table(t) for t in c.tables))
        for c in parsed.categories
    ]
    if parsed.tables:
        categories.insert(0, StandardCategory(DEFAULT_CATEGORY, tuple(_to_table(t) for t in parsed.tables)))

    project = StandardProject(name=parsed.project, categories=tuple(categories))
    logger.debug(
        "Loaded standards project %r: %d categories, %d tables",
        project.name,
        len(project.categories),
        sum(1 for _ in project.tables),
    )
    return project


def load_standards(path: Union[str, Path]) -> StandardProject:
    """Load a standards project from a YAML or JSON file.

    Raises:
        StandardsConfigError: If the file is missing or invalid
    """
    return standards_from_dict(_read_yaml(path), source=str(path))


def manifest_from_dict(config: Dict[str, Any], source: Optional[str] = None) -> AttributeManifest:
    """Create an AttributeManifest from a parsed manifest mapping."""
    try:
        parsed = ManifestConfig.model_validate(config)
    except ValidationError as e:
        raise StandardsConfigError(
            "Invalid attribute manifest",
            path=source,
            issues=_format_issues(e),
        ) from e

    schema = AttributeSchema(
        (f.name, FieldInfo(FieldCategory.from_name(f.type), f.length, f.decimals))
        for f in parsed.fields
    )
    return AttributeManifest(file_name=parsed.file, schema=schema)


def load_attribute_manifest(path: Union[str, Path]) -> AttributeManifest:
    """Load an attribute manifest from a YAML or JSON file.

    Raises:
        StandardsConfigError: If the file is missing or invalid
    """
    return manifest_from_dict(_read_yaml(path), source=str(path))


# ============================================
# Pasted column rows
# ============================================


def _cell(cells: List[str], index: int, default: str) -> str:
    if index < len(cells) and cells[index].strip():
        return cells[index].strip()
    return default


def parse_column_rows(text: Optional[str]) -> List[ColumnDefinition]:
    """Parse tab-separated column rows copied from a spreadsheet.

    Each line is ``id<TAB>name<TAB>type<TAB>length``. Lines with fewer than
    two cells are skipped; blank cells fall back to defaults.

    Example:
        >>> cols = parse_column_rows("NAME\\tRoad name\\tVARCHAR2\\t50")
        >>> cols[0].declared_length
        '50'
    """
    columns: List[ColumnDefinition] = []
    if not text or not text.strip():
        return columns

    for line in text.strip().splitlines():
        if not line.strip():
            continue
        cells = line.split("\t")
        if len(cells) < 2:
            continue

        index = len(columns)
        columns.append(
            ColumnDefinition(
                column_id=_cell(cells, 0, f"COL_{index + 1}"),
                column_name=_cell(cells, 1, f"COLUMN_{index + 1}"),
                declared_type=_cell(cells, 2, DEFAULT_TYPE),
                declared_length=_cell(cells, 3, DEFAULT_LENGTH),
            )
        )

    logger.debug("Parsed %d column rows", len(columns))
    return columns
