"""Schema QC library modules.

This package contains the standard definitions, the comparison engine and
the report payload used to check vector file attribute tables.
"""

from geoqc.lib.engine import (
    FIELD_ERROR,
    NOT_FOUND,
    ColumnValidationResult,
    ValidationStatus,
    validate_column,
    validate_file,
    validate_table,
)
from geoqc.lib.errors import (
    ConfigurationError,
    EmptyReportError,
    GeoQCError,
    StandardNotFoundError,
    StandardsConfigError,
    StructuralError,
)
from geoqc.lib.length import parse_length, render_length
from geoqc.lib.observability import JSONFormatter, setup_logging
from geoqc.lib.reconcile import (
    StandardType,
    TypeFamily,
    is_length_correct,
    is_type_correct,
    resolve_standard_type,
)
from geoqc.lib.report import ReportData, build_report, format_check
from geoqc.lib.schema import AttributeSchema, FieldCategory, FieldInfo, schema_from_dataframe
from geoqc.lib.settings import GeoQCSettings, LoggingConfig, load_settings
from geoqc.lib.standard import (
    ColumnDefinition,
    StandardCategory,
    StandardProject,
    TableDefinition,
    file_base_name,
)
from geoqc.lib.standards_loader import (
    AttributeManifest,
    load_attribute_manifest,
    load_standards,
    manifest_from_dict,
    parse_column_rows,
    standards_from_dict,
)

__all__ = [
    # Standards
    "ColumnDefinition",
    "StandardCategory",
    "StandardProject",
    "TableDefinition",
    "file_base_name",
    # Attribute schema
    "AttributeSchema",
    "FieldCategory",
    "FieldInfo",
    "schema_from_dataframe",
    # Length and type rules
    "parse_length",
    "render_length",
    "StandardType",
    "TypeFamily",
    "is_length_correct",
    "is_type_correct",
    "resolve_standard_type",
    # Engine
    "FIELD_ERROR",
    "NOT_FOUND",
    "ColumnValidationResult",
    "ValidationStatus",
    "validate_column",
    "validate_file",
    "validate_table",
    # Report
    "ReportData",
    "build_report",
    "format_check",
    # Loading
    "AttributeManifest",
    "load_attribute_manifest",
    "load_standards",
    "manifest_from_dict",
    "parse_column_rows",
    "standards_from_dict",
    # Errors
    "ConfigurationError",
    "EmptyReportError",
    "GeoQCError",
    "StandardNotFoundError",
    "StandardsConfigError",
    "StructuralError",
    # Settings and logging
    "GeoQCSettings",
    "JSONFormatter",
    "LoggingConfig",
    "load_settings",
    "setup_logging",
]
