"""Tests for geoqc/lib/errors.py - structured exception hierarchy."""

import pytest

from geoqc.lib.errors import (
    ConfigurationError,
    EmptyReportError,
    GeoQCError,
    StandardNotFoundError,
    StandardsConfigError,
    StructuralError,
)


class TestGeoQCError:
    """Tests for base GeoQCError class."""

    def test_basic_message(self):
        error = GeoQCError("Something went wrong")
        assert str(error) == "Something went wrong"

    def test_with_table(self):
        error = GeoQCError("Validation failed", table="ROADS")
        assert "[ROADS]" in str(error)
        assert "Validation failed" in str(error)

    def test_with_details(self):
        error = GeoQCError("Bad input", details={"field": "NAME", "length": 50})
        assert "field: NAME" in str(error)
        assert "length: 50" in str(error)

    def test_with_suggestion(self):
        error = GeoQCError("Missing table", suggestion="Add the table")
        assert "Suggestion: Add the table" in str(error)

    def test_to_dict(self):
        error = GeoQCError("Test error", table="ROADS", details={"key": "value"}, suggestion="Fix it")
        d = error.to_dict()
        assert d["error_type"] == "GeoQCError"
        assert d["table"] == "ROADS"
        assert d["details"]["key"] == "value"
        assert d["suggestion"] == "Fix it"


class TestSubclasses:
    """Tests for the specific error types."""

    def test_configuration_error_field_and_value(self):
        error = ConfigurationError("Duplicate", field="column_id", value="NAME")
        assert error.field == "column_id"
        assert "value: NAME" in str(error)

    def test_standards_config_error_lists_issues(self):
        error = StandardsConfigError("Invalid", path="s.yaml", issues=["a: missing", "b: bad"])
        assert error.issues == ["a: missing", "b: bad"]
        assert "  - a: missing" in str(error)
        assert "path: s.yaml" in str(error)
        assert isinstance(error, ConfigurationError)

    def test_empty_report_error_is_structural(self):
        error = EmptyReportError()
        assert isinstance(error, StructuralError)
        assert "No validation results" in str(error)
        assert error.suggestion

    def test_standard_not_found(self):
        error = StandardNotFoundError("No table", file_name="rivers.shp", project="Survey")
        assert error.details["file_name"] == "rivers.shp"
        assert error.details["project"] == "Survey"
        assert "table whose id equals the file name" in error.suggestion

    @pytest.mark.parametrize(
        "cls",
        [ConfigurationError, StandardsConfigError, StructuralError, EmptyReportError, StandardNotFoundError],
    )
    def test_all_derive_from_base(self, cls):
        assert issubclass(cls, GeoQCError)

    def test_not_found_is_not_structural(self):
        """A missing standard is a lookup failure, not a broken run."""
        assert not issubclass(StandardNotFoundError, StructuralError)
