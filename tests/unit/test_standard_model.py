"""Tests for geoqc.lib.standard module."""

import pytest

from geoqc.lib.errors import ConfigurationError
from geoqc.lib.reconcile import TypeFamily
from geoqc.lib.standard import (
    ColumnDefinition,
    StandardCategory,
    StandardProject,
    TableDefinition,
    file_base_name,
)


class TestColumnDefinition:
    """Tests for ColumnDefinition."""

    def test_type_resolved_once(self):
        column = ColumnDefinition("NAME", "Road name", "varchar2", "50")

        assert column.standard_type.family == TypeFamily.CHARACTER_LIKE
        assert column.declared_size == (50, 0)

    def test_defaults(self):
        column = ColumnDefinition("NAME")

        assert column.required is False
        assert column.key_role == ""
        assert column.declared_size == (0, 0)

    def test_blank_id_rejected(self):
        with pytest.raises(ConfigurationError):
            ColumnDefinition("  ")

    def test_immutable(self):
        column = ColumnDefinition("NAME")
        with pytest.raises(AttributeError):
            column.column_id = "OTHER"


class TestTableDefinition:
    """Tests for TableDefinition."""

    def test_columns_become_tuple(self):
        table = TableDefinition("ROADS", columns=[ColumnDefinition("A"), ColumnDefinition("B")])

        assert isinstance(table.columns, tuple)
        assert len(table) == 2

    def test_duplicate_column_ids_rejected_ignoring_case(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TableDefinition("ROADS", columns=[ColumnDefinition("NAME"), ColumnDefinition("name")])

        assert "Duplicate column id 'name'" in str(exc_info.value)
        assert exc_info.value.table == "ROADS"

    def test_blank_id_rejected(self):
        with pytest.raises(ConfigurationError):
            TableDefinition("")

    def test_matches_is_exact_and_case_insensitive(self):
        table = TableDefinition("ROADS")

        assert table.matches("roads")
        assert not table.matches("road")
        assert not table.matches("ROADS2")


class TestStandardProject:
    """Tests for StandardProject lookups."""

    @pytest.fixture
    def project(self):
        return StandardProject(
            "Survey",
            categories=[
                StandardCategory("Transport", [TableDefinition("ROADS"), TableDefinition("RAIL")]),
                StandardCategory("Buildings", [TableDefinition("BLDG")]),
            ],
        )

    def test_tables_in_category_order(self, project):
        assert [t.table_id for t in project.tables] == ["ROADS", "RAIL", "BLDG"]

    def test_find_table(self, project):
        assert project.find_table("bldg").table_id == "BLDG"
        assert project.find_table("missing") is None

    @pytest.mark.parametrize(
        "path",
        ["roads.shp", "ROADS.SHP", "/data/2025/Roads.shp", "C:\\gis\\roads.dbf", "roads"],
    )
    def test_find_table_for_file(self, project, path):
        assert project.find_table_for_file(path).table_id == "ROADS"

    def test_find_table_for_file_no_fuzzy_match(self, project):
        assert project.find_table_for_file("roads_v2.shp") is None
        assert project.find_table_for_file("road.shp") is None

    def test_duplicate_table_ids_across_categories(self):
        with pytest.raises(ConfigurationError) as exc_info:
            StandardProject(
                "Survey",
                categories=[
                    StandardCategory("A", [TableDefinition("ROADS")]),
                    StandardCategory("B", [TableDefinition("roads")]),
                ],
            )
        assert "category 'B'" in str(exc_info.value)

    def test_from_tables(self):
        project = StandardProject.from_tables("Survey", [TableDefinition("ROADS")])

        assert project.categories[0].name == "default"
        assert project.find_table("ROADS") is not None


class TestFileBaseName:
    """Tests for file_base_name."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("roads.shp", "roads"),
            ("/data/roads.shp", "roads"),
            ("C:\\gis\\ROADS.SHP", "ROADS"),
            ("roads.shp.xml", "roads.shp"),
            ("roads", "roads"),
        ],
    )
    def test_base_name(self, path, expected):
        assert file_base_name(path) == expected
