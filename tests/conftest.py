"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from geoqc.lib.schema import AttributeSchema, FieldCategory, FieldInfo  # noqa: E402
from geoqc.lib.standard import ColumnDefinition, StandardProject, TableDefinition  # noqa: E402


@pytest.fixture
def roads_table():
    """Standard table with one character and one numeric column."""
    return TableDefinition(
        table_id="ROADS",
        table_name="Road centerlines",
        columns=(
            ColumnDefinition("NAME", "Road name", "VARCHAR2", "50", required=True, key_role="PK"),
            ColumnDefinition("AREA", "Paved area", "NUMBER", "9,2"),
        ),
    )


@pytest.fixture
def roads_schema():
    """Attribute schema that fully conforms to roads_table."""
    return AttributeSchema(
        [
            ("NAME", FieldInfo(FieldCategory.CHARACTER, 50)),
            ("AREA", FieldInfo(FieldCategory.NUMERIC, 9, 2)),
        ]
    )


@pytest.fixture
def roads_project(roads_table):
    """Single-category project holding roads_table."""
    return StandardProject.from_tables("Road survey", [roads_table])


@pytest.fixture
def standards_yaml(tmp_path):
    """Write a standards file and return its path."""
    path = tmp_path / "standards.yaml"
    path.write_text(
        """
project: Road survey 2025
categories:
  - name: Transport
    tables:
      - id: ROADS
        name: Road centerlines
        columns:
          - {id: NAME, name: Road name, type: VARCHAR2, length: 50, required: true, key: PK}
          - {id: AREA, name: Paved area, type: NUMBER, length: "9,2"}
  - name: Buildings
    tables:
      - id: BLDG
        columns:
          - {id: BLDG_ID, type: VARCHAR2, length: 20}
""",
        encoding="utf-8",
    )
    return path
