"""CLI entry point for schema QC.

Usage:
    python -m geoqc check standards.yaml
    python -m geoqc validate standards.yaml roads_fields.yaml
    python -m geoqc validate standards.yaml roads_fields.yaml --json

Exit codes:
    0  every standard column is Normal (or the standards file is valid)
    1  at least one column is in Error
    2  the run could not happen (bad standards, no matching table, ...)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from geoqc.lib.engine import validate_file
from geoqc.lib.errors import GeoQCError
from geoqc.lib.observability import setup_logging
from geoqc.lib.report import ReportData, build_report
from geoqc.lib.settings import load_settings
from geoqc.lib.standards_loader import load_attribute_manifest, load_standards

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERRORS_FOUND = 1
EXIT_FAILED = 2

TABLE_COLUMNS = [
    ("std_column_id", "Column ID", 16),
    ("std_column_name", "Column Name", 20),
    ("std_type", "Std Type", 10),
    ("std_length", "Std Len", 8),
    ("cur_type", "Cur Type", 10),
    ("cur_length", "Cur Len", 10),
    ("field_found", "Found", 6),
    ("type_correct", "Type", 5),
    ("length_correct", "Len", 5),
    ("status", "Status", 6),
]


def check_command(standards_path: str) -> int:
    """Validate a standards file and list its tables."""
    project = load_standards(standards_path)

    print(f"Project: {project.name or '(unnamed)'}")
    for category in project.categories:
        print(f"  [{category.name}]")
        for table in category.tables:
            label = f" - {table.table_name}" if table.table_name else ""
            print(f"    {table.table_id}{label} ({len(table.columns)} columns)")
    print("\nStandards file is valid.")
    return EXIT_OK


def print_report(report: ReportData) -> None:
    """Print verdict rows and the summary line."""
    print(f"File:    {report.source_file_name}")
    print(f"Project: {report.project_name}")
    print(f"Checked: {report.report_timestamp:%Y-%m-%d %H:%M}")
    print()

    header = "  ".join(title.ljust(width) for _, title, width in TABLE_COLUMNS)
    print(header)
    print("-" * len(header))
    for row in report.display_rows():
        print("  ".join(row[name][:width].ljust(width) for name, _, width in TABLE_COLUMNS))

    print()
    print(report.summary())


def validate_command(
    standards_path: str,
    manifest_path: str,
    *,
    project_name: Optional[str] = None,
    as_json: bool = False,
) -> int:
    """Validate a captured attribute manifest against its standard table."""
    project = load_standards(standards_path)
    manifest = load_attribute_manifest(manifest_path)

    logger.info("Validating %s against project %r", manifest.file_name, project.name)
    results = validate_file(project, manifest.file_name, manifest.schema)
    report = build_report(
        results,
        source_file_name=manifest.file_name,
        project_name=project.name or project_name,
    )

    if as_json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(report)

    return EXIT_OK if report.passed else EXIT_ERRORS_FOUND


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoqc",
        description="Check vector file attribute tables against standard schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Check a standards file and list its tables
    python -m geoqc check ./standards.yaml

    # Validate a captured field list (table chosen by file name)
    python -m geoqc validate ./standards.yaml ./roads_fields.yaml

    # Machine-readable report
    python -m geoqc validate ./standards.yaml ./roads_fields.yaml --json
        """,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--json-log",
        action="store_true",
        help="Output logs in JSON format (for log aggregation systems)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to a file in addition to the console",
    )

    subparsers = parser.add_subparsers(dest="command")

    check = subparsers.add_parser("check", help="Validate a standards file")
    check.add_argument("standards", help="Standards YAML/JSON file")

    validate = subparsers.add_parser("validate", help="Validate a file's fields against its standard table")
    validate.add_argument("standards", help="Standards YAML/JSON file")
    validate.add_argument("manifest", help="Attribute manifest captured from the vector file")
    validate.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the report as JSON",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILED

    try:
        settings = load_settings()
        log_config = settings.logging_config()
        setup_logging(
            verbose=args.verbose,
            json_format=args.json_log or log_config.format == "json",
            log_file=args.log_file or log_config.file,
            level=log_config.level,
        )

        if args.command == "check":
            return check_command(args.standards)
        return validate_command(
            args.standards,
            args.manifest,
            project_name=settings.project_name,
            as_json=args.as_json,
        )
    except GeoQCError as e:
        logger.debug("Run failed: %s", e.to_dict())
        print(f"\nError: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
