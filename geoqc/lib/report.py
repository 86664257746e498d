"""Report payload for exporters.

``build_report`` aggregates a finished validation run into an immutable
``ReportData``. Exporters (PDF, document renderers) read only this payload;
they never look at files or standard tables and never re-derive verdicts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from geoqc.lib.engine import ColumnValidationResult, ValidationStatus
from geoqc.lib.errors import EmptyReportError

logger = logging.getLogger(__name__)

__all__ = [
    "CHECK_MARK",
    "CROSS_MARK",
    "NO_PROJECT",
    "UNKNOWN_FILE",
    "ReportData",
    "build_report",
    "format_check",
]

UNKNOWN_FILE = "unknown"
NO_PROJECT = "no project"
CHECK_MARK = "✓"
CROSS_MARK = "✗"

DISPLAY_COLUMNS = [
    "std_column_id",
    "std_column_name",
    "std_type",
    "std_length",
    "found_field_name",
    "field_found",
    "cur_type",
    "cur_length",
    "type_correct",
    "length_correct",
    "status",
]


def format_check(value: Any) -> str:
    """Render a boolean as a check mark; anything else is unchecked."""
    if isinstance(value, bool) and value:
        return CHECK_MARK
    return CROSS_MARK


@dataclass(frozen=True)
class ReportData:
    """Aggregated outcome of one validation run."""

    report_timestamp: datetime
    source_file_name: str
    project_name: str
    results: Tuple[ColumnValidationResult, ...]
    total_count: int
    normal_count: int
    error_count: int
    success_rate_percent: float

    @property
    def success_rate_display(self) -> str:
        return f"{self.success_rate_percent:.1f}%"

    @property
    def passed(self) -> bool:
        """True when every standard column is Normal."""
        return self.error_count == 0

    def summary(self) -> str:
        """One-line completion message."""
        return (
            f"{self.total_count} columns checked: "
            f"{self.normal_count} normal, {self.error_count} errors "
            f"({self.success_rate_display})"
        )

    def display_rows(self) -> List[Dict[str, str]]:
        """Verdict rows as display strings, booleans shown as check marks."""
        rows = []
        for result in self.results:
            row = {}
            for name in DISPLAY_COLUMNS:
                value = getattr(result, name)
                if isinstance(value, bool):
                    row[name] = format_check(value)
                else:
                    row[name] = str(value)
            rows.append(row)
        return rows

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "report_timestamp": self.report_timestamp.isoformat(),
            "source_file_name": self.source_file_name,
            "project_name": self.project_name,
            "total_count": self.total_count,
            "normal_count": self.normal_count,
            "error_count": self.error_count,
            "success_rate_percent": self.success_rate_percent,
            "results": [r.to_dict() for r in self.results],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Verdict rows as a DataFrame, one row per standard column."""
        return pd.DataFrame([r.to_dict() for r in self.results], columns=DISPLAY_COLUMNS)


def _source_name(source_file_name: Optional[str]) -> str:
    if not source_file_name or not str(source_file_name).strip():
        return UNKNOWN_FILE
    name = str(source_file_name).replace("\\", "/").rsplit("/", 1)[-1]
    return name or UNKNOWN_FILE


def build_report(
    results: Optional[Iterable[ColumnValidationResult]],
    source_file_name: Optional[str] = None,
    project_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ReportData:
    """Aggregate validation results into a ReportData.

    Args:
        results: Verdict rows from validate_table, in column order
        source_file_name: File that was validated (a path is reduced to its name)
        project_name: Name of the standards project
        now: Report timestamp; defaults to the current local time

    Returns:
        Immutable ReportData

    Raises:
        EmptyReportError: If results is None or empty
    """
    rows = tuple(results or ())
    if not rows:
        raise EmptyReportError(details={"source_file_name": source_file_name or UNKNOWN_FILE})

    total = len(rows)
    normal = sum(1 for r in rows if r.status == ValidationStatus.NORMAL)
    rate = round(100.0 * normal / total, 1)

    report = ReportData(
        report_timestamp=now or datetime.now(),
        source_file_name=_source_name(source_file_name),
        project_name=project_name or NO_PROJECT,
        results=rows,
        total_count=total,
        normal_count=normal,
        error_count=total - normal,
        success_rate_percent=rate,
    )
    logger.debug("Built report for %s: %s", report.source_file_name, report.summary())
    return report
