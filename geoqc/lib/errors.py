"""Structured exception hierarchy for schema QC.

Data problems found while comparing a file against a standard are never
raised: they become Error verdict rows. The exceptions here cover the other
cases, where the run cannot happen at all or the standard itself is broken.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "GeoQCError",
    "ConfigurationError",
    "StandardsConfigError",
    "StructuralError",
    "EmptyReportError",
    "StandardNotFoundError",
]


class GeoQCError(Exception):
    """Base exception for all geoqc errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.table = table
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if table:
            parts.insert(0, f"[{table}]")

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self.args[0]) if self.args else "",
            "table": self.table,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ConfigurationError(GeoQCError):
    """Error in a standard definition.

    Raised when a table or project breaks its own invariants, such as a
    duplicated column id.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value

        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details=details, **kwargs)


class StandardsConfigError(ConfigurationError):
    """Error loading a standards or attribute manifest file."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        issues: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> None:
        self.path = path
        self.issues = issues or []

        details = kwargs.pop("details", {})
        if path:
            details["path"] = path
        if issues:
            details["issue_count"] = len(issues)
            issue_lines = "\n".join(f"  - {issue}" for issue in issues)
            message = f"{message}\n\nIssues found:\n{issue_lines}"

        super().__init__(message, details=details, **kwargs)


class StructuralError(GeoQCError):
    """A validation run or report could not be produced at all.

    Distinct from a verdict: a run that finds zero errors returns normally,
    a run that never happened raises this.
    """


class EmptyReportError(StructuralError):
    """A report was requested for an empty result set."""

    def __init__(self, message: str = "No validation results to report", **kwargs: Any) -> None:
        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = "Run a validation that covers at least one standard column first."
        super().__init__(message, suggestion=suggestion, **kwargs)


class StandardNotFoundError(GeoQCError):
    """No standard table matches the file being validated."""

    def __init__(
        self,
        message: str,
        *,
        file_name: Optional[str] = None,
        project: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.file_name = file_name
        self.project = project

        details = kwargs.pop("details", {})
        if file_name:
            details["file_name"] = file_name
        if project:
            details["project"] = project

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = (
                "Add a table whose id equals the file name (without extension) "
                "to the standards project."
            )

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)
