"""
Custom Exception Hierarchy

Provides specific exception types for the ingestion, scheduling and
reporting layers with structured error information.
"""
from typing import Optional, Dict, Any


class VitalSchedError(Exception):
    """Base exception for all vitals scheduling errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class IngestionError(VitalSchedError):
    """Errors reading a vitals or summary table as a whole."""

    def __init__(
        self,
        message: str,
        source: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INGESTION_ERROR",
            details={"source": source, **(details or {})}
        )
        self.source = source


class MalformedRowError(VitalSchedError):
    """
    A single summary row that cannot be scheduled.

    Raised inside the row parser and converted into a RowDiagnostic by the
    reader, so it never aborts a whole table.
    """

    def __init__(
        self,
        message: str,
        row_number: int = 0,
        field: str = "",
        kind: str = "MALFORMED_ROW",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=kind,
            details={"row_number": row_number, "field": field, **(details or {})}
        )
        self.row_number = row_number
        self.field = field
        self.kind = kind


class UnknownPolicyError(VitalSchedError):
    """Requested scheduling policy is not registered."""

    def __init__(
        self,
        message: str,
        policy: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="UNKNOWN_POLICY",
            details={"policy": policy, **(details or {})}
        )
        self.policy = policy


class ReportGenerationError(VitalSchedError):
    """Errors during report generation."""

    def __init__(
        self,
        message: str,
        report_type: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REPORT_ERROR",
            details={"report_type": report_type, **(details or {})}
        )
        self.report_type = report_type
