"""
Custom Exception Hierarchy

Provides specific exception types for nomogram errors
with structured error information.
"""
from typing import Optional, Dict, Any, Iterable


class NomogramError(Exception):
    """Base exception for all nomogram errors."""

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


class InvalidFindingError(NomogramError):
    """A finding identifier outside the fixed ultrasound finding set."""

    def __init__(
        self,
        finding: Any,
        valid_findings: Iterable[str] = (),
        details: Optional[Dict[str, Any]] = None
    ):
        valid = list(valid_findings)
        super().__init__(
            message=f"Unknown finding: {finding!r}. Valid: {valid}",
            code="INVALID_FINDING",
            details={"finding": str(finding), "valid_findings": valid, **(details or {})}
        )
        self.finding = finding
        self.valid_findings = valid
