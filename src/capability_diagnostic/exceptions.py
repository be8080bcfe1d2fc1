"""
Custom exceptions for the capability diagnostic.
"""

from typing import Optional


class DiagnosticError(Exception):
    """Base exception for the capability diagnostic."""
    pass


class InvalidInputError(DiagnosticError, ValueError):
    """Raised when a submission cannot be evaluated.

    Covers a blank organisation name and unreadable or malformed
    submission files. Out-of-range scores are clamped, not rejected.
    """
    def __init__(self, message: str, issues: Optional[list[str]] = None):
        self.message = message
        self.issues = issues or []
        super().__init__(self.message)
