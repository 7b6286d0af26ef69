"""
Domain errors for complaint intake.

None of these know about HTTP; the API layer maps them to status codes
in app/api/errors.py.
"""
from datetime import date
from typing import Any, Dict, Optional


class ComplaintDomainError(Exception):
    """Base class for every error raised by the complaint services."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class AllocationError(ComplaintDomainError):
    """The counter store could not durably record an increment. Safe to retry."""

    code = "ALLOCATION_FAILED"

    def __init__(self, issue_date: date, reason: str = ""):
        message = f"Could not allocate a receipt sequence for {issue_date.isoformat()}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, {"issue_date": issue_date.isoformat()})
        self.issue_date = issue_date


class FormatError(ComplaintDomainError):
    """Invalid inputs to receipt-number formatting or parsing."""

    code = "INVALID_RECEIPT_FORMAT"


class InvalidStatusTransitionError(ComplaintDomainError):
    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: Any, requested: Any):
        current_value = getattr(current, "value", current)
        requested_value = getattr(requested, "value", requested)
        super().__init__(
            f"Cannot change status from {current_value} to {requested_value}",
            {"current": current_value, "requested": requested_value},
        )
        self.current = current
        self.requested = requested


class ComplaintNotFoundError(ComplaintDomainError):
    code = "NOT_FOUND"


class ComplaintTypeNotFoundError(ComplaintDomainError):
    code = "NOT_FOUND"


class ComplaintValidationError(ComplaintDomainError):
    code = "VALIDATION_ERROR"


class ComplaintNotDeletableError(ComplaintDomainError):
    code = "NOT_DELETABLE"


class ConcurrentStatusUpdateError(ComplaintDomainError):
    """Another request changed the complaint between read and write."""

    code = "CONCURRENT_UPDATE"


class UserNotFoundError(ComplaintDomainError):
    code = "NOT_FOUND"


class ApplicantStatusNotFoundError(ComplaintDomainError):
    code = "NOT_FOUND"
