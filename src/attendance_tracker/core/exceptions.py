from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``reason`` is a stable code callers can branch on; the message is for humans.
    """

    reason = "domain_error"
    default_message = "Request rejected"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    reason = "validation_error"
    default_message = "Invalid input"


class InvalidArgument(ValidationError):
    reason = "invalid_argument"
    default_message = "Invalid argument"


class InvalidRange(ValidationError):
    reason = "invalid_range"
    default_message = "Check-out time cannot be earlier than check-in time"


class LifecycleError(DomainError):
    """Raised when a check-in/check-out is not allowed in the current state."""

    reason = "lifecycle_error"


class AlreadyCheckedIn(LifecycleError):
    reason = "already_checked_in"
    default_message = "Already checked in today"


class NotCheckedIn(LifecycleError):
    reason = "not_checked_in"
    default_message = "Please check in first"


class AlreadyCheckedOut(LifecycleError):
    reason = "already_checked_out"
    default_message = "Already checked out today"
