"""User domain exceptions.

Custom exceptions for the user domain, used for validation, authorization
and supervisor-assignment failures.
"""

from enum import Enum
from typing import Any, Optional

from psowatch.domain.shared.exceptions import DomainException, ErrorCode


class InvalidEmailError(ValueError):
    """
    Raised when email format is invalid.

    This exception is raised during Email value object creation
    when the provided string doesn't match expected email format.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidRoleError(ValueError):
    """Raised when a persisted or requested role name is not a known role."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown user role: {value!r}")


class CallerLookupFailure(str, Enum):
    """Internal reason a caller could not be resolved.

    Both reasons surface as USER_NOT_FOUND to clients; the distinction is
    kept for logs and diagnostics only.
    """

    MISSING_ID = "missing_id"
    NOT_FOUND = "not_found"
    DELETED = "deleted"


class AuthError(DomainException):
    """Raised when a caller is unresolved, inactive, or lacks privileges."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INSUFFICIENT_PRIVILEGES,
        details: dict[str, Any] | None = None,
        reason: Optional[CallerLookupFailure] = None,
    ) -> None:
        super().__init__(message, code, details)
        self.reason = reason


class SupervisorError(DomainException):
    """Raised when the supervisor assignment could not be persisted."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SUPERVISOR_ASSIGNMENT_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UserRoleChangeError(DomainException):
    """Raised when a role change cannot be applied."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ROLE_ASSIGNMENT_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UserDeletionError(DomainException):
    """Raised when a user cannot be soft-deleted."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.DATABASE_DELETION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmailAlreadyExistsError(Exception):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class UserNotFoundError(Exception):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
