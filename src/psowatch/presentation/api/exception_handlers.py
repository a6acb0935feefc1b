"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with a consistent error
format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from psowatch.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from psowatch.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from psowatch.domain.user import AuthError, InvalidRoleError

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMPLOYEE_EMAIL_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL_FORMAT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ROLE_ASSIGNMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TARGET_NOT_EMPLOYEE: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - caller could not be resolved
    ErrorCode.CALLER_ID_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.INSUFFICIENT_PRIVILEGES: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TARGET_USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.USER_ALREADY_DELETED: status.HTTP_409_CONFLICT,
    # 422 Unprocessable Entity - business rule violations
    ErrorCode.BUSINESS_RULE_VIOLATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    # 500 Internal Server Error
    ErrorCode.SUPERVISOR_ASSIGNMENT_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.ROLE_ASSIGNMENT_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.DATABASE_DELETION_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for a domain exception.

    Auth errors are 401 unless the caller was resolved and merely lacks
    privileges (403). Everything else goes through the error code mapping,
    with a fallback based on exception type.
    """
    if isinstance(exc, AuthError):
        if exc.code == ErrorCode.INSUFFICIENT_PRIVILEGES:
            return status.HTTP_403_FORBIDDEN
        return status.HTTP_401_UNAUTHORIZED

    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    # Fallback based on exception type hierarchy
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BusinessRuleViolation):
        return status.HTTP_422_UNPROCESSABLE_ENTITY

    # Default to 400 for domain exceptions
    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Logs the full exception details for debugging while returning
        a safe, user-friendly message to the client.
        """
        status_code = _get_status_for_exception(exc)

        log = logger.error if status_code >= 500 else logger.warning
        log(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )

    @app.exception_handler(InvalidRoleError)
    async def invalid_role_handler(
        request: Request,
        exc: InvalidRoleError,
    ) -> JSONResponse:
        """A stored role name is not a known role (corrupt row)."""
        logger.error(
            "Unknown role on %s %s: %r",
            request.method,
            request.url.path,
            exc.value,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
