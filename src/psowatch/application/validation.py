"""Input validation shared by application services and commands."""

from psowatch.domain.shared.exceptions import ErrorCode, ValidationError
from psowatch.domain.user import Email, InvalidEmailError


def parse_email(raw: str, field_name: str = "Email") -> Email:
    """Build an ``Email`` or raise ``ValidationError(INVALID_EMAIL_FORMAT)``."""
    if not raw:
        raise ValidationError(
            f"{field_name} is required",
            ErrorCode.EMPLOYEE_EMAIL_REQUIRED,
        )
    try:
        return Email(raw)
    except InvalidEmailError as e:
        raise ValidationError(
            f"{field_name} has an invalid format: {raw}",
            ErrorCode.INVALID_EMAIL_FORMAT,
            details={"email": raw},
        ) from e
