"""SQLAlchemy repository implementations for user domain."""

from psowatch.infrastructure.persistence.sqlalchemy.repositories.user.user_directory import (  # NOQA: E501
    UserDirectorySQLAlchemy,
)

__all__ = ["UserDirectorySQLAlchemy"]
