from datetime import datetime
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from psowatch.domain.shared.exceptions import BusinessRuleViolation
from psowatch.domain.shared.time import utc_now
from psowatch.domain.user.value_objects import Email, UserRole


class User:
    """
    User aggregate root.

    Holds identity (internal id, identity-provider object id, email), the
    user's role and, for Employees (PSOs), the id of the supervising user.
    Users are never hard-deleted: deletion moves the role to Unassigned and
    stamps ``deleted_at``.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        role: Union[str, UserRole] = UserRole.EMPLOYEE,
        full_name: Optional[str] = None,
        external_id: Optional[str] = None,
        supervisor_id: Optional[UUID] = None,
        deleted_at: Optional[datetime] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id if id is not None else uuid4()
        self._role = UserRole.parse(role)
        self._full_name = full_name or None
        self._external_id = external_id or None
        self._supervisor_id = supervisor_id
        self._deleted_at = deleted_at
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def external_id(self) -> Optional[str]:
        return self._external_id

    @property
    def full_name(self) -> Optional[str]:
        return self._full_name

    @property
    def display_name(self) -> str:
        if self._full_name:
            return self._full_name
        # Fallback derived from the mailbox name, e.g. "jane.doe" -> "jane doe"
        return self._email.local_part.replace(".", " ").replace("_", " ")

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def supervisor_id(self) -> Optional[UUID]:
        return self._supervisor_id

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self._deleted_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_active(self) -> bool:
        return self._deleted_at is None

    @property
    def is_employee(self) -> bool:
        return self._role == UserRole.EMPLOYEE

    @property
    def is_supervisor(self) -> bool:
        return self._role == UserRole.SUPERVISOR

    def assign_supervisor(self, supervisor_id: Optional[UUID]) -> None:
        if supervisor_id is not None and not self.is_employee:
            msg = f"Only employees can be supervised (user {self.email} is {self._role.value})"
            raise BusinessRuleViolation(msg, details={"user_id": str(self._id)})
        self._supervisor_id = supervisor_id
        self._updated_at = utc_now()

    def change_role(self, role: UserRole) -> None:
        self._role = UserRole.parse(role)
        if self._role != UserRole.EMPLOYEE:
            self._supervisor_id = None
        self._updated_at = utc_now()

    def soft_delete(self) -> None:
        self._role = UserRole.UNASSIGNED
        self._supervisor_id = None
        self._deleted_at = utc_now()
        self._updated_at = self._deleted_at

    def restore(self) -> None:
        """Undo a soft delete; the caller sets the new role."""
        self._deleted_at = None
        self._updated_at = utc_now()

    def link_external_id(self, external_id: str, full_name: Optional[str] = None) -> None:
        """Attach the identity-provider id; a given name replaces the stored one."""
        self._external_id = external_id
        if full_name:
            self._full_name = full_name
        self._updated_at = utc_now()

    def snapshot(self) -> dict[str, Any]:
        """JSON-compatible view of the user, used for audit before/after data."""
        return {
            "id": str(self._id),
            "email": self.email,
            "fullName": self._full_name,
            "externalId": self._external_id,
            "role": self._role.value,
            "supervisorId": str(self._supervisor_id) if self._supervisor_id else None,
            "deletedAt": self._deleted_at.isoformat() if self._deleted_at else None,
        }

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        role: UserRole = UserRole.EMPLOYEE,
        full_name: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> "User":
        return cls(
            email=email,
            role=role,
            full_name=full_name,
            external_id=external_id,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        role: Union[str, UserRole],
        full_name: Optional[str],
        external_id: Optional[str],
        supervisor_id: Optional[UUID],
        deleted_at: Optional[datetime],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            role=role,
            full_name=full_name,
            external_id=external_id,
            supervisor_id=supervisor_id,
            deleted_at=deleted_at,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value}, role={self._role.value})"
