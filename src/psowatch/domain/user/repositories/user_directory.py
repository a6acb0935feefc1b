"""User directory interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from psowatch.domain.user.aggregates.user import User
from psowatch.domain.user.value_objects import UserRole


class UserDirectory(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """
        Find a user by identity-provider object id, including deleted users.

        Parameters
        ----------
        external_id
            The caller's external identity id

        Returns
        -------
        User if found (active or soft-deleted), None otherwise
        """

    @abstractmethod
    async def find_active_by_external_id(self, external_id: str) -> Optional[User]:
        """
        Find an active (not soft-deleted) user by external identity id.

        Returns
        -------
        User if found and active, None otherwise
        """

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email address, including deleted users.

        The email is normalized to lower case before lookup.

        Raises
        ------
        InvalidEmailError
            If email format is invalid
        """

    @abstractmethod
    async def find_active_by_email(self, email: str) -> Optional[User]:
        """
        Find an active user by email address.

        Raises
        ------
        InvalidEmailError
            If email format is invalid
        """

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UUID]) -> list[User]:
        """
        Load several users by internal id.

        Unknown ids are silently absent from the result.
        """

    @abstractmethod
    async def list_by_role(self, role: UserRole, active_only: bool = True) -> list[User]:
        """
        List users holding ``role`` ordered by display name.

        Soft-deleted users hold the Unassigned role, so ``active_only=False``
        only adds rows when listing ``UserRole.UNASSIGNED``.
        """

    @abstractmethod
    async def update_supervisor(self, user_id: UUID, supervisor_id: Optional[UUID]) -> None:
        """
        Set (or clear) the supervisor of a single user.

        Raises
        ------
        UserNotFoundError
            If no user with ``user_id`` exists
        """

    @abstractmethod
    async def update_supervisors(
        self,
        user_ids: Sequence[UUID],
        supervisor_id: Optional[UUID],
    ) -> int:
        """
        Set (or clear) the supervisor of several users as one atomic unit.

        Either every row is updated or none is: implementations must raise
        (and leave all rows untouched) when any id cannot be updated.

        Parameters
        ----------
        user_ids
            Internal ids of the users to update
        supervisor_id
            Internal id of the new supervisor, or None to unassign

        Returns
        -------
        Number of rows updated (equal to ``len(user_ids)``)
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """
        Save or update a user.

        Raises
        ------
        EmailAlreadyExistsError
            If email is already in use by another user
        """

    @abstractmethod
    async def release_supervised(self, supervisor_id: UUID) -> int:
        """
        Clear the supervisor link of every user supervised by ``supervisor_id``.

        Used when a supervisor is demoted or deleted.

        Returns
        -------
        Number of users released
        """
