"""SQLAlchemy implementation of UserDirectory."""

import logging
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from psowatch.domain.shared.time import ensure_tz_aware, utc_now
from psowatch.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UserDirectory,
    UserNotFoundError,
    UserRole,
)
from psowatch.infrastructure.persistence.sqlalchemy.models.user import UserModel

logger = logging.getLogger(__name__)


class UserDirectorySQLAlchemy(UserDirectory):
    """SQLAlchemy implementation of the UserDirectory interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.external_id == external_id)
        return await self._find_one(stmt)

    async def find_active_by_external_id(self, external_id: str) -> Optional[User]:
        stmt = select(UserModel).where(
            UserModel.external_id == external_id,
            UserModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def find_by_email(self, email: str) -> Optional[User]:
        # Normalize email for lookup
        email_value = Email(email).value

        stmt = select(UserModel).where(UserModel.email == email_value)
        return await self._find_one(stmt)

    async def find_active_by_email(self, email: str) -> Optional[User]:
        email_value = Email(email).value

        stmt = select(UserModel).where(
            UserModel.email == email_value,
            UserModel.deleted_at.is_(None),
        )
        return await self._find_one(stmt)

    async def find_by_ids(self, user_ids: Sequence[UUID]) -> list[User]:
        if not user_ids:
            return []

        stmt = select(UserModel).where(UserModel.id.in_(list(user_ids)))
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def list_by_role(self, role: UserRole, active_only: bool = True) -> list[User]:
        stmt = select(UserModel).where(UserModel.role == UserRole.parse(role).value)
        if active_only:
            stmt = stmt.where(UserModel.deleted_at.is_(None))

        result = await self._session.execute(stmt)
        users = [self._map_to_domain(m) for m in result.scalars().all()]
        return sorted(users, key=lambda u: (u.display_name.lower(), u.email))

    async def update_supervisor(self, user_id: UUID, supervisor_id: Optional[UUID]):
        model = await self._find_model_by_id(user_id)
        if model is None:
            raise UserNotFoundError(str(user_id))

        model.supervisor_id = supervisor_id
        model.updated_at = utc_now()
        await self._session.flush()

    async def update_supervisors(
        self,
        user_ids: Sequence[UUID],
        supervisor_id: Optional[UUID],
    ) -> int:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return 0

        # Refuse before writing anything when an id is unknown
        count_stmt = select(func.count()).select_from(UserModel).where(
            UserModel.id.in_(ids)
        )
        found = (await self._session.execute(count_stmt)).scalar_one()
        if found != len(ids):
            msg = f"Expected {len(ids)} users, found {found}"
            raise UserNotFoundError(msg)

        stmt = (
            update(UserModel)
            .where(UserModel.id.in_(ids))
            .values(supervisor_id=supervisor_id, updated_at=utc_now())
        )
        result = await self._session.execute(stmt)
        if result.rowcount != len(ids):
            # The caller's transaction is rolled back on this error
            msg = f"Updated {result.rowcount} of {len(ids)} users"
            raise UserNotFoundError(msg)

        await self._session.flush()
        logger.debug("Set supervisor %s on %d user(s)", supervisor_id, len(ids))
        return len(ids)

    async def release_supervised(self, supervisor_id: UUID) -> int:
        stmt = (
            update(UserModel)
            .where(UserModel.supervisor_id == supervisor_id)
            .values(supervisor_id=None, updated_at=utc_now())
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount

    async def save(self, user: User):
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = self._map_to_model(user)
                self._session.add(model)
                logger.info("Created user: %s (email: %s)", user.id, user.email)

            await self._session.flush()
        except IntegrityError as e:
            # Handle unique constraint violation on email
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(user.email) from e
            raise

    async def _find_one(self, stmt) -> Optional[User]:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def _find_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        # Unknown role names raise InvalidRoleError here
        return User.reconstitute(
            id=model.id,
            email=model.email,
            role=model.role,
            full_name=model.full_name,
            external_id=model.external_id,
            supervisor_id=model.supervisor_id,
            deleted_at=ensure_tz_aware(model.deleted_at) if model.deleted_at else None,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            external_id=user.external_id,
            email=user.email,
            full_name=user.full_name,
            role=user.role.value,
            supervisor_id=user.supervisor_id,
            deleted_at=user.deleted_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User):
        # Note: id never changes
        model.external_id = user.external_id
        model.email = user.email
        model.full_name = user.full_name
        model.role = user.role.value
        model.supervisor_id = user.supervisor_id
        model.deleted_at = user.deleted_at
        model.updated_at = user.updated_at
