"""First-access sign-in: bind an identity-provider id to a user record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from psowatch.application.services import AuthorizationService
from psowatch.application.services.session_boundary import commit_core
from psowatch.application.validation import parse_email
from psowatch.domain.shared.exceptions import DomainException, ErrorCode
from psowatch.domain.user import (
    AuthError,
    CallerLookupFailure,
    User,
    UserDirectory,
    UserRole,
)

if TYPE_CHECKING:
    from psowatch.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a sign-in."""

    user: User
    linked: bool = False
    created: bool = False


class SignInCommand:
    """
    Resolve the signed-in caller, linking or provisioning on first access.

    A caller whose id is already known is returned as is. Otherwise the
    user with the caller's email gets the id attached (users provisioned by
    email only are completed this way), and an unknown email is provisioned
    as an Employee. Deleted users stay deleted and are refused.
    """

    def __init__(
        self,
        user_directory: UserDirectory,
        authorization_service: AuthorizationService,
        db_session: Optional[Any] = None,
    ):
        self._users = user_directory
        self._authorization = authorization_service
        self._db_session = db_session

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> SignInCommand:
        return cls(
            user_directory=factory.user_directory(),
            authorization_service=AuthorizationService.from_factory(factory),
            db_session=factory.session,
        )

    async def execute(
        self,
        caller_id: str,
        email: str,
        full_name: Optional[str] = None,
    ) -> SignInResult:
        try:
            return SignInResult(user=await self._authorization.resolve_caller(caller_id))
        except AuthError as e:
            if e.reason != CallerLookupFailure.NOT_FOUND:
                raise

        address = parse_email(email, "Email").value
        user = await self._users.find_by_email(address)

        if user is None:
            user = User.create(
                address,
                role=UserRole.EMPLOYEE,
                full_name=full_name,
                external_id=caller_id,
            )
            created = True
        elif not user.is_active:
            logger.info("Sign-in refused for deleted user %s", address)
            raise AuthError(
                "User not found",
                ErrorCode.USER_NOT_FOUND,
                reason=CallerLookupFailure.DELETED,
            )
        else:
            if user.external_id:
                logger.warning(
                    "Replacing identity id of %s (%s -> %s)",
                    address,
                    user.external_id,
                    caller_id,
                )
            user.link_external_id(caller_id, full_name)
            created = False

        await commit_core(
            self._db_session,
            lambda: self._users.save(user),
            _sign_in_failed(address),
            logger,
        )
        logger.info(
            "%s %s as %s",
            "Provisioned" if created else "Linked",
            address,
            user.role.value,
        )
        return SignInResult(user=user, linked=True, created=created)


def _sign_in_failed(email: str):
    def to_error(e: Exception) -> DomainException:
        return DomainException(
            f"Failed to sign in {email}",
            ErrorCode.INTERNAL_ERROR,
            details={"email": email, "error": str(e)},
        )

    return to_error
