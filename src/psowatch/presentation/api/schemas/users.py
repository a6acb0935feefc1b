from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ChangeRoleRequest(BaseModel):
    """Request schema for a role change.

    ``role`` null means unassign (soft delete), as older clients send it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_email: str
    role: Optional[str]


class RoleChangeResponse(BaseModel):
    email: str
    previous_role: Optional[str]
    new_role: str
    user_created: bool = False


class SignInRequest(BaseModel):
    """Profile claims forwarded by the auth gateway on first access."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str
    full_name: Optional[str] = None


class CurrentUserResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    created: bool = False
