from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SupervisorReassignmentRequest(BaseModel):
    """Request schema for a bulk supervisor reassignment.

    Accepts both snake_case and camelCase keys. A missing or empty
    ``new_supervisor_email`` unassigns the users.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_emails: list[str] = Field(default_factory=list)
    new_supervisor_email: Optional[str] = None


class SupervisorReassignmentResponse(BaseModel):
    affected_count: int


class SupervisorResponse(BaseModel):
    """Entry of the supervisor picker."""

    email: str
    full_name: str
    external_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
