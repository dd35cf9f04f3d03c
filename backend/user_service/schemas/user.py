"""User Schemas — Pydantic models for the /users request bodies and response envelopes.

Invariants:
    - UserPayload fields are explicitly optional: presence rules live in core/validate_fields
    - Non-string field values are rejected by Pydantic (mapped to 400 by the error handler)
    - Length caps mirror the column sizes, so over-long input is a 400, never a storage error
    - UserResponse serializes id as "_id"
    - Success responses are always wrapped in {"data": ...}

Design Decisions:
    - Strict str (no coercion from numbers/bools): a name of 42 is a client error, not "42"
    - alias + populate_by_name: FastAPI dumps by alias and re-validates, so the alias
      must be accepted on input as well as emitted on output
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from user_service.core.domain_types import (
    EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, UserFilter,
)
from user_service.core.repository_protocols import UserLike


class UserPayload(BaseModel):
    """POST/PUT body — both fields optional at the parsing layer."""
    name: StrictStr | None = Field(None, max_length=NAME_MAX_LENGTH)
    email: StrictStr | None = Field(None, max_length=EMAIL_MAX_LENGTH)


class UserQuery(BaseModel):
    """GET /users exact-match filter."""
    name: str | None = None
    email: str | None = None

    def to_filter(self) -> UserFilter:
        return UserFilter(name=self.name, email=self.email)


class UserResponse(BaseModel):
    """Public-facing user data."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(alias="_id")
    name: str
    email: str

    @classmethod
    def from_user(cls, user: UserLike) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class UserEnvelope(BaseModel):
    data: UserResponse


class UserListEnvelope(BaseModel):
    data: list[UserResponse]
