"""User Request Handler — per-verb orchestration of validation, storage, and outcome.

Invariants:
    - Order per request: identity check -> body check -> storage call -> respond
    - Validation failures raise before the repository is touched
    - Repository None is turned into ResourceNotFoundError (404), never a 400
    - One repository call per request, except PUT without a body (lookup only)
    - No retries: DatabaseError from the repository propagates unchanged

Design Decisions:
    - Handler returns envelopes, routes only choose the status code
    - A missing POST body is treated as {}: both fields reported missing
    - A missing PUT body still resolves identity first, so an unknown id is 404
      and a known id is 400
"""

import logging

from user_service.core.domain_types import UserFilter
from user_service.core.errors import FieldValidationError, ResourceNotFoundError
from user_service.core.repository_protocols import UserRepository
from user_service.core.validate_fields import require_user_fields, validate_user_fields
from user_service.core.validate_identity import require_user_id
from user_service.schemas.user import (
    UserEnvelope, UserListEnvelope, UserPayload, UserResponse,
)

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "User"


def _envelope(user) -> UserEnvelope:
    return UserEnvelope(data=UserResponse.from_user(user))


class UserRequestHandler:
    """Maps each /users verb onto validators and a single repository call."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list_users(self, user_filter: UserFilter | None = None) -> UserListEnvelope:
        if user_filter is not None and user_filter.is_empty:
            user_filter = None
        users = await self.repository.read_all(user_filter)
        return UserListEnvelope(data=[UserResponse.from_user(u) for u in users])

    async def create_user(self, payload: UserPayload | None) -> UserEnvelope:
        payload = payload or UserPayload()
        fields = require_user_fields(payload.name, payload.email)
        user = await self.repository.create(fields)
        return _envelope(user)

    async def get_user(self, raw_id: str) -> UserEnvelope:
        user_id = require_user_id(raw_id)
        user = await self.repository.read_one(user_id)
        if user is None:
            raise ResourceNotFoundError(RESOURCE_TYPE, raw_id)
        return _envelope(user)

    async def replace_user(
        self, raw_id: str, payload: UserPayload | None,
    ) -> UserEnvelope:
        user_id = require_user_id(raw_id)
        if payload is None:
            # nothing to validate yet: existence decides between 404 and 400
            if await self.repository.read_one(user_id) is None:
                raise ResourceNotFoundError(RESOURCE_TYPE, raw_id)
            raise FieldValidationError(validate_user_fields(None, None))
        fields = require_user_fields(payload.name, payload.email)
        user = await self.repository.update(user_id, fields)
        if user is None:
            raise ResourceNotFoundError(RESOURCE_TYPE, raw_id)
        return _envelope(user)

    async def delete_user(self, raw_id: str) -> UserEnvelope:
        user_id = require_user_id(raw_id)
        user = await self.repository.delete(user_id)
        if user is None:
            raise ResourceNotFoundError(RESOURCE_TYPE, raw_id)
        return _envelope(user)
