"""User Routes — CRUD endpoints for the User resource.

Invariants:
    - Routes contain no validation or storage logic (delegate to UserRequestHandler)
    - Path ids arrive as raw strings: the identity check belongs to the handler, so a
      malformed id is a domain ValidationError rather than a framework error
    - Request bodies are optional at the framework level; presence rules run in core/

Design Decisions:
    - Handler built per request from the request-scoped DB session
    - No route for delete_all: maintenance-only repository operation
"""

import logging

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.infrastructure.database import get_db
from user_service.schemas.user import (
    UserEnvelope, UserListEnvelope, UserPayload, UserQuery,
)
from user_service.services.user_repository import SqlUserRepository
from user_service.services.user_requests import UserRequestHandler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def get_user_handler(db: AsyncSession = Depends(get_db)) -> UserRequestHandler:
    """FastAPI dependency wiring the handler to the request's session."""
    return UserRequestHandler(SqlUserRepository(db))


@router.get("", response_model=UserListEnvelope)
async def list_users(
    query: UserQuery = Depends(),
    handler: UserRequestHandler = Depends(get_user_handler),
):
    """List users in insertion order, optionally filtered by exact name/email."""
    return await handler.list_users(query.to_filter())


@router.post(
    "", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: UserPayload | None = Body(None),
    handler: UserRequestHandler = Depends(get_user_handler),
):
    """Create a user."""
    return await handler.create_user(payload)


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: str, handler: UserRequestHandler = Depends(get_user_handler),
):
    """Get a user by id."""
    return await handler.get_user(user_id)


@router.put("/{user_id}", response_model=UserEnvelope)
async def replace_user(
    user_id: str,
    payload: UserPayload | None = Body(None),
    handler: UserRequestHandler = Depends(get_user_handler),
):
    """Replace a user's name and email."""
    return await handler.replace_user(user_id, payload)


@router.delete("/{user_id}", response_model=UserEnvelope)
async def delete_user(
    user_id: str, handler: UserRequestHandler = Depends(get_user_handler),
):
    """Delete a user and return its last state."""
    return await handler.delete_user(user_id)
