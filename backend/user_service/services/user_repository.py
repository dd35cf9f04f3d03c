"""User Repository — the only code that reads or writes the users table.

Invariants:
    - Not-found is returned as None, never raised
    - Every mutating call commits exactly one change (single-record atomicity)
    - read_all is ordered by insertion (User.seq) and never fails on empty results
    - SQLAlchemy failures roll back and surface as DatabaseError

Design Decisions:
    - Repository over raw queries in routes: request handler stays storage-agnostic
      and tests swap in an in-memory fake through the UserRepository protocol
    - delete_all exists for tests and maintenance only; no route exposes it
"""

import functools
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.domain_types import UserFields, UserFilter, UserId
from user_service.infrastructure.database import to_database_error
from user_service.models.user import User

logger = logging.getLogger(__name__)


def _storage_call(func):
    """Roll back and translate SQLAlchemy errors raised by a repository method."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"User repository {func.__name__} failed: {e}",
                extra={"operation": func.__name__},
            )
            raise to_database_error(e) from e

    return wrapper


class SqlUserRepository:
    """SQLAlchemy-backed UserRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, user_id: UserId) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @_storage_call
    async def create(self, fields: UserFields) -> User:
        user = User(name=fields.name, email=fields.email)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("User created", extra={"user_id": str(user.id)})
        return user

    @_storage_call
    async def read_all(self, user_filter: UserFilter | None = None) -> list[User]:
        query = select(User).order_by(User.seq)
        if user_filter is not None:
            if user_filter.name is not None:
                query = query.where(User.name == user_filter.name)
            if user_filter.email is not None:
                query = query.where(User.email == user_filter.email)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @_storage_call
    async def read_one(self, user_id: UserId) -> User | None:
        return await self._get(user_id)

    @_storage_call
    async def update(self, user_id: UserId, fields: UserFields) -> User | None:
        """Replace name and email wholesale. id is never touched."""
        user = await self._get(user_id)
        if user is None:
            return None
        user.name = fields.name
        user.email = fields.email
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("User updated", extra={"user_id": str(user_id)})
        return user

    @_storage_call
    async def delete(self, user_id: UserId) -> User | None:
        """Remove the user and return its last persisted state."""
        user = await self._get(user_id)
        if user is None:
            return None
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User deleted", extra={"user_id": str(user_id)})
        return user

    @_storage_call
    async def delete_all(self) -> int:
        result = await self.db.execute(delete(User))
        await self.db.commit()
        logger.info(f"Deleted {result.rowcount} user(s)")
        return result.rowcount
