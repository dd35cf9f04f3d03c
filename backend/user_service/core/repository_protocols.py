"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Not-found is a None return, never an exception
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass in-memory fakes
    - Async in Protocol: implementations do IO; the pure validators that run
      before them are never async
"""

from typing import Protocol, Sequence

from user_service.core.domain_types import UserFields, UserFilter, UserId


class UserLike(Protocol):
    """Structural contract for persisted users handed back by a repository."""
    id: UserId
    name: str
    email: str


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def create(self, fields: UserFields) -> UserLike: ...
    async def read_all(
        self, user_filter: UserFilter | None = None,
    ) -> Sequence[UserLike]: ...
    async def read_one(self, user_id: UserId) -> UserLike | None: ...
    async def update(
        self, user_id: UserId, fields: UserFields,
    ) -> UserLike | None: ...
    async def delete(self, user_id: UserId) -> UserLike | None: ...
    async def delete_all(self) -> int: ...
