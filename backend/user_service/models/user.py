"""User ORM — persists the single User resource.

Invariants:
    - id is a UUID generated on insert, unique and immutable
    - name and email are non-nullable (validated before reaching the ORM)
    - seq increases with every insert and defines listing order

Design Decisions:
    - Surrogate integer seq as primary key, public UUID id as unique column:
      insertion order stays stable even when timestamps collide
    - updated_at maintained by SQLAlchemy onupdate, not a DB trigger
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from user_service.core.domain_types import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH
from user_service.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A user with a name and an email address."""
    __tablename__ = "users"

    seq: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), unique=True, index=True,
        nullable=False, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
