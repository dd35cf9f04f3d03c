"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID — never pass raw path strings past the identity check
    - FieldPresence encodes the three-way presence check explicitly
    - UserFields only exists for values that passed field validation

Design Decisions:
    - NewType over dataclass wrapper for UserId: zero runtime cost, full type-checker support
    - Frozen dataclasses for validated values: immutable once checked
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Field Limits ────────────────────────────────────────────────

NAME_MAX_LENGTH: int = 255
EMAIL_MAX_LENGTH: int = 320  # RFC 5321 path limit


# ─── Enums ───────────────────────────────────────────────────────

class FieldPresence(str, Enum):
    """Presence of a submitted field — absent, exactly empty, or present."""
    ABSENT = "absent"
    EMPTY = "empty"
    PRESENT = "present"


class ViolationReason(str, Enum):
    """Why a submitted field was rejected."""
    MISSING = "missing"
    EMPTY = "empty"
    MALFORMED = "malformed"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class FieldViolation:
    """A single rejected field with the reason it failed."""
    field: str
    reason: ViolationReason

    def to_detail(self) -> dict:
        return {"field": self.field, "reason": self.reason.value}


@dataclass(frozen=True)
class UserFields:
    """Validated name/email pair — safe to hand to the repository."""
    name: str
    email: str


@dataclass(frozen=True)
class UserFilter:
    """Exact-match listing filter. None on a field means 'any value'."""
    name: str | None = None
    email: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.email is None
