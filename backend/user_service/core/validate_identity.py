"""Identity Validation — decides whether a path-supplied id is a well-formed user id.

Invariants:
    - Pure: no storage lookup, no side effects
    - Only the canonical 8-4-4-4-12 hexadecimal UUID form is accepted
    - Rejection happens before any storage call and maps to 400, never 404
"""

import re
from uuid import UUID

from user_service.core.domain_types import UserId
from user_service.core.errors import InvalidIdentifierError


USER_ID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
)


def parse_user_id(raw: str) -> UserId | None:
    """Return the parsed id, or None when raw is not a canonical UUID string."""
    if not isinstance(raw, str) or not USER_ID_PATTERN.fullmatch(raw):
        return None
    return UserId(UUID(raw))


def require_user_id(raw: str) -> UserId:
    """Parse raw or raise InvalidIdentifierError."""
    user_id = parse_user_id(raw)
    if user_id is None:
        raise InvalidIdentifierError(raw)
    return user_id
