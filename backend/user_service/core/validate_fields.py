"""Field Validation — presence and format checks for submitted name/email pairs.

Invariants:
    - Pure and synchronous: never touches storage
    - Presence is three-way (absent / empty / present); no trimming
    - Every failing field is reported, not just the first one
    - A UserFields value is only built once both fields passed

Design Decisions:
    - Fixed email grammar by default, pluggable via email_check: callers can swap in a
      stricter checker without touching presence rules
    - Unicode throughout: the local part takes any non-space, non-@ characters and
      domain labels take any Unicode letter or digit, so internationalized
      addresses (zoë@exämple.com) are accepted as typed, without punycode
"""

import re
from typing import Callable

from user_service.core.domain_types import (
    FieldPresence, FieldViolation, UserFields, ViolationReason,
)
from user_service.core.errors import FieldValidationError


# a label is Unicode letters/digits with inner hyphens; no underscores
_LABEL = r"[^\W_](?:(?:[^\W_]|-)*[^\W_])?"

# local-part "@" domain, domain needs at least one dot-separated label after the first
EMAIL_PATTERN = re.compile(rf"[^\s@]+@{_LABEL}(?:\.{_LABEL})+")

EmailCheck = Callable[[str], bool]


def classify_presence(value: object) -> FieldPresence:
    """Explicit three-way presence check."""
    if value is None:
        return FieldPresence.ABSENT
    if value == "":
        return FieldPresence.EMPTY
    return FieldPresence.PRESENT


def is_well_formed_email(value: str) -> bool:
    """Default address grammar."""
    return bool(EMAIL_PATTERN.fullmatch(value))


def _presence_violation(
    field_name: str, value: object,
) -> FieldViolation | None:
    presence = classify_presence(value)
    if presence is FieldPresence.ABSENT:
        return FieldViolation(field_name, ViolationReason.MISSING)
    if presence is FieldPresence.EMPTY:
        return FieldViolation(field_name, ViolationReason.EMPTY)
    return None


def validate_user_fields(
    name: str | None,
    email: str | None,
    email_check: EmailCheck = is_well_formed_email,
) -> list[FieldViolation]:
    """Return every violated field. Empty list means the pair is valid."""
    violations: list[FieldViolation] = []

    name_violation = _presence_violation("name", name)
    if name_violation:
        violations.append(name_violation)

    email_violation = _presence_violation("email", email)
    if email_violation:
        violations.append(email_violation)
    elif not email_check(email):
        violations.append(FieldViolation("email", ViolationReason.MALFORMED))

    return violations


def require_user_fields(
    name: str | None,
    email: str | None,
    email_check: EmailCheck = is_well_formed_email,
) -> UserFields:
    """Validate and build UserFields, or raise FieldValidationError."""
    violations = validate_user_fields(name, email, email_check)
    if violations:
        raise FieldValidationError(violations)
    return UserFields(name=name, email=email)
