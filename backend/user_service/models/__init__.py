"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is populated before create_all/autogenerate
"""

from user_service.models.user import User  # noqa: F401
