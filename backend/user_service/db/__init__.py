"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
