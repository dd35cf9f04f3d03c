"""Infrastructure Layer — storage handle and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All storage failures mapped to core DatabaseError
"""
