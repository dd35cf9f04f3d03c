"""Services Layer — request orchestration and persistence.

Invariants:
    - Routes call UserRequestHandler only; the handler calls the repository only
    - Exactly one storage call per request on every validated path
"""
