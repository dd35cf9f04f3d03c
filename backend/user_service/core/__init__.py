"""Core Layer — pure validation and domain types, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: validators decide,
      services perform the single storage call
"""
