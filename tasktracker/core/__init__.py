"""Core Layer — pure domain logic, no IO, no async, no file access.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Functions are deterministic given their inputs (clock passed in explicitly)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
