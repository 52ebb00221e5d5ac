"""Infrastructure Layer — file persistence and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All OS-level failures mapped to StoreError subclasses (core/errors.py)
"""
