"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; every error body has the shape {"error": <message>}

Design Decisions:
    - Thin routes delegate to TaskService (ADR: impureim sandwich)
"""
