"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to UserManager (ADR: ExMA impureim sandwich)
    - Failure kinds map to HTTP status in one place (error_handlers.status_for)
"""
