"""Core Layer - domain types, failure taxonomy and store contracts. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
