"""Infrastructure Layer - database access, store implementations and logging setup.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - All SQLAlchemy errors mapped to core/errors.py types before leaving this layer

Design Decisions:
    - Concrete stores live beside the session manager that feeds them (ADR: ExMA locality)
"""
