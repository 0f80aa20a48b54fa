"""Services Layer - orchestrates core rules around IO-bound collaborators.

Invariants:
    - Services depend on core Protocols, never on concrete stores

Design Decisions:
    - Store instance injected per request (ADR: no global state)
"""
