"""Boundary Protocols - contract between the user manager and the record store.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - save() inserts when record.id is None, otherwise updates in place
    - save() raises EmailConflictError when another record already holds the email
    - save() raises UserVanishedError when the record to update no longer exists

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
      (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do IO; the manager awaits each call
"""

from typing import Protocol

from user_registry.core.domain_types import Page, PageSpec, UserId, UserRecord


class UserStore(Protocol):
    """Contract for user persistence - implemented by shell."""
    async def find_all(self, page_spec: PageSpec) -> Page: ...
    async def find_by_email(self, email: str) -> UserRecord | None: ...
    async def exists_by_email(self, email: str | None) -> bool: ...
    async def find_by_first_name(
        self, first_name: str, page_spec: PageSpec,
    ) -> Page | None: ...
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def save(self, record: UserRecord) -> UserRecord: ...
    async def delete(self, record: UserRecord) -> None: ...
