"""Domain Types - user records, drafts and pages shared by the core and the store.

Invariants:
    - UserRecord.id is None until the store assigns it, then never changes
    - PageSpec.number is zero-based; PageSpec.size is always >= 1
    - Page.content holds at most PageSpec.size records

Design Decisions:
    - Plain dataclasses over ORM objects: core logic never touches SQLAlchemy
      (ADR: ExMA dependency arrows point inward)
    - UserRecord is mutable: update applies field changes in place before saving
"""

from dataclasses import dataclass
from math import ceil
from typing import NewType


UserId = NewType("UserId", int)


@dataclass
class UserRecord:
    """A single user as stored and returned by the registry."""
    first_name: str
    last_name: str
    email: str
    id: UserId | None = None


@dataclass(frozen=True)
class UserDraft:
    """Caller-supplied fields for create/update, before persistence."""
    first_name: str | None
    last_name: str | None
    email: str | None


@dataclass(frozen=True)
class PageSpec:
    """Which slice of an ordered result to return."""
    number: int = 0
    size: int = 5

    def __post_init__(self):
        if self.number < 0:
            raise ValueError("page number must be >= 0")
        if self.size < 1:
            raise ValueError("page size must be >= 1")

    @property
    def offset(self) -> int:
        return self.number * self.size


@dataclass(frozen=True)
class Page:
    """A bounded, ordered subset of records plus paging metadata."""
    content: list[UserRecord]
    spec: PageSpec
    total_elements: int

    @property
    def number(self) -> int:
        return self.spec.number

    @property
    def size(self) -> int:
        return self.spec.size

    @property
    def total_pages(self) -> int:
        return ceil(self.total_elements / self.spec.size)

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def first(self) -> bool:
        return self.spec.number == 0

    @property
    def last(self) -> bool:
        return self.spec.number + 1 >= self.total_pages

    @property
    def empty(self) -> bool:
        return not self.content
