"""Tagged Outcomes - success-with-value or failure-with-kind, returned by the user manager.

Invariants:
    - Exactly one of Success / Failure per operation call
    - Failure always carries an ErrorKind and a human-readable message
    - Callers branch with isinstance(); there is no implicit unwrap

Design Decisions:
    - Return values over exceptions for expected domain failures: the error path has
      the same shape as the success path (ADR: same as enforce_* returning error dicts)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from user_registry.core.errors import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


Outcome = Union[Success[T], Failure]


def missing_input(message: str) -> Failure:
    return Failure(ErrorKind.MISSING_INPUT, message)


def conflict(message: str) -> Failure:
    return Failure(ErrorKind.CONFLICT, message)


def not_found(message: str) -> Failure:
    return Failure(ErrorKind.NOT_FOUND, message)
