"""SQL User Store - UserStore implementation on an async SQLAlchemy session.

Invariants:
    - Pages are ordered by id: the same query without writes yields the same page
    - Each save()/delete() is a single commit touching one row
    - A unique-email violation surfaces as EmailConflictError, after rollback
    - Updating a row deleted since it was read raises UserVanishedError
    - Never returns ORM objects: rows are copied into UserRecord

Design Decisions:
    - One store per request session (ADR: AsyncSession is not shareable across tasks)
    - find_by_first_name always produces a page, possibly empty; None is reserved for
      stores that cannot answer the query at all
"""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from user_registry.core.domain_types import Page, PageSpec, UserId, UserRecord
from user_registry.core.errors import (
    EmailConflictError, ErrorContext, UserVanishedError,
)
from user_registry.models.user import EMAIL_UNIQUE_CONSTRAINT, User

logger = logging.getLogger(__name__)


def _to_record(row: User) -> UserRecord:
    return UserRecord(
        id=UserId(row.id),
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
    )


def _is_email_violation(exc: IntegrityError) -> bool:
    detail = str(exc.orig)
    # PostgreSQL names the constraint, SQLite names the column
    return EMAIL_UNIQUE_CONSTRAINT in detail or "users.email" in detail


class SqlAlchemyUserStore:
    """UserStore backed by the users table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all(self, page_spec: PageSpec) -> Page:
        return await self._page(select(User), page_spec)

    async def find_by_first_name(
        self, first_name: str, page_spec: PageSpec,
    ) -> Page | None:
        return await self._page(
            select(User).where(User.first_name == first_name), page_spec,
        )

    async def find_by_email(self, email: str) -> UserRecord | None:
        row = await self._db.scalar(select(User).where(User.email == email))
        return _to_record(row) if row else None

    async def exists_by_email(self, email: str | None) -> bool:
        found = await self._db.scalar(
            select(User.id).where(User.email == email).limit(1),
        )
        return found is not None

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        row = await self._db.get(User, user_id)
        return _to_record(row) if row else None

    async def save(self, record: UserRecord) -> UserRecord:
        if record.id is None:
            row = User(
                first_name=record.first_name,
                last_name=record.last_name,
                email=record.email,
            )
            self._db.add(row)
        else:
            row = await self._db.get(User, record.id)
            if row is None:
                raise UserVanishedError(
                    record.id, ErrorContext(user_id=record.id, operation="save"),
                )
            row.first_name = record.first_name
            row.last_name = record.last_name
            row.email = record.email

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if _is_email_violation(e):
                logger.warning(
                    f"Unique email constraint rejected {record.email}",
                    extra={"error_code": "CONFLICT", "operation": "save"},
                )
                raise EmailConflictError(
                    record.email, ErrorContext(user_id=record.id, operation="save"),
                ) from e
            raise
        await self._db.refresh(row)
        return _to_record(row)

    async def delete(self, record: UserRecord) -> None:
        row = await self._db.get(User, record.id)
        if row is None:
            return
        await self._db.delete(row)
        await self._db.commit()

    async def _page(self, query: Select, page_spec: PageSpec) -> Page:
        total = await self._db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        rows = await self._db.scalars(
            query.order_by(User.id)
            .limit(page_spec.size)
            .offset(page_spec.offset),
        )
        return Page(
            content=[_to_record(row) for row in rows],
            spec=page_spec,
            total_elements=total or 0,
        )
