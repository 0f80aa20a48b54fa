"""User ORM - persisted row behind every UserRecord.

Invariants:
    - id is an autoincrement integer primary key, never reused
    - first_name, last_name, email are non-nullable, at most 255 chars
    - email is UNIQUE: the database rejects duplicates at write time

Design Decisions:
    - Unique constraint named explicitly so IntegrityError can be attributed to it
    - Index on first_name: search_by_first_name filters on it
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from user_registry.db.base import Base

EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"


class User(Base):
    """User row."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return (
            f"User(id={self.id!r}, first_name={self.first_name!r}, "
            f"last_name={self.last_name!r}, email={self.email!r})"
        )
