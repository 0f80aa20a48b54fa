"""User Manager - email uniqueness, partial updates and not-found detection for users.

Invariants:
    - Stateless: the only collaborator is the injected UserStore
    - Every operation performs at most one mutating store call, after all checks pass
    - Domain failures are returned as Failure outcomes, never raised
    - Store failures other than EmailConflictError and UserVanishedError propagate unchanged

Design Decisions:
    - create_user checks "email exists" before "email empty" (ADR: check order
      kept stable; an empty email never exists, so the empty check still fires)
    - update_user skips the uniqueness check when the email is unchanged or None
    - update_user overwrites first/last name unconditionally; shape validation at the
      API boundary rejects empty names before they get here
    - EmailConflictError from save() is converted to CONFLICT: the unique constraint
      closes the race between exists_by_email() and save()
    - UserVanishedError from save() is converted to NOT_FOUND: the row was deleted
      between find_by_id() and save()
"""

import logging

from user_registry.core.domain_types import (
    Page, PageSpec, UserDraft, UserId, UserRecord,
)
from user_registry.core.errors import (
    EmailConflictError, ErrorKind, UserVanishedError,
)
from user_registry.core.outcome import (
    Outcome, Success, conflict, missing_input, not_found,
)
from user_registry.core.repository_protocols import UserStore

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found. Maybe you entered wrong or negative id?"
ID_REQUIRED = "Id can not be null."


class UserManager:
    """Applies business rules around users on top of a UserStore."""

    def __init__(self, store: UserStore):
        self._store = store

    async def list_users(self, page_spec: PageSpec) -> Page:
        """Return one page of all users, unchanged from the store."""
        return await self._store.find_all(page_spec)

    async def search_by_first_name(
        self, name: str | None, page_spec: PageSpec,
    ) -> Outcome[Page]:
        """Return one page of users whose first name equals name."""
        if not name:
            logger.warning(
                "Requested name is null or empty",
                extra={"error_code": ErrorKind.MISSING_INPUT.value},
            )
            return missing_input("Name can not be null or empty")
        page = await self._store.find_by_first_name(name, page_spec)
        if page is None:
            return not_found("User not found")
        return Success(page)

    async def create_user(self, draft: UserDraft) -> Outcome[UserRecord]:
        """Persist a new user from draft if its email is free."""
        logger.info(f"Creating user according to received request: {draft}")
        if await self._store.exists_by_email(draft.email):
            return self._email_taken(draft.email, "User already exists")

        if not draft.email:
            logger.warning(
                f"Requested email is null or empty: {draft.email!r}",
                extra={"error_code": ErrorKind.MISSING_INPUT.value},
            )
            return missing_input("Email cannot be null or empty")

        record = UserRecord(
            first_name=draft.first_name,
            last_name=draft.last_name,
            email=draft.email,
        )
        try:
            saved = await self._store.save(record)
        except EmailConflictError:
            return self._email_taken(draft.email, "User already exists")
        logger.info(f"Created user: {saved}", extra={"user_id": saved.id})
        return Success(saved)

    async def update_user(
        self, user_id: UserId | None, draft: UserDraft,
    ) -> Outcome[UserRecord]:
        """Apply draft to an existing user; the email changes only if it is free."""
        logger.info(
            f"Updating user with id {user_id} according to received request: {draft}",
            extra={"user_id": user_id},
        )
        if user_id is None:
            return self._id_missing()

        record = await self._store.find_by_id(user_id)
        if record is None:
            return self._user_not_found(user_id)

        # A record's own email never counts as taken
        if draft.email is not None and draft.email != record.email:
            if await self._store.exists_by_email(draft.email):
                return self._email_taken(
                    draft.email, "User with this email already exists",
                )
            record.email = draft.email

        record.first_name = draft.first_name
        record.last_name = draft.last_name

        try:
            saved = await self._store.save(record)
        except EmailConflictError:
            return self._email_taken(
                draft.email, "User with this email already exists",
            )
        except UserVanishedError:
            return self._user_not_found(user_id)
        return Success(saved)

    async def delete_user(self, user_id: UserId | None) -> Outcome[None]:
        """Remove an existing user."""
        logger.info(f"Deleting user with id {user_id}", extra={"user_id": user_id})
        if user_id is None:
            return self._id_missing()

        record = await self._store.find_by_id(user_id)
        if record is None:
            return self._user_not_found(user_id)

        await self._store.delete(record)
        return Success(None)

    # ─── Failure helpers ────────────────────────────────────────

    def _email_taken(self, email: str | None, message: str):
        logger.warning(
            f"Requested email already registered: {email}",
            extra={"error_code": ErrorKind.CONFLICT.value},
        )
        return conflict(message)

    def _id_missing(self):
        logger.warning(
            "Requested id is null",
            extra={"error_code": ErrorKind.MISSING_INPUT.value},
        )
        return missing_input(ID_REQUIRED)

    def _user_not_found(self, user_id: UserId):
        logger.warning(
            f"User {user_id} not found",
            extra={"error_code": ErrorKind.NOT_FOUND.value, "user_id": user_id},
        )
        return not_found(USER_NOT_FOUND)
