"""User Routes - list, search, create, update and delete users.

Invariants:
    - Request bodies are validated by Pydantic before reaching the route handler
    - Routes never contain business logic: every decision is UserManager's
    - Every Failure outcome is translated by failure_response(), never dropped
    - page is zero-based; size is clamped to settings.max_page_size
    - page and path ids are bounded to the INTEGER column range, so out-of-range
      values are shape errors (406) and never reach the database

Design Decisions:
    - UserManager built per request around the request's DB session
      (ADR: no global state, store injected explicitly)
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_registry.api.error_handlers import failure_response
from user_registry.config import get_settings
from user_registry.core.domain_types import PageSpec, UserId
from user_registry.core.outcome import Failure
from user_registry.infrastructure.database import get_db
from user_registry.infrastructure.user_store import SqlAlchemyUserStore
from user_registry.schemas.user import (
    MessageResponse, PageResponse, UserRequest, UserResponse,
)
from user_registry.services.user_manager import UserManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def get_user_manager(db: AsyncSession = Depends(get_db)) -> UserManager:
    """FastAPI dependency: a UserManager over the request's session."""
    return UserManager(SqlAlchemyUserStore(db))


def get_page_spec(
    page: int = Query(0, ge=0, le=INT32_MAX),
    size: int | None = Query(None, ge=1),
) -> PageSpec:
    """FastAPI dependency: page/size query parameters as a PageSpec."""
    settings = get_settings()
    if size is None:
        size = settings.default_page_size
    return PageSpec(number=page, size=min(size, settings.max_page_size))


@router.get("", response_model=PageResponse)
async def list_users(
    page_spec: PageSpec = Depends(get_page_spec),
    manager: UserManager = Depends(get_user_manager),
):
    """List users with pagination."""
    page = await manager.list_users(page_spec)
    return PageResponse.from_page(page)


@router.get("/search", response_model=PageResponse)
async def search_users_by_first_name(
    first_name: str | None = Query(None),
    page_spec: PageSpec = Depends(get_page_spec),
    manager: UserManager = Depends(get_user_manager),
):
    """Search users by exact first name."""
    outcome = await manager.search_by_first_name(first_name, page_spec)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return PageResponse.from_page(outcome.value)


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserRequest, manager: UserManager = Depends(get_user_manager),
):
    """Create a user."""
    outcome = await manager.create_user(body.to_draft())
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return UserResponse.from_record(outcome.value)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    body: UserRequest,
    user_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    manager: UserManager = Depends(get_user_manager),
):
    """Update a user's names and, when it is free, email."""
    outcome = await manager.update_user(UserId(user_id), body.to_draft())
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return UserResponse.from_record(outcome.value)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    manager: UserManager = Depends(get_user_manager),
):
    """Delete a user."""
    outcome = await manager.delete_user(UserId(user_id))
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    logger.info(f"User {user_id} deleted", extra={"user_id": user_id})
    return MessageResponse(message=f"Successful deleted user {user_id}")
