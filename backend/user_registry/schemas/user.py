"""User Schemas - Pydantic models with field-level validation for the /users API.

Invariants:
    - UserRequest.first_name / last_name: 1-255 chars, not blank
    - UserRequest.email: valid email syntax, at most 255 chars, no display name
    - Validators reject, never rewrite: accepted values reach the manager as sent
    - Responses expose id, first_name, last_name, email (snake_case on the wire)

Design Decisions:
    - Shape checks live here, business checks in UserManager: a request that reaches
      the manager is already well-formed (ADR: validation at the boundary)
    - email-validator for syntax only; its normalized form is discarded so the stored
      email is exactly what the client sent
    - Email length is a Field constraint (string_too_long), so only syntax failures
      surface as value_error on email
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from user_registry.core.domain_types import Page, UserDraft, UserRecord

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


class UserRequest(BaseModel):
    """Create/update payload - the same shape for both operations."""
    first_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(max_length=EMAIL_MAX_LENGTH)

    @field_validator("first_name", "last_name")
    @classmethod
    def reject_blank_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, v: str) -> str:
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email address: {e}") from e
        return v

    def to_draft(self) -> UserDraft:
        return UserDraft(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
        )


class UserResponse(BaseModel):
    """User response - public-facing user data."""
    id: int
    first_name: str
    last_name: str
    email: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserResponse":
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
        )


class PageResponse(BaseModel):
    """One page of users plus paging metadata."""
    content: list[UserResponse]
    number: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse":
        return cls(
            content=[UserResponse.from_record(r) for r in page.content],
            number=page.number,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number_of_elements=page.number_of_elements,
            first=page.first,
            last=page.last,
            empty=page.empty,
        )


class MessageResponse(BaseModel):
    message: str
