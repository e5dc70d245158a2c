"""
API request and response models.

Pydantic models for FastAPI endpoint shape checks and OpenAPI schema
generation. Request fields accept any JSON value: types, constraints and
normalization belong to the domain validator, which reports the first
violation with user-facing text.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SignUpRequest(BaseModel):
    """Request model for account creation."""

    model_config = ConfigDict(populate_by_name=True)

    email: Any = Field(None, description="Email address (5-100 characters)")
    password: Any = Field(
        None,
        description="Password (8-100 characters, upper and lower case letters and a digit)",
    )
    confirm_password: Any = Field(
        None, alias="confirmPassword", description="Must equal password exactly"
    )


class SignUpResponse(BaseModel):
    """Response model for successful account creation."""

    message: str
    email: str


class SignInRequest(BaseModel):
    """Request model for sign-in."""

    email: Any = None
    password: Any = None


class SignInResponse(BaseModel):
    """Response model for successful sign-in."""

    message: str
    email: str


class TodoRequest(BaseModel):
    """Request model for todo creation."""

    title: Any = Field(None, description="Todo title (1-200 characters)")
    description: Any = Field(None, description="Optional description (up to 1000 characters)")


class TodoResponse(BaseModel):
    """Response model for an admitted todo, as handed to storage."""

    title: str
    description: str | None


class ValidationErrorDetail(BaseModel):
    """First validation failure, surfaced verbatim to the user."""

    message: str
    field: str
    reason: str


class ValidationErrorResponse(BaseModel):
    """Validation error response model."""

    detail: ValidationErrorDetail


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
