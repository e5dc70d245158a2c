"""
API v1 routes.

Defines REST endpoints that run the admission pipeline before handing
input to the account and todo collaborators.
"""

import math

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import (
    get_account_gateway,
    get_admission_service,
    get_rate_limit_scope,
    get_todo_sink,
)
from src.api.models import (
    ErrorResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    TodoRequest,
    TodoResponse,
    ValidationErrorResponse,
)
from src.domain.admission import AdmissionService
from src.domain.exceptions import GatewayError, RateLimitExceeded, ValidationError
from src.domain.ports import AccountGateway, TodoSink

router = APIRouter(tags=["v1"])

_ADMISSION_RESPONSES = {
    422: {"model": ValidationErrorResponse, "description": "First validation failure"},
    429: {"model": ErrorResponse, "description": "Too many attempts"},
}


def _validation_failed(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": exc.message, "field": exc.field, "reason": exc.reason},
    )


def _rate_limited(exc: RateLimitExceeded) -> HTTPException:
    retry_after_seconds = max(1, math.ceil(exc.retry_after_ms / 1000))
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=exc.policy.message,
        headers={"Retry-After": str(retry_after_seconds)},
    )


@router.post(
    "/signup",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_ADMISSION_RESPONSES,
        400: {"model": ErrorResponse, "description": "Account service rejected the request"},
    },
    summary="Create an account",
    description="Submit email, password and password confirmation. "
    "The request is throttled, validated and then handed to the account service.",
)
async def sign_up(
    request_data: SignUpRequest,
    service: AdmissionService = Depends(get_admission_service),
    gateway: AccountGateway = Depends(get_account_gateway),
    scope: str | None = Depends(get_rate_limit_scope),
) -> SignUpResponse:
    """
    Create an account.

    - **email**: 5-100 characters, stored trimmed and lowercased
    - **password**: 8-100 characters with upper case, lower case and a digit
    - **confirmPassword**: must equal password exactly
    """
    try:
        admitted = service.admit_sign_up(request_data.model_dump(by_alias=True), scope=scope)
    except RateLimitExceeded as exc:
        raise _rate_limited(exc) from None
    except ValidationError as exc:
        raise _validation_failed(exc) from None

    try:
        gateway.sign_up(admitted.email, admitted.password)
    except GatewayError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Registration failed. Please try again.",
        ) from None

    return SignUpResponse(message="Account created", email=admitted.email)


@router.post(
    "/signin",
    response_model=SignInResponse,
    responses={
        **_ADMISSION_RESPONSES,
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
    },
    summary="Sign in",
    description="Submit email and password. The request is throttled and "
    "validated before the credentials are checked by the account service.",
)
async def sign_in(
    request_data: SignInRequest,
    service: AdmissionService = Depends(get_admission_service),
    gateway: AccountGateway = Depends(get_account_gateway),
    scope: str | None = Depends(get_rate_limit_scope),
) -> SignInResponse:
    """Sign in with email and password."""
    try:
        admitted = service.admit_sign_in(request_data.model_dump(), scope=scope)
    except RateLimitExceeded as exc:
        raise _rate_limited(exc) from None
    except ValidationError as exc:
        raise _validation_failed(exc) from None

    try:
        gateway.sign_in(admitted.email, admitted.password)
    except GatewayError:
        # Same message whichever credential was wrong
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        ) from None

    return SignInResponse(message="Signed in", email=admitted.email)


@router.post(
    "/todos",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_ADMISSION_RESPONSES,
        502: {"model": ErrorResponse, "description": "Todo storage failed"},
    },
    summary="Add a todo",
    description="Submit a title and optional description. Free text is "
    "sanitized before it is handed to storage.",
)
async def add_todo(
    request_data: TodoRequest,
    service: AdmissionService = Depends(get_admission_service),
    sink: TodoSink = Depends(get_todo_sink),
    scope: str | None = Depends(get_rate_limit_scope),
) -> TodoResponse:
    """
    Add a todo item.

    - **title**: 1-200 characters after trimming
    - **description**: optional, up to 1000 characters
    """
    try:
        admitted = service.admit_todo(request_data.model_dump(), scope=scope)
    except RateLimitExceeded as exc:
        raise _rate_limited(exc) from None
    except ValidationError as exc:
        raise _validation_failed(exc) from None

    try:
        sink.add_todo(admitted.title, admitted.description)
    except GatewayError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to add todo",
        ) from None

    return TodoResponse(title=admitted.title, description=admitted.description)
