"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and collaborator adapters into routes.
"""

from dataclasses import replace

from fastapi import Depends, Request

from src.adapters.console.gateways import ConsoleAccountGateway, ConsoleTodoSink
from src.config.settings import Settings, get_settings
from src.domain.admission import (
    SIGN_IN_POLICY,
    SIGN_UP_POLICY,
    TODO_POLICY,
    AdmissionService,
)
from src.domain.rate_limiter import SlidingWindowRateLimiter

# Module-level singletons - console gateways are stateless
_account_gateway = ConsoleAccountGateway()
_todo_sink = ConsoleTodoSink()


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    """
    Get rate limiter from app state.

    The limiter is created during app lifespan startup and stored in app.state,
    so its attempt history is shared by every request the app serves.
    """
    return request.app.state.rate_limiter


def get_account_gateway() -> ConsoleAccountGateway:
    """Get console account gateway (singleton)."""
    return _account_gateway


def get_todo_sink() -> ConsoleTodoSink:
    """Get console todo sink (singleton)."""
    return _todo_sink


def get_admission_service(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AdmissionService:
    """
    Create admission service with injected limiter and configured budgets.

    Budgets stay caller-supplied: the limiter only receives them per call.
    Idle limiter keys are swept here, at most once per window.
    """
    window_ms = settings.rate_limit_window_ms
    rate_limiter = get_rate_limiter(request)
    rate_limiter.sweep_if_due(window_ms)
    return AdmissionService(
        rate_limiter=rate_limiter,
        sign_up_policy=replace(
            SIGN_UP_POLICY, max_attempts=settings.sign_up_max_attempts, window_ms=window_ms
        ),
        sign_in_policy=replace(
            SIGN_IN_POLICY, max_attempts=settings.sign_in_max_attempts, window_ms=window_ms
        ),
        todo_policy=replace(
            TODO_POLICY, max_attempts=settings.todo_max_attempts, window_ms=window_ms
        ),
    )


def get_rate_limit_scope(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> str | None:
    """
    Identity composed into rate limit keys.

    Returns None (one budget per action for the whole process) unless
    per-client limiting is enabled, in which case the client host is used.
    """
    if not settings.rate_limit_per_client or request.client is None:
        return None
    return request.client.host
