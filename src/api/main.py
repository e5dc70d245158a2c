"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging, routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.adapters.clock.system import SystemClock
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Todo admission API v1 - Sign up, sign in and add todos",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging from settings
    - Creates the process-wide rate limiter on startup
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting application...")

    # Store limiter in app state for dependency injection
    app.state.rate_limiter = SlidingWindowRateLimiter(
        clock=SystemClock(),
        max_keys=settings.rate_limit_max_keys,
    )

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="todo-admission",
    description="Request admission for a todo application - rate limiting, "
    "validation and sanitization in front of the account and storage services",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
