"""
Domain layer - Pure admission logic with zero framework imports.

This package decides whether a raw request may proceed: it throttles
repeated actions, validates and normalizes input, and sanitizes free
text. It defines its own port interfaces for the clock and for the
external collaborators that receive admitted input.
"""

from .admission import (
    AdmissionService,
    RateLimitPolicy,
    SignInInput,
    SignUpInput,
    TodoInput,
)
from .exceptions import (
    AdmissionError,
    GatewayError,
    RateLimitExceeded,
    SchemaNotFound,
    ValidationError,
)
from .ports import AccountGateway, Clock, TodoSink
from .rate_limiter import SlidingWindowRateLimiter
from .sanitizer import sanitize
from .validation import ValidatedInput, validate

__all__ = [
    "AccountGateway",
    "AdmissionError",
    "AdmissionService",
    "Clock",
    "GatewayError",
    "RateLimitExceeded",
    "RateLimitPolicy",
    "SchemaNotFound",
    "SignInInput",
    "SignUpInput",
    "SlidingWindowRateLimiter",
    "TodoInput",
    "TodoSink",
    "ValidatedInput",
    "ValidationError",
    "sanitize",
    "validate",
]
