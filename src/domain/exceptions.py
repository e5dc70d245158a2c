"""
Domain exceptions - Semantic error types for request admission.

This module defines domain-specific exceptions that communicate
admission decisions without leaking transport details.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .admission import RateLimitPolicy


class AdmissionError(Exception):
    """Base class for admission domain errors."""

    pass


class ValidationError(AdmissionError):
    """
    First constraint violated by a raw input.

    Attributes:
        field: Name of the offending field (e.g. "confirmPassword")
        reason: Machine-readable rule identifier (e.g. "mismatch")
        message: User-facing text, surfaced verbatim by callers
    """

    def __init__(self, field: str, reason: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, reason={self.reason!r})"


class RateLimitExceeded(AdmissionError):
    """Action budget exhausted for the current window."""

    def __init__(self, policy: "RateLimitPolicy", retry_after_ms: float) -> None:
        super().__init__(policy.message)
        self.policy = policy
        self.retry_after_ms = retry_after_ms


class SchemaNotFound(AdmissionError):
    """No validation schema registered under the requested name."""

    pass


class GatewayError(Exception):
    """Opaque failure reported by an external account or storage collaborator."""

    pass
