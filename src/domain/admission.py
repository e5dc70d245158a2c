"""
Admission domain service - Rate limit, validate, sanitize.

Every mutating action passes through the same pipeline before it is
handed to an external collaborator:

    Rate Limiter -> Schema Validator -> Sanitizer -> handoff

The limiter runs first so a throttled caller fails fast without paying
for validation. Sanitization only touches free text (todo title and
description); credentials are handed over verbatim.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import RateLimitExceeded, ValidationError
from .rate_limiter import SlidingWindowRateLimiter
from .sanitizer import sanitize
from .validation import TODO, ValidatedInput, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitPolicy:
    """Attempt budget for one action, plus the text shown when it is exhausted."""

    action: str
    max_attempts: int
    window_ms: int
    message: str

    def key_for(self, scope: str | None = None) -> str:
        """
        Compose the limiter key.

        Without a scope every caller shares one budget per action.
        """
        if scope is None:
            return self.action
        return f"{self.action}:{scope}"


SIGN_UP_POLICY = RateLimitPolicy(
    action="signup",
    max_attempts=3,
    window_ms=60_000,
    message="Too many attempts. Please wait 1 minute.",
)
SIGN_IN_POLICY = RateLimitPolicy(
    action="signin",
    max_attempts=5,
    window_ms=60_000,
    message="Too many sign-in attempts. Please wait 1 minute.",
)
TODO_POLICY = RateLimitPolicy(
    action="addTodo",
    max_attempts=10,
    window_ms=60_000,
    message="Too many requests. Please wait a moment.",
)


@dataclass(frozen=True)
class SignUpInput:
    email: str
    password: str


@dataclass(frozen=True)
class SignInInput:
    email: str
    password: str


@dataclass(frozen=True)
class TodoInput:
    title: str
    description: str | None


@dataclass
class AdmissionService:
    """
    Domain service deciding whether an action may proceed.

    Owns no state of its own; the limiter instance is injected so that
    its attempt history lives exactly as long as the application does.
    """

    rate_limiter: SlidingWindowRateLimiter
    sign_up_policy: RateLimitPolicy = SIGN_UP_POLICY
    sign_in_policy: RateLimitPolicy = SIGN_IN_POLICY
    todo_policy: RateLimitPolicy = TODO_POLICY

    def admit_sign_up(
        self, raw_input: Mapping[str, object], scope: str | None = None
    ) -> SignUpInput:
        """
        Admit a credential-creation request.

        Args:
            raw_input: email, password, confirmPassword
            scope: Optional identity composed into the rate limit key

        Returns:
            Normalized credentials (email trimmed and lowercased)

        Raises:
            RateLimitExceeded: If the sign-up budget is exhausted
            ValidationError: For the first rule violated
        """
        self._check_rate(self.sign_up_policy, scope)
        validated = self._validate("signUp", raw_input)
        return SignUpInput(email=validated["email"], password=validated["password"])

    def admit_sign_in(
        self, raw_input: Mapping[str, object], scope: str | None = None
    ) -> SignInInput:
        """Admit a credential-verification request."""
        self._check_rate(self.sign_in_policy, scope)
        validated = self._validate("signIn", raw_input)
        return SignInInput(email=validated["email"], password=validated["password"])

    def admit_todo(self, raw_input: Mapping[str, object], scope: str | None = None) -> TodoInput:
        """
        Admit a todo item, sanitizing its free text.

        A description that sanitizes down to nothing is reported as absent;
        a title that does is rejected as required.
        """
        self._check_rate(self.todo_policy, scope)
        validated = self._validate("todo", raw_input)

        title = sanitize(validated["title"])
        if not title:
            logger.info("Rejected todo input: field=title reason=required (sanitized empty)")
            message = TODO.fields["title"].message_for("required")
            raise ValidationError("title", "required", message)

        description = validated["description"]
        if description is not None:
            description = sanitize(description) or None

        return TodoInput(title=title, description=description)

    def _check_rate(self, policy: RateLimitPolicy, scope: str | None) -> None:
        key = policy.key_for(scope)
        if self.rate_limiter.is_allowed(key, policy.max_attempts, policy.window_ms):
            return

        retry_after_ms = self.rate_limiter.retry_after_ms(
            key, policy.max_attempts, policy.window_ms
        )
        logger.warning("Rate limit exceeded for key=%s retry_after_ms=%.0f", key, retry_after_ms)
        raise RateLimitExceeded(policy, retry_after_ms)

    def _validate(self, schema_name: str, raw_input: Mapping[str, object]) -> ValidatedInput:
        try:
            return validate(schema_name, raw_input)
        except ValidationError as exc:
            logger.info("Rejected %s input: field=%s reason=%s", schema_name, exc.field, exc.reason)
            raise
