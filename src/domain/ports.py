"""
Port interfaces - Protocol definitions for collaborator abstraction.

This module defines the interfaces (ports) that the domain requires
from its surroundings. Adapters implement these protocols.
"""

from typing import Protocol


class Clock(Protocol):
    """Port interface for the time source used by the rate limiter."""

    def now_ms(self) -> float:
        """
        Current time in milliseconds.

        Only differences between readings are meaningful, so a monotonic
        source is preferred over wall-clock time.
        """
        ...


class AccountGateway(Protocol):
    """Port interface for the external authentication collaborator."""

    def sign_up(self, email: str, password: str) -> None:
        """
        Create an account for already validated credentials.

        The collaborator owns password hashing and duplicate-email rejection.

        Raises:
            GatewayError: If the collaborator rejects the request
        """
        ...

    def sign_in(self, email: str, password: str) -> None:
        """
        Verify credentials against the collaborator.

        Raises:
            GatewayError: If the credentials are rejected
        """
        ...


class TodoSink(Protocol):
    """Port interface for the external todo storage collaborator."""

    def add_todo(self, title: str, description: str | None) -> None:
        """
        Store a validated, sanitized todo item.

        Raises:
            GatewayError: If the collaborator fails to store the item
        """
        ...
