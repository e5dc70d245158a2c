"""
Console gateway adapters - Implement AccountGateway and TodoSink protocols.

This module provides console-based implementations of the domain's
collaborator ports, logging each handoff for demo purposes. In
production these are replaced by the managed auth/storage client.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleAccountGateway:
    """
    Implements AccountGateway protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Passwords are never written to the log.
    """

    def sign_up(self, email: str, password: str) -> None:
        """
        Log the account creation handoff.

        Args:
            email: Normalized email address
            password: Plaintext password (not logged)
        """
        logger.info("[SIGNUP] Email: %s", email)

    def sign_in(self, email: str, password: str) -> None:
        """Log the sign-in handoff."""
        logger.info("[SIGNIN] Email: %s", email)


class ConsoleTodoSink:
    """Implements TodoSink protocol via console logging."""

    def add_todo(self, title: str, description: str | None) -> None:
        """
        Log the todo handoff.

        Args:
            title: Sanitized title
            description: Sanitized description, or None when absent
        """
        logger.info("[TODO] Title: %s Description: %s", title, description)
