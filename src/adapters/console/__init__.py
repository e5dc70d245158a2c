"""Console adapters - Logging stand-ins for external collaborators."""

from .gateways import ConsoleAccountGateway, ConsoleTodoSink

__all__ = ["ConsoleAccountGateway", "ConsoleTodoSink"]
