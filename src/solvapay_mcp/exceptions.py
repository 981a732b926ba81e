"""Exceptions raised by the SolvaPay MCP plugin."""

from typing import Any


class SolvaPayMCPError(Exception):
    """Base class for SolvaPay MCP errors."""


class ConfigurationMissingError(SolvaPayMCPError):
    """Raised when no API key can be resolved."""


class HandshakeError(SolvaPayMCPError):
    """Raised when the connection or MCP handshake fails."""


class NotConnectedError(SolvaPayMCPError):
    """Raised when a request is issued on a bridge that is not connected."""


class RemoteCallError(SolvaPayMCPError):
    """Raised when a tool discovery or tool call request fails remotely."""


def to_message(error: Any) -> str:
    """Return the message of an exception, or the string form of any other raised value.

    An exception raised without a message yields an empty string.
    """
    return str(error)
