"""Bridge to the SolvaPay MCP server.

The bridge owns a single Streamable HTTP connection, discovers the tools the
server advertises and forwards tool calls, flattening each call result into a
single string.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from mcp.client.session import ClientSession
from mcp.client.streamable_http import streamablehttp_client
from mcp.types import Implementation

from .constants import (
    API_KEY_HEADER,
    CLIENT_NAME,
    CLIENT_VERSION,
    ERROR_INVALID_ENDPOINT,
    ERROR_NOT_CONNECTED,
)
from .exceptions import HandshakeError, NotConnectedError, RemoteCallError, to_message
from .persistent import _PersistentSession

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection state of an :class:`MCPBridge`."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


@dataclass(slots=True)
class RemoteTool:
    """A tool advertised by the MCP server."""

    name: str
    input_schema: dict[str, Any]
    description: str | None = None


def _validate_endpoint(endpoint: str) -> None:
    parsed = urlparse(endpoint)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(ERROR_INVALID_ENDPOINT.format(endpoint=endpoint))


def _root_cause(exc: BaseException) -> BaseException:
    """Unwrap single-member exception groups raised by the transport task group."""
    while isinstance(exc, BaseExceptionGroup) and len(exc.exceptions) == 1:
        exc = exc.exceptions[0]
    return exc


def _block_field(block: Any, key: str) -> Any:
    if isinstance(block, dict):
        return block.get(key)
    return getattr(block, key, None)


def _block_to_json(block: Any) -> Any:
    if hasattr(block, "model_dump"):
        return block.model_dump(mode="json", by_alias=True, exclude_none=True)
    return block


def content_to_text(content: Sequence[Any]) -> str:
    """Flatten MCP content blocks into one string.

    Non-empty text blocks are joined with newlines in their original order.
    When there is no text at all, the whole content list is returned as
    compact JSON so the caller always gets something printable.
    """
    parts: list[str] = []
    for block in content:
        if _block_field(block, "type") == "text":
            text = _block_field(block, "text")
            if text:
                parts.append(text)
    if parts:
        return "\n".join(parts)
    return json.dumps([_block_to_json(block) for block in content], separators=(",", ":"), ensure_ascii=False)


@asynccontextmanager
async def _open_session(endpoint: str, api_key: str) -> AsyncIterator[ClientSession]:
    """Open a Streamable HTTP transport and an initialized client session."""
    async with streamablehttp_client(endpoint, headers={API_KEY_HEADER: api_key}) as (read_stream, write_stream, _):
        session = ClientSession(
            read_stream,
            write_stream,
            client_info=Implementation(name=CLIENT_NAME, version=CLIENT_VERSION),
        )
        async with session:
            await session.initialize()
            yield session


class MCPBridge:
    """Connection to the SolvaPay MCP server.

    Example:
        >>> async with MCPBridge(endpoint, api_key) as bridge:
        ...     tools = await bridge.list_tools()
        ...     text = await bridge.call_tool("list_plans", {})
    """

    def __init__(self, endpoint: str, api_key: str) -> None:
        self.endpoint = endpoint
        self.api_key = api_key
        self.state = ConnectionState.DISCONNECTED
        self._client: _PersistentSession | None = None
        self._session: ClientSession | None = None

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    async def connect(self) -> None:
        """Connect to the MCP server and perform the handshake.

        A bridge that is already connected closes its current session before
        opening a new one.

        Raises:
            HandshakeError: If the endpoint is invalid or the handshake fails.
        """
        if self._client is not None:
            logger.debug("Reconnecting to %s, closing the current session first", self.endpoint)
            await self.close()

        try:
            _validate_endpoint(self.endpoint)
            client = _PersistentSession(_open_session(self.endpoint, self.api_key))
            session = await client.start()
        except Exception as exc:
            cause = _root_cause(exc)
            logger.debug("Handshake with %s failed: %r", self.endpoint, cause)
            raise HandshakeError(to_message(cause)) from exc

        self._client = client
        self._session = session
        self.state = ConnectionState.CONNECTED
        logger.debug("Connected to %s", self.endpoint)

    def _require_session(self) -> ClientSession:
        # Snapshot the session so a concurrent close cannot clear it mid-call
        session = self._session
        if self.state is not ConnectionState.CONNECTED or session is None:
            raise NotConnectedError(ERROR_NOT_CONNECTED)
        return session

    async def list_tools(self) -> list[RemoteTool]:
        """Discover all tools available on the MCP server, in server order."""
        session = self._require_session()
        try:
            result = await session.list_tools()
        except Exception as exc:
            raise RemoteCallError(to_message(_root_cause(exc))) from exc

        return [
            RemoteTool(name=tool.name, description=tool.description, input_schema=tool.inputSchema)
            for tool in result.tools
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> str:
        """Forward a tool call to the MCP server and return its text result."""
        session = self._require_session()
        try:
            result = await session.call_tool(name, arguments)
        except Exception as exc:
            raise RemoteCallError(to_message(_root_cause(exc))) from exc

        if getattr(result, "isError", False):
            logger.debug("MCP server reported an error result for tool '%s'", name)
        return content_to_text(result.content)

    async def close(self) -> None:
        """Close the connection. Safe to call any number of times."""
        client = self._client
        self._client = None
        self._session = None
        self.state = ConnectionState.DISCONNECTED
        if client is None:
            return

        try:
            await client.close()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error while closing MCP session to %s: %s", self.endpoint, to_message(_root_cause(exc)))
        else:
            logger.debug("Closed MCP session to %s", self.endpoint)

    async def __aenter__(self) -> MCPBridge:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
