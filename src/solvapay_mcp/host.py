"""Interface of the host plugin runtime.

These protocols describe what the plugin consumes from the host. They exist
for IDE support and static type checking; hosts do not need to inherit from
them.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypedDict, runtime_checkable


class TextBlock(TypedDict):
    type: str
    text: str


class ToolResponse(TypedDict):
    """Envelope returned by every tool execution."""

    content: list[TextBlock]


ToolExecutor = Callable[[str, dict[str, Any]], Awaitable[ToolResponse]]


@dataclass(frozen=True, slots=True)
class HostToolDefinition:
    """A remote tool projected into the host's tool registry."""

    name: str
    description: str
    parameters: dict[str, Any]
    execute: ToolExecutor


@runtime_checkable
class HostLogger(Protocol):
    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...


@runtime_checkable
class HostService(Protocol):
    """Background service whose lifecycle is driven by the host."""

    id: str

    async def start(self) -> None: ...

    async def stop(self) -> None: ...


@runtime_checkable
class PluginApi(Protocol):
    """Capabilities the host hands to :func:`solvapay_mcp.register`."""

    config: Mapping[str, Any]
    logger: HostLogger

    def register_tool(self, tool: HostToolDefinition, *, optional: bool = False) -> None:
        """Add a tool to the host's registry."""
        ...

    def register_service(self, service: HostService) -> None:
        """Hand a background service to the host."""
        ...


__all__ = [
    "HostLogger",
    "HostService",
    "HostToolDefinition",
    "PluginApi",
    "TextBlock",
    "ToolExecutor",
    "ToolResponse",
]
