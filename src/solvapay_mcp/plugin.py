"""SolvaPay plugin entry point.

Connects to the hosted SolvaPay MCP server, discovers the available tools and
registers each one as a host tool, so an agent can manage payments,
customers, plans and more through chat.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .bridge import MCPBridge, RemoteTool
from .config import resolve_config
from .constants import (
    LOG_CONNECT_FAILED,
    LOG_CONNECTED,
    LOG_DISCONNECTED,
    LOG_DISCOVERED,
    LOG_INVALID_CONFIG,
    LOG_NO_API_KEY,
    LOG_REGISTER_FAILED,
    SERVICE_ID,
    TOOL_ERROR_PREFIX,
    TOOL_LABEL,
    TOOL_NAME_PREFIX,
)
from .exceptions import to_message
from .host import HostToolDefinition, PluginApi, ToolResponse

logger = logging.getLogger(__name__)


def exposed_tool_name(name: str) -> str:
    """Return the host-facing name for a remote tool."""
    return f"{TOOL_NAME_PREFIX}{name}"


def original_tool_name(name: str) -> str:
    """Strip the host prefix from a tool name, if present."""
    if name.startswith(TOOL_NAME_PREFIX):
        return name[len(TOOL_NAME_PREFIX) :]
    return name


def tool_description(tool: RemoteTool) -> str:
    return tool.description or f"{TOOL_LABEL}: {tool.name}"


def _text_response(text: str) -> ToolResponse:
    return {"content": [{"type": "text", "text": text}]}


def build_tool_definition(bridge: MCPBridge, tool: RemoteTool) -> HostToolDefinition:
    """Project a remote tool into a host tool definition.

    The executor calls the remote tool under its original name and never
    raises: failures come back as a text block starting with ``Error: ``.
    """
    original_name = tool.name

    async def execute(tool_call_id: str, params: dict[str, Any]) -> ToolResponse:
        try:
            text = await bridge.call_tool(original_name, params)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Tool call %s (%s) failed: %r", original_name, tool_call_id, exc)
            return _text_response(TOOL_ERROR_PREFIX + to_message(exc))
        return _text_response(text)

    return HostToolDefinition(
        name=exposed_tool_name(original_name),
        description=tool_description(tool),
        parameters=tool.input_schema,
        execute=execute,
    )


@dataclass
class ServiceState:
    """Lifecycle state shared by the service's ``start`` and ``stop``."""

    connected: bool = False


class SolvaPayService:
    """Background service that owns the bridge inside the host."""

    id = SERVICE_ID

    def __init__(self, api: PluginApi, bridge: MCPBridge, endpoint: str) -> None:
        self.api = api
        self.bridge = bridge
        self.endpoint = endpoint
        self.state = ServiceState()

    async def start(self) -> None:
        """Connect, discover tools and register them. Never raises."""
        try:
            await self.bridge.connect()
            self.state.connected = True
            self.api.logger.info(LOG_CONNECTED.format(endpoint=self.endpoint))

            tools = await self.bridge.list_tools()
            self.api.logger.info(LOG_DISCOVERED.format(count=len(tools)))
        except Exception as exc:  # noqa: BLE001
            self.api.logger.error(LOG_CONNECT_FAILED.format(message=to_message(exc)))
            await self._disconnect()
            return

        # Tools already handed to the host keep a live bridge
        for tool in tools:
            try:
                self.api.register_tool(build_tool_definition(self.bridge, tool), optional=True)
            except Exception as exc:  # noqa: BLE001
                self.api.logger.error(LOG_REGISTER_FAILED.format(name=tool.name, message=to_message(exc)))

    async def stop(self) -> None:
        """Close the bridge if ``start`` connected it."""
        if not self.state.connected:
            return
        await self.bridge.close()
        self.state.connected = False
        self.api.logger.info(LOG_DISCONNECTED)

    async def _disconnect(self) -> None:
        # A failed start leaves no open connection behind
        if self.state.connected:
            await self.bridge.close()
            self.state.connected = False


def _validation_summary(exc: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors())


def register(api: PluginApi) -> SolvaPayService | None:
    """Plugin entry point called by the host runtime.

    Returns:
        The registered service, or None when no usable API key is configured
    """
    try:
        config = resolve_config(api.config)
    except ValidationError as exc:
        api.logger.warn(LOG_INVALID_CONFIG.format(message=_validation_summary(exc)))
        return None
    if config is None:
        api.logger.warn(LOG_NO_API_KEY)
        return None

    bridge = MCPBridge(endpoint=config.endpoint, api_key=config.api_key)
    service = SolvaPayService(api, bridge, config.endpoint)
    api.register_service(service)
    return service
