"""SolvaPay MCP - expose the SolvaPay MCP tool catalog as host plugin tools."""

from solvapay_mcp.bridge import ConnectionState, MCPBridge, RemoteTool
from solvapay_mcp.config import ResolvedConfig, SolvaPayPluginConfig, resolve_config
from solvapay_mcp.exceptions import (
    ConfigurationMissingError,
    HandshakeError,
    NotConnectedError,
    RemoteCallError,
    SolvaPayMCPError,
    to_message,
)
from solvapay_mcp.host import HostToolDefinition, PluginApi
from solvapay_mcp.plugin import SolvaPayService, register

__all__ = [
    "ConfigurationMissingError",
    "ConnectionState",
    "HandshakeError",
    "HostToolDefinition",
    "MCPBridge",
    "NotConnectedError",
    "PluginApi",
    "RemoteCallError",
    "RemoteTool",
    "ResolvedConfig",
    "SolvaPayMCPError",
    "SolvaPayPluginConfig",
    "SolvaPayService",
    "register",
    "resolve_config",
    "to_message",
]
__version__ = "0.1.0"
