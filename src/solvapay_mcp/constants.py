"""Constants for the SolvaPay MCP plugin.

This module defines names, defaults and log message templates shared by the
bridge, the registrar and the command line.
"""

# Plugin identity
PLUGIN_ID = "solvapay"
SERVICE_ID = "solvapay-mcp"
CLIENT_NAME = "solvapay-mcp"
CLIENT_VERSION = "0.1.0"

# Tool naming constants
TOOL_NAME_PREFIX = "solvapay_"
TOOL_LABEL = "SolvaPay"

# Remote endpoint
DEFAULT_ENDPOINT = "https://mcp.solvapay.com/mcp"
API_KEY_HEADER = "X-API-Key"

# Environment fallbacks
ENV_API_KEY = "SOLVAPAY_API_KEY"
ENV_ENDPOINT = "SOLVAPAY_MCP_ENDPOINT"
ENV_LOG_LEVEL = "SOLVAPAY_LOG_LEVEL"
ENV_TEST_API_KEY = "SOLVAPAY_TEST_API_KEY"

# Host config location: plugins.entries.<PLUGIN_ID>.config
CONFIG_PATH = ("plugins", "entries", PLUGIN_ID, "config")

# Default timeout for closing the background session
SESSION_CLOSE_TIMEOUT = 5.0

# Host log message constants
LOG_PREFIX = f"[{TOOL_LABEL}]"
LOG_NO_API_KEY = (
    f"{LOG_PREFIX} No API key configured. Set plugins.entries.{PLUGIN_ID}.config.apiKey or {ENV_API_KEY} env var."
)
LOG_CONNECTED = LOG_PREFIX + " Connected to MCP server at {endpoint}"
LOG_DISCOVERED = LOG_PREFIX + " Discovered {count} tools"
LOG_CONNECT_FAILED = LOG_PREFIX + " Failed to connect: {message}"
LOG_DISCONNECTED = f"{LOG_PREFIX} Disconnected from MCP server"
LOG_REGISTER_FAILED = LOG_PREFIX + " Failed to register tool {name}: {message}"
LOG_INVALID_CONFIG = LOG_PREFIX + " Invalid plugin config, plugin disabled: {message}"

# Error message constants
ERROR_NOT_CONNECTED = "Not connected"
ERROR_INVALID_ENDPOINT = "Invalid MCP endpoint URL: {endpoint!r}"
ERROR_SESSION_ENDED = "MCP session ended before the handshake completed"
TOOL_ERROR_PREFIX = "Error: "
