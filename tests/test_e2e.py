"""Live tests against the SolvaPay MCP sandbox.

Skipped unless SOLVAPAY_TEST_API_KEY is set. To run locally:

    SOLVAPAY_TEST_API_KEY=sk_sandbox_... pytest tests/test_e2e.py
"""

import os

import pytest

from solvapay_mcp.bridge import MCPBridge
from solvapay_mcp.constants import DEFAULT_ENDPOINT, ENV_TEST_API_KEY
from solvapay_mcp.exceptions import SolvaPayMCPError

pytestmark = [pytest.mark.solvapay_api, pytest.mark.asyncio]


@pytest.fixture
def api_key():
    return os.environ[ENV_TEST_API_KEY]


async def test_discovers_expected_tools(api_key):
    async with MCPBridge(endpoint=DEFAULT_ENDPOINT, api_key=api_key) as bridge:
        tools = await bridge.list_tools()

    names = [tool.name for tool in tools]
    assert len(names) >= 38
    for expected in ["create_customer", "list_plans", "get_wallet_balance", "list_transactions", "record_usage"]:
        assert expected in names
    assert all(tool.name and tool.input_schema is not None for tool in tools)


@pytest.mark.parametrize("tool_name", ["list_customers", "get_wallet_balance", "list_plans"])
async def test_read_only_calls_return_text(api_key, tool_name):
    async with MCPBridge(endpoint=DEFAULT_ENDPOINT, api_key=api_key) as bridge:
        result = await bridge.call_tool(tool_name, {})

    assert isinstance(result, str)
    assert result


async def test_invalid_api_key_is_rejected():
    bridge = MCPBridge(endpoint=DEFAULT_ENDPOINT, api_key="sk_sandbox_invalid_key_that_does_not_exist")
    try:
        with pytest.raises(SolvaPayMCPError):
            await bridge.connect()
            await bridge.call_tool("list_customers", {})
    finally:
        await bridge.close()
