"""Pytest configuration."""

import os
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp.types import CallToolResult, ListToolsResult

from solvapay_mcp.constants import ENV_API_KEY, ENV_ENDPOINT, ENV_TEST_API_KEY

TEST_ENDPOINT = "https://mcp.example.com/mcp"
TEST_API_KEY = "sk_sandbox_test_key"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "solvapay_api: mark test as requiring the live SolvaPay sandbox")


def pytest_collection_modifyitems(config, items):
    """Skip live sandbox tests unless a test API key is available."""
    if os.environ.get(ENV_TEST_API_KEY):
        return

    skip_live = pytest.mark.skip(reason=f"set {ENV_TEST_API_KEY} to run live sandbox tests")
    for item in items:
        if "solvapay_api" in item.keywords:
            item.add_marker(skip_live)


class FakeTransport:
    """Stand-in for ``streamablehttp_client`` that records its lifecycle."""

    def __init__(self):
        self.calls: list[tuple[str, dict | None]] = []
        self.opened = 0
        self.closed = 0
        self.fail_with: BaseException | None = None

    def __call__(self, url, headers=None, **kwargs):
        self.calls.append((url, headers))
        return self._open()

    @asynccontextmanager
    async def _open(self):
        if self.fail_with is not None:
            raise self.fail_with
        self.opened += 1
        try:
            yield ("read-stream", "write-stream", lambda: None)
        finally:
            self.closed += 1


class FakeClientSession:
    """Stand-in for ``mcp.ClientSession``; calling it returns itself."""

    def __init__(self):
        self.initialize = AsyncMock()
        self.list_tools = AsyncMock(return_value=ListToolsResult(tools=[]))
        self.call_tool = AsyncMock(return_value=CallToolResult(content=[]))
        self.init_args: tuple | None = None
        self.entered = 0
        self.exited = 0

    def __call__(self, read_stream, write_stream, **kwargs):
        self.init_args = (read_stream, write_stream, kwargs)
        return self

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, *exc_info):
        self.exited += 1


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real SolvaPay settings out of unit tests."""
    monkeypatch.delenv(ENV_API_KEY, raising=False)
    monkeypatch.delenv(ENV_ENDPOINT, raising=False)


@pytest.fixture
def fake_transport(monkeypatch):
    transport = FakeTransport()
    monkeypatch.setattr("solvapay_mcp.bridge.streamablehttp_client", transport)
    return transport


@pytest.fixture
def fake_session(monkeypatch):
    session = FakeClientSession()
    monkeypatch.setattr("solvapay_mcp.bridge.ClientSession", session)
    return session


def create_mock_api(**config_overrides):
    """Build a host API mock with a SolvaPay plugin entry.

    Overrides set to None are removed from the plugin config.
    """
    plugin_config = {"apiKey": TEST_API_KEY, **config_overrides}
    plugin_config = {key: value for key, value in plugin_config.items() if value is not None}

    api = MagicMock()
    api.config = {"plugins": {"entries": {"solvapay": {"enabled": True, "config": plugin_config}}}}
    return api
