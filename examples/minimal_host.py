#!/usr/bin/env python3
"""Minimal host runtime for the SolvaPay plugin.

This script plays the part of a plugin host: it hands the plugin a config
mapping, a logger and the two registration hooks, then drives the service
lifecycle and calls one of the discovered tools.

    SOLVAPAY_API_KEY=sk_sandbox_... python examples/minimal_host.py list_plans
"""

import asyncio
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from solvapay_mcp import HostToolDefinition, register

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


class HostLogger:
    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def info(self, msg: str) -> None:
        self._logger.info(msg)

    def warn(self, msg: str) -> None:
        self._logger.warning(msg)

    def error(self, msg: str) -> None:
        self._logger.error(msg)


class MinimalHost:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.logger = HostLogger(logging.getLogger("host"))
        self.tools: dict[str, HostToolDefinition] = {}
        self.services = []

    def register_tool(self, tool: HostToolDefinition, *, optional: bool = False) -> None:
        self.tools[tool.name] = tool

    def register_service(self, service) -> None:
        self.services.append(service)


async def main(tool_name: str, params: dict[str, Any]) -> None:
    load_dotenv()
    host = MinimalHost(config={})
    register(host)

    for service in host.services:
        await service.start()
    try:
        print(f"{len(host.tools)} tools registered")
        tool = host.tools.get(f"solvapay_{tool_name}")
        if tool is None:
            print(f"Tool not found: {tool_name}")
            return
        result = await tool.execute("example-call", params)
        print(result["content"][0]["text"])
    finally:
        for service in host.services:
            await service.stop()


if __name__ == "__main__":
    name = sys.argv[1] if len(sys.argv) > 1 else "list_plans"
    arguments = json.loads(sys.argv[2]) if len(sys.argv) > 2 else {}
    asyncio.run(main(name, arguments))
