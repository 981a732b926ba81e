#!/usr/bin/env python3
"""Command-line interface for checking a SolvaPay MCP setup.

Connects with the same settings the plugin would use (flags, then ``.env`` /
environment, then the default endpoint) and lists or calls remote tools.
"""

import asyncio
import json
import logging
import sys
from typing import Any, NoReturn

import click
from dotenv import load_dotenv

from solvapay_mcp.bridge import MCPBridge, RemoteTool
from solvapay_mcp.config import ResolvedConfig, SolvaPayPluginConfig, resolve_plugin_config
from solvapay_mcp.constants import ENV_LOG_LEVEL, TOOL_ERROR_PREFIX
from solvapay_mcp.exceptions import SolvaPayMCPError, to_message
from solvapay_mcp.plugin import exposed_tool_name, original_tool_name, tool_description

logger = logging.getLogger("solvapay_mcp.cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _fail(message: str) -> NoReturn:
    click.echo(f"{TOOL_ERROR_PREFIX}{message}", err=True)
    sys.exit(1)


def _resolve(api_key: str | None, endpoint: str | None) -> ResolvedConfig:
    """Return settings from flags and environment or exit when no key is found."""
    try:
        config = resolve_plugin_config(SolvaPayPluginConfig(api_key=api_key, endpoint=endpoint), strict=True)
    except SolvaPayMCPError as exc:
        _fail(to_message(exc))
    assert config is not None
    return config


async def _list_tools(config: ResolvedConfig) -> list[RemoteTool]:
    async with MCPBridge(endpoint=config.endpoint, api_key=config.api_key) as bridge:
        return await bridge.list_tools()


async def _call_tool(config: ResolvedConfig, name: str, arguments: dict[str, Any]) -> str:
    async with MCPBridge(endpoint=config.endpoint, api_key=config.api_key) as bridge:
        return await bridge.call_tool(name, arguments)


def connection_options(func):
    """Add ``--api-key`` and ``--endpoint`` options to a command."""
    func = click.option(
        "--endpoint",
        default=None,
        help="MCP endpoint URL (default: $SOLVAPAY_MCP_ENDPOINT or the hosted server)",
    )(func)
    func = click.option("--api-key", default=None, help="SolvaPay API key (default: $SOLVAPAY_API_KEY)")(func)
    return func


@click.group()
@click.option(
    "--log-level",
    "-l",
    default="WARNING",
    envvar=ENV_LOG_LEVEL,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level",
)
def main(log_level: str) -> None:
    """Inspect and call SolvaPay MCP tools."""
    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


@main.command("tools")
@connection_options
@click.option("--json", "json_output", is_flag=True, help="Print tool definitions as JSON")
def tools_command(api_key: str | None, endpoint: str | None, json_output: bool) -> None:
    """List the tools the server advertises, under their plugin names."""
    config = _resolve(api_key, endpoint)
    try:
        tools = asyncio.run(_list_tools(config))
    except SolvaPayMCPError as exc:
        _fail(to_message(exc))

    logger.info("Discovered %d tools at %s", len(tools), config.endpoint)
    if json_output:
        output = [
            {
                "name": exposed_tool_name(tool.name),
                "description": tool_description(tool),
                "parameters": tool.input_schema,
            }
            for tool in tools
        ]
        click.echo(json.dumps(output, ensure_ascii=False))
        return

    for tool in tools:
        click.echo(f"{exposed_tool_name(tool.name)}\t{tool_description(tool)}")


@main.command("call")
@click.argument("tool_name")
@click.option("--args", "args_json", default="{}", show_default=True, help="Tool arguments as a JSON object")
@connection_options
def call_command(tool_name: str, args_json: str, api_key: str | None, endpoint: str | None) -> None:
    """Call TOOL_NAME (with or without the solvapay_ prefix) and print its result."""
    try:
        arguments = json.loads(args_json)
    except json.JSONDecodeError as exc:
        _fail(f"--args is not valid JSON: {exc}")
    if not isinstance(arguments, dict):
        _fail("--args must be a JSON object")

    config = _resolve(api_key, endpoint)
    try:
        result = asyncio.run(_call_tool(config, original_tool_name(tool_name), arguments))
    except SolvaPayMCPError as exc:
        _fail(to_message(exc))

    click.echo(result)


if __name__ == "__main__":
    main()
