"""Configuration models and resolution for the SolvaPay MCP plugin.

Both settings are resolved with the same precedence: the plugin entry in the
host configuration wins over the environment. The endpoint additionally falls
back to the hosted SolvaPay server; the API key has no default.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import CONFIG_PATH, DEFAULT_ENDPOINT, ENV_API_KEY, ENV_ENDPOINT, LOG_NO_API_KEY
from .exceptions import ConfigurationMissingError

logger = logging.getLogger(__name__)


class SolvaPayPluginConfig(BaseModel):
    """The ``plugins.entries.solvapay.config`` section of the host configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    api_key: str | None = Field(default=None, alias="apiKey")
    endpoint: str | None = None

    @classmethod
    def from_host_config(cls, host_config: Mapping[str, Any] | None) -> SolvaPayPluginConfig:
        """Extract the plugin section from a host configuration mapping.

        Missing intermediate sections yield an empty configuration.
        """
        node: Any = host_config
        for key in CONFIG_PATH:
            if not isinstance(node, Mapping):
                return cls()
            node = node.get(key)
        if not isinstance(node, Mapping):
            return cls()
        return cls.model_validate(node)


class ResolvedConfig(BaseModel):
    """Settings the bridge is built from."""

    api_key: str = Field(repr=False)
    endpoint: str


def resolve_plugin_config(
    plugin_config: SolvaPayPluginConfig,
    environ: Mapping[str, str] | None = None,
    strict: bool = False,
) -> ResolvedConfig | None:
    """Apply environment fallbacks and defaults to a plugin configuration.

    Args:
        plugin_config: Explicit plugin settings
        environ: Environment to read fallbacks from (defaults to ``os.environ``)
        strict: Raise instead of returning None when no API key is found

    Returns:
        The resolved settings, or None when no API key is available

    Raises:
        ConfigurationMissingError: If ``strict`` is set and no API key is found
    """
    environ = os.environ if environ is None else environ

    api_key = plugin_config.api_key or environ.get(ENV_API_KEY)
    endpoint = plugin_config.endpoint or environ.get(ENV_ENDPOINT) or DEFAULT_ENDPOINT

    if not api_key:
        if strict:
            raise ConfigurationMissingError(LOG_NO_API_KEY)
        return None

    logger.debug("Resolved SolvaPay MCP endpoint: %s", endpoint)
    return ResolvedConfig(api_key=api_key, endpoint=endpoint)


def resolve_config(
    host_config: Mapping[str, Any] | None,
    environ: Mapping[str, str] | None = None,
    strict: bool = False,
) -> ResolvedConfig | None:
    """Resolve plugin settings from a host configuration mapping."""
    return resolve_plugin_config(SolvaPayPluginConfig.from_host_config(host_config), environ, strict)
