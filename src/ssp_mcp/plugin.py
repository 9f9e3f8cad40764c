"""Plugin interface for SSP MCP components.

This module defines the plugin base class and metadata that all SSP MCP
plugins use to integrate with the server via pluggy hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ssp_mcp.hooks import hookimpl

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ssp_mcp.server import SSPServer


@dataclass
class PluginMetadata:
    """Metadata describing an SSP MCP plugin."""

    name: str
    """Unique plugin name, e.g., 'projects', 'notifications'."""

    version: str
    """Plugin version following semver, e.g., '1.0.0'."""

    description: str
    """Human-readable description of what this plugin provides."""

    maintainer: str
    """Maintainer email or team."""


class BasePlugin:
    """Base implementation of an SSP MCP plugin with default hook methods.

    Subclasses override the hooks they need. All hook methods are decorated
    with @hookimpl to register them with pluggy.
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @property
    def metadata(self) -> PluginMetadata:
        return self._metadata

    @hookimpl
    def ssp_get_plugin_metadata(self) -> PluginMetadata:
        """Return plugin metadata."""
        return self._metadata

    @hookimpl
    def ssp_register_tools(self, mcp: FastMCP, server: SSPServer) -> None:
        """Register MCP tools. Override in subclass."""
        pass

    @hookimpl
    def ssp_health_check(self, server: SSPServer) -> tuple[bool, str]:  # noqa: ARG002
        """Check plugin health. Plugins without requirements are always healthy."""
        return True, "No requirements"
