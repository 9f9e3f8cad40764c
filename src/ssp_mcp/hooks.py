"""Hook specifications for SSP MCP plugins.

Plugins implement these hooks with the ``hookimpl`` marker and are
registered with the PluginManager.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ssp_mcp.plugin import PluginMetadata
    from ssp_mcp.server import SSPServer

PROJECT_NAME = "ssp_mcp"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class SSPMCPHookSpec:
    """Hooks a plugin can implement."""

    @hookspec
    def ssp_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return metadata describing the plugin."""

    @hookspec
    def ssp_register_tools(self, mcp: FastMCP, server: SSPServer) -> None:
        """Register MCP tools provided by the plugin."""

    @hookspec
    def ssp_health_check(self, server: SSPServer) -> tuple[bool, str]:  # type: ignore[empty-body]
        """Report whether the plugin can work with the current configuration."""

    @hookspec
    def ssp_project_created(
        self, server: SSPServer, cluster_id: str, project: str, creator: str, mega_id: str
    ) -> None:
        """Called after a regular project has been provisioned completely."""
