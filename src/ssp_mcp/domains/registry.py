"""Registry of the built-in domain plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ssp_mcp.hooks import hookimpl
from ssp_mcp.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ssp_mcp.server import SSPServer


class ProjectsPlugin(BasePlugin):
    """Project provisioning, permissions and metadata tools."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="projects",
                version="1.0.0",
                description="Create OpenShift projects and manage their metadata",
                maintainer="cloud-team@example.com",
            )
        )

    @hookimpl
    def ssp_register_tools(self, mcp: FastMCP, server: SSPServer) -> None:
        from ssp_mcp.domains.projects.tools import register_tools

        register_tools(mcp, server)

    @hookimpl
    def ssp_health_check(self, server: SSPServer) -> tuple[bool, str]:
        clusters = server.registry.cluster_ids
        if not clusters:
            return False, "No clusters configured"
        return True, f"Clusters: {', '.join(clusters)}"


def get_core_plugins() -> list[BasePlugin]:
    """Return all built-in plugin instances."""
    from ssp_mcp.domains.notifications.plugin import NotificationsPlugin

    return [
        ProjectsPlugin(),
        NotificationsPlugin(),
    ]
