"""Registration and invocation of SSP MCP plugins.

Core plugins come from ``ssp_mcp.domains.registry``; third-party packages
can add more under the ``ssp_mcp.plugins`` entry point group.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy

from ssp_mcp.hooks import PROJECT_NAME, SSPMCPHookSpec

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from ssp_mcp.server import SSPServer

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "ssp_mcp.plugins"


class PluginManager:
    """Holds the registered plugins and their health state."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SSPMCPHookSpec)
        self._registered_plugins: dict[str, Any] = {}
        self._healthy_plugins: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        return self._pm.hook

    @property
    def registered_plugins(self) -> dict[str, Any]:
        return self._registered_plugins

    @property
    def healthy_plugins(self) -> dict[str, Any]:
        """Plugins that passed the last health check run."""
        return self._healthy_plugins

    def register_plugin(self, plugin: Any, name: str | None = None) -> str:
        """Register ``plugin`` under ``name`` or its metadata name.

        Returns:
            The registration name.
        """
        if name is None:
            if hasattr(plugin, "ssp_get_plugin_metadata"):
                name = plugin.ssp_get_plugin_metadata().name
            else:
                name = type(plugin).__name__

        self._pm.register(plugin, name=name)
        self._registered_plugins[name] = plugin
        logger.debug(f"Registered plugin: {name}")
        return name

    def load_entrypoint_plugins(self) -> int:
        count = self._pm.load_setuptools_entrypoints(PLUGIN_ENTRY_POINT_GROUP)

        for plugin in self._pm.get_plugins():
            name = self._pm.get_name(plugin)
            if name and name not in self._registered_plugins:
                self._registered_plugins[name] = plugin
                logger.info(f"Loaded plugin {name} from entry point")

        if count:
            logger.info(f"Loaded {count} plugins from {PLUGIN_ENTRY_POINT_GROUP}")
        return count

    def load_core_plugins(self) -> int:
        from ssp_mcp.domains.registry import get_core_plugins

        plugins = get_core_plugins()
        for plugin in plugins:
            self.register_plugin(plugin)

        logger.info(f"Loaded {len(plugins)} core plugins")
        return len(plugins)

    def register_all_tools(self, mcp: FastMCP, server: SSPServer) -> None:
        self.hook.ssp_register_tools(mcp=mcp, server=server)
        logger.info(f"Registered tools from {len(self._registered_plugins)} plugins")

    def run_health_checks(self, server: SSPServer) -> dict[str, tuple[bool, str]]:
        """Check every plugin against the running server.

        A plugin whose check raises counts as unhealthy.

        Returns:
            Plugin name to (healthy, message).
        """
        results: dict[str, tuple[bool, str]] = {}
        self._healthy_plugins.clear()

        for name, plugin in self._registered_plugins.items():
            if not hasattr(plugin, "ssp_health_check"):
                results[name] = (True, "No health check defined")
                self._healthy_plugins[name] = plugin
                continue

            try:
                is_healthy, message = plugin.ssp_health_check(server=server)
            except Exception as e:
                results[name] = (False, f"Health check error: {e}")
                logger.warning(f"Health check of plugin {name} raised: {e}")
                continue

            results[name] = (is_healthy, message)
            if is_healthy:
                self._healthy_plugins[name] = plugin
                logger.info(f"Plugin {name} is healthy: {message}")
            else:
                logger.warning(f"Plugin {name} unavailable: {message}")

        return results

    def notify_project_created(
        self, server: SSPServer, cluster_id: str, project: str, creator: str, mega_id: str
    ) -> bool:
        """Tell all plugins about a new project.

        Notification failures are logged and never propagate to the caller.

        Returns:
            True if every plugin handled the notification.
        """
        try:
            self.hook.ssp_project_created(
                server=server,
                cluster_id=cluster_id,
                project=project,
                creator=creator,
                mega_id=mega_id,
            )
        except Exception as e:
            logger.error(
                f"Can't send notification about new project {project} "
                f"on cluster {cluster_id}: {e}"
            )
            return False
        return True
