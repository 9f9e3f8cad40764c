"""FastMCP server definition for SSP with domain plugins."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from ssp_mcp.clients.cluster import ClusterRegistry
from ssp_mcp.clients.identity import resolve_username
from ssp_mcp.config import SSPConfig, get_config
from ssp_mcp.domains.metadata.client import MetadataSynchronizer
from ssp_mcp.domains.permissions.client import PermissionBindingManager
from ssp_mcp.domains.projects.client import ProjectQueryService
from ssp_mcp.domains.projects.provisioner import ProjectProvisioner
from ssp_mcp.plugin_manager import PluginManager

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class SSPServer:
    """SSP MCP Server wiring the cluster registry, domain services and plugins."""

    def __init__(
        self,
        config: SSPConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or get_config()
        self._transport = transport
        self._registry: ClusterRegistry | None = None
        self._mcp: FastMCP | None = None
        self._plugin_manager: PluginManager | None = None
        self._username: str | None = None
        self._permissions: PermissionBindingManager | None = None
        self._metadata: MetadataSynchronizer | None = None
        self._provisioner: ProjectProvisioner | None = None
        self._queries: ProjectQueryService | None = None

    @property
    def config(self) -> SSPConfig:
        return self._config

    @property
    def registry(self) -> ClusterRegistry:
        """Get the cluster registry.

        Raises:
            RuntimeError: If server is not running.
        """
        if self._registry is None:
            raise RuntimeError("Server not running. Cluster registry not available.")
        return self._registry

    @property
    def mcp(self) -> FastMCP:
        if self._mcp is None:
            raise RuntimeError("Server not initialized.")
        return self._mcp

    @property
    def plugin_manager(self) -> PluginManager:
        if self._plugin_manager is None:
            raise RuntimeError("Server not initialized.")
        return self._plugin_manager

    @property
    def username(self) -> str:
        """The acting user, resolved on first use.

        Raises:
            ConfigurationError: If no identity is available.
        """
        if self._username is None:
            self._username = resolve_username(self._config)
        return self._username

    @property
    def permissions(self) -> PermissionBindingManager:
        if self._permissions is None:
            self._permissions = PermissionBindingManager(self.registry)
        return self._permissions

    @property
    def metadata(self) -> MetadataSynchronizer:
        if self._metadata is None:
            self._metadata = MetadataSynchronizer(
                self.registry, self._config.test_project_deletion_days
            )
        return self._metadata

    @property
    def provisioner(self) -> ProjectProvisioner:
        if self._provisioner is None:
            self._provisioner = ProjectProvisioner(self.registry, self.permissions, self.metadata)
        return self._provisioner

    @property
    def queries(self) -> ProjectQueryService:
        if self._queries is None:
            self._queries = ProjectQueryService(self.registry, self.permissions, self.metadata)
        return self._queries

    def startup(self) -> None:
        """Build the cluster registry and run plugin health checks.

        An already present registry is kept.
        """
        if self._registry is None:
            self._registry = ClusterRegistry.from_config(self._config, self._transport)

        if self._plugin_manager is not None:
            self._plugin_manager.run_health_checks(self)
            logger.info(
                f"SSP MCP server started with {len(self._plugin_manager.healthy_plugins)}/"
                f"{len(self._plugin_manager.registered_plugins)} plugins healthy"
            )

    def shutdown(self) -> None:
        """Close all cluster connections and drop the domain services."""
        if self._registry is not None:
            self._registry.close()
        self._registry = None
        self._permissions = None
        self._metadata = None
        self._provisioner = None
        self._queries = None

    def _create_lifespan(self) -> Callable[[Any], AbstractAsyncContextManager[None]]:
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            logger.info("Starting SSP MCP server...")
            server_self.startup()
            try:
                yield
            finally:
                logger.info("Shutting down SSP MCP server...")
                server_self.shutdown()
                logger.info("SSP MCP server shut down")

        return lifespan

    def _register_health_endpoint(self, mcp: FastMCP) -> None:
        server_self = self

        @mcp.custom_route("/health", methods=["GET"])
        async def health(_request: Request) -> JSONResponse:
            registry = server_self._registry
            connected = registry is not None
            pm = server_self._plugin_manager
            body = {
                "status": "healthy" if connected else "starting",
                "connected": connected,
                "clusters": registry.cluster_ids if registry is not None else [],
                "plugins": {
                    "total": len(pm.registered_plugins) if pm else 0,
                    "healthy": len(pm.healthy_plugins) if pm else 0,
                },
            }
            status = HTTPStatus.OK if connected else HTTPStatus.SERVICE_UNAVAILABLE
            return JSONResponse(body, status_code=status)

    def create_mcp(self) -> FastMCP:
        """Create and configure the FastMCP server."""
        self._plugin_manager = PluginManager()
        self._plugin_manager.load_core_plugins()
        self._plugin_manager.load_entrypoint_plugins()

        mcp = FastMCP(
            name="ssp-mcp",
            instructions=(
                "Create OpenShift projects, grant admin access and maintain "
                "their billing code and MEGA-ID."
            ),
            host=self._config.host,
            port=self._config.port,
            lifespan=self._create_lifespan(),
        )
        self._plugin_manager.register_all_tools(mcp, self)
        self._register_health_endpoint(mcp)

        self._mcp = mcp
        return mcp


def create_server(config: SSPConfig | None = None) -> FastMCP:
    """Create the FastMCP server for ``config``."""
    return SSPServer(config).create_mcp()
