"""MCP Tools for OpenShift project provisioning and administration."""

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from ssp_mcp.utils.errors import (
    OperationNotAllowedError,
    RemoteAPIError,
    SSPError,
    ValidationError,
)

if TYPE_CHECKING:
    from ssp_mcp.server import SSPServer


def error_response(error: SSPError) -> dict[str, Any]:
    """Convert an SSPError into a tool response."""
    response: dict[str, Any] = {"error": error.message}
    if isinstance(error, RemoteAPIError) and error.completed_steps:
        response["completed_steps"] = [step.value for step in error.completed_steps]
    return response


def require_operation_allowed(server: "SSPServer", operation: str) -> None:
    """Raise OperationNotAllowedError if the configuration disables ``operation``."""
    allowed, reason = server.config.is_operation_allowed(operation)
    if not allowed:
        raise OperationNotAllowedError(reason or f"Operation {operation} is not allowed")


def register_tools(mcp: FastMCP, server: "SSPServer") -> None:
    """Register project tools with the MCP server."""

    @mcp.tool()
    def create_project(
        cluster_id: str,
        project: str,
        billing: str,
        mega_id: str = "",
    ) -> dict[str, Any]:
        """Create a new project on a cluster.

        The acting user becomes admin of the project and is recorded as its
        requester together with the billing code and MEGA-ID.

        Args:
            cluster_id: Cluster to create the project on.
            project: Project name (lower-cased before creation).
            billing: Billing code (Kontierungsnummer), required.
            mega_id: Optional MEGA-ID.

        Returns:
            The created project or an error message.
        """
        try:
            require_operation_allowed(server, "create")
            username = server.username
            result = server.provisioner.create_project(
                cluster_id, project, username, billing, mega_id
            )
        except SSPError as e:
            return error_response(e)

        server.plugin_manager.notify_project_created(
            server, cluster_id, result.project, username, mega_id
        )

        return {
            "name": result.project,
            "cluster_id": cluster_id,
            "billing": result.billing,
            "mega_id": result.mega_id,
            "completed_steps": [step.value for step in result.completed_steps],
            "message": f"Project {result.project} has been created on cluster {cluster_id}",
        }

    @mcp.tool()
    def create_test_project(cluster_id: str, project: str) -> dict[str, Any]:
        """Create a self-expiring test project.

        The project is named "<user>-<project>", has no billing code and is
        deleted automatically after the configured number of days.

        Args:
            cluster_id: Cluster to create the project on.
            project: Requested name, prefixed with the acting user's name.

        Returns:
            The created project or an error message.
        """
        try:
            require_operation_allowed(server, "create")
            result = server.provisioner.create_test_project(cluster_id, project, server.username)
        except SSPError as e:
            return error_response(e)

        return {
            "name": result.project,
            "cluster_id": cluster_id,
            "deletion_days": server.config.test_project_deletion_days,
            "completed_steps": [step.value for step in result.completed_steps],
            "message": f"Test project {result.project} has been created on cluster {cluster_id}",
        }

    @mcp.tool()
    def list_projects(cluster_id: str) -> dict[str, Any]:
        """List the projects on a cluster.

        Args:
            cluster_id: Cluster to query.

        Returns:
            Project names.
        """
        if not cluster_id:
            return {"error": "Cluster must be provided"}

        try:
            names = server.queries.list_projects(cluster_id, server.username)
        except SSPError as e:
            return error_response(e)

        return {"cluster_id": cluster_id, "projects": names, "total": len(names)}

    @mcp.tool()
    def get_project_admins(cluster_id: str, project: str) -> dict[str, Any]:
        """List the admins of a project.

        Args:
            cluster_id: Cluster of the project.
            project: Project name.

        Returns:
            Usernames in the project's admin role binding.
        """
        if not cluster_id or not project:
            return {"error": "Cluster and project must be provided"}

        try:
            admins, _operators = server.queries.get_admins_and_operators(cluster_id, project)
        except SSPError as e:
            return error_response(e)

        return {"cluster_id": cluster_id, "project": project, "admins": admins}

    @mcp.tool()
    def get_project_information(cluster_id: str, project: str) -> dict[str, Any]:
        """Get billing code and MEGA-ID of a project.

        Only admins of the project may read its information.

        Args:
            cluster_id: Cluster of the project.
            project: Project name.

        Returns:
            The project's kontierungsnummer and megaid.
        """
        try:
            server.queries.check_admin_permissions(cluster_id, server.username, project)
            info = server.queries.get_project_information(cluster_id, project)
        except SSPError as e:
            return error_response(e)

        return info.model_dump()

    @mcp.tool()
    def update_project_information(
        cluster_id: str,
        project: str,
        billing: str,
        mega_id: str = "",
    ) -> dict[str, Any]:
        """Update billing code and MEGA-ID of a project.

        An empty MEGA-ID keeps the current one. The acting user is recorded
        as requester.

        Args:
            cluster_id: Cluster of the project.
            project: Project name.
            billing: New billing code (Kontierungsnummer), required.
            mega_id: New MEGA-ID, or empty to keep the existing one.

        Returns:
            Confirmation or an error message.
        """
        try:
            require_operation_allowed(server, "update")
            if not cluster_id:
                raise ValidationError("Cluster must be provided")
            if not project:
                raise ValidationError("Project name must be provided")
            if not billing:
                raise ValidationError("Accounting number must be provided")
            username = server.username
            server.queries.check_admin_permissions(cluster_id, username, project)
            server.metadata.upsert_metadata(
                cluster_id, project, billing=billing, mega_id=mega_id, owner=username
            )
        except SSPError as e:
            return error_response(e)

        return {
            "cluster_id": cluster_id,
            "project": project,
            "message": f"The details for project {project} on cluster {cluster_id} have been saved",
        }
