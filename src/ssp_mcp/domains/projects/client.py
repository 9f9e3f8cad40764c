"""Read-only project queries used by the admin screens."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssp_mcp.domains.permissions.client import ADMIN_ROLE, OPERATOR_ROLE
from ssp_mcp.domains.projects.models import ProjectList
from ssp_mcp.utils.errors import PermissionDeniedError, ValidationError

if TYPE_CHECKING:
    from ssp_mcp.clients.cluster import ClusterRegistry
    from ssp_mcp.domains.metadata.client import MetadataSynchronizer
    from ssp_mcp.domains.metadata.models import ProjectInformation
    from ssp_mcp.domains.permissions.client import PermissionBindingManager
    from ssp_mcp.domains.permissions.models import RoleBinding

logger = logging.getLogger(__name__)

PROJECTS_PATH = "oapi/v1/projects"


class ProjectQueryService:
    """Lists projects and reads their admins and business metadata."""

    def __init__(
        self,
        registry: ClusterRegistry,
        permissions: PermissionBindingManager,
        metadata: MetadataSynchronizer,
    ) -> None:
        self._registry = registry
        self._permissions = permissions
        self._metadata = metadata

    def list_projects(self, cluster_id: str, username: str) -> list[str]:
        """List the names of the projects on a cluster.

        The result is meant to contain only projects ``username`` can access,
        but it is not filtered: the service account sees every project and
        all of them are returned.
        """
        # TODO: filter by the user's role bindings once the access rules are defined
        cluster = self._registry.resolve(cluster_id)
        projects = cluster.get_document(PROJECTS_PATH, ProjectList)
        logger.info(f"{username} has queried all his projects in clusterid: {cluster_id}")
        return projects.names

    def _admin_bindings(
        self, cluster_id: str, project: str
    ) -> tuple[RoleBinding, RoleBinding | None]:
        admins = self._permissions.get_role_binding(cluster_id, project, ADMIN_ROLE)
        operators = self._permissions.find_role_binding(cluster_id, project, OPERATOR_ROLE)
        return admins, operators

    def get_admins_and_operators(self, cluster_id: str, project: str) -> tuple[list[str], list[str]]:
        """Return the members of the admin and operator role bindings.

        A project without an operator binding has no operators.
        """
        admins, operators = self._admin_bindings(cluster_id, project)
        return admins.members, operators.members if operators else []

    def check_admin_permissions(self, cluster_id: str, username: str, project: str) -> None:
        """Ensure ``username`` is admin or operator of ``project``.

        Raises:
            ValidationError: If cluster or project is missing.
            PermissionDeniedError: If the user has no admin rights.
        """
        if not cluster_id:
            raise ValidationError("Cluster must be provided")
        if not project:
            raise ValidationError("Project name must be provided")

        admins, operators = self._admin_bindings(cluster_id, project)
        if admins.has_member(username) or (operators and operators.has_member(username)):
            return

        logger.info(f"{username} is not admin of project {project} on cluster {cluster_id}")
        raise PermissionDeniedError(
            f"You are not admin of project {project} on cluster {cluster_id}"
        )

    def get_project_information(self, cluster_id: str, project: str) -> ProjectInformation:
        return self._metadata.get_project_information(cluster_id, project)
