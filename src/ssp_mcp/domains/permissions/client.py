"""Role binding read-modify-write operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssp_mcp.domains.permissions.models import RoleBinding

if TYPE_CHECKING:
    from ssp_mcp.clients.cluster import ClusterRegistry

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
OPERATOR_ROLE = "operator"


def role_binding_path(project: str, role: str) -> str:
    return f"oapi/v1/namespaces/{project}/rolebindings/{role}"


class PermissionBindingManager:
    """Grants users roles on projects by editing role binding documents."""

    def __init__(self, registry: ClusterRegistry) -> None:
        self._registry = registry

    def get_role_binding(self, cluster_id: str, project: str, role: str) -> RoleBinding:
        """Fetch the role binding of ``role`` in ``project``.

        Raises:
            ClusterNotFoundError: If the cluster is not configured.
            RemoteAPIError: If the binding cannot be read.
        """
        cluster = self._registry.resolve(cluster_id)
        return cluster.get_document(role_binding_path(project, role), RoleBinding)

    def find_role_binding(self, cluster_id: str, project: str, role: str) -> RoleBinding | None:
        """Like get_role_binding, but returns None if the binding does not exist."""
        cluster = self._registry.resolve(cluster_id)
        response = cluster.request("GET", role_binding_path(project, role))
        if response.status_code == 404:
            return None
        cluster.expect_status(response, 200)
        return cluster.decode(response, RoleBinding)

    def grant_admin(self, cluster_id: str, project: str, username: str) -> RoleBinding:
        """Add ``username`` to the admin role binding of ``project``.

        The whole binding is read, the user is appended and the document is
        written back with PUT.

        Returns:
            The binding as written.

        Raises:
            ClusterNotFoundError: If the cluster is not configured.
            RemoteAPIError: If reading or writing the binding fails.
        """
        cluster = self._registry.resolve(cluster_id)
        path = role_binding_path(project, ADMIN_ROLE)

        binding = cluster.get_document(path, RoleBinding)
        binding.add_user(username)
        cluster.put_document(path, binding)

        logger.info(f"{username} is now admin of {project} on cluster {cluster_id}")
        return binding
