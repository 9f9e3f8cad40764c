"""Namespace metadata read-modify-write operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssp_mcp.domains.metadata.models import MetadataUpdate, Namespace, ProjectInformation

if TYPE_CHECKING:
    from ssp_mcp.clients.cluster import ClusterRegistry

logger = logging.getLogger(__name__)

DEFAULT_DELETION_DAYS = 30


def namespace_path(project: str) -> str:
    return f"api/v1/namespaces/{project}"


class MetadataSynchronizer:
    """Keeps billing, owner, MEGA-ID and expiry annotations on namespaces."""

    def __init__(
        self,
        registry: ClusterRegistry,
        test_project_deletion_days: int = DEFAULT_DELETION_DAYS,
    ) -> None:
        self._registry = registry
        self._deletion_days = test_project_deletion_days

    def get_namespace(self, cluster_id: str, project: str) -> Namespace:
        cluster = self._registry.resolve(cluster_id)
        return cluster.get_document(namespace_path(project), Namespace)

    def upsert_metadata(
        self,
        cluster_id: str,
        project: str,
        billing: str,
        mega_id: str,
        owner: str,
        test_project: bool = False,
    ) -> Namespace:
        """Write project metadata into the namespace annotations.

        The full namespace is read, the annotations are merged and the whole
        object is written back. Billing and owner are always overwritten; the
        MEGA-ID only when a new one is given. There is no version check, so
        a concurrent writer's changes may be overwritten.

        Returns:
            The namespace as written.

        Raises:
            ClusterNotFoundError: If the cluster is not configured.
            RemoteAPIError: If reading or writing the namespace fails.
        """
        update = MetadataUpdate(
            billing=billing, owner=owner, mega_id=mega_id, test_project=test_project
        )
        cluster = self._registry.resolve(cluster_id)
        path = namespace_path(project)

        namespace = cluster.get_document(path, Namespace)
        namespace.metadata.set_annotations(update.annotations(self._deletion_days))
        cluster.put_document(path, namespace)

        logger.info(
            f"User {owner} changed config of project {project} on cluster {cluster_id}. "
            f"Kontierungsnummer: {billing}, MegaID: {mega_id}"
        )
        return namespace

    def get_project_information(self, cluster_id: str, project: str) -> ProjectInformation:
        """Read billing code and MEGA-ID of a project.

        Missing annotations are returned as empty strings.
        """
        return ProjectInformation.from_namespace(self.get_namespace(cluster_id, project))
