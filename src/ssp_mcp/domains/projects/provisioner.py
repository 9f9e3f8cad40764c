"""Project provisioning.

Creating a project is a fixed sequence of remote calls:

1. validate the input (no network access),
2. POST a ProjectRequest to the cluster,
3. grant the creator admin rights on the new project,
4. write billing, owner and MEGA-ID annotations.

The platform offers no transaction spanning these steps. A failure in
step 3 or 4 leaves the project (and possibly its permissions) in place;
nothing is rolled back. The steps that completed are logged and attached
to the raised error so that the partial project can be cleaned up by hand.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssp_mcp.clients.cluster import encode_document
from ssp_mcp.domains.projects.models import (
    TEST_PROJECT_BILLING,
    NewProject,
    ProjectRequest,
    ProvisioningResult,
    ProvisioningStep,
)
from ssp_mcp.utils.errors import AlreadyExistsError, RemoteAPIError, ValidationError

if TYPE_CHECKING:
    from ssp_mcp.clients.cluster import ClusterRegistry
    from ssp_mcp.domains.metadata.client import MetadataSynchronizer
    from ssp_mcp.domains.permissions.client import PermissionBindingManager

logger = logging.getLogger(__name__)

PROJECT_REQUESTS_PATH = "oapi/v1/projectrequests"


def validate_new_project(project: str, billing: str, test_project: bool) -> None:
    """Check the input of a creation request.

    Raises:
        ValidationError: If the project name, or the billing code of a
            regular project, is missing.
    """
    if not project:
        raise ValidationError("Project name has to be provided")

    if not test_project and not billing:
        raise ValidationError("Accounting number must be provided")


class ProjectProvisioner:
    """Creates projects and sets up their permissions and metadata."""

    def __init__(
        self,
        registry: ClusterRegistry,
        permissions: PermissionBindingManager,
        metadata: MetadataSynchronizer,
    ) -> None:
        self._registry = registry
        self._permissions = permissions
        self._metadata = metadata

    def provision(self, request: NewProject) -> ProvisioningResult:
        """Run all provisioning steps for ``request``.

        Raises:
            ValidationError: If the input is incomplete.
            ClusterNotFoundError: If the cluster is not configured.
            AlreadyExistsError: If the project exists already.
            RemoteAPIError: If any remote call fails.
        """
        validate_new_project(request.project, request.billing, request.test_project)

        name = request.project.lower()
        cluster = self._registry.resolve(request.cluster_id)
        steps: list[ProvisioningStep] = []

        response = cluster.request(
            "POST", PROJECT_REQUESTS_PATH, json=encode_document(ProjectRequest.for_name(name))
        )
        if response.status_code == 409:
            raise AlreadyExistsError("Project", name)
        cluster.expect_status(response, 201)
        steps.append(ProvisioningStep.CREATED)
        logger.info(f"{request.creator} created a new project: {name} on cluster {cluster.cluster_id}")

        try:
            self._permissions.grant_admin(request.cluster_id, name, request.creator)
            steps.append(ProvisioningStep.PERMISSIONS_ASSIGNED)

            self._metadata.upsert_metadata(
                request.cluster_id,
                name,
                billing=request.billing,
                mega_id=request.mega_id,
                owner=request.creator,
                test_project=request.test_project,
            )
            steps.append(ProvisioningStep.METADATA_SYNCED)
        except RemoteAPIError as e:
            logger.error(
                f"Project {name} on cluster {request.cluster_id} is only partially provisioned; "
                f"completed steps: {', '.join(step.value for step in steps)}"
            )
            raise RemoteAPIError(status_code=e.status_code, completed_steps=steps) from e

        return ProvisioningResult(
            cluster_id=request.cluster_id,
            project=name,
            creator=request.creator,
            billing=request.billing,
            mega_id=request.mega_id,
            test_project=request.test_project,
            completed_steps=steps,
        )

    def create_project(
        self,
        cluster_id: str,
        project: str,
        creator: str,
        billing: str,
        mega_id: str = "",
    ) -> ProvisioningResult:
        """Create a regular, billed project."""
        return self.provision(
            NewProject(
                cluster_id=cluster_id,
                project=project,
                creator=creator,
                billing=billing,
                mega_id=mega_id,
            )
        )

    def create_test_project(self, cluster_id: str, project: str, creator: str) -> ProvisioningResult:
        """Create a test project named ``{creator}-{project}``.

        Test projects carry no billing code and are marked for automatic
        deletion.
        """
        if not project:
            raise ValidationError("Project name has to be provided")

        return self.provision(
            NewProject(
                cluster_id=cluster_id,
                project=f"{creator}-{project}",
                creator=creator,
                billing=TEST_PROJECT_BILLING,
                test_project=True,
            )
        )
