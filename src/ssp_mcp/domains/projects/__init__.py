"""Projects domain - provisioning and querying OpenShift projects."""

from ssp_mcp.domains.projects.client import ProjectQueryService
from ssp_mcp.domains.projects.models import (
    TEST_PROJECT_BILLING,
    NewProject,
    Project,
    ProjectList,
    ProjectRequest,
    ProvisioningResult,
    ProvisioningStep,
)
from ssp_mcp.domains.projects.provisioner import ProjectProvisioner, validate_new_project

__all__ = [
    "TEST_PROJECT_BILLING",
    "NewProject",
    "Project",
    "ProjectList",
    "ProjectProvisioner",
    "ProjectQueryService",
    "ProjectRequest",
    "ProvisioningResult",
    "ProvisioningStep",
    "validate_new_project",
]
