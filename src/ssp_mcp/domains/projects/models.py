"""Pydantic models for OpenShift projects and their provisioning."""

from enum import Enum

from pydantic import BaseModel, Field

from ssp_mcp.models.common import APIDocument, ListMeta, ObjectMeta

TEST_PROJECT_BILLING = "keine-verrechnung"


class ProjectRequest(APIDocument):
    """Body of a POST to ``oapi/v1/projectrequests``."""

    kind: str | None = "ProjectRequest"
    api_version: str | None = Field("v1", alias="apiVersion")
    metadata: ObjectMeta

    @classmethod
    def for_name(cls, name: str) -> "ProjectRequest":
        return cls(kind="ProjectRequest", api_version="v1", metadata=ObjectMeta(name=name))


class ProjectItemMeta(ObjectMeta):
    """Metadata of a listed project; the name is mandatory."""

    name: str


class Project(APIDocument):
    """OpenShift project as returned by ``oapi/v1/projects``."""

    metadata: ProjectItemMeta


class ProjectList(APIDocument):
    """List response of ``oapi/v1/projects``."""

    metadata: ListMeta | None = None
    items: list[Project] = Field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [item.metadata.name for item in self.items]


class NewProject(BaseModel):
    """Input for provisioning a project."""

    cluster_id: str = Field(..., description="Target cluster")
    project: str = Field(..., description="Requested project name")
    creator: str = Field(..., description="Acting user, becomes admin and requester")
    billing: str = Field("", description="Billing code (Kontierungsnummer)")
    mega_id: str = Field("", description="Optional MEGA-ID")
    test_project: bool = Field(False, description="Create as self-expiring test project")


class ProvisioningStep(str, Enum):
    """Steps of project provisioning, in execution order."""

    CREATED = "created"
    PERMISSIONS_ASSIGNED = "permissions_assigned"
    METADATA_SYNCED = "metadata_synced"


class ProvisioningResult(BaseModel):
    """Outcome of a successful provisioning run."""

    cluster_id: str
    project: str = Field(..., description="Final (lower-cased) project name")
    creator: str
    billing: str
    mega_id: str = ""
    test_project: bool = False
    completed_steps: list[ProvisioningStep] = Field(default_factory=list)
