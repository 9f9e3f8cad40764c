"""Pydantic models for namespace metadata."""

from pydantic import BaseModel, Field

from ssp_mcp.models.common import APIDocument, ObjectMeta
from ssp_mcp.utils.annotations import SSPAnnotations


class Namespace(APIDocument):
    """Namespace document from the ``api/v1`` API.

    ``spec`` and ``status`` are not modelled and pass through unchanged.
    """

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)


class ProjectInformation(BaseModel):
    """Business metadata of a project."""

    kontierungsnummer: str = Field("", description="Billing code")
    megaid: str = Field("", description="MEGA-ID asset identifier")

    @classmethod
    def from_namespace(cls, namespace: Namespace) -> "ProjectInformation":
        meta = namespace.metadata
        return cls(
            kontierungsnummer=meta.annotation(SSPAnnotations.BILLING),
            megaid=meta.annotation(SSPAnnotations.MEGA_ID),
        )


class MetadataUpdate(BaseModel):
    """Values written to a project's annotations."""

    billing: str = Field(..., description="Billing code, always written")
    owner: str = Field(..., description="Requester, always written")
    mega_id: str = Field("", description="MEGA-ID, written only when non-empty")
    test_project: bool = Field(False, description="Whether to add expiry annotations")

    def annotations(self, deletion_days: int) -> dict[str, str]:
        """Annotation values to merge into the namespace."""
        values = {
            SSPAnnotations.BILLING: self.billing,
            SSPAnnotations.REQUESTER: self.owner,
        }
        if self.test_project:
            values.update(SSPAnnotations.test_project_annotations(deletion_days))
        if self.mega_id:
            values[SSPAnnotations.MEGA_ID] = self.mega_id
        return values
