"""Common Pydantic models for documents read from and written to the cluster API.

Documents are decoded into typed models that declare only the fields this
server touches. Every other field is kept as passthrough data so that a
read-modify-write cycle sends the object back without losing anything.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class APIDocument(BaseModel):
    """Base for API documents that keep unknown fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kind: str | None = Field(None, description="Resource kind")
    api_version: str | None = Field(None, alias="apiVersion", description="API version")


class ObjectMeta(BaseModel):
    """Kubernetes object metadata with passthrough of unknown fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = Field(None, description="Resource name")
    namespace: str | None = Field(None, description="Resource namespace")
    resource_version: str | None = Field(
        None, alias="resourceVersion", description="Opaque version of the object"
    )
    labels: dict[str, str | None] | None = Field(None, description="Resource labels")
    annotations: dict[str, str | None] | None = Field(None, description="Resource annotations")

    @field_validator("annotations", "labels", mode="before")
    @classmethod
    def _stringify_values(cls, value: Any) -> Any:
        # The API only stores strings, but older writers sent numbers. Nulls are kept as read.
        if isinstance(value, dict):
            return {k: v if v is None else str(v) for k, v in value.items()}
        return value

    def set_annotations(self, values: dict[str, str]) -> None:
        """Merge ``values`` into the annotations, keeping all other keys."""
        self.annotations = {**(self.annotations or {}), **values}

    def annotation(self, key: str, default: str = "") -> str:
        """Return an annotation value or ``default`` when absent or null."""
        value = (self.annotations or {}).get(key)
        return default if value is None else value


class ListMeta(BaseModel):
    """Metadata of a list response."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    resource_version: str | None = Field(None, alias="resourceVersion")
