"""Metadata domain - billing and ownership annotations on project namespaces."""

from ssp_mcp.domains.metadata.client import (
    DEFAULT_DELETION_DAYS,
    MetadataSynchronizer,
    namespace_path,
)
from ssp_mcp.domains.metadata.models import MetadataUpdate, Namespace, ProjectInformation

__all__ = [
    "DEFAULT_DELETION_DAYS",
    "MetadataSynchronizer",
    "MetadataUpdate",
    "Namespace",
    "ProjectInformation",
    "namespace_path",
]
