"""Exception hierarchy for SSP MCP.

Every error raised towards a caller derives from SSPError and carries a
short, user-facing message. Details of remote failures (status codes,
response bodies, transport errors) are logged where they happen and never
end up in the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ssp_mcp.domains.projects.models import ProvisioningStep

GENERIC_API_ERROR = "Error when calling the OpenShift API. Please contact the cloud team."


class SSPError(Exception):
    """Base error for all SSP MCP failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SSPError):
    """Input is missing or invalid and can be corrected by the user."""


class AlreadyExistsError(SSPError):
    """The platform reported that the resource already exists."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"The {kind.lower()} {name} already exists")
        self.kind = kind
        self.name = name


class NotFoundError(SSPError):
    """A resource could not be found."""

    def __init__(self, kind: str, name: str, namespace: str | None = None) -> None:
        if namespace:
            message = f"{kind} '{name}' not found in namespace '{namespace}'"
        else:
            message = f"{kind} '{name}' not found"
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.namespace = namespace


class ClusterNotFoundError(NotFoundError):
    """The requested cluster id is not configured."""

    def __init__(self, cluster_id: str) -> None:
        super().__init__("Cluster", cluster_id)
        self.cluster_id = cluster_id


class RemoteAPIError(SSPError):
    """A call to the cluster API failed.

    The message is always the generic one. ``status_code`` is the HTTP
    status if a response was received, and ``completed_steps`` lists the
    provisioning steps that finished before the failure.
    """

    def __init__(
        self,
        status_code: int | None = None,
        completed_steps: list[ProvisioningStep] | None = None,
    ) -> None:
        super().__init__(GENERIC_API_ERROR)
        self.status_code = status_code
        self.completed_steps = list(completed_steps or [])


class PermissionDeniedError(SSPError):
    """The acting user lacks the rights for the requested operation."""


class ConfigurationError(SSPError):
    """The server configuration is invalid."""


class OperationNotAllowedError(SSPError):
    """The operation is disabled by the server configuration."""
