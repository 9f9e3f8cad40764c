"""Utility functions and helpers for SSP MCP server."""

from ssp_mcp.utils.annotations import SSPAnnotations
from ssp_mcp.utils.errors import (
    GENERIC_API_ERROR,
    AlreadyExistsError,
    ClusterNotFoundError,
    ConfigurationError,
    NotFoundError,
    OperationNotAllowedError,
    PermissionDeniedError,
    RemoteAPIError,
    SSPError,
    ValidationError,
)

__all__ = [
    # Errors
    "GENERIC_API_ERROR",
    "SSPError",
    "ValidationError",
    "AlreadyExistsError",
    "NotFoundError",
    "ClusterNotFoundError",
    "RemoteAPIError",
    "PermissionDeniedError",
    "ConfigurationError",
    "OperationNotAllowedError",
    # Annotations
    "SSPAnnotations",
]
