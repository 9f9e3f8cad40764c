"""Permissions domain - project role bindings."""

from ssp_mcp.domains.permissions.client import (
    ADMIN_ROLE,
    OPERATOR_ROLE,
    PermissionBindingManager,
    role_binding_path,
)
from ssp_mcp.domains.permissions.models import RoleBinding

__all__ = [
    "ADMIN_ROLE",
    "OPERATOR_ROLE",
    "PermissionBindingManager",
    "RoleBinding",
    "role_binding_path",
]
