"""Clients for the cluster APIs and the acting user's identity."""

from ssp_mcp.clients.cluster import ClusterClient, ClusterRegistry, encode_document
from ssp_mcp.clients.identity import resolve_username

__all__ = [
    "ClusterClient",
    "ClusterRegistry",
    "encode_document",
    "resolve_username",
]
