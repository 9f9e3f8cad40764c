"""Shared document models."""

from ssp_mcp.models.common import APIDocument, ListMeta, ObjectMeta

__all__ = ["APIDocument", "ListMeta", "ObjectMeta"]
