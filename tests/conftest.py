"""Shared fixtures: an in-memory OpenShift API behind httpx.MockTransport."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from ssp_mcp.clients.cluster import ClusterRegistry
from ssp_mcp.config import ClusterConfig, SSPConfig
from ssp_mcp.domains.metadata.client import MetadataSynchronizer
from ssp_mcp.domains.permissions.client import PermissionBindingManager
from ssp_mcp.domains.projects.client import ProjectQueryService
from ssp_mcp.domains.projects.provisioner import ProjectProvisioner

CLUSTER_ID = "cluster-a"
CLUSTER_URL = "https://api.cluster-a.example.com:8443"
PROVISIONER_SA = "system:serviceaccount:ssp:provisioner"

_ROLE_BINDING = re.compile(r"^/oapi/v1/namespaces/(?P<project>[^/]+)/rolebindings/(?P<role>[^/]+)$")
_NAMESPACE = re.compile(r"^/api/v1/namespaces/(?P<project>[^/]+)$")


class FakeOpenShift:
    """Minimal stateful stand-in for the project, role binding and namespace APIs."""

    def __init__(self) -> None:
        self.namespaces: dict[str, dict[str, Any]] = {}
        self.role_bindings: dict[tuple[str, str], dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._failures: dict[tuple[str, str], int] = {}

    def fail(self, method: str, path: str, status: int) -> None:
        """Answer ``method path`` with ``status`` from now on."""
        self._failures[(method, path)] = status

    def add_project(self, name: str, annotations: dict[str, str | None] | None = None) -> None:
        self.namespaces[name] = {
            "kind": "Namespace",
            "apiVersion": "v1",
            "metadata": {
                "name": name,
                "uid": f"uid-{name}",
                "resourceVersion": "1",
                "labels": {"kubernetes.io/metadata.name": name},
                "annotations": {"openshift.io/display-name": "", **(annotations or {})},
            },
            "spec": {"finalizers": ["kubernetes"]},
            "status": {"phase": "Active"},
        }
        self.role_bindings[(name, "admin")] = {
            "kind": "RoleBinding",
            "apiVersion": "v1",
            "metadata": {"name": "admin", "namespace": name, "resourceVersion": "1"},
            "roleRef": {"name": "admin"},
            "subjects": [{"kind": "ServiceAccount", "name": "provisioner", "namespace": "ssp"}],
            "userNames": [PROVISIONER_SA],
            "groupNames": None,
        }

    def writes(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method in ("POST", "PUT")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        status = self._failures.get((request.method, path))
        if status is not None:
            return httpx.Response(status, text=f"injected failure {status}")

        if path == "/oapi/v1/projectrequests" and request.method == "POST":
            name = json.loads(request.content)["metadata"]["name"]
            if name in self.namespaces:
                return httpx.Response(409, json={"kind": "Status", "reason": "AlreadyExists"})
            self.add_project(name)
            return httpx.Response(201, json={"kind": "Project", "metadata": {"name": name}})

        if path == "/oapi/v1/projects" and request.method == "GET":
            items = [
                {"kind": "Project", "metadata": ns["metadata"], "status": ns["status"]}
                for ns in self.namespaces.values()
            ]
            return httpx.Response(200, json={"kind": "ProjectList", "metadata": {}, "items": items})

        match = _ROLE_BINDING.match(path)
        if match:
            key = (match["project"], match["role"])
            return self._get_or_put(request, self.role_bindings, key)

        match = _NAMESPACE.match(path)
        if match:
            return self._get_or_put(request, self.namespaces, match["project"])

        return httpx.Response(404, json={"kind": "Status", "reason": "NotFound"})

    @staticmethod
    def _get_or_put(request: httpx.Request, store: dict[Any, Any], key: Any) -> httpx.Response:
        if key not in store:
            return httpx.Response(404, json={"kind": "Status", "reason": "NotFound"})
        if request.method == "GET":
            return httpx.Response(200, json=store[key])
        if request.method == "PUT":
            store[key] = json.loads(request.content)
            return httpx.Response(200, json=store[key])
        return httpx.Response(405)


@pytest.fixture
def fake_cluster() -> FakeOpenShift:
    return FakeOpenShift()


@pytest.fixture
def ssp_config() -> SSPConfig:
    """Config with one cluster and no environment influence."""
    return SSPConfig(
        _env_file=None,
        clusters=[ClusterConfig(id=CLUSTER_ID, url=CLUSTER_URL, token=SecretStr("sa-token"))],
        username="alice",
        test_project_deletion_days=30,
    )


@pytest.fixture
def registry(ssp_config: SSPConfig, fake_cluster: FakeOpenShift) -> Iterator[ClusterRegistry]:
    registry = ClusterRegistry.from_config(ssp_config, httpx.MockTransport(fake_cluster.handler))
    yield registry
    registry.close()


@pytest.fixture
def permissions(registry: ClusterRegistry) -> PermissionBindingManager:
    return PermissionBindingManager(registry)


@pytest.fixture
def metadata(registry: ClusterRegistry) -> MetadataSynchronizer:
    return MetadataSynchronizer(registry, test_project_deletion_days=30)


@pytest.fixture
def provisioner(
    registry: ClusterRegistry,
    permissions: PermissionBindingManager,
    metadata: MetadataSynchronizer,
) -> ProjectProvisioner:
    return ProjectProvisioner(registry, permissions, metadata)


@pytest.fixture
def queries(
    registry: ClusterRegistry,
    permissions: PermissionBindingManager,
    metadata: MetadataSynchronizer,
) -> ProjectQueryService:
    return ProjectQueryService(registry, permissions, metadata)
