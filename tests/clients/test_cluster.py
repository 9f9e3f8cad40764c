"""Tests for ClusterClient and ClusterRegistry."""

from unittest.mock import MagicMock

import httpx
import pytest
from pydantic import SecretStr

from ssp_mcp.clients.cluster import ClusterClient, ClusterRegistry
from ssp_mcp.config import ClusterConfig, SSPConfig
from ssp_mcp.domains.permissions.models import RoleBinding
from ssp_mcp.utils.errors import GENERIC_API_ERROR, ClusterNotFoundError, RemoteAPIError


class TestClusterRegistry:
    """Test cluster id resolution."""

    def test_resolve_known_cluster(self, registry: ClusterRegistry) -> None:
        """A configured cluster resolves to a client bound to its URL."""
        client = registry.resolve("cluster-a")

        assert client.cluster_id == "cluster-a"
        assert client.base_url.startswith("https://api.cluster-a.example.com:8443")

    def test_resolve_unknown_cluster(self, registry: ClusterRegistry) -> None:
        """An unknown cluster id raises ClusterNotFoundError, not RemoteAPIError."""
        with pytest.raises(ClusterNotFoundError) as exc_info:
            registry.resolve("cluster-z")

        assert not isinstance(exc_info.value, RemoteAPIError)
        assert "cluster-z" in str(exc_info.value)

    def test_cluster_ids_sorted(self) -> None:
        """cluster_ids lists all configured clusters."""
        registry = ClusterRegistry({"b": MagicMock(), "a": MagicMock()})

        assert registry.cluster_ids == ["a", "b"]
        assert "a" in registry
        assert "c" not in registry

    def test_from_config_reads_clusters_file(self, tmp_path, fake_cluster) -> None:
        """Clusters from the YAML file are added to inline clusters."""
        clusters_file = tmp_path / "clusters.yaml"
        clusters_file.write_text(
            "clusters:\n"
            "  - id: cluster-b\n"
            "    url: https://api.cluster-b.example.com\n"
            "    verify_tls: false\n"
        )
        config = SSPConfig(
            _env_file=None,
            clusters=[ClusterConfig(id="cluster-a", url="https://api.cluster-a.example.com")],
            clusters_file=clusters_file,
        )

        registry = ClusterRegistry.from_config(config, httpx.MockTransport(fake_cluster.handler))

        assert registry.cluster_ids == ["cluster-a", "cluster-b"]
        registry.close()

    def test_close_closes_all_clients(self) -> None:
        """close() closes every client."""
        clients = {"a": MagicMock(), "b": MagicMock()}
        ClusterRegistry(clients).close()

        clients["a"].close.assert_called_once()
        clients["b"].close.assert_called_once()


class TestClusterClient:
    """Test request handling of a single cluster client."""

    def _client(self, handler) -> ClusterClient:
        config = ClusterConfig(
            id="cluster-a",
            url="https://api.cluster-a.example.com:8443",
            token=SecretStr("sa-token"),
        )
        return ClusterClient.from_config(config, timeout=5.0, transport=httpx.MockTransport(handler))

    def test_bearer_token_sent(self) -> None:
        """Requests carry the cluster token as bearer authorization."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        self._client(handler).request("GET", "oapi/v1/projects")

        assert seen[0].headers["Authorization"] == "Bearer sa-token"
        assert seen[0].url.path == "/oapi/v1/projects"

    def test_transport_error_becomes_remote_api_error(self) -> None:
        """Connection failures surface as RemoteAPIError with the generic message."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RemoteAPIError) as exc_info:
            self._client(handler).request("GET", "oapi/v1/projects")

        assert exc_info.value.message == GENERIC_API_ERROR
        assert exc_info.value.status_code is None
        assert "refused" not in str(exc_info.value)

    def test_get_document_unexpected_status(self) -> None:
        """A non-200 answer raises RemoteAPIError carrying the status code."""
        client = self._client(lambda request: httpx.Response(403, text="forbidden"))

        with pytest.raises(RemoteAPIError) as exc_info:
            client.get_document("oapi/v1/namespaces/p/rolebindings/admin", RoleBinding)

        assert exc_info.value.status_code == 403
        assert "forbidden" not in str(exc_info.value)

    def test_get_document_invalid_json(self) -> None:
        """An undecodable body raises RemoteAPIError."""
        client = self._client(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(RemoteAPIError):
            client.get_document("oapi/v1/namespaces/p/rolebindings/admin", RoleBinding)

    def test_get_document_wrong_shape(self) -> None:
        """A body not matching the document type raises RemoteAPIError."""
        client = self._client(lambda request: httpx.Response(200, json={"userNames": "bob"}))

        with pytest.raises(RemoteAPIError):
            client.get_document("oapi/v1/namespaces/p/rolebindings/admin", RoleBinding)
