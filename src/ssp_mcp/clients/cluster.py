"""HTTP clients for the OpenShift clusters the server provisions on.

A ClusterClient wraps one ``httpx.Client`` bound to the base URL and
credentials of a cluster. The ClusterRegistry builds one client per
configured cluster at startup and resolves cluster ids to clients.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel

from ssp_mcp.utils.errors import ClusterNotFoundError, RemoteAPIError

if TYPE_CHECKING:
    from ssp_mcp.config import ClusterConfig, SSPConfig

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)


class ClusterClient:
    """Authenticated HTTP access to the API of a single cluster."""

    def __init__(self, cluster_id: str, http: httpx.Client) -> None:
        self._cluster_id = cluster_id
        self._http = http

    @classmethod
    def from_config(
        cls,
        config: ClusterConfig,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> ClusterClient:
        """Create a client from cluster settings.

        Args:
            config: Cluster connection settings.
            timeout: Request timeout in seconds.
            transport: Optional transport, used to route requests in tests.
        """
        headers = {"Accept": "application/json"}
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"

        http = httpx.Client(
            base_url=config.url,
            headers=headers,
            timeout=timeout,
            verify=config.verify_tls,
            transport=transport,
        )
        return cls(config.id, http)

    @property
    def cluster_id(self) -> str:
        return self._cluster_id

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    def request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        """Send a request to a path relative to the cluster base URL.

        Raises:
            RemoteAPIError: On any transport failure.
        """
        try:
            return self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} on cluster {self._cluster_id} failed: {e}")
            raise RemoteAPIError() from e

    def get_document(self, path: str, model: type[DocumentT]) -> DocumentT:
        """GET a JSON document and decode it into ``model``.

        Raises:
            RemoteAPIError: If the status is not 200 or the body cannot be decoded.
        """
        response = self.request("GET", path)
        self.expect_status(response, 200)
        return self.decode(response, model)

    def put_document(self, path: str, document: BaseModel) -> httpx.Response:
        """PUT the full document back to ``path``.

        Raises:
            RemoteAPIError: If the status is not 200.
        """
        response = self.request("PUT", path, json=encode_document(document))
        self.expect_status(response, 200)
        return response

    def expect_status(self, response: httpx.Response, *expected: int) -> None:
        """Raise RemoteAPIError unless the response has one of the expected codes."""
        if response.status_code in expected:
            return
        request = response.request
        logger.error(
            f"Unexpected response from cluster {self._cluster_id} for "
            f"{request.method} {request.url.path}: {response.status_code} {response.text}"
        )
        raise RemoteAPIError(status_code=response.status_code)

    def decode(self, response: httpx.Response, model: type[DocumentT]) -> DocumentT:
        """Decode a response body into a typed document.

        Raises:
            RemoteAPIError: If the body is not valid JSON for ``model``.
        """
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            logger.error(
                f"Error decoding {model.__name__} from cluster {self._cluster_id}: "
                f"{e} (status {response.status_code})"
            )
            raise RemoteAPIError(status_code=response.status_code) from e

    def close(self) -> None:
        self._http.close()


def encode_document(document: BaseModel) -> dict[str, Any]:
    """Encode a typed document, including passthrough fields, for the API.

    Only fields present in the decoded document or assigned since are
    emitted, so explicit nulls survive and unread defaults are not added.
    """
    return document.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ClusterRegistry:
    """Maps cluster ids to their clients.

    Built once at startup and never mutated afterwards, so lookups are safe
    from concurrent requests.
    """

    def __init__(self, clients: Mapping[str, ClusterClient]) -> None:
        self._clients = MappingProxyType(dict(clients))

    @classmethod
    def from_config(
        cls,
        config: SSPConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> ClusterRegistry:
        """Create clients for every configured cluster."""
        clients = {
            cluster.id: ClusterClient.from_config(cluster, config.request_timeout, transport)
            for cluster in config.load_clusters()
        }
        logger.info(f"Configured {len(clients)} clusters: {', '.join(sorted(clients))}")
        return cls(clients)

    @property
    def cluster_ids(self) -> list[str]:
        return sorted(self._clients)

    def resolve(self, cluster_id: str) -> ClusterClient:
        """Return the client for ``cluster_id``.

        Raises:
            ClusterNotFoundError: If the cluster is not configured.
        """
        try:
            return self._clients[cluster_id]
        except KeyError:
            raise ClusterNotFoundError(cluster_id) from None

    def __contains__(self, cluster_id: object) -> bool:
        return cluster_id in self._clients

    def close(self) -> None:
        """Close all underlying HTTP connections."""
        for client in self._clients.values():
            client.close()
