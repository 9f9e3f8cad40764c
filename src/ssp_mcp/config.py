"""Configuration for SSP MCP server.

Settings are read from environment variables with the SSP_MCP_ prefix or
from a .env file. Clusters can be given inline (as JSON in SSP_MCP_CLUSTERS)
or in a YAML file referenced by SSP_MCP_CLUSTERS_FILE.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ssp_mcp.utils.errors import ConfigurationError


class TransportMode(str, Enum):
    """MCP transport the server listens on."""

    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ClusterConfig(BaseModel):
    """Connection settings for one OpenShift cluster."""

    id: str = Field(..., min_length=1, description="Cluster identifier used by callers")
    url: str = Field(..., description="Base URL of the cluster API, e.g. https://api.c1:8443")
    token: SecretStr | None = Field(None, description="Bearer token of the service account")
    verify_tls: bool = Field(True, description="Verify the API server certificate")


class SSPConfig(BaseSettings):
    """Configuration for the SSP MCP server."""

    model_config = SettingsConfigDict(
        env_prefix="SSP_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Clusters
    clusters: list[ClusterConfig] = Field(
        default_factory=list,
        description="Clusters the server can provision projects on",
    )
    clusters_file: Path | None = Field(
        default=None,
        description="YAML file with a top-level 'clusters' list",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for each request to a cluster API",
    )

    # Identity of the acting user
    username: str | None = Field(
        default=None,
        description="Acting username; resolved from 'oc whoami' when not set",
    )

    # Projects
    test_project_deletion_days: int = Field(
        default=30,
        ge=1,
        description="Days after which test projects are deleted automatically",
    )
    read_only_mode: bool = Field(
        default=False,
        description="Disable all write operations",
    )

    # Notification mail
    mail_server: str | None = Field(default=None, description="SMTP host")
    mail_port: int = Field(default=25, description="SMTP port")
    mail_verify_tls: bool = Field(
        default=False,
        description="Verify the SMTP relay certificate on STARTTLS",
    )
    mail_sender: str | None = Field(default=None, description="Sender address")
    mail_new_project_recipient: str | None = Field(
        default=None,
        description="Recipient of new-project notifications",
    )

    # Server
    transport: TransportMode = Field(default=TransportMode.STDIO)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    def load_clusters(self) -> list[ClusterConfig]:
        """Return inline clusters followed by those from ``clusters_file``.

        Raises:
            ConfigurationError: If the clusters file cannot be read or parsed.
        """
        clusters = list(self.clusters)
        if self.clusters_file is None:
            return clusters

        try:
            data: Any = yaml.safe_load(self.clusters_file.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read clusters file {self.clusters_file}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.clusters_file}: {e}") from e

        entries = (data or {}).get("clusters") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ConfigurationError(
                f"Clusters file {self.clusters_file} must contain a 'clusters' list"
            )

        try:
            clusters.extend(ClusterConfig.model_validate(entry) for entry in entries)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid cluster entry in {self.clusters_file}: {e}") from e
        return clusters

    def validate_cluster_config(self) -> list[str]:
        """Validate cluster settings.

        Returns:
            List of warning messages.

        Raises:
            ConfigurationError: If cluster ids are duplicated or the file is invalid.
        """
        warnings: list[str] = []
        clusters = self.load_clusters()

        if not clusters:
            warnings.append("No clusters configured; every project operation will fail.")

        seen: set[str] = set()
        for cluster in clusters:
            if cluster.id in seen:
                raise ConfigurationError(f"Cluster id '{cluster.id}' is configured twice")
            seen.add(cluster.id)
            if cluster.token is None:
                warnings.append(f"Cluster '{cluster.id}' has no token; requests are anonymous.")
            if not cluster.verify_tls:
                warnings.append(f"TLS verification is disabled for cluster '{cluster.id}'.")

        return warnings

    def is_operation_allowed(self, operation: str) -> tuple[bool, str | None]:
        """Check whether a write operation is permitted.

        Args:
            operation: Operation type, e.g. "create" or "update".

        Returns:
            Tuple of (allowed, reason if not allowed).
        """
        if self.read_only_mode and operation in ("create", "update"):
            return False, "Server is running in read-only mode"
        return True, None

    @property
    def mail_enabled(self) -> bool:
        """Whether all settings for notification mails are present."""
        return bool(self.mail_server and self.mail_sender and self.mail_new_project_recipient)


@lru_cache
def get_config() -> SSPConfig:
    """Get the process-wide configuration."""
    return SSPConfig()
