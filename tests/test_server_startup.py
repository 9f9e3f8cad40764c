"""Tests for SSPServer startup and shutdown."""

from unittest.mock import Mock, patch

import pytest

from ssp_mcp.config import SSPConfig
from ssp_mcp.server import SSPServer


def test_startup_preserves_pre_injected_registry(ssp_config: SSPConfig) -> None:
    """startup() should not replace an already present cluster registry."""
    server = SSPServer(ssp_config)
    registry = Mock()
    server._registry = registry

    with patch("ssp_mcp.server.ClusterRegistry") as registry_cls:
        server.startup()
        registry_cls.from_config.assert_not_called()

    assert server._registry is registry


def test_startup_creates_registry_when_none_exists(ssp_config: SSPConfig) -> None:
    """startup() should build the registry from the configuration."""
    server = SSPServer(ssp_config)
    assert server._registry is None

    with patch("ssp_mcp.server.ClusterRegistry") as registry_cls:
        server.startup()
        registry_cls.from_config.assert_called_once_with(ssp_config, None)

    assert server._registry is registry_cls.from_config.return_value


def test_startup_builds_real_registry(ssp_config: SSPConfig) -> None:
    server = SSPServer(ssp_config)

    server.startup()
    try:
        assert server.registry.cluster_ids == ["cluster-a"]
    finally:
        server.shutdown()


def test_startup_runs_health_checks(ssp_config: SSPConfig) -> None:
    """Health checks should run when a plugin manager is present."""
    server = SSPServer(ssp_config)
    server._registry = Mock()

    mock_pm = Mock()
    mock_pm.registered_plugins = {"p1": Mock()}
    mock_pm.healthy_plugins = {"p1": Mock()}
    server._plugin_manager = mock_pm

    server.startup()

    mock_pm.run_health_checks.assert_called_once_with(server)


def test_startup_skips_health_checks_without_plugin_manager(ssp_config: SSPConfig) -> None:
    """startup() should not fail when plugin_manager is None."""
    server = SSPServer(ssp_config)
    assert server._plugin_manager is None

    with patch("ssp_mcp.server.ClusterRegistry"):
        server.startup()  # Should not raise


def test_registry_unavailable_before_startup(ssp_config: SSPConfig) -> None:
    server = SSPServer(ssp_config)

    with pytest.raises(RuntimeError, match="not running"):
        _ = server.registry


def test_shutdown_closes_registry_and_drops_services(ssp_config: SSPConfig) -> None:
    server = SSPServer(ssp_config)
    registry = Mock()
    registry.cluster_ids = ["cluster-a"]
    server._registry = registry
    provisioner = server.provisioner

    server.shutdown()

    registry.close.assert_called_once()
    assert server._registry is None
    assert server._provisioner is None
    assert provisioner is not None


def test_domain_services_are_shared(ssp_config: SSPConfig) -> None:
    server = SSPServer(ssp_config)
    server._registry = Mock()

    assert server.provisioner is server.provisioner
    assert server.queries is server.queries
    assert server.metadata is server.metadata


def test_username_is_resolved_once(ssp_config: SSPConfig) -> None:
    server = SSPServer(ssp_config)

    with patch("ssp_mcp.server.resolve_username", return_value="alice") as resolve:
        assert server.username == "alice"
        assert server.username == "alice"

    resolve.assert_called_once_with(ssp_config)


def test_create_mcp_registers_core_plugins(ssp_config: SSPConfig) -> None:
    server = SSPServer(ssp_config)

    mcp = server.create_mcp()

    assert server.mcp is mcp
    assert set(server.plugin_manager.registered_plugins) >= {"projects", "notifications"}
