"""Entry point for SSP MCP server."""

import argparse
import logging
import sys
from typing import Any

from ssp_mcp import __version__
from ssp_mcp.config import LogLevel, SSPConfig, TransportMode
from ssp_mcp.utils.errors import ConfigurationError


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ssp-mcp",
        description="MCP server for self-service OpenShift project provisioning",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transport options
    parser.add_argument(
        "--transport",
        choices=[mode.value for mode in TransportMode],
        default=None,
        help="Transport mode (default: from config or stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind HTTP server to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind HTTP server to (default: 8000)",
    )

    # Cluster and identity options
    parser.add_argument(
        "--clusters-file",
        default=None,
        help="YAML file listing the clusters",
    )
    parser.add_argument(
        "--username",
        default=None,
        help="Acting username (default: from 'oc whoami')",
    )

    # Safety options
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Run in read-only mode (disable project creation and updates)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SSPConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.transport:
        config_kwargs["transport"] = TransportMode(args.transport)

    if args.host:
        config_kwargs["host"] = args.host

    if args.port:
        config_kwargs["port"] = args.port

    if args.clusters_file:
        config_kwargs["clusters_file"] = args.clusters_file

    if args.username:
        config_kwargs["username"] = args.username

    if args.read_only:
        config_kwargs["read_only_mode"] = True

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return SSPConfig(**config_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = build_config(parse_args(argv))

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting SSP MCP server v{__version__}")

    try:
        warnings = config.validate_cluster_config()
        for warning in warnings:
            logger.warning(warning)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    from ssp_mcp.server import create_server

    mcp = create_server(config)

    if config.transport == TransportMode.STDIO:
        logger.info("Running with stdio transport")
    else:
        logger.info(f"Running with {config.transport.value} transport on {config.host}:{config.port}")
    mcp.run(transport=config.transport.value)

    return 0


if __name__ == "__main__":
    sys.exit(main())
