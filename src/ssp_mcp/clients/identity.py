"""Resolution of the acting user's identity.

The server does not authenticate users itself. The acting username is
either configured explicitly or taken from the logged-in ``oc`` session.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import TYPE_CHECKING

from ssp_mcp.utils.errors import ConfigurationError

if TYPE_CHECKING:
    from ssp_mcp.config import SSPConfig

logger = logging.getLogger(__name__)


def _get_cli_username() -> str | None:
    """Get the username of the current ``oc`` login.

    Returns:
        The username, or None if oc is missing or not logged in.
    """
    cli_path = shutil.which("oc")
    if not cli_path:
        return None

    try:
        result = subprocess.run(
            [cli_path, "whoami"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except subprocess.TimeoutExpired:
        logger.debug("Timeout getting username from oc")
        return None
    except OSError as e:
        logger.debug(f"Error getting username from oc: {e}")
        return None

    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def resolve_username(config: SSPConfig) -> str:
    """Return the acting username.

    Raises:
        ConfigurationError: If no username is configured and oc has no session.
    """
    if config.username:
        return config.username

    username = _get_cli_username()
    if username:
        logger.debug(f"Acting as {username} (from oc whoami)")
        return username

    raise ConfigurationError(
        "No acting user available. Set SSP_MCP_USERNAME or log in with 'oc login'."
    )
