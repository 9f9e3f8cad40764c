"""Plugin sending notification mails about new projects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ssp_mcp.domains.notifications.mail import MailError, MailNotifier
from ssp_mcp.hooks import hookimpl
from ssp_mcp.plugin import BasePlugin, PluginMetadata
from ssp_mcp.utils.errors import ConfigurationError

if TYPE_CHECKING:
    from ssp_mcp.server import SSPServer

logger = logging.getLogger(__name__)


class NotificationsPlugin(BasePlugin):
    """Mails the cloud team whenever a regular project has been created."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="notifications",
                version="1.0.0",
                description="New project notification mails",
                maintainer="cloud-team@example.com",
            )
        )

    @hookimpl
    def ssp_health_check(self, server: SSPServer) -> tuple[bool, str]:
        if server.config.mail_enabled:
            return True, f"Mails are sent via {server.config.mail_server}"
        return False, "Mail server, sender or recipient not configured"

    @hookimpl
    def ssp_project_created(
        self, server: SSPServer, cluster_id: str, project: str, creator: str, mega_id: str
    ) -> None:
        if not server.config.mail_enabled:
            logger.debug(f"Mail not configured, no notification about new project {project}")
            return

        notifier = MailNotifier(server.config)
        try:
            notifier.send_new_project_mail(cluster_id, project, creator, mega_id)
        except (ConfigurationError, MailError) as e:
            logger.error(
                f"Can't send e-mail about new project {project} ({e}) on cluster {cluster_id}."
            )
