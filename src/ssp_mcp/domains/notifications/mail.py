"""Notification mails about newly created projects."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from typing import TYPE_CHECKING

from ssp_mcp.utils.errors import ConfigurationError, SSPError

if TYPE_CHECKING:
    from ssp_mcp.config import SSPConfig

logger = logging.getLogger(__name__)

NEW_PROJECT_BODY = """\
Dear Ladies and Gentlemen,
<br><br>
The following project has been created on:
<br><br>
Cluster: {cluster_id}<br>
Project name: {project}<br>
Creator: {creator}<br>
Mega ID: {mega_id}
<br><br>
Kind regards<br>
Your Cloud Team
"""


class MailError(SSPError):
    """Raised when a notification mail cannot be sent."""


def starttls_context(verify: bool) -> ssl.SSLContext:
    """TLS context for STARTTLS, without certificate checks unless ``verify``."""
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_new_project_message(
    sender: str,
    recipient: str,
    cluster_id: str,
    project: str,
    creator: str,
    mega_id: str,
) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = f"New Project '{project}' on OpenShift"
    message["Date"] = formatdate(localtime=True)
    message["Message-ID"] = make_msgid()
    message.set_content(
        NEW_PROJECT_BODY.format(
            cluster_id=cluster_id, project=project, creator=creator, mega_id=mega_id
        ),
        subtype="html",
    )
    return message


class MailNotifier:
    """Sends new-project notifications over SMTP."""

    def __init__(self, config: SSPConfig, timeout: float = 30.0) -> None:
        self._config = config
        self._timeout = timeout

    def send_new_project_mail(
        self, cluster_id: str, project: str, creator: str, mega_id: str
    ) -> None:
        """Send the notification about a new project.

        Raises:
            ConfigurationError: If mail server, sender or recipient are not set.
            MailError: If the SMTP conversation fails.
        """
        config = self._config
        if not config.mail_server:
            raise ConfigurationError("Mail server is not configured (SSP_MCP_MAIL_SERVER)")
        if not config.mail_sender:
            raise ConfigurationError("Mail sender is not configured (SSP_MCP_MAIL_SENDER)")
        if not config.mail_new_project_recipient:
            raise ConfigurationError(
                "New project recipient is not configured (SSP_MCP_MAIL_NEW_PROJECT_RECIPIENT)"
            )

        message = build_new_project_message(
            config.mail_sender,
            config.mail_new_project_recipient,
            cluster_id,
            project,
            creator,
            mega_id,
        )

        try:
            with smtplib.SMTP(config.mail_server, config.mail_port, timeout=self._timeout) as smtp:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls(context=starttls_context(config.mail_verify_tls))
                    smtp.ehlo()
                smtp.send_message(message)
        except (OSError, smtplib.SMTPException) as e:
            raise MailError(f"Sending mail via {config.mail_server} failed: {e}") from e

        logger.info(f"Sent new project mail for {project} on cluster {cluster_id}")
