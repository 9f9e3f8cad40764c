"""Notifications domain - mails about newly created projects."""

from ssp_mcp.domains.notifications.mail import (
    MailError,
    MailNotifier,
    build_new_project_message,
)
from ssp_mcp.domains.notifications.plugin import NotificationsPlugin

__all__ = [
    "MailError",
    "MailNotifier",
    "NotificationsPlugin",
    "build_new_project_message",
]
