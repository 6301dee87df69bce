# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification delivery.

Services depend on the ``NotificationSender`` protocol and receive an
implementation through their constructor. The built-in sender is the
in-app channel: it writes one ``Notification`` row per recipient who accepts
notifications and commits them in a single save. Push, email and SMS
delivery are handled outside this application.
"""

import logging
from typing import Protocol

from src.infrastructure.database.models import Notification
from src.infrastructure.database.repository import Repository
from src.models.common import Result
from src.models.messaging import NotificationDto, RecipientDto

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    """Port used by services that fan out notifications."""

    async def enqueue_notifications(
        self,
        recipients: list[RecipientDto],
        notification: NotificationDto,
    ) -> Result[int]:
        """Queue ``notification`` for every recipient.

        Returns:
            The number of notifications queued.
        """
        ...


class InAppNotificationSender:
    """Persists in-app notifications through the notifications repository.

    Attributes:
        notifications: Repository sharing the caller's session.
    """

    def __init__(self, notifications: Repository[Notification]) -> None:
        self.notifications = notifications

    async def enqueue_notifications(
        self,
        recipients: list[RecipientDto],
        notification: NotificationDto,
    ) -> Result[int]:
        rows = [
            Notification(
                entity_id=notification.entity_id,
                receiver_id=recipient.id,
                title=notification.title,
                short_description=notification.short_description,
                message=notification.message,
                message_type=notification.message_type,
                notification_url=notification.notification_url,
            )
            for recipient in recipients
            if recipient.receive_notifications
        ]
        if not rows:
            return Result.success(0)

        created = await self.notifications.create_range(rows)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self.notifications.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info(
            "Queued %d in-app notifications: entity=%s, title=%s",
            len(rows),
            notification.entity_id,
            notification.title,
        )
        return Result.success(len(rows))
