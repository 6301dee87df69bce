# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification delivery.

Example:
    sender = InAppNotificationSender(MessagingRepositoryManager(session).notifications)
    await sender.enqueue_notifications(recipients, notification)
"""

from src.infrastructure.notifications.service import (
    InAppNotificationSender,
    NotificationSender,
)

__all__ = [
    "InAppNotificationSender",
    "NotificationSender",
]
