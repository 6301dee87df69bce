# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification and recipient models used by the fan-out paths."""

from pydantic import Field

from src.infrastructure.database.models.messaging import MessageType
from src.models.common import ApiModel


class RecipientDto(ApiModel):
    """One addressee of a notification.

    Attributes:
        id: Parent, learner or teacher id.
        emails: Known email addresses, default first.
        receive_notifications: Whether an in-app notification is wanted.
        receive_emails: Whether an email copy is wanted.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    emails: list[str] = Field(default_factory=list)
    receive_notifications: bool = True
    receive_emails: bool = True
    message_type: str = MessageType.NONE


class NotificationDto(ApiModel):
    """Content of a notification before it is addressed."""

    entity_id: str | None = None
    title: str
    short_description: str | None = None
    message: str | None = None
    message_type: str = MessageType.NONE
    notification_url: str | None = None
