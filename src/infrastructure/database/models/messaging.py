# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Messaging side tables.

Notifications and messages reference the aggregate they describe only through
``entity_id``. There is no foreign key, so deleting an aggregate never removes
them on its own; ``EntityReferenceCleaner`` does that explicitly.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, EntityMixin
from src.utils.datetime import utc_now


class MessageType:
    """Audience constants shared by notifications and messages."""

    NONE = "none"
    GLOBAL = "global"
    PARENT = "parent"
    LEARNER = "learner"
    TEACHER = "teacher"


class Notification(EntityMixin, Base):
    """In-app notification delivered to one receiver."""

    __tablename__ = "notifications"

    entity_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    receiver_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    short_description: Mapped[Optional[str]] = mapped_column(String(255))
    message: Mapped[Optional[str]] = mapped_column(Text)
    message_type: Mapped[str] = mapped_column(String(20), default=MessageType.NONE, nullable=False)
    notification_url: Mapped[Optional[str]] = mapped_column(String(500))
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    read_on: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))


class Message(EntityMixin, Base):
    """Chat or broadcast message."""

    __tablename__ = "messages"

    entity_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    sender_id: Mapped[Optional[str]] = mapped_column(String(36))
    receiver_id: Mapped[Optional[str]] = mapped_column(String(36), index=True)
    title: Mapped[Optional[str]] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    message_type: Mapped[str] = mapped_column(String(20), default=MessageType.NONE, nullable=False)
    created_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
