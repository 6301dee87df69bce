# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the in-app notification sender."""

from unittest.mock import MagicMock

import pytest

from src.infrastructure.database.models import MessageType, Notification
from src.infrastructure.notifications import InAppNotificationSender
from src.models.common import Result
from src.models.messaging import NotificationDto, RecipientDto


@pytest.fixture
def notifications(repository_factory) -> MagicMock:
    """Create a notification repository double."""
    return repository_factory(Notification)


@pytest.fixture
def notification() -> NotificationDto:
    """Create notification content."""
    return NotificationDto(
        entity_id="l1",
        title="Disciplinary incident for Sam Doe",
        message_type=MessageType.PARENT,
        notification_url="/learners/l1",
    )


class TestInAppNotificationSender:
    """Tests for InAppNotificationSender."""

    @pytest.mark.asyncio
    async def test_one_row_per_accepting_recipient(
        self, notifications: MagicMock, notification: NotificationDto
    ) -> None:
        """Test that recipients who opted out are skipped."""
        sender = InAppNotificationSender(notifications)
        recipients = [
            RecipientDto(id="p1"),
            RecipientDto(id="p2", receive_notifications=False),
            RecipientDto(id="p3"),
        ]

        result = await sender.enqueue_notifications(recipients, notification)

        rows = notifications.create_range.await_args.args[0]
        assert result.data == 2
        assert [row.receiver_id for row in rows] == ["p1", "p3"]
        assert all(row.entity_id == "l1" for row in rows)
        notifications.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_nobody_to_notify(
        self, notifications: MagicMock, notification: NotificationDto
    ) -> None:
        """Test that no rows means no save."""
        sender = InAppNotificationSender(notifications)

        result = await sender.enqueue_notifications(
            [RecipientDto(id="p1", receive_notifications=False)], notification
        )

        assert result.succeeded is True
        assert result.data == 0
        notifications.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_failure(self, notifications: MagicMock, notification: NotificationDto) -> None:
        """Test that a save failure is reported."""
        notifications.save.return_value = Result.fail("connection reset")
        sender = InAppNotificationSender(notifications)

        result = await sender.enqueue_notifications([RecipientDto(id="p1")], notification)

        assert result.messages == ["connection reset"]
