# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Removal of notifications and messages that refer to a deleted aggregate.

Notifications and messages carry the id of the aggregate they describe in
``entity_id`` without a foreign key. Deleting an aggregate root therefore
goes through ``EntityReferenceCleaner.delete_aggregate``, which removes the
root and every row tagged with its id.

Two modes are supported:

- atomic (default): the root delete and the reference cleanup are committed
  in one save. Any failure rolls everything back and the root survives.
- non-atomic: the root delete is saved first and the cleanup is saved
  separately. A cleanup failure is reported but the root stays deleted and
  the tagged rows are left behind.

Example:
    cleaner = EntityReferenceCleaner(messaging.notifications, messaging.messages)
    result = await cleaner.delete_aggregate(
        schools.school_grades, grade_id, "School Grade successfully deleted"
    )
"""

import logging
from typing import Any

from src.infrastructure.database.models import Message, Notification
from src.infrastructure.database.repository import Repository
from src.infrastructure.database.specification import Specification
from src.models.common import Result

logger = logging.getLogger(__name__)


class EntityReferenceCleaner:
    """Deletes aggregate roots together with their notifications and messages.

    Attributes:
        notifications: Notification repository on the caller's session.
        messages: Message repository on the caller's session.
        atomic: Commit the root delete and the cleanup together.
    """

    def __init__(
        self,
        notifications: Repository[Notification],
        messages: Repository[Message],
        atomic: bool = True,
    ) -> None:
        self.notifications = notifications
        self.messages = messages
        self.atomic = atomic

    async def remove_references(self, entity_id: str) -> Result[int]:
        """Stage deletion of every notification and message tagged ``entity_id``.

        Returns:
            Number of rows staged for deletion.
        """
        removed = 0
        for repository in (self.notifications, self.messages):
            model = repository.model
            result = await repository.delete_where(
                Specification(model, model.entity_id == entity_id)
            )
            if not result.succeeded:
                return Result.fail(result.messages)
            removed += result.data or 0
        return Result.success(removed)

    async def delete_aggregate(
        self,
        root: Repository[Any],
        entity_id: str,
        success_message: str,
    ) -> Result[None]:
        """Delete ``entity_id`` from ``root`` and clean up its references.

        Deletions staged by the caller on the same session before this call
        are committed with the root.

        Args:
            root: Repository of the aggregate root.
            entity_id: Id of the root to delete.
            success_message: Message returned on success.

        Returns:
            Success with ``success_message``, or the first failure verbatim.
        """
        deleted = await root.delete(entity_id)
        if not deleted.succeeded:
            await root.rollback()
            return Result.fail(deleted.messages)

        if not self.atomic:
            saved = await root.save()
            if not saved.succeeded:
                return Result.fail(saved.messages)

        cleaned = await self.remove_references(entity_id)
        if not cleaned.succeeded:
            await root.rollback()
            logger.warning(
                "Reference cleanup failed for %s %s (atomic=%s): %s",
                root.entity_name,
                entity_id,
                self.atomic,
                cleaned.messages,
            )
            return Result.fail(cleaned.messages)

        saved = await root.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info(
            "Deleted %s %s with %d references",
            root.entity_name,
            entity_id,
            cleaned.data or 0,
        )
        return Result.success(messages=success_message)
