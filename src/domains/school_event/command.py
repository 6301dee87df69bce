# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School event write side.

Participating activity groups reference their event without a cascading
foreign key. They are removed explicitly, in the same unit of work, before
the event itself is deleted. Consents given for a removed group go with it.
"""

import logging

from sqlalchemy.orm import selectinload

from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import ParticipatingActivityGroup, SchoolEvent, new_id
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.common import Result
from src.models.events import SchoolEventDto

logger = logging.getLogger(__name__)

EVENT_FIELDS = (
    "name",
    "description",
    "start_date",
    "end_date",
    "location",
    "published",
    "attendance_consent_required",
    "transport_consent_required",
)


def event_not_found(event_id: str) -> str:
    return f"No School Event found for ID '{event_id}'."


class SchoolEventCommandService:
    """Create, update and delete school events.

    Attributes:
        _schools: Schools repositories bound to the request session.
        _cleaner: Removes notifications and messages of deleted events.
    """

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    async def create(self, dto: SchoolEventDto) -> Result[SchoolEventDto]:
        event_id = dto.id or new_id()
        event = SchoolEvent(id=event_id, **{field: getattr(dto, field) for field in EVENT_FIELDS})

        created = await self._schools.school_events.create(event)
        if not created.succeeded:
            return Result.fail(created.messages)

        groups = [
            ParticipatingActivityGroup(event_id=event_id, activity_group_id=activity_group_id)
            for activity_group_id in dict.fromkeys(
                g.activity_group_id for g in dto.participating_activity_groups
            )
        ]
        if groups:
            added = await self._schools.participating_activity_groups.create_range(groups)
            if not added.succeeded:
                await self._schools.school_events.rollback()
                return Result.fail(added.messages)

        saved = await self._schools.school_events.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("School event created: %s with %d groups", event_id, len(groups))
        return Result.success(dto.model_copy(update={"id": event_id}))

    async def update(self, dto: SchoolEventDto) -> Result[None]:
        """Copy the event fields and reconcile participating groups.

        Groups are matched by ``activity_group_id``. Groups no longer in the
        DTO are deleted together with the consents given for them.
        """
        event_id = dto.id or ""
        spec = Specification.by_id(SchoolEvent, event_id).add_include(
            selectinload(SchoolEvent.participating_activity_groups)
        )
        result = await self._schools.school_events.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(event_not_found(event_id))

        event = result.data
        for field in EVENT_FIELDS:
            setattr(event, field, getattr(dto, field))

        existing = {g.activity_group_id: g for g in event.participating_activity_groups}
        desired = {g.activity_group_id for g in dto.participating_activity_groups}

        for activity_group_id in desired - existing.keys():
            created = await self._schools.participating_activity_groups.create(
                ParticipatingActivityGroup(event_id=event_id, activity_group_id=activity_group_id)
            )
            if not created.succeeded:
                await self._schools.school_events.rollback()
                return Result.fail(created.messages)

        for activity_group_id, group in existing.items():
            if activity_group_id in desired:
                continue
            removed = await self._schools.participating_activity_groups.remove(group)
            if not removed.succeeded:
                await self._schools.school_events.rollback()
                return Result.fail(removed.messages)

        saved = await self._schools.school_events.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("School event updated: %s", event_id)
        return Result.success(messages="School event updated successfully")

    async def delete(self, event_id: str) -> Result[None]:
        """Delete an event, its participating groups, consents and references."""
        groups = await self._schools.participating_activity_groups.delete_where(
            Specification(ParticipatingActivityGroup, ParticipatingActivityGroup.event_id == event_id)
        )
        if not groups.succeeded:
            await self._schools.school_events.rollback()
            return Result.fail(groups.messages)

        return await self._cleaner.delete_aggregate(
            self._schools.school_events,
            event_id,
            "School event removed successfully",
        )
