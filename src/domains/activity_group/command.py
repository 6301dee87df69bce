# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity group write side.

Team members are owned by their group and removed with it. Events point at
a group through participating activity group rows whose foreign keys do not
cascade, so those rows are removed explicitly before the group.

Example:
    >>> service = ActivityGroupCommandService(SchoolsRepositoryManager(db), cleaner)
    >>> await service.add_team_member(group_id, learner_id)
"""

import logging

from sqlalchemy.orm import selectinload

from src.domains.activity_group.query import ACTIVITY_GROUP_NOT_FOUND
from src.domains.learner.query import learner_not_found
from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import (
    ActivityGroup,
    ActivityGroupTeamMember,
    Learner,
    ParticipatingActivityGroup,
    new_id,
)
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.activity import ActivityGroupDto
from src.models.common import Result
from src.models.school import LearnerSummaryDto

logger = logging.getLogger(__name__)


class ActivityGroupCommandService:
    """Create, update and delete activity groups and their team members.

    Attributes:
        _schools: Schools repositories bound to the request session.
        _cleaner: Removes notifications and messages of deleted groups.
    """

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    async def create(self, dto: ActivityGroupDto | None) -> Result[ActivityGroupDto]:
        """Create a group with its initial team members."""
        if dto is None:
            return Result.fail("Activity group data must be provided.")

        group = ActivityGroup(
            id=dto.id or new_id(),
            name=dto.name,
            age_group_id=dto.age_group_id,
            teacher_id=dto.teacher_id,
        )
        members = list({member.id: member for member in dto.team_members}.values())
        for member in members:
            group.team_members.append(
                ActivityGroupTeamMember(id=new_id(), activity_group_id=group.id, learner_id=member.id)
            )

        created = await self._schools.activity_groups.create(group)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.activity_groups.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Activity group created: %s with %d members", group.id, len(members))
        return Result.success(dto.model_copy(update={"id": group.id, "team_members": members}))

    async def update(self, dto: ActivityGroupDto) -> Result[None]:
        """Update a group. ``dto.team_members`` is the desired member set."""
        spec = Specification.by_id(ActivityGroup, dto.id or "").add_include(
            selectinload(ActivityGroup.team_members)
        )
        result = await self._schools.activity_groups.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(ACTIVITY_GROUP_NOT_FOUND)

        group = result.data
        group.name = dto.name
        group.age_group_id = dto.age_group_id
        group.teacher_id = dto.teacher_id
        updated = await self._schools.activity_groups.update(group)
        if not updated.succeeded:
            return Result.fail(updated.messages)

        synced = await self._sync_team_members(group, dto.team_members)
        if not synced.succeeded:
            await self._schools.activity_groups.rollback()
            return synced

        saved = await self._schools.activity_groups.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Activity group updated successfully")

    async def delete(self, group_id: str) -> Result[None]:
        """Delete a group, its event participation, members and references."""
        participation = await self._schools.participating_activity_groups.delete_where(
            Specification(
                ParticipatingActivityGroup,
                ParticipatingActivityGroup.activity_group_id == group_id,
            )
        )
        if not participation.succeeded:
            await self._schools.activity_groups.rollback()
            return Result.fail(participation.messages)

        return await self._cleaner.delete_aggregate(
            self._schools.activity_groups,
            group_id,
            "Activity Group deleted successfully.",
        )

    async def add_team_member(self, group_id: str, learner_id: str) -> Result[None]:
        """Add a learner to a group. Adding an existing member changes nothing."""
        group = await self._schools.activity_groups.first_or_default(
            Specification.by_id(ActivityGroup, group_id)
        )
        if not group.succeeded:
            return Result.fail(group.messages)
        if group.data is None:
            return Result.fail(ACTIVITY_GROUP_NOT_FOUND)

        learner = await self._schools.learners.first_or_default(
            Specification.by_id(Learner, learner_id)
        )
        if not learner.succeeded:
            return Result.fail(learner.messages)
        if learner.data is None:
            return Result.fail(learner_not_found(learner_id))

        existing = await self._member(group_id, learner_id)
        if not existing.succeeded:
            return Result.fail(existing.messages)
        if existing.data is not None:
            return Result.success(messages="Team Member successfully added")

        created = await self._schools.activity_group_team_members.create(
            ActivityGroupTeamMember(id=new_id(), activity_group_id=group_id, learner_id=learner_id)
        )
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.activity_group_team_members.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Team Member successfully added")

    async def remove_team_member(self, group_id: str, learner_id: str) -> Result[None]:
        existing = await self._member(group_id, learner_id)
        if not existing.succeeded:
            return Result.fail(existing.messages)
        if existing.data is None:
            return Result.fail(
                f"Team member with learner id '{learner_id}' does not exist in the database"
            )

        removed = await self._schools.activity_group_team_members.remove(existing.data)
        if not removed.succeeded:
            return Result.fail(removed.messages)

        saved = await self._schools.activity_group_team_members.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Team Member removed successfully")

    async def _member(self, group_id: str, learner_id: str) -> Result:
        return await self._schools.activity_group_team_members.first_or_default(
            Specification(
                ActivityGroupTeamMember,
                ActivityGroupTeamMember.activity_group_id == group_id,
                ActivityGroupTeamMember.learner_id == learner_id,
            )
        )

    async def _sync_team_members(
        self,
        group: ActivityGroup,
        desired: list[LearnerSummaryDto],
    ) -> Result[None]:
        current = {member.learner_id: member for member in group.team_members}
        desired_ids = {member.id for member in desired}

        for learner_id in desired_ids - current.keys():
            created = await self._schools.activity_group_team_members.create(
                ActivityGroupTeamMember(
                    id=new_id(), activity_group_id=group.id, learner_id=learner_id
                )
            )
            if not created.succeeded:
                return Result.fail(created.messages)

        for learner_id in current.keys() - desired_ids:
            removed = await self._schools.activity_group_team_members.remove(current[learner_id])
            if not removed.succeeded:
                return Result.fail(removed.messages)

        logger.debug(
            "Activity group %s members: +%d -%d",
            group.id,
            len(desired_ids - current.keys()),
            len(current.keys() - desired_ids),
        )
        return Result.success()
