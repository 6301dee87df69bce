# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity group read side."""

import logging

from sqlalchemy.orm import selectinload

from src.domains.learner import LearnerQueryService
from src.domains.learner.recipients import add_learner_recipients, recipient_details
from src.domains.teacher import teacher_recipient
from src.infrastructure.database.models import ActivityGroup, ActivityGroupTeamMember
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.activity import ActivityGroupDto
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import ActivityGroupPageParameters, LearnerPageParameters
from src.models.school import LearnerDto

logger = logging.getLogger(__name__)

ACTIVITY_GROUP_NOT_FOUND = "Activity group not found."


def group_details() -> tuple:
    """Loader options for an activity group with its age group, coach and members."""
    return (
        selectinload(ActivityGroup.age_group),
        selectinload(ActivityGroup.teacher),
        selectinload(ActivityGroup.team_members).selectinload(ActivityGroupTeamMember.learner),
    )


def _filters(parameters: ActivityGroupPageParameters) -> list:
    criteria = []
    if parameters.age_group_id:
        criteria.append(ActivityGroup.age_group_id == parameters.age_group_id)
    if parameters.teacher_id:
        criteria.append(ActivityGroup.teacher_id == parameters.teacher_id)
    if parameters.learner_id:
        criteria.append(
            ActivityGroup.team_members.any(
                ActivityGroupTeamMember.learner_id == parameters.learner_id
            )
        )
    return criteria


class ActivityGroupQueryService:
    """Read operations over activity groups."""

    def __init__(self, schools: SchoolsRepositoryManager) -> None:
        self._schools = schools

    async def all(self, parameters: ActivityGroupPageParameters) -> Result[list[ActivityGroupDto]]:
        """Every group matching the filters, ignoring paging."""
        spec = (
            Specification(ActivityGroup, *_filters(parameters))
            .add_include(*group_details())
            .add_order_by(ActivityGroup.name.asc())
        )
        result = await self._schools.activity_groups.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([ActivityGroupDto.from_entity(g) for g in result.data or []])

    async def paged(
        self, parameters: ActivityGroupPageParameters
    ) -> PaginatedResult[ActivityGroupDto]:
        spec = PagedSpecification(
            ActivityGroup,
            parameters,
            *_filters(parameters),
            search_columns=[ActivityGroup.name],
        ).add_include(*group_details())

        rows = await self._schools.activity_groups.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.activity_groups.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [ActivityGroupDto.from_entity(g) for g in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def get(self, group_id: str) -> Result[ActivityGroupDto]:
        spec = Specification.by_id(ActivityGroup, group_id).add_include(*group_details())
        result = await self._schools.activity_groups.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail("No activity group found with the provided ID.")
        return Result.success(ActivityGroupDto.from_entity(result.data))

    async def team_members(self, parameters: LearnerPageParameters) -> PaginatedResult[LearnerDto]:
        """Page through the learners of ``parameters.activity_group_id``.

        The learner filters (grade, class, age range and search text) narrow
        the members further.
        """
        if not parameters.activity_group_id:
            return PaginatedResult.fail("ActivityGroupId must be provided.")
        return await LearnerQueryService(self._schools).paged(parameters)

    async def notification_list(self, group_id: str) -> Result[list[RecipientDto]]:
        """Members of the group, each followed by their parents, then the coach."""
        spec = Specification.by_id(ActivityGroup, group_id).add_include(
            selectinload(ActivityGroup.teacher),
            selectinload(ActivityGroup.team_members)
            .selectinload(ActivityGroupTeamMember.learner)
            .options(*recipient_details()),
        )
        result = await self._schools.activity_groups.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(ACTIVITY_GROUP_NOT_FOUND)

        group = result.data
        learners = [member.learner for member in group.team_members if member.learner is not None]
        recipients = add_learner_recipients({}, learners)
        if group.teacher is not None:
            recipients.setdefault(group.teacher.id, teacher_recipient(group.teacher))

        logger.debug("Activity group %s notification list: %d", group_id, len(recipients))
        return Result.success(list(recipients.values()))
