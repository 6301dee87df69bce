# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Age group service.

Activity groups point at their age group without a cascading foreign key,
so deleting an age group first detaches the activity groups that use it.
"""

import logging

from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import ActivityGroup, AgeGroup, new_id
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.activity import AgeGroupDto
from src.models.common import PaginatedResult, Result
from src.models.paging import PageParameters

logger = logging.getLogger(__name__)

AGE_GROUP_NOT_FOUND = "Age group not found"


class AgeGroupService:
    """Query and command service for age groups."""

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    async def all(self) -> Result[list[AgeGroupDto]]:
        spec = Specification(AgeGroup).add_order_by(AgeGroup.min_age.asc(), AgeGroup.name.asc())
        result = await self._schools.age_groups.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([AgeGroupDto.from_entity(a) for a in result.data or []])

    async def paged(self, parameters: PageParameters) -> PaginatedResult[AgeGroupDto]:
        spec = PagedSpecification(AgeGroup, parameters, search_columns=[AgeGroup.name])

        rows = await self._schools.age_groups.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.age_groups.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [AgeGroupDto.from_entity(a) for a in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def get(self, age_group_id: str) -> Result[AgeGroupDto]:
        result = await self._schools.age_groups.first_or_default(
            Specification.by_id(AgeGroup, age_group_id)
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(AGE_GROUP_NOT_FOUND)
        return Result.success(AgeGroupDto.from_entity(result.data))

    async def create(self, dto: AgeGroupDto) -> Result[AgeGroupDto]:
        age_group = AgeGroup(
            id=dto.id or new_id(),
            name=dto.name,
            min_age=dto.min_age,
            max_age=dto.max_age,
        )

        created = await self._schools.age_groups.create(age_group)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.age_groups.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Age group created: %s (%s)", age_group.id, age_group.name)
        return Result.success(AgeGroupDto.from_entity(age_group), "Age group successfully created")

    async def update(self, dto: AgeGroupDto) -> Result[None]:
        result = await self._schools.age_groups.first_or_default(
            Specification.by_id(AgeGroup, dto.id or "")
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(AGE_GROUP_NOT_FOUND)

        age_group = result.data
        age_group.name = dto.name
        age_group.min_age = dto.min_age
        age_group.max_age = dto.max_age
        updated = await self._schools.age_groups.update(age_group)
        if not updated.succeeded:
            return Result.fail(updated.messages)

        saved = await self._schools.age_groups.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Age group successfully updated")

    async def delete(self, age_group_id: str) -> Result[None]:
        """Delete an age group after detaching the activity groups using it."""
        groups = await self._schools.activity_groups.list(
            Specification(ActivityGroup, ActivityGroup.age_group_id == age_group_id)
        )
        if not groups.succeeded:
            return Result.fail(groups.messages)

        for group in groups.data or []:
            group.age_group_id = None
            updated = await self._schools.activity_groups.update(group)
            if not updated.succeeded:
                await self._schools.age_groups.rollback()
                return Result.fail(updated.messages)

        return await self._cleaner.delete_aggregate(
            self._schools.age_groups,
            age_group_id,
            "Age group successfully deleted",
        )
