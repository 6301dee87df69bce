# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learner read side.

Learner ages are not stored; they are derived from the identity number.
When a page request narrows the age range the matching learners are loaded
in full, filtered by age and then sliced into the requested page.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import (
    ActivityGroupTeamMember,
    Learner,
    LearnerEmailAddress,
    LearnerParent,
    Parent,
)
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.common import PaginatedResult, Result
from src.models.paging import LearnerPageParameters
from src.models.school import LearnerDto, ParentDto
from src.utils.datetime import age_from_id_number

logger = logging.getLogger(__name__)

MIN_AGE = 0
MAX_AGE = 100


def learner_details() -> tuple:
    """Loader options for a learner with contact details and parents."""
    return (
        selectinload(Learner.contact_numbers),
        selectinload(Learner.email_addresses),
        selectinload(Learner.parents).selectinload(LearnerParent.parent),
    )


def learner_not_found(learner_id: str) -> str:
    return f"No learner matching id '{learner_id}' found in the datastore"


class LearnerQueryService:
    """Read operations over learners."""

    def __init__(self, schools: SchoolsRepositoryManager) -> None:
        self._schools = schools

    async def paged(self, parameters: LearnerPageParameters) -> PaginatedResult[LearnerDto]:
        criteria = []
        if parameters.grade_id:
            criteria.append(Learner.school_grade_id == parameters.grade_id)
        if parameters.class_id:
            criteria.append(Learner.school_class_id == parameters.class_id)
        if parameters.parent_id:
            criteria.append(Learner.parents.any(LearnerParent.parent_id == parameters.parent_id))
        if parameters.activity_group_id:
            criteria.append(
                Learner.id.in_(
                    select(ActivityGroupTeamMember.learner_id).where(
                        ActivityGroupTeamMember.activity_group_id == parameters.activity_group_id
                    )
                )
            )

        spec = PagedSpecification(
            Learner,
            parameters,
            *criteria,
            search_columns=[Learner.first_name, Learner.last_name, Learner.id_number],
        ).add_include(*learner_details())

        if parameters.min_age > MIN_AGE or parameters.max_age < MAX_AGE:
            return await self._paged_by_age(spec, parameters)

        rows = await self._schools.learners.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.learners.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [LearnerDto.from_entity(learner) for learner in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def _paged_by_age(
        self,
        spec: Specification[Learner],
        parameters: LearnerPageParameters,
    ) -> PaginatedResult[LearnerDto]:
        spec.skip = None
        spec.take = None
        rows = await self._schools.learners.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        matching = [
            learner
            for learner in rows.data or []
            if parameters.min_age <= age_from_id_number(learner.id_number) <= parameters.max_age
        ]
        page = matching[parameters.skip : parameters.skip + parameters.page_size]
        return PaginatedResult.success(
            [LearnerDto.from_entity(learner) for learner in page],
            total_count=len(matching),
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def count(self) -> Result[int]:
        return await self._schools.learners.count()

    async def get(self, learner_id: str) -> Result[LearnerDto]:
        spec = Specification.by_id(Learner, learner_id).add_include(*learner_details())
        result = await self._schools.learners.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(learner_not_found(learner_id))
        return Result.success(LearnerDto.from_entity(result.data))

    async def by_email(self, email: str) -> Result[LearnerDto]:
        spec = Specification(
            Learner,
            Learner.email_addresses.any(func.lower(LearnerEmailAddress.email) == email.lower()),
        ).add_include(*learner_details())
        result = await self._schools.learners.first_or_default(spec)
        if not result.succeeded or result.data is None:
            return Result.fail("No learner found.")
        return Result.success(LearnerDto.from_entity(result.data))

    async def exist(self, email: str) -> Result[str]:
        """Return the id of the learner using ``email``, or no data if none does."""
        spec = Specification(
            Learner,
            Learner.email_addresses.any(func.lower(LearnerEmailAddress.email) == email.lower()),
        )
        result = await self._schools.learners.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success(result.data.id if result.data is not None else None)

    async def learner_parents(self, learner_id: str) -> Result[list[ParentDto]]:
        spec = Specification(LearnerParent, LearnerParent.learner_id == learner_id).add_include(
            selectinload(LearnerParent.parent).selectinload(Parent.contact_numbers),
            selectinload(LearnerParent.parent).selectinload(Parent.email_addresses),
        )
        result = await self._schools.learner_parents.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success(
            [ParentDto.from_entity(link.parent) for link in result.data or [] if link.parent is not None]
        )
