# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School grade service.

This module provides the SchoolGradeService that handles:
- Grade listing, paging and lookup
- Grade create, rename and cascading delete
- The notification recipient list of a grade

Example:
    >>> service = SchoolGradeService(SchoolsRepositoryManager(db), cleaner)
    >>> page = await service.paged(PageParameters(page_nr=1, page_size=10))
"""

import logging

from src.domains.learner.recipients import add_learner_recipients, recipient_details
from src.domains.messaging import EntityReferenceCleaner
from src.domains.teacher import teacher_recipient
from src.infrastructure.database.models import Learner, SchoolGrade, Teacher, new_id
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import PageParameters
from src.models.school import SchoolGradeDto

logger = logging.getLogger(__name__)

GRADE_NOT_FOUND = "School Grade not found"


class SchoolGradeService:
    """Query and command service for school grades.

    Attributes:
        _schools: Schools repositories bound to the request session.
        _cleaner: Removes notifications and messages of deleted grades.
    """

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    # =========================================================================
    # Queries
    # =========================================================================

    async def all(self) -> Result[list[SchoolGradeDto]]:
        spec = Specification(SchoolGrade).add_order_by(SchoolGrade.name.asc())
        result = await self._schools.school_grades.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([SchoolGradeDto.from_entity(g) for g in result.data or []])

    async def paged(self, parameters: PageParameters) -> PaginatedResult[SchoolGradeDto]:
        spec = PagedSpecification(SchoolGrade, parameters, search_columns=[SchoolGrade.name])

        rows = await self._schools.school_grades.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.school_grades.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [SchoolGradeDto.from_entity(g) for g in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def get(self, grade_id: str) -> Result[SchoolGradeDto]:
        result = await self._schools.school_grades.first_or_default(
            Specification.by_id(SchoolGrade, grade_id)
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(GRADE_NOT_FOUND)
        return Result.success(SchoolGradeDto.from_entity(result.data))

    async def notification_list(
        self,
        grade_id: str,
        min_age: int = 0,
        max_age: int = 100,
    ) -> Result[list[RecipientDto]]:
        """Build the recipients of a grade wide notification.

        Learners of the grade whose age lies in ``[min_age, max_age]`` come
        first, each followed by their parents. Teachers of the grade are
        appended last. Every recipient appears once.
        """
        learner_spec = Specification(Learner, Learner.school_grade_id == grade_id).add_include(
            *recipient_details()
        )
        learners = await self._schools.learners.list(learner_spec)
        if not learners.succeeded:
            return Result.fail(learners.messages)

        recipients = add_learner_recipients({}, learners.data or [], min_age, max_age)

        teachers = await self._schools.teachers.list(
            Specification(Teacher, Teacher.grade_id == grade_id)
        )
        if not teachers.succeeded:
            return Result.fail(teachers.messages)

        for teacher in teachers.data or []:
            recipients.setdefault(teacher.id, teacher_recipient(teacher))

        return Result.success(list(recipients.values()))

    # =========================================================================
    # Commands
    # =========================================================================

    async def create(self, dto: SchoolGradeDto) -> Result[SchoolGradeDto]:
        grade = SchoolGrade(id=dto.id or new_id(), name=dto.name)

        created = await self._schools.school_grades.create(grade)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.school_grades.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("School grade created: %s (%s)", grade.id, grade.name)
        return Result.success(SchoolGradeDto.from_entity(grade), "School Grade successfully created")

    async def update(self, dto: SchoolGradeDto) -> Result[None]:
        """Rename a grade. The name is the only updatable field."""
        result = await self._schools.school_grades.first_or_default(
            Specification.by_id(SchoolGrade, dto.id or "")
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(GRADE_NOT_FOUND)

        grade = result.data
        grade.name = dto.name
        updated = await self._schools.school_grades.update(grade)
        if not updated.succeeded:
            return Result.fail(updated.messages)

        saved = await self._schools.school_grades.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="School Grade successfully updated")

    async def delete(self, grade_id: str) -> Result[None]:
        """Delete a grade with its notifications and messages."""
        return await self._cleaner.delete_aggregate(
            self._schools.school_grades,
            grade_id,
            "School Grade successfully deleted",
        )
