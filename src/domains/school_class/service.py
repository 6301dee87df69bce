# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School class service.

Classes belong to a grade and are removed with it. Deleting a class on its
own leaves its learners and teachers in place with no class assigned.
"""

import logging

from sqlalchemy.orm import selectinload

from src.domains.learner.recipients import add_learner_recipients, recipient_details
from src.domains.messaging import EntityReferenceCleaner
from src.domains.teacher import teacher_recipient
from src.infrastructure.database.models import (
    Learner,
    SchoolClass,
    SchoolGrade,
    Teacher,
    new_id,
)
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import SchoolClassPageParameters
from src.models.school import SchoolClassDto

logger = logging.getLogger(__name__)

CLASS_NOT_FOUND = "School Class not found"


class SchoolClassService:
    """Query and command service for school classes."""

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    async def all(self) -> Result[list[SchoolClassDto]]:
        spec = (
            Specification(SchoolClass)
            .add_include(selectinload(SchoolClass.grade))
            .add_order_by(SchoolClass.name.asc())
        )
        result = await self._schools.school_classes.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([SchoolClassDto.from_entity(c) for c in result.data or []])

    async def paged(self, parameters: SchoolClassPageParameters) -> PaginatedResult[SchoolClassDto]:
        criteria = []
        if parameters.grade_id:
            criteria.append(SchoolClass.grade_id == parameters.grade_id)

        spec = PagedSpecification(
            SchoolClass, parameters, *criteria, search_columns=[SchoolClass.name]
        ).add_include(selectinload(SchoolClass.grade))

        rows = await self._schools.school_classes.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.school_classes.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [SchoolClassDto.from_entity(c) for c in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def get(self, class_id: str) -> Result[SchoolClassDto]:
        spec = Specification.by_id(SchoolClass, class_id).add_include(selectinload(SchoolClass.grade))
        result = await self._schools.school_classes.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(CLASS_NOT_FOUND)
        return Result.success(SchoolClassDto.from_entity(result.data))

    async def notification_list(
        self,
        class_id: str,
        min_age: int = 0,
        max_age: int = 100,
    ) -> Result[list[RecipientDto]]:
        """Learners of the class in the age range, their parents, then the class teachers."""
        learner_spec = Specification(Learner, Learner.school_class_id == class_id).add_include(
            *recipient_details()
        )
        learners = await self._schools.learners.list(learner_spec)
        if not learners.succeeded:
            return Result.fail(learners.messages)

        recipients = add_learner_recipients({}, learners.data or [], min_age, max_age)

        teachers = await self._schools.teachers.list(
            Specification(Teacher, Teacher.school_class_id == class_id)
        )
        if not teachers.succeeded:
            return Result.fail(teachers.messages)

        for teacher in teachers.data or []:
            recipients.setdefault(teacher.id, teacher_recipient(teacher))

        return Result.success(list(recipients.values()))

    async def create(self, dto: SchoolClassDto) -> Result[SchoolClassDto]:
        """Create a class in an existing grade."""
        grade = await self._schools.school_grades.first_or_default(
            Specification.by_id(SchoolGrade, dto.grade_id)
        )
        if not grade.succeeded:
            return Result.fail(grade.messages)
        if grade.data is None:
            return Result.fail("School Grade not found")

        school_class = SchoolClass(id=dto.id or new_id(), name=dto.name, grade_id=dto.grade_id)

        created = await self._schools.school_classes.create(school_class)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.school_classes.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("School class created: %s in grade %s", school_class.id, dto.grade_id)
        return Result.success(
            SchoolClassDto(
                id=school_class.id,
                name=school_class.name,
                grade_id=school_class.grade_id,
                grade_name=grade.data.name,
            ),
            "School Class successfully created",
        )

    async def update(self, dto: SchoolClassDto) -> Result[None]:
        result = await self._schools.school_classes.first_or_default(
            Specification.by_id(SchoolClass, dto.id or "")
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(CLASS_NOT_FOUND)

        school_class = result.data
        school_class.name = dto.name
        school_class.grade_id = dto.grade_id
        updated = await self._schools.school_classes.update(school_class)
        if not updated.succeeded:
            return Result.fail(updated.messages)

        saved = await self._schools.school_classes.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="School Class successfully updated")

    async def delete(self, class_id: str) -> Result[None]:
        return await self._cleaner.delete_aggregate(
            self._schools.school_classes,
            class_id,
            "School Class successfully deleted",
        )
