# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher service.

This module provides the TeacherService that handles:
- Teacher listing, paging and lookup by id or email
- Teacher create, update and delete
- The notification recipient list of a set of teachers

Activity groups reference their coach without a cascading foreign key, so a
teacher is detached from its activity groups before it is deleted.
"""

import logging

from sqlalchemy import func

from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import ActivityGroup, MessageType, Teacher, new_id
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import TeacherPageParameters
from src.models.school import TeacherDto

logger = logging.getLogger(__name__)


def teacher_not_found(teacher_id: str) -> str:
    return f"No teacher with id matching '{teacher_id}' found in the database"


def teacher_recipient(teacher: Teacher) -> RecipientDto:
    """Teachers receive in-app notifications but no email copies."""
    return RecipientDto(
        id=teacher.id,
        first_name=teacher.name,
        last_name=teacher.surname,
        emails=[teacher.email] if teacher.email else [],
        receive_notifications=True,
        receive_emails=False,
        message_type=MessageType.TEACHER,
    )


def _filters(parameters: TeacherPageParameters) -> list:
    criteria = []
    if parameters.grade_id:
        criteria.append(Teacher.grade_id == parameters.grade_id)
    if parameters.class_id:
        criteria.append(Teacher.school_class_id == parameters.class_id)
    return criteria


class TeacherService:
    """Query and command service for teachers.

    Attributes:
        _schools: Schools repositories bound to the request session.
        _cleaner: Removes notifications and messages of deleted teachers.
    """

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    # =========================================================================
    # Queries
    # =========================================================================

    async def all(self) -> Result[list[TeacherDto]]:
        spec = Specification(Teacher).add_order_by(Teacher.surname.asc(), Teacher.name.asc())
        result = await self._schools.teachers.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([TeacherDto.from_entity(t) for t in result.data or []])

    async def paged(self, parameters: TeacherPageParameters) -> PaginatedResult[TeacherDto]:
        spec = PagedSpecification(
            Teacher,
            parameters,
            *_filters(parameters),
            search_columns=[Teacher.name, Teacher.surname, Teacher.email],
        )

        rows = await self._schools.teachers.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.teachers.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [TeacherDto.from_entity(t) for t in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def get(self, teacher_id: str) -> Result[TeacherDto]:
        result = await self._schools.teachers.first_or_default(
            Specification.by_id(Teacher, teacher_id)
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(teacher_not_found(teacher_id))
        return Result.success(TeacherDto.from_entity(result.data))

    async def by_email(self, email: str) -> Result[TeacherDto]:
        result = await self._schools.teachers.first_or_default(
            Specification(Teacher, func.lower(Teacher.email) == email.lower())
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail("No teacher found")
        return Result.success(TeacherDto.from_entity(result.data))

    async def exist(self, email: str) -> Result[str]:
        """Return the id of the teacher using ``email``, or no data if none does."""
        result = await self._schools.teachers.first_or_default(
            Specification(Teacher, func.lower(Teacher.email) == email.lower())
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success(result.data.id if result.data is not None else None)

    async def notification_list(
        self, parameters: TeacherPageParameters
    ) -> Result[list[RecipientDto]]:
        """Recipients for every teacher matching the grade and class filters."""
        spec = Specification(Teacher, *_filters(parameters))
        result = await self._schools.teachers.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)

        recipients: dict[str, RecipientDto] = {}
        for teacher in result.data or []:
            recipients.setdefault(teacher.id, teacher_recipient(teacher))
        return Result.success(list(recipients.values()))

    # =========================================================================
    # Commands
    # =========================================================================

    async def create(self, dto: TeacherDto) -> Result[TeacherDto]:
        teacher = Teacher(
            id=dto.id or new_id(),
            name=dto.name,
            surname=dto.surname,
            email=dto.email,
            grade_id=dto.grade_id,
            school_class_id=dto.school_class_id,
        )

        created = await self._schools.teachers.create(teacher)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.teachers.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Teacher created: %s", teacher.id)
        return Result.success(TeacherDto.from_entity(teacher))

    async def update(self, dto: TeacherDto) -> Result[None]:
        result = await self._schools.teachers.first_or_default(
            Specification.by_id(Teacher, dto.id or "")
        )
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(teacher_not_found(dto.id or ""))

        teacher = result.data
        teacher.name = dto.name
        teacher.surname = dto.surname
        teacher.email = dto.email
        teacher.grade_id = dto.grade_id
        teacher.school_class_id = dto.school_class_id
        updated = await self._schools.teachers.update(teacher)
        if not updated.succeeded:
            return Result.fail(updated.messages)

        saved = await self._schools.teachers.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Teacher was successfully updated")

    async def delete(self, teacher_id: str) -> Result[None]:
        """Delete a teacher after detaching it from the activity groups it coaches."""
        groups = await self._schools.activity_groups.list(
            Specification(ActivityGroup, ActivityGroup.teacher_id == teacher_id)
        )
        if not groups.succeeded:
            return Result.fail(groups.messages)

        for group in groups.data or []:
            group.teacher_id = None
            updated = await self._schools.activity_groups.update(group)
            if not updated.succeeded:
                await self._schools.teachers.rollback()
                return Result.fail(updated.messages)

        return await self._cleaner.delete_aggregate(
            self._schools.teachers,
            teacher_id,
            "Teacher was removed successfully",
        )
