# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher API endpoints.

This module provides endpoints for teacher management:
- GET /all - All teachers by surname
- GET /pagedteachers - Page through teachers (grade and class filters)
- GET /notificationList - Recipients for a teacher broadcast
- GET /byemail/{email} - Teacher using an email address
- GET /exist/{email} - Id of the teacher using an email address (anonymous)
- GET /{teacher_id} - Teacher details
- PUT / - Create a teacher
- POST / - Update a teacher
- DELETE /{teacher_id} - Delete a teacher, detaching its activity groups
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import RequirePermission, get_teacher_service, teacher_page_parameters
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import RATE_LIMIT_ANONYMOUS, limiter
from src.domains.auth import Permissions
from src.domains.teacher import TeacherService
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import TeacherPageParameters
from src.models.school import TeacherDto

logger = logging.getLogger(__name__)

router = APIRouter()

Service = Annotated[TeacherService, Depends(get_teacher_service)]
Parameters = Annotated[TeacherPageParameters, Depends(teacher_page_parameters)]


@router.get("/all", response_model=Result[list[TeacherDto]], summary="List all teachers")
async def all_teachers(
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.View)),
) -> Result[list[TeacherDto]]:
    return await service.all()


@router.get(
    "/pagedteachers",
    response_model=PaginatedResult[TeacherDto],
    summary="Page through teachers",
)
async def paged_teachers(
    parameters: Parameters,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.Search)),
) -> PaginatedResult[TeacherDto]:
    return await service.paged(parameters)


@router.get(
    "/notificationList",
    response_model=Result[list[RecipientDto]],
    summary="Notification recipients among teachers",
    description="Every teacher matching GradeId and ClassId. Paging is ignored.",
)
async def notification_list(
    parameters: Parameters,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.View)),
) -> Result[list[RecipientDto]]:
    return await service.notification_list(parameters)


@router.get("/byemail/{email}", response_model=Result[TeacherDto], summary="Find teacher by email")
async def teacher_by_email(
    email: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.View)),
) -> Result[TeacherDto]:
    return await service.by_email(email)


@router.get("/exist/{email}", response_model=Result[str], summary="Check teacher email")
@limiter.limit(RATE_LIMIT_ANONYMOUS)
async def teacher_exists(request: Request, email: str, service: Service) -> Result[str]:
    """Return the id of the teacher using ``email``.

    Anonymous and rate limited. An unknown email succeeds without data.
    """
    return await service.exist(email)


@router.get("/{teacher_id}", response_model=Result[TeacherDto], summary="Get teacher")
async def get_teacher(
    teacher_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.View)),
) -> Result[TeacherDto]:
    return await service.get(teacher_id)


@router.put("", response_model=Result[TeacherDto], summary="Create teacher")
async def create_teacher(
    teacher: TeacherDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.Create)),
) -> Result[TeacherDto]:
    return await service.create(teacher)


@router.post("", response_model=Result[None], summary="Update teacher")
async def update_teacher(
    teacher: TeacherDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.Edit)),
) -> Result[None]:
    return await service.update(teacher)


@router.delete("/{teacher_id}", response_model=Result[None], summary="Delete teacher")
async def delete_teacher(
    teacher_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Teacher.Delete)),
) -> Result[None]:
    """Delete a teacher. Activity groups it coached are left without a coach."""
    return await service.delete(teacher_id)
