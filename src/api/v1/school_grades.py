# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School grade API endpoints.

This module provides endpoints for school grades:
- GET /all - All grades ordered by name
- GET /pagedgrades - One page of grades
- GET /notificationList/{grade_id} - Recipients for a grade broadcast
- GET /{grade_id} - Grade details
- PUT / - Create a grade
- POST / - Rename a grade
- DELETE /{grade_id} - Delete a grade with its notifications and messages

Every endpoint answers HTTP 200 with a result envelope, failures included.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    Paging,
    RequirePermission,
    get_school_grade_service,
)
from src.api.middleware.auth import CurrentUser
from src.domains.auth import Permissions
from src.domains.school_grade import SchoolGradeService
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.school import SchoolGradeDto

logger = logging.getLogger(__name__)

router = APIRouter()

Service = Annotated[SchoolGradeService, Depends(get_school_grade_service)]


@router.get("/all", response_model=Result[list[SchoolGradeDto]], summary="List all grades")
async def all_grades(
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.View)),
) -> Result[list[SchoolGradeDto]]:
    return await service.all()


@router.get(
    "/pagedgrades",
    response_model=PaginatedResult[SchoolGradeDto],
    summary="Page through grades",
)
async def paged_grades(
    paging: Paging,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.Search)),
) -> PaginatedResult[SchoolGradeDto]:
    return await service.paged(paging)


@router.get(
    "/notificationList/{grade_id}",
    response_model=Result[list[RecipientDto]],
    summary="Notification recipients of a grade",
    description="Learners in the grade within the age range, their parents and the grade's teachers.",
)
async def notification_list(
    grade_id: str,
    service: Service,
    min_age: Annotated[int, Query(alias="MinAge", ge=0)] = 0,
    max_age: Annotated[int, Query(alias="MaxAge", ge=0)] = 100,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.View)),
) -> Result[list[RecipientDto]]:
    return await service.notification_list(grade_id, min_age=min_age, max_age=max_age)


@router.get("/{grade_id}", response_model=Result[SchoolGradeDto], summary="Get grade")
async def get_grade(
    grade_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.View)),
) -> Result[SchoolGradeDto]:
    return await service.get(grade_id)


@router.put("", response_model=Result[SchoolGradeDto], summary="Create grade")
async def create_grade(
    grade: SchoolGradeDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.Create)),
) -> Result[SchoolGradeDto]:
    return await service.create(grade)


@router.post("", response_model=Result[None], summary="Rename grade")
async def update_grade(
    grade: SchoolGradeDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.Edit)),
) -> Result[None]:
    return await service.update(grade)


@router.delete("/{grade_id}", response_model=Result[None], summary="Delete grade")
async def delete_grade(
    grade_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolGrade.Delete)),
) -> Result[None]:
    """Delete a grade and every notification and message that refers to it."""
    return await service.delete(grade_id)
