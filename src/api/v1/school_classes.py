# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School class API endpoints.

- GET /all - All classes ordered by name
- GET /pagedschoolclasses - One page of classes, optionally within a grade
- GET /notificationList/{class_id} - Recipients for a class broadcast
- GET /{class_id} - Class details
- PUT / - Create a class in a grade
- POST / - Update a class
- DELETE /{class_id} - Delete a class with its notifications and messages
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    RequirePermission,
    get_school_class_service,
    school_class_page_parameters,
)
from src.api.middleware.auth import CurrentUser
from src.domains.auth import Permissions
from src.domains.school_class import SchoolClassService
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import SchoolClassPageParameters
from src.models.school import SchoolClassDto

router = APIRouter()

Service = Annotated[SchoolClassService, Depends(get_school_class_service)]


@router.get("/all", response_model=Result[list[SchoolClassDto]], summary="List all classes")
async def all_classes(
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.View)),
) -> Result[list[SchoolClassDto]]:
    return await service.all()


@router.get(
    "/pagedschoolclasses",
    response_model=PaginatedResult[SchoolClassDto],
    summary="Page through classes",
)
async def paged_classes(
    parameters: Annotated[SchoolClassPageParameters, Depends(school_class_page_parameters)],
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.Search)),
) -> PaginatedResult[SchoolClassDto]:
    return await service.paged(parameters)


@router.get(
    "/notificationList/{class_id}",
    response_model=Result[list[RecipientDto]],
    summary="Notification recipients of a class",
    description="Learners in the class within the age range, their parents and the class teachers.",
)
async def notification_list(
    class_id: str,
    service: Service,
    min_age: Annotated[int, Query(alias="MinAge", ge=0)] = 0,
    max_age: Annotated[int, Query(alias="MaxAge", ge=0)] = 100,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.View)),
) -> Result[list[RecipientDto]]:
    return await service.notification_list(class_id, min_age=min_age, max_age=max_age)


@router.get("/{class_id}", response_model=Result[SchoolClassDto], summary="Get class")
async def get_class(
    class_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.View)),
) -> Result[SchoolClassDto]:
    return await service.get(class_id)


@router.put("", response_model=Result[SchoolClassDto], summary="Create class")
async def create_class(
    school_class: SchoolClassDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.Create)),
) -> Result[SchoolClassDto]:
    return await service.create(school_class)


@router.post("", response_model=Result[None], summary="Update class")
async def update_class(
    school_class: SchoolClassDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.Edit)),
) -> Result[None]:
    return await service.update(school_class)


@router.delete("/{class_id}", response_model=Result[None], summary="Delete class")
async def delete_class(
    class_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolClass.Delete)),
) -> Result[None]:
    return await service.delete(class_id)
