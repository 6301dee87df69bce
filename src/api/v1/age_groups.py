# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Age group API endpoints.

- GET /all - All age groups, youngest first
- GET /pagedagegroups - One page of age groups
- GET /{age_group_id} - Age group details
- PUT / - Create an age group
- POST / - Update an age group
- DELETE /{age_group_id} - Delete an age group, detaching its activity groups
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import Paging, RequirePermission, get_age_group_service
from src.api.middleware.auth import CurrentUser
from src.domains.age_group import AgeGroupService
from src.domains.auth import Permissions
from src.models.activity import AgeGroupDto
from src.models.common import PaginatedResult, Result

router = APIRouter()

Service = Annotated[AgeGroupService, Depends(get_age_group_service)]


@router.get("/all", response_model=Result[list[AgeGroupDto]], summary="List all age groups")
async def all_age_groups(
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.AgeGroup.View)),
) -> Result[list[AgeGroupDto]]:
    return await service.all()


@router.get(
    "/pagedagegroups",
    response_model=PaginatedResult[AgeGroupDto],
    summary="Page through age groups",
)
async def paged_age_groups(
    paging: Paging,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.AgeGroup.Search)),
) -> PaginatedResult[AgeGroupDto]:
    return await service.paged(paging)


@router.get("/{age_group_id}", response_model=Result[AgeGroupDto], summary="Get age group")
async def get_age_group(
    age_group_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.AgeGroup.View)),
) -> Result[AgeGroupDto]:
    return await service.get(age_group_id)


@router.put("", response_model=Result[AgeGroupDto], summary="Create age group")
async def create_age_group(
    age_group: AgeGroupDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.AgeGroup.Create)),
) -> Result[AgeGroupDto]:
    return await service.create(age_group)


@router.post("", response_model=Result[None], summary="Update age group")
async def update_age_group(
    age_group: AgeGroupDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.AgeGroup.Edit)),
) -> Result[None]:
    return await service.update(age_group)


@router.delete("/{age_group_id}", response_model=Result[None], summary="Delete age group")
async def delete_age_group(
    age_group_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.AgeGroup.Delete)),
) -> Result[None]:
    return await service.delete(age_group_id)
