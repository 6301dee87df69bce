# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity group API endpoints.

This module provides endpoints for teams and clubs:
- GET /all - Every group matching the filters
- GET /pagedactivitygroups - Page through groups (age group, coach, learner filters)
- GET /teamMembers - Page through the learners of a group
- PUT /teamMembers/add/{group_id}/{learner_id} - Add a learner to a group
- DELETE /teamMembers/remove/{group_id}/{learner_id} - Remove a learner from a group
- GET /notificationList/{group_id} - Recipients for a group broadcast
- GET /{group_id} - Group details with members
- PUT / - Create a group with its members
- POST / - Update a group; the member list is the desired set
- DELETE /{group_id} - Delete a group, its event participation and references
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends

from src.api.dependencies import (
    RequirePermission,
    activity_group_page_parameters,
    get_activity_group_command_service,
    get_activity_group_query_service,
    learner_page_parameters,
)
from src.api.middleware.auth import CurrentUser
from src.domains.activity_group import ActivityGroupCommandService, ActivityGroupQueryService
from src.domains.auth import Permissions
from src.models.activity import ActivityGroupDto
from src.models.common import PaginatedResult, Result
from src.models.messaging import RecipientDto
from src.models.paging import ActivityGroupPageParameters, LearnerPageParameters
from src.models.school import LearnerDto

logger = logging.getLogger(__name__)

router = APIRouter()

Queries = Annotated[ActivityGroupQueryService, Depends(get_activity_group_query_service)]
Commands = Annotated[ActivityGroupCommandService, Depends(get_activity_group_command_service)]
Parameters = Annotated[ActivityGroupPageParameters, Depends(activity_group_page_parameters)]


@router.get("/all", response_model=Result[list[ActivityGroupDto]], summary="List activity groups")
async def all_groups(
    parameters: Parameters,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.View)),
) -> Result[list[ActivityGroupDto]]:
    return await service.all(parameters)


@router.get(
    "/pagedactivitygroups",
    response_model=PaginatedResult[ActivityGroupDto],
    summary="Page through activity groups",
)
async def paged_groups(
    parameters: Parameters,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.Search)),
) -> PaginatedResult[ActivityGroupDto]:
    return await service.paged(parameters)


@router.get(
    "/teamMembers",
    response_model=PaginatedResult[LearnerDto],
    summary="Page through team members",
    description="ActivityGroupId is required. The learner filters narrow the members.",
)
async def team_members(
    parameters: Annotated[LearnerPageParameters, Depends(learner_page_parameters)],
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.View)),
) -> PaginatedResult[LearnerDto]:
    return await service.team_members(parameters)


@router.put(
    "/teamMembers/add/{group_id}/{learner_id}",
    response_model=Result[None],
    summary="Add team member",
)
async def add_team_member(
    group_id: str,
    learner_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.Edit)),
) -> Result[None]:
    return await service.add_team_member(group_id, learner_id)


@router.delete(
    "/teamMembers/remove/{group_id}/{learner_id}",
    response_model=Result[None],
    summary="Remove team member",
)
async def remove_team_member(
    group_id: str,
    learner_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.Edit)),
) -> Result[None]:
    return await service.remove_team_member(group_id, learner_id)


@router.get(
    "/notificationList/{group_id}",
    response_model=Result[list[RecipientDto]],
    summary="Notification recipients of an activity group",
    description="Team members, their parents and the coach.",
)
async def notification_list(
    group_id: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.View)),
) -> Result[list[RecipientDto]]:
    return await service.notification_list(group_id)


@router.get("/{group_id}", response_model=Result[ActivityGroupDto], summary="Get activity group")
async def get_group(
    group_id: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.View)),
) -> Result[ActivityGroupDto]:
    return await service.get(group_id)


@router.put("", response_model=Result[ActivityGroupDto], summary="Create activity group")
async def create_group(
    service: Commands,
    group: Annotated[ActivityGroupDto | None, Body()] = None,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.Create)),
) -> Result[ActivityGroupDto]:
    return await service.create(group)


@router.post("", response_model=Result[None], summary="Update activity group")
async def update_group(
    group: ActivityGroupDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.Edit)),
) -> Result[None]:
    return await service.update(group)


@router.delete("/{group_id}", response_model=Result[None], summary="Delete activity group")
async def delete_group(
    group_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.ActivityGroup.Delete)),
) -> Result[None]:
    """Delete a group after removing the events' participation rows that point at it."""
    return await service.delete(group_id)
