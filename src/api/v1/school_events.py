# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School event API endpoints.

This module provides endpoints for school events and parent consent:
- GET /pagedevents - One page of events
- GET /{event_id} - Event details with participating groups
- PUT / - Create, POST / - Update (group set-diff), DELETE /{event_id}
- GET /permissions/{participating_activity_group_id} - Consents of a group
- POST /permissions/give, POST /permissions/retract - Parent consent
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    RequirePermission,
    get_parent_permission_service,
    get_school_event_command_service,
    get_school_event_query_service,
    school_event_page_parameters,
)
from src.api.middleware.auth import CurrentUser
from src.domains.auth import Permissions
from src.domains.school_event import (
    ParentPermissionService,
    SchoolEventCommandService,
    SchoolEventQueryService,
)
from src.models.common import PaginatedResult, Result
from src.models.events import ConsentRequest, ParentPermissionDto, SchoolEventDto
from src.models.paging import SchoolEventPageParameters

router = APIRouter()

Queries = Annotated[SchoolEventQueryService, Depends(get_school_event_query_service)]
Commands = Annotated[SchoolEventCommandService, Depends(get_school_event_command_service)]
Consents = Annotated[ParentPermissionService, Depends(get_parent_permission_service)]


@router.get("/pagedevents", response_model=PaginatedResult[SchoolEventDto], summary="Page through events")
async def paged_events(
    parameters: Annotated[SchoolEventPageParameters, Depends(school_event_page_parameters)],
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.Search)),
) -> PaginatedResult[SchoolEventDto]:
    return await service.paged(parameters)


# =========================================================================
# Parent consent
# =========================================================================


@router.get(
    "/permissions/{participating_activity_group_id}",
    response_model=Result[list[ParentPermissionDto]],
    summary="Consents of a participating group",
)
async def group_permissions(
    participating_activity_group_id: str,
    service: Consents,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.View)),
) -> Result[list[ParentPermissionDto]]:
    return await service.for_group(participating_activity_group_id)


@router.post("/permissions/give", response_model=Result[None], summary="Give consent")
async def give_permission(
    request: ConsentRequest,
    service: Consents,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.Edit)),
) -> Result[None]:
    """Record or overwrite a parent's consent for a learner."""
    return await service.give(request)


@router.post("/permissions/retract", response_model=Result[None], summary="Retract consent")
async def retract_permission(
    request: ConsentRequest,
    service: Consents,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.Edit)),
) -> Result[None]:
    return await service.retract(request)


# =========================================================================
# Events
# =========================================================================


@router.get("/{event_id}", response_model=Result[SchoolEventDto], summary="Get event")
async def get_event(
    event_id: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.View)),
) -> Result[SchoolEventDto]:
    return await service.get(event_id)


@router.put("", response_model=Result[SchoolEventDto], summary="Create event")
async def create_event(
    event: SchoolEventDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.Create)),
) -> Result[SchoolEventDto]:
    return await service.create(event)


@router.post("", response_model=Result[None], summary="Update event")
async def update_event(
    event: SchoolEventDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.Edit)),
) -> Result[None]:
    return await service.update(event)


@router.delete("/{event_id}", response_model=Result[None], summary="Delete event")
async def delete_event(
    event_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.SchoolEvent.Delete)),
) -> Result[None]:
    """Delete an event with its groups, consents, notifications and messages."""
    return await service.delete(event_id)
