# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent API endpoints.

This module provides endpoints for parent management:
- GET /pagedparents, /all, /count - Listing
- GET /byemail/{email}, /exist/{email} - Lookup by email (exist is anonymous)
- GET /{parent_id} - Parent details
- PUT / - Create, POST / - Update, POST /updateprofile - Profile only
- DELETE /{parent_id} - Delete a parent with its notifications and messages
- PUT /learners - Link a learner, DELETE /learners/{parent_id}/{learner_id} - Unlink
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import (
    RequirePermission,
    get_parent_command_service,
    get_parent_query_service,
    parent_page_parameters,
)
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import RATE_LIMIT_ANONYMOUS, limiter
from src.domains.auth import Permissions
from src.domains.parent import ParentCommandService, ParentQueryService
from src.models.common import PaginatedResult, Result
from src.models.paging import ParentPageParameters
from src.models.school import ParentDto, ParentLearnerLinkDto

logger = logging.getLogger(__name__)

router = APIRouter()

Queries = Annotated[ParentQueryService, Depends(get_parent_query_service)]
Commands = Annotated[ParentCommandService, Depends(get_parent_command_service)]


@router.get("/pagedparents", response_model=PaginatedResult[ParentDto], summary="Page through parents")
async def paged_parents(
    parameters: Annotated[ParentPageParameters, Depends(parent_page_parameters)],
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Search)),
) -> PaginatedResult[ParentDto]:
    return await service.paged(parameters)


@router.get("/all", response_model=Result[list[ParentDto]], summary="List all parents")
async def all_parents(
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.View)),
) -> Result[list[ParentDto]]:
    return await service.all()


@router.get("/count", response_model=Result[int], summary="Count parents")
async def count_parents(
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.View)),
) -> Result[int]:
    return await service.count()


@router.get("/byemail/{email}", response_model=Result[ParentDto], summary="Find parent by email")
async def parent_by_email(
    email: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.View)),
) -> Result[ParentDto]:
    return await service.by_email(email)


@router.get("/exist/{email}", response_model=Result[str], summary="Check parent email")
@limiter.limit(RATE_LIMIT_ANONYMOUS)
async def parent_exists(request: Request, email: str, service: Queries) -> Result[str]:
    """Return the id of the parent using ``email``. Anonymous and rate limited."""
    return await service.exist(email)


@router.put("/learners", response_model=Result[None], summary="Link learner to parent")
async def link_learner(
    link: ParentLearnerLinkDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Edit)),
) -> Result[None]:
    return await service.link_learner(link.parent_id, link.learner_id)


@router.delete(
    "/learners/{parent_id}/{learner_id}",
    response_model=Result[None],
    summary="Unlink learner from parent",
)
async def unlink_learner(
    parent_id: str,
    learner_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Edit)),
) -> Result[None]:
    return await service.unlink_learner(parent_id, learner_id)


@router.get("/{parent_id}", response_model=Result[ParentDto], summary="Get parent")
async def get_parent(
    parent_id: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.View)),
) -> Result[ParentDto]:
    return await service.get(parent_id)


@router.put("", response_model=Result[ParentDto], summary="Create parent")
async def create_parent(
    parent: ParentDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Create)),
) -> Result[ParentDto]:
    return await service.create(parent)


@router.post("", response_model=Result[None], summary="Update parent")
async def update_parent(
    parent: ParentDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Edit)),
) -> Result[None]:
    """Update the profile and reconcile the linked learners."""
    return await service.update(parent)


@router.post("/updateprofile", response_model=Result[None], summary="Update parent profile")
async def update_profile(
    parent: ParentDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Edit)),
) -> Result[None]:
    return await service.update_profile(parent)


@router.delete("/{parent_id}", response_model=Result[None], summary="Delete parent")
async def delete_parent(
    parent_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Parent.Delete)),
) -> Result[None]:
    return await service.delete(parent_id)
