# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learner API endpoints.

This module provides endpoints for learner management:
- GET /pagedlearners - Page through learners (grade, class, parent, age filters)
- GET /count - Number of learners
- GET /byemail/{email} - Learner using an email address
- GET /exist/{email} - Id of the learner using an email address (anonymous)
- GET /learnerparents/{learner_id} - Parents of a learner
- POST /learnerparents/{learner_id} - Replace the parents of a learner
- GET /{learner_id} - Learner details
- PUT / - Create a learner
- POST / - Update a learner
- DELETE /{learner_id} - Delete a learner with its notifications and messages
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import (
    RequirePermission,
    get_learner_command_service,
    get_learner_query_service,
    learner_page_parameters,
)
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import RATE_LIMIT_ANONYMOUS, limiter
from src.domains.auth import Permissions
from src.domains.learner import LearnerCommandService, LearnerQueryService
from src.models.common import PaginatedResult, Result
from src.models.paging import LearnerPageParameters
from src.models.school import LearnerDto, ParentDto, ParentSummaryDto

logger = logging.getLogger(__name__)

router = APIRouter()

Queries = Annotated[LearnerQueryService, Depends(get_learner_query_service)]
Commands = Annotated[LearnerCommandService, Depends(get_learner_command_service)]


@router.get(
    "/pagedlearners",
    response_model=PaginatedResult[LearnerDto],
    summary="Page through learners",
    description="Ages are derived from the identity number. MinAge/MaxAge narrow the page.",
)
async def paged_learners(
    parameters: Annotated[LearnerPageParameters, Depends(learner_page_parameters)],
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Search)),
) -> PaginatedResult[LearnerDto]:
    return await service.paged(parameters)


@router.get("/count", response_model=Result[int], summary="Count learners")
async def count_learners(
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.View)),
) -> Result[int]:
    return await service.count()


@router.get("/byemail/{email}", response_model=Result[LearnerDto], summary="Find learner by email")
async def learner_by_email(
    email: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.View)),
) -> Result[LearnerDto]:
    return await service.by_email(email)


@router.get("/exist/{email}", response_model=Result[str], summary="Check learner email")
@limiter.limit(RATE_LIMIT_ANONYMOUS)
async def learner_exists(request: Request, email: str, service: Queries) -> Result[str]:
    """Return the id of the learner using ``email``.

    Anonymous and rate limited. An unknown email succeeds without data.
    """
    return await service.exist(email)


@router.get(
    "/learnerparents/{learner_id}",
    response_model=Result[list[ParentDto]],
    summary="Parents of a learner",
)
async def learner_parents(
    learner_id: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.View)),
) -> Result[list[ParentDto]]:
    return await service.learner_parents(learner_id)


@router.post(
    "/learnerparents/{learner_id}",
    response_model=Result[None],
    summary="Replace the parents of a learner",
)
async def update_learner_parents(
    learner_id: str,
    parents: list[ParentSummaryDto],
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Edit)),
) -> Result[None]:
    """Link the given parents and unlink every other parent of the learner."""
    return await service.update_learner_parents(learner_id, parents)


@router.get("/{learner_id}", response_model=Result[LearnerDto], summary="Get learner")
async def get_learner(
    learner_id: str,
    service: Queries,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.View)),
) -> Result[LearnerDto]:
    return await service.get(learner_id)


@router.put("", response_model=Result[LearnerDto], summary="Create learner")
async def create_learner(
    learner: LearnerDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Create)),
) -> Result[LearnerDto]:
    return await service.create(learner)


@router.post("", response_model=Result[None], summary="Update learner")
async def update_learner(
    learner: LearnerDto,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Edit)),
) -> Result[None]:
    return await service.update(learner)


@router.delete("/{learner_id}", response_model=Result[None], summary="Delete learner")
async def delete_learner(
    learner_id: str,
    service: Commands,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Learner.Delete)),
) -> Result[None]:
    return await service.delete(learner_id)
