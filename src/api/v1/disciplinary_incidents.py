# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Disciplinary incident API endpoints.

Creating an incident notifies the learner's parents. The incident is
recorded even when that notification fails.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from src.api.dependencies import RequirePermission, get_disciplinary_incident_service
from src.api.middleware.auth import CurrentUser
from src.domains.auth import Permissions
from src.domains.discipline import DisciplinaryIncidentService
from src.models.common import Result
from src.models.discipline import DisciplinaryIncidentDto

router = APIRouter()

Service = Annotated[DisciplinaryIncidentService, Depends(get_disciplinary_incident_service)]


@router.get(
    "/learner/{learner_id}",
    response_model=Result[list[DisciplinaryIncidentDto]],
    summary="Incidents of a learner",
)
async def learner_incidents(
    learner_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Discipline.View)),
) -> Result[list[DisciplinaryIncidentDto]]:
    return await service.by_learner(learner_id)


@router.get("/{incident_id}", response_model=Result[DisciplinaryIncidentDto], summary="Get incident")
async def get_incident(
    incident_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Discipline.View)),
) -> Result[DisciplinaryIncidentDto]:
    return await service.get(incident_id)


@router.put("", response_model=Result[DisciplinaryIncidentDto], summary="Record incident")
async def create_incident(
    service: Service,
    incident: Annotated[DisciplinaryIncidentDto | None, Body()] = None,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Discipline.Create)),
) -> Result[DisciplinaryIncidentDto]:
    """Record an incident and notify the learner's parents."""
    return await service.create(incident)


@router.post("", response_model=Result[None], summary="Update incident")
async def update_incident(
    incident: DisciplinaryIncidentDto,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Discipline.Edit)),
) -> Result[None]:
    return await service.update(incident)


@router.delete("/{incident_id}", response_model=Result[None], summary="Delete incident")
async def delete_incident(
    incident_id: str,
    service: Service,
    current_user: CurrentUser = Depends(RequirePermission(Permissions.Discipline.Delete)),
) -> Result[None]:
    return await service.delete(incident_id)
