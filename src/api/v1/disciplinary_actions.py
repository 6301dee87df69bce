# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Disciplinary action and severity scale API endpoints.

Severity scales live under /scales, actions at the router root.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import RequirePermission, get_disciplinary_action_service
from src.api.middleware.auth import CurrentUser
from src.domains.auth import Permissions
from src.domains.discipline import DisciplinaryActionService
from src.models.common import Result
from src.models.discipline import DisciplinaryActionDto, SeverityScaleDto

router = APIRouter()

Service = Annotated[DisciplinaryActionService, Depends(get_disciplinary_action_service)]
CanView = Depends(RequirePermission(Permissions.Discipline.View))
CanCreate = Depends(RequirePermission(Permissions.Discipline.Create))
CanEdit = Depends(RequirePermission(Permissions.Discipline.Edit))
CanDelete = Depends(RequirePermission(Permissions.Discipline.Delete))


# =========================================================================
# Severity scales
# =========================================================================


@router.get("/scales", response_model=Result[list[SeverityScaleDto]], summary="List severity scales")
async def all_scales(service: Service, current_user: CurrentUser = CanView) -> Result[list[SeverityScaleDto]]:
    return await service.all_scales()


@router.get("/scales/{scale_id}", response_model=Result[SeverityScaleDto], summary="Get severity scale")
async def get_scale(
    scale_id: str, service: Service, current_user: CurrentUser = CanView
) -> Result[SeverityScaleDto]:
    return await service.get_scale(scale_id)


@router.put("/scales", response_model=Result[SeverityScaleDto], summary="Create severity scale")
async def create_scale(
    scale: SeverityScaleDto, service: Service, current_user: CurrentUser = CanCreate
) -> Result[SeverityScaleDto]:
    return await service.create_scale(scale)


@router.post("/scales", response_model=Result[None], summary="Update severity scale")
async def update_scale(
    scale: SeverityScaleDto, service: Service, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.update_scale(scale)


@router.delete("/scales/{scale_id}", response_model=Result[None], summary="Delete severity scale")
async def delete_scale(
    scale_id: str, service: Service, current_user: CurrentUser = CanDelete
) -> Result[None]:
    return await service.delete_scale(scale_id)


# =========================================================================
# Actions
# =========================================================================


@router.get("", response_model=Result[list[DisciplinaryActionDto]], summary="List actions")
async def all_actions(
    service: Service, current_user: CurrentUser = CanView
) -> Result[list[DisciplinaryActionDto]]:
    return await service.all_actions()


@router.get("/{action_id}", response_model=Result[DisciplinaryActionDto], summary="Get action")
async def get_action(
    action_id: str, service: Service, current_user: CurrentUser = CanView
) -> Result[DisciplinaryActionDto]:
    return await service.get_action(action_id)


@router.put("", response_model=Result[DisciplinaryActionDto], summary="Create action")
async def create_action(
    action: DisciplinaryActionDto, service: Service, current_user: CurrentUser = CanCreate
) -> Result[DisciplinaryActionDto]:
    return await service.create_action(action)


@router.post("", response_model=Result[None], summary="Update action")
async def update_action(
    action: DisciplinaryActionDto, service: Service, current_user: CurrentUser = CanEdit
) -> Result[None]:
    return await service.update_action(action)


@router.delete("/{action_id}", response_model=Result[None], summary="Delete action")
async def delete_action(
    action_id: str, service: Service, current_user: CurrentUser = CanDelete
) -> Result[None]:
    return await service.delete_action(action_id)
