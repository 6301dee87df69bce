# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Severity scales and disciplinary actions."""

import logging

from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import DisciplinaryAction, SeverityScale, new_id
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.common import Result
from src.models.discipline import DisciplinaryActionDto, SeverityScaleDto

logger = logging.getLogger(__name__)


class DisciplinaryActionService:
    """CRUD over severity scales and the actions that reference them."""

    def __init__(self, schools: SchoolsRepositoryManager) -> None:
        self._schools = schools

    # =========================================================================
    # Severity scales
    # =========================================================================

    async def all_scales(self) -> Result[list[SeverityScaleDto]]:
        spec = Specification(SeverityScale).add_order_by(SeverityScale.score.asc())
        result = await self._schools.severity_scales.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([SeverityScaleDto.from_entity(s) for s in result.data or []])

    async def get_scale(self, scale_id: str) -> Result[SeverityScaleDto]:
        result = await self._schools.severity_scales.first_or_default(
            Specification.by_id(SeverityScale, scale_id)
        )
        if not result.succeeded or result.data is None:
            return Result.fail("Scale not found")
        return Result.success(SeverityScaleDto.from_entity(result.data))

    async def create_scale(self, dto: SeverityScaleDto) -> Result[SeverityScaleDto]:
        scale = SeverityScale(
            id=dto.id or new_id(),
            name=dto.name,
            score=dto.score,
            description=dto.description,
        )
        created = await self._schools.severity_scales.create(scale)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.severity_scales.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(SeverityScaleDto.from_entity(scale), "Scale created")

    async def update_scale(self, dto: SeverityScaleDto) -> Result[None]:
        result = await self._schools.severity_scales.first_or_default(
            Specification.by_id(SeverityScale, dto.id or "")
        )
        if not result.succeeded or result.data is None:
            return Result.fail("Scale not found")

        scale = result.data
        scale.name = dto.name
        scale.score = dto.score
        scale.description = dto.description

        saved = await self._schools.severity_scales.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Scale updated")

    async def delete_scale(self, scale_id: str) -> Result[None]:
        deleted = await self._schools.severity_scales.delete(scale_id)
        if not deleted.succeeded:
            return Result.fail(deleted.messages)

        saved = await self._schools.severity_scales.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Scale deleted")

    # =========================================================================
    # Actions
    # =========================================================================

    async def all_actions(self) -> Result[list[DisciplinaryActionDto]]:
        spec = (
            Specification(DisciplinaryAction)
            .add_include(selectinload(DisciplinaryAction.severity_scale))
            .add_order_by(DisciplinaryAction.name.asc())
        )
        result = await self._schools.disciplinary_actions.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([DisciplinaryActionDto.from_entity(a) for a in result.data or []])

    async def get_action(self, action_id: str) -> Result[DisciplinaryActionDto]:
        spec = Specification.by_id(DisciplinaryAction, action_id).add_include(
            selectinload(DisciplinaryAction.severity_scale)
        )
        result = await self._schools.disciplinary_actions.first_or_default(spec)
        if not result.succeeded or result.data is None:
            return Result.fail("Action not found")
        return Result.success(DisciplinaryActionDto.from_entity(result.data))

    async def create_action(self, dto: DisciplinaryActionDto) -> Result[DisciplinaryActionDto]:
        action = DisciplinaryAction(
            id=dto.id or new_id(),
            name=dto.name,
            description=dto.description,
            severity_scale_id=dto.severity_scale_id,
        )
        created = await self._schools.disciplinary_actions.create(action)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.disciplinary_actions.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(DisciplinaryActionDto.from_entity(action), "Action created")

    async def update_action(self, dto: DisciplinaryActionDto) -> Result[None]:
        result = await self._schools.disciplinary_actions.first_or_default(
            Specification.by_id(DisciplinaryAction, dto.id or "")
        )
        if not result.succeeded or result.data is None:
            return Result.fail("Action not found")

        action = result.data
        action.name = dto.name
        action.description = dto.description
        action.severity_scale_id = dto.severity_scale_id

        saved = await self._schools.disciplinary_actions.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Action updated")

    async def delete_action(self, action_id: str) -> Result[None]:
        deleted = await self._schools.disciplinary_actions.delete(action_id)
        if not deleted.succeeded:
            return Result.fail(deleted.messages)

        saved = await self._schools.disciplinary_actions.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Action deleted")
