# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent consent for school events.

A consent record is identified by event, parent, learner, consent type and
participating group. Giving consent twice updates the existing record.
"""

import logging

from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import ParentPermission, new_id
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.common import Result
from src.models.events import ConsentRequest, ParentPermissionDto

logger = logging.getLogger(__name__)


def consent_spec(request: ConsentRequest) -> Specification[ParentPermission]:
    return Specification(
        ParentPermission,
        ParentPermission.event_id == request.event_id,
        ParentPermission.parent_id == request.parent_id,
        ParentPermission.learner_id == request.learner_id,
        ParentPermission.consent_type == request.consent_type,
        ParentPermission.participating_activity_group_id == request.participating_activity_group_id
        if request.participating_activity_group_id
        else ParentPermission.participating_activity_group_id.is_(None),
    )


class ParentPermissionService:
    """List, give and retract parent consents."""

    def __init__(self, schools: SchoolsRepositoryManager) -> None:
        self._schools = schools

    async def for_group(self, participating_activity_group_id: str) -> Result[list[ParentPermissionDto]]:
        spec = Specification(
            ParentPermission,
            ParentPermission.participating_activity_group_id == participating_activity_group_id,
        ).add_include(selectinload(ParentPermission.learner))
        result = await self._schools.parent_permissions.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([ParentPermissionDto.from_entity(p) for p in result.data or []])

    async def give(self, request: ConsentRequest) -> Result[None]:
        found = await self._schools.parent_permissions.first_or_default(consent_spec(request))
        if not found.succeeded:
            return Result.fail(found.messages)

        permission = found.data
        if permission is None:
            created = await self._schools.parent_permissions.create(
                ParentPermission(
                    id=new_id(),
                    parent_id=request.parent_id,
                    learner_id=request.learner_id,
                    event_id=request.event_id,
                    participating_activity_group_id=request.participating_activity_group_id,
                    consent_type=request.consent_type,
                    granted=request.consent,
                    consent_direction=request.consent_direction,
                )
            )
            if not created.succeeded:
                return Result.fail(created.messages)
        else:
            permission.granted = request.consent
            permission.consent_direction = request.consent_direction

        saved = await self._schools.parent_permissions.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info(
            "Consent %s for learner %s on event %s",
            request.consent_type,
            request.learner_id,
            request.event_id,
        )
        return Result.success(messages="Consent granted")

    async def retract(self, request: ConsentRequest) -> Result[None]:
        found = await self._schools.parent_permissions.first_or_default(consent_spec(request))
        if not found.succeeded:
            return Result.fail(found.messages)
        if found.data is None:
            return Result.fail("No matching consent record found.")

        removed = await self._schools.parent_permissions.remove(found.data)
        if not removed.succeeded:
            return Result.fail(removed.messages)

        saved = await self._schools.parent_permissions.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Consent was successfully retracted")
