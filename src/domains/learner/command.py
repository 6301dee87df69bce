# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learner write side.

Example:
    >>> service = LearnerCommandService(SchoolsRepositoryManager(db), cleaner)
    >>> created = await service.create(LearnerDto(first_name="Ann", last_name="Lee"))
    >>> created.data.id
    '5f0c...'
"""

import logging

from sqlalchemy.orm import selectinload

from src.domains.learner.query import learner_not_found
from src.domains.messaging import EntityReferenceCleaner
from src.infrastructure.database.models import (
    Learner,
    LearnerContactNumber,
    LearnerEmailAddress,
    LearnerParent,
    Parent,
    new_id,
)
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.common import Result
from src.models.school import LearnerDto, ParentSummaryDto
from src.utils.datetime import age_from_id_number

logger = logging.getLogger(__name__)

DEFAULT_INTERNATIONAL_CODE = "27"

# Fields copied from the DTO on update. Everything else is left untouched.
UPDATABLE_FIELDS = (
    "first_name",
    "middle_name",
    "last_name",
    "id_number",
    "gender",
    "description",
    "medical_notes",
    "medical_aid_parent_id",
    "school_grade_id",
    "school_class_id",
    "receive_notifications",
    "receive_messages",
    "receive_emails",
)


class LearnerCommandService:
    """Create, update and delete learners and their parent links.

    Attributes:
        _schools: Schools repositories bound to the request session.
        _cleaner: Removes notifications and messages of deleted learners.
    """

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    async def create(self, dto: LearnerDto) -> Result[LearnerDto]:
        """Create a learner with a default contact number, email and parent links.

        The learner row is flushed before the parent links are staged so the
        links never reference a missing learner.
        """
        learner_id = dto.id or new_id()
        learner = Learner(
            id=learner_id,
            child_guid=learner_id,
            first_name=dto.first_name,
            middle_name=dto.middle_name,
            last_name=dto.last_name,
            id_number=dto.id_number,
            gender=dto.gender,
            description=dto.description,
            medical_notes=dto.medical_notes,
            medical_aid_parent_id=dto.medical_aid_parent_id,
            school_grade_id=dto.school_grade_id,
            school_class_id=dto.school_class_id,
            receive_notifications=dto.receive_notifications,
            receive_messages=dto.receive_messages,
            receive_emails=dto.receive_emails,
            contact_numbers=[
                LearnerContactNumber(
                    number=dto.contact_number or "",
                    international_code=DEFAULT_INTERNATIONAL_CODE,
                    is_default=True,
                )
            ],
            email_addresses=[LearnerEmailAddress(email=dto.email_address or "", is_default=True)],
        )

        created = await self._schools.learners.create(learner)
        if not created.succeeded:
            return Result.fail(created.messages)

        flushed = await self._schools.learners.flush()
        if not flushed.succeeded:
            return Result.fail(flushed.messages)

        links = [
            LearnerParent(
                learner_id=learner_id,
                parent_id=parent.id,
                parent_consent_required=parent.require_consent,
            )
            for parent in _unique_parents(dto.parents)
        ]
        if links:
            linked = await self._schools.learner_parents.create_range(links)
            if not linked.succeeded:
                await self._schools.learner_parents.rollback()
                return Result.fail(linked.messages)

        saved = await self._schools.learners.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Learner created: %s with %d parents", learner_id, len(links))
        return Result.success(
            dto.model_copy(
                update={
                    "id": learner_id,
                    "child_guid": learner_id,
                    "age": age_from_id_number(dto.id_number),
                }
            )
        )

    async def update(self, dto: LearnerDto) -> Result[None]:
        """Copy the updatable fields and reconcile the parent links.

        Parents in the DTO but not linked are added, carrying the parent's
        ``require_consent``. Linked parents missing from the DTO are
        unlinked. Links present on both sides are left untouched.
        """
        learner_id = dto.id or ""
        spec = Specification.by_id(Learner, learner_id).add_include(selectinload(Learner.parents))
        result = await self._schools.learners.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(learner_not_found(learner_id))

        learner = result.data
        for field in UPDATABLE_FIELDS:
            setattr(learner, field, getattr(dto, field))

        updated = await self._schools.learners.update(learner)
        if not updated.succeeded:
            return Result.fail(updated.messages)

        reconciled = await self._reconcile_parents(learner_id, list(learner.parents), dto.parents)
        if not reconciled.succeeded:
            await self._schools.learners.rollback()
            return reconciled

        saved = await self._schools.learners.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Learner updated: %s", learner_id)
        return Result.success(messages="Learner updated successfully")

    async def update_learner_parents(
        self,
        learner_id: str,
        parents: list[ParentSummaryDto],
    ) -> Result[None]:
        existing = await self._schools.learner_parents.list(
            Specification(LearnerParent, LearnerParent.learner_id == learner_id)
        )
        if not existing.succeeded:
            return Result.fail(existing.messages)

        reconciled = await self._reconcile_parents(learner_id, existing.data or [], parents)
        if not reconciled.succeeded:
            await self._schools.learner_parents.rollback()
            return reconciled

        saved = await self._schools.learner_parents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Learner parents updated successfully")

    async def delete(self, learner_id: str) -> Result[None]:
        """Delete a learner with its notifications and messages."""
        return await self._cleaner.delete_aggregate(
            self._schools.learners,
            learner_id,
            "Learner removed successfully",
        )

    async def _reconcile_parents(
        self,
        learner_id: str,
        links: list[LearnerParent],
        desired: list[ParentSummaryDto],
    ) -> Result[None]:
        existing_ids = {link.parent_id for link in links}
        desired_ids = {parent.id for parent in desired}

        for parent_id in desired_ids - existing_ids:
            found = await self._schools.parents.first_or_default(
                Specification.by_id(Parent, parent_id)
            )
            if not found.succeeded:
                return Result.fail(found.messages)
            if found.data is None:
                logger.debug("Skipping unknown parent %s for learner %s", parent_id, learner_id)
                continue

            created = await self._schools.learner_parents.create(
                LearnerParent(
                    learner_id=learner_id,
                    parent_id=parent_id,
                    parent_consent_required=found.data.require_consent,
                )
            )
            if not created.succeeded:
                return Result.fail(created.messages)

        for link in links:
            if link.parent_id in desired_ids:
                continue
            removed = await self._schools.learner_parents.remove(link)
            if not removed.succeeded:
                return Result.fail(removed.messages)

        return Result.success()


def _unique_parents(parents: list[ParentSummaryDto]) -> list[ParentSummaryDto]:
    unique: dict[str, ParentSummaryDto] = {}
    for parent in parents:
        unique.setdefault(parent.id, parent)
    return list(unique.values())
