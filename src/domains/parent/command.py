# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent write side.

A parent's ``require_consent`` flag is mirrored onto every learner link as
``parent_consent_required``. Updates that change the flag push it to the
existing links in the same unit of work.
"""

import logging

from sqlalchemy.orm import selectinload

from src.domains.messaging import EntityReferenceCleaner
from src.domains.parent.query import parent_not_found
from src.infrastructure.database.models import (
    EmergencyContact,
    LearnerParent,
    Parent,
    ParentAddress,
    ParentContactNumber,
    ParentEmailAddress,
    new_id,
)
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.models.common import Result
from src.models.school import ParentDto

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "title",
    "first_name",
    "last_name",
    "id_number",
    "receive_notifications",
    "receive_messages",
    "receive_emails",
    "require_consent",
)


class ParentCommandService:
    """Create, update and delete parents and their learner links."""

    def __init__(self, schools: SchoolsRepositoryManager, cleaner: EntityReferenceCleaner) -> None:
        self._schools = schools
        self._cleaner = cleaner

    async def create(self, dto: ParentDto) -> Result[ParentDto]:
        parent_id = dto.id or new_id()
        parent = Parent(
            id=parent_id,
            **{field: getattr(dto, field) for field in PROFILE_FIELDS},
            contact_numbers=[
                ParentContactNumber(
                    number=c.number,
                    international_code=c.international_code,
                    is_default=c.is_default,
                )
                for c in dto.contact_numbers
            ],
            email_addresses=[
                ParentEmailAddress(email=e.email, is_default=e.is_default)
                for e in dto.email_addresses
            ],
            addresses=[
                ParentAddress(
                    street=a.street,
                    suburb=a.suburb,
                    city=a.city,
                    postal_code=a.postal_code,
                    is_default=a.is_default,
                )
                for a in dto.addresses
            ],
            emergency_contacts=[
                EmergencyContact(
                    name=c.name,
                    number=c.number,
                    relationship_to_learner=c.relationship_to_learner,
                )
                for c in dto.emergency_contacts
            ],
            learners=[
                LearnerParent(learner_id=learner_id, parent_consent_required=dto.require_consent)
                for learner_id in dict.fromkeys(learner.id for learner in dto.learners)
            ],
        )

        created = await self._schools.parents.create(parent)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.parents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Parent created: %s", parent_id)
        return Result.success(dto.model_copy(update={"id": parent_id}))

    async def update(self, dto: ParentDto) -> Result[None]:
        """Update profile fields and reconcile the linked learners."""
        loaded = await self._load(dto.id or "")
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        parent = loaded.data
        self._apply_profile(parent, dto)

        existing = {link.learner_id: link for link in parent.learners}
        desired = {learner.id for learner in dto.learners}

        for learner_id in desired - existing.keys():
            created = await self._schools.learner_parents.create(
                LearnerParent(
                    learner_id=learner_id,
                    parent_id=parent.id,
                    parent_consent_required=dto.require_consent,
                )
            )
            if not created.succeeded:
                await self._schools.parents.rollback()
                return Result.fail(created.messages)

        for learner_id, link in existing.items():
            if learner_id in desired:
                link.parent_consent_required = dto.require_consent
                continue
            removed = await self._schools.learner_parents.remove(link)
            if not removed.succeeded:
                await self._schools.parents.rollback()
                return Result.fail(removed.messages)

        saved = await self._schools.parents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Parent updated: %s", parent.id)
        return Result.success(messages="Parent updated successfully.")

    async def update_profile(self, dto: ParentDto) -> Result[None]:
        """Update profile fields only. Learner links keep their membership."""
        loaded = await self._load(dto.id or "")
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        parent = loaded.data
        self._apply_profile(parent, dto)
        for link in parent.learners:
            link.parent_consent_required = dto.require_consent

        saved = await self._schools.parents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Parent Updated successfully")

    async def delete(self, parent_id: str) -> Result[None]:
        """Delete a parent with its children, links, consents and references."""
        return await self._cleaner.delete_aggregate(
            self._schools.parents,
            parent_id,
            "Parent Removed successfully",
        )

    async def link_learner(self, parent_id: str, learner_id: str) -> Result[None]:
        loaded = await self._load(parent_id)
        if not loaded.succeeded:
            return Result.fail(loaded.messages)

        parent = loaded.data
        if any(link.learner_id == learner_id for link in parent.learners):
            return Result.success(messages="Learner already linked")

        created = await self._schools.learner_parents.create(
            LearnerParent(
                learner_id=learner_id,
                parent_id=parent_id,
                parent_consent_required=parent.require_consent,
            )
        )
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.learner_parents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Learner linked successfully")

    async def unlink_learner(self, parent_id: str, learner_id: str) -> Result[None]:
        found = await self._schools.learner_parents.first_or_default(
            Specification(
                LearnerParent,
                LearnerParent.parent_id == parent_id,
                LearnerParent.learner_id == learner_id,
            )
        )
        if not found.succeeded:
            return Result.fail(found.messages)
        if found.data is None:
            return Result.fail(f"Learner '{learner_id}' is not linked to parent '{parent_id}'")

        removed = await self._schools.learner_parents.remove(found.data)
        if not removed.succeeded:
            return Result.fail(removed.messages)

        saved = await self._schools.learner_parents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Learner unlinked successfully")

    async def _load(self, parent_id: str) -> Result:
        """Load a tracked parent with its learner links as ``data``."""
        spec = Specification.by_id(Parent, parent_id).add_include(selectinload(Parent.learners))
        result = await self._schools.parents.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(parent_not_found(parent_id))
        return Result.success(result.data)

    @staticmethod
    def _apply_profile(parent: Parent, dto: ParentDto) -> None:
        for field in PROFILE_FIELDS:
            setattr(parent, field, getattr(dto, field))
