# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic repository returning result envelopes.

Every method reports persistence failures as ``Result.fail`` carrying the
database error text verbatim instead of raising. Staging operations
(``create``, ``update``, ``delete``) only touch the session; nothing reaches
the database until ``flush`` or ``save``.

All repositories built on the same ``AsyncSession`` share one unit of work,
so ``save`` on any of them commits everything staged so far.

Example:
    grades = Repository(session, SchoolGrade)
    created = await grades.create(SchoolGrade(name="Grade 1"))
    if created.succeeded:
        saved = await grades.save()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import (
    ActivityGroup,
    ActivityGroupTeamMember,
    AgeGroup,
    BusinessListing,
    DisciplinaryAction,
    DisciplinaryIncident,
    Learner,
    LearnerParent,
    ListingImage,
    ListingProduct,
    ListingService,
    ListingTier,
    Message,
    Notification,
    Parent,
    ParentPermission,
    ParticipatingActivityGroup,
    SchoolClass,
    SchoolEvent,
    SchoolGrade,
    SeverityScale,
    Teacher,
)
from src.infrastructure.database.specification import Specification
from src.models.common import Result

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """CRUD and specification queries over one mapped class.

    Attributes:
        session: Request scoped session.
        model: Mapped class handled by this repository.
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    # =========================================================================
    # Queries
    # =========================================================================

    async def list_all(self) -> Result[list[ModelT]]:
        return await self.list(Specification(self.model))

    async def list(self, spec: Specification[ModelT]) -> Result[list[ModelT]]:
        try:
            result = await self.session.execute(spec.to_select())
            return Result.success(list(result.scalars().unique().all()))
        except SQLAlchemyError as e:
            logger.warning("Listing %s failed: %s", self.entity_name, e)
            return Result.fail(str(e))

    async def first_or_default(self, spec: Specification[ModelT]) -> Result[ModelT | None]:
        """Return the first match, or a successful result with no data."""
        try:
            result = await self.session.execute(spec.to_select().limit(1))
            return Result.success(result.scalars().first())
        except SQLAlchemyError as e:
            logger.warning("Query on %s failed: %s", self.entity_name, e)
            return Result.fail(str(e))

    async def count(self, spec: Specification[ModelT] | None = None) -> Result[int]:
        spec = spec or Specification(self.model)
        try:
            total = await self.session.scalar(spec.to_count())
            return Result.success(int(total or 0))
        except SQLAlchemyError as e:
            logger.warning("Counting %s failed: %s", self.entity_name, e)
            return Result.fail(str(e))

    # =========================================================================
    # Staging
    # =========================================================================

    async def create(self, entity: ModelT) -> Result[ModelT]:
        try:
            self.session.add(entity)
            return Result.success(entity)
        except SQLAlchemyError as e:
            return Result.fail(str(e))

    async def create_range(self, entities: Iterable[ModelT]) -> Result[list[ModelT]]:
        items = list(entities)
        try:
            self.session.add_all(items)
            return Result.success(items)
        except SQLAlchemyError as e:
            return Result.fail(str(e))

    async def update(self, entity: ModelT) -> Result[ModelT]:
        """Mark an entity for update. Tracked entities need no extra work."""
        try:
            self.session.add(entity)
            return Result.success(entity)
        except SQLAlchemyError as e:
            return Result.fail(str(e))

    async def delete(self, entity_id: Any) -> Result[None]:
        """Stage deletion of the row with ``entity_id``.

        Returns:
            Failure with ``"No <Entity> with id '<id>' was found"`` when the
            row does not exist.
        """
        try:
            entity = await self.session.get(self.model, entity_id)
            if entity is None:
                return Result.fail(f"No {self.entity_name} with id '{entity_id}' was found")
            await self.session.delete(entity)
            return Result.success()
        except SQLAlchemyError as e:
            logger.warning("Deleting %s %s failed: %s", self.entity_name, entity_id, e)
            return Result.fail(str(e))

    async def remove(self, entity: ModelT) -> Result[None]:
        try:
            await self.session.delete(entity)
            return Result.success()
        except SQLAlchemyError as e:
            return Result.fail(str(e))

    async def delete_where(self, spec: Specification[ModelT]) -> Result[int]:
        """Stage deletion of every row matching ``spec``.

        Returns:
            The number of rows staged for deletion.
        """
        found = await self.list(spec)
        if not found.succeeded:
            return Result.fail(found.messages)

        for entity in found.data or []:
            removed = await self.remove(entity)
            if not removed.succeeded:
                return Result.fail(removed.messages)
        return Result.success(len(found.data or []))

    # =========================================================================
    # Unit of work
    # =========================================================================

    async def flush(self) -> Result[None]:
        """Write staged changes without committing."""
        try:
            await self.session.flush()
            return Result.success()
        except SQLAlchemyError as e:
            logger.warning("Flush failed for %s: %s", self.entity_name, e)
            await self.session.rollback()
            return Result.fail(str(e))

    async def save(self) -> Result[None]:
        """Commit the unit of work. Rolls back and fails on error."""
        try:
            await self.session.commit()
            return Result.success()
        except SQLAlchemyError as e:
            logger.error("Saving %s failed: %s", self.entity_name, e)
            await self.session.rollback()
            return Result.fail(str(e))

    async def rollback(self) -> None:
        await self.session.rollback()


class SchoolsRepositoryManager:
    """Repositories of the schools module bound to one session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.school_grades = Repository(session, SchoolGrade)
        self.school_classes = Repository(session, SchoolClass)
        self.age_groups = Repository(session, AgeGroup)
        self.teachers = Repository(session, Teacher)
        self.learners = Repository(session, Learner)
        self.learner_parents = Repository(session, LearnerParent)
        self.parents = Repository(session, Parent)
        self.parent_permissions = Repository(session, ParentPermission)
        self.severity_scales = Repository(session, SeverityScale)
        self.disciplinary_actions = Repository(session, DisciplinaryAction)
        self.disciplinary_incidents = Repository(session, DisciplinaryIncident)
        self.school_events = Repository(session, SchoolEvent)
        self.activity_groups = Repository(session, ActivityGroup)
        self.activity_group_team_members = Repository(session, ActivityGroupTeamMember)
        self.participating_activity_groups = Repository(session, ParticipatingActivityGroup)


class MessagingRepositoryManager:
    """Notification and message side tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.notifications = Repository(session, Notification)
        self.messages = Repository(session, Message)


class BusinessRepositoryManager:
    """Repositories of the business directory bound to one session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.listing_tiers = Repository(session, ListingTier)
        self.listings = Repository(session, BusinessListing)
        self.listing_products = Repository(session, ListingProduct)
        self.listing_services = Repository(session, ListingService)
        self.listing_images = Repository(session, ListingImage)
