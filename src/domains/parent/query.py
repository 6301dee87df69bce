# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent read side."""

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import LearnerParent, Parent, ParentEmailAddress
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.common import PaginatedResult, Result
from src.models.paging import ParentPageParameters
from src.models.school import ParentDto


def parent_details() -> tuple:
    """Loader options for a parent with contact details and learners."""
    return (
        selectinload(Parent.contact_numbers),
        selectinload(Parent.email_addresses),
        selectinload(Parent.addresses),
        selectinload(Parent.emergency_contacts),
        selectinload(Parent.learners).selectinload(LearnerParent.learner),
    )


def parent_not_found(parent_id: str) -> str:
    return f"No parent with id '{parent_id}' was found in the database"


def _by_email(email: str) -> Specification[Parent]:
    return Specification(
        Parent,
        Parent.email_addresses.any(func.lower(ParentEmailAddress.email) == email.lower()),
    )


class ParentQueryService:
    """Read operations over parents."""

    def __init__(self, schools: SchoolsRepositoryManager) -> None:
        self._schools = schools

    async def paged(self, parameters: ParentPageParameters) -> PaginatedResult[ParentDto]:
        criteria = []
        if parameters.learner_id:
            criteria.append(Parent.learners.any(LearnerParent.learner_id == parameters.learner_id))

        spec = PagedSpecification(
            Parent,
            parameters,
            *criteria,
            search_columns=[Parent.first_name, Parent.last_name, Parent.id_number],
        ).add_include(*parent_details())

        rows = await self._schools.parents.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.parents.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [ParentDto.from_entity(parent) for parent in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def all(self) -> Result[list[ParentDto]]:
        spec = (
            Specification(Parent)
            .add_include(selectinload(Parent.contact_numbers), selectinload(Parent.email_addresses))
            .add_order_by(Parent.last_name.asc(), Parent.first_name.asc())
        )
        result = await self._schools.parents.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([ParentDto.from_entity(parent) for parent in result.data or []])

    async def count(self) -> Result[int]:
        return await self._schools.parents.count()

    async def get(self, parent_id: str) -> Result[ParentDto]:
        spec = Specification.by_id(Parent, parent_id).add_include(*parent_details())
        result = await self._schools.parents.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(parent_not_found(parent_id))
        return Result.success(ParentDto.from_entity(result.data))

    async def by_email(self, email: str) -> Result[ParentDto]:
        result = await self._schools.parents.first_or_default(
            _by_email(email).add_include(*parent_details())
        )
        if not result.succeeded or result.data is None:
            return Result.fail("No parent found.")
        return Result.success(ParentDto.from_entity(result.data))

    async def exist(self, email: str) -> Result[str]:
        """Return the id of the parent using ``email``, or no data if none does."""
        result = await self._schools.parents.first_or_default(_by_email(email))
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success(result.data.id if result.data is not None else None)
