# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School event read side."""

from sqlalchemy.orm import selectinload

from src.domains.school_event.command import event_not_found
from src.infrastructure.database.models import ParticipatingActivityGroup, SchoolEvent
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import PagedSpecification, Specification
from src.models.common import PaginatedResult, Result
from src.models.events import SchoolEventDto
from src.models.paging import SchoolEventPageParameters


def event_details() -> tuple:
    return (
        selectinload(SchoolEvent.participating_activity_groups).selectinload(
            ParticipatingActivityGroup.activity_group
        ),
    )


class SchoolEventQueryService:
    """Read operations over school events."""

    def __init__(self, schools: SchoolsRepositoryManager) -> None:
        self._schools = schools

    async def paged(self, parameters: SchoolEventPageParameters) -> PaginatedResult[SchoolEventDto]:
        criteria = [SchoolEvent.published.is_(True)] if parameters.published_only else []
        spec = PagedSpecification(
            SchoolEvent,
            parameters,
            *criteria,
            search_columns=[SchoolEvent.name, SchoolEvent.location],
        ).add_include(*event_details())

        rows = await self._schools.school_events.list(spec)
        if not rows.succeeded:
            return PaginatedResult.fail(rows.messages)

        total = await self._schools.school_events.count(spec)
        if not total.succeeded:
            return PaginatedResult.fail(total.messages)

        return PaginatedResult.success(
            [SchoolEventDto.from_entity(event) for event in rows.data or []],
            total_count=total.data or 0,
            page_nr=parameters.page_nr,
            page_size=parameters.page_size,
        )

    async def get(self, event_id: str) -> Result[SchoolEventDto]:
        spec = Specification.by_id(SchoolEvent, event_id).add_include(*event_details())
        result = await self._schools.school_events.first_or_default(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        if result.data is None:
            return Result.fail(event_not_found(event_id))
        return Result.success(SchoolEventDto.from_entity(result.data))
