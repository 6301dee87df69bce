# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School event and parent consent models."""

from datetime import datetime

from pydantic import Field

from src.infrastructure.database.models import (
    ParentPermission,
    ParticipatingActivityGroup,
    SchoolEvent,
)
from src.models.common import ApiModel, loaded


class ConsentTypes:
    """Kinds of consent a parent can give for an event."""

    ATTENDANCE = "attendance"
    TRANSPORT = "transport"


class ParticipatingActivityGroupDto(ApiModel):
    id: str | None = None
    activity_group_id: str
    activity_group_name: str | None = None

    @classmethod
    def from_entity(cls, group: ParticipatingActivityGroup) -> "ParticipatingActivityGroupDto":
        activity_group = loaded(group, "activity_group")
        return cls(
            id=group.id,
            activity_group_id=group.activity_group_id,
            activity_group_name=activity_group.name if activity_group is not None else None,
        )


class SchoolEventDto(ApiModel):
    """School event with the activity groups taking part.

    On update ``participating_activity_groups`` is the desired set, matched
    by ``activity_group_id``.
    """

    id: str | None = None
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    location: str | None = None
    published: bool = False
    attendance_consent_required: bool = False
    transport_consent_required: bool = False
    participating_activity_groups: list[ParticipatingActivityGroupDto] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, event: SchoolEvent) -> "SchoolEventDto":
        return cls(
            id=event.id,
            name=event.name,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            location=event.location,
            published=event.published,
            attendance_consent_required=event.attendance_consent_required,
            transport_consent_required=event.transport_consent_required,
            participating_activity_groups=[
                ParticipatingActivityGroupDto.from_entity(group)
                for group in loaded(event, "participating_activity_groups", [])
            ],
        )


class ParentPermissionDto(ApiModel):
    id: str
    parent_id: str
    learner_id: str
    learner_name: str | None = None
    event_id: str
    participating_activity_group_id: str | None = None
    consent_type: str
    granted: bool
    consent_direction: str | None = None

    @classmethod
    def from_entity(cls, permission: ParentPermission) -> "ParentPermissionDto":
        learner = loaded(permission, "learner")
        return cls(
            id=permission.id,
            parent_id=permission.parent_id,
            learner_id=permission.learner_id,
            learner_name=f"{learner.first_name} {learner.last_name}" if learner is not None else None,
            event_id=permission.event_id,
            participating_activity_group_id=permission.participating_activity_group_id,
            consent_type=permission.consent_type,
            granted=permission.granted,
            consent_direction=permission.consent_direction,
        )


class ConsentRequest(ApiModel):
    """Body of the give and retract consent endpoints.

    Attributes:
        consent: Whether consent is granted. Ignored on retract.
        consent_direction: Transport direction, for example ``"both"``.
    """

    parent_id: str
    learner_id: str
    event_id: str
    participating_activity_group_id: str | None = None
    consent_type: str = ConsentTypes.ATTENDANCE
    consent: bool = True
    consent_direction: str | None = None
