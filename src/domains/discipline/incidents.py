# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Disciplinary incidents and the parent notification fan-out.

Recording an incident notifies the learner's parents. Recipients are built
from the learner's parent links, one per distinct parent, each carrying that
parent's notification and email preferences. A learner without parents gets
no notification and the incident is still recorded.
"""

import logging

from sqlalchemy.orm import selectinload

from src.infrastructure.database.models import (
    DisciplinaryAction,
    DisciplinaryIncident,
    Learner,
    LearnerParent,
    MessageType,
    Parent,
    new_id,
)
from src.infrastructure.database.repository import SchoolsRepositoryManager
from src.infrastructure.database.specification import Specification
from src.infrastructure.notifications import NotificationSender
from src.models.common import Result
from src.models.discipline import DisciplinaryIncidentDto
from src.models.messaging import NotificationDto, RecipientDto

logger = logging.getLogger(__name__)


def parent_recipients(learner: Learner) -> list[RecipientDto]:
    """Recipients for a learner's parents, deduplicated by parent id."""
    recipients: dict[str, RecipientDto] = {}
    for link in learner.parents:
        parent = link.parent
        if parent is None or parent.id in recipients:
            continue
        recipients[parent.id] = RecipientDto(
            id=parent.id,
            first_name=parent.first_name,
            last_name=parent.last_name,
            emails=[e.email for e in parent.email_addresses],
            receive_notifications=parent.receive_notifications,
            receive_emails=parent.receive_emails,
            message_type=MessageType.PARENT,
        )
    return list(recipients.values())


def incident_notification(learner: Learner, incident: DisciplinaryIncident) -> NotificationDto:
    full_name = f"{learner.first_name} {learner.last_name}"
    return NotificationDto(
        entity_id=learner.id,
        title=f"Disciplinary incident for {full_name}",
        short_description=f"Incident recorded on {incident.incident_date.isoformat()}",
        message=incident.description or f"A disciplinary incident was recorded for {full_name}.",
        message_type=MessageType.PARENT,
        notification_url=f"/learners/{learner.id}",
    )


class DisciplinaryIncidentService:
    """Record incidents and notify parents.

    Attributes:
        _schools: Schools repositories bound to the request session.
        _sender: Delivers the incident notification.
    """

    def __init__(self, schools: SchoolsRepositoryManager, sender: NotificationSender) -> None:
        self._schools = schools
        self._sender = sender

    async def by_learner(self, learner_id: str) -> Result[list[DisciplinaryIncidentDto]]:
        spec = (
            Specification(DisciplinaryIncident, DisciplinaryIncident.learner_id == learner_id)
            .add_include(selectinload(DisciplinaryIncident.disciplinary_action))
            .add_order_by(DisciplinaryIncident.incident_date.desc())
        )
        result = await self._schools.disciplinary_incidents.list(spec)
        if not result.succeeded:
            return Result.fail(result.messages)
        return Result.success([DisciplinaryIncidentDto.from_entity(i) for i in result.data or []])

    async def get(self, incident_id: str) -> Result[DisciplinaryIncidentDto]:
        spec = Specification.by_id(DisciplinaryIncident, incident_id).add_include(
            selectinload(DisciplinaryIncident.disciplinary_action)
        )
        result = await self._schools.disciplinary_incidents.first_or_default(spec)
        if not result.succeeded or result.data is None:
            return Result.fail("Incident not found")
        return Result.success(DisciplinaryIncidentDto.from_entity(result.data))

    async def create(self, dto: DisciplinaryIncidentDto | None) -> Result[DisciplinaryIncidentDto]:
        """Record an incident, then notify the learner's parents.

        A failed notification is logged and does not undo the incident.
        """
        if dto is None:
            return Result.fail("Incident details must be provided")

        incident = DisciplinaryIncident(
            id=dto.id or new_id(),
            incident_date=dto.incident_date,
            description=dto.description,
            learner_id=dto.learner_id,
            disciplinary_action_id=dto.disciplinary_action_id,
            severity_score=await self._severity_score(dto),
        )
        created = await self._schools.disciplinary_incidents.create(incident)
        if not created.succeeded:
            return Result.fail(created.messages)

        saved = await self._schools.disciplinary_incidents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)

        logger.info("Incident recorded: %s for learner %s", incident.id, incident.learner_id)
        await self._notify_parents(incident)

        return Result.success(
            dto.model_copy(update={"id": incident.id, "severity_score": incident.severity_score})
        )

    async def update(self, dto: DisciplinaryIncidentDto) -> Result[None]:
        result = await self._schools.disciplinary_incidents.first_or_default(
            Specification.by_id(DisciplinaryIncident, dto.id or "")
        )
        if not result.succeeded or result.data is None:
            return Result.fail("Incident not found")

        incident = result.data
        incident.incident_date = dto.incident_date
        incident.description = dto.description
        incident.learner_id = dto.learner_id
        incident.disciplinary_action_id = dto.disciplinary_action_id
        incident.severity_score = await self._severity_score(dto)

        saved = await self._schools.disciplinary_incidents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Incident updated")

    async def delete(self, incident_id: str) -> Result[None]:
        deleted = await self._schools.disciplinary_incidents.delete(incident_id)
        if not deleted.succeeded:
            return Result.fail(deleted.messages)

        saved = await self._schools.disciplinary_incidents.save()
        if not saved.succeeded:
            return Result.fail(saved.messages)
        return Result.success(messages="Incident removed")

    async def _severity_score(self, dto: DisciplinaryIncidentDto) -> int:
        """Explicit score, else the score of the action's severity scale."""
        if dto.severity_score is not None:
            return dto.severity_score
        if not dto.disciplinary_action_id:
            return 0

        spec = Specification.by_id(DisciplinaryAction, dto.disciplinary_action_id).add_include(
            selectinload(DisciplinaryAction.severity_scale)
        )
        result = await self._schools.disciplinary_actions.first_or_default(spec)
        if not result.succeeded or result.data is None or result.data.severity_scale is None:
            return 0
        return result.data.severity_scale.score

    async def _notify_parents(self, incident: DisciplinaryIncident) -> None:
        spec = Specification.by_id(Learner, incident.learner_id).add_include(
            selectinload(Learner.parents)
            .selectinload(LearnerParent.parent)
            .selectinload(Parent.email_addresses)
        )
        result = await self._schools.learners.first_or_default(spec)
        if not result.succeeded or result.data is None:
            logger.warning("Learner %s not found for incident notification", incident.learner_id)
            return

        learner = result.data
        recipients = parent_recipients(learner)
        if not recipients:
            logger.debug("Learner %s has no parents to notify", learner.id)
            return

        sent = await self._sender.enqueue_notifications(
            recipients, incident_notification(learner, incident)
        )
        if not sent.succeeded:
            logger.warning("Incident notification failed for %s: %s", learner.id, sent.messages)
