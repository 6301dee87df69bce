# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Discipline models: severity scales, actions and incidents."""

from datetime import date

from pydantic import Field

from src.infrastructure.database.models import (
    DisciplinaryAction,
    DisciplinaryIncident,
    SeverityScale,
)
from src.models.common import ApiModel, loaded


class SeverityScaleDto(ApiModel):
    id: str | None = None
    name: str = Field(min_length=1, max_length=100)
    score: int = 0
    description: str | None = None

    @classmethod
    def from_entity(cls, scale: SeverityScale) -> "SeverityScaleDto":
        return cls(id=scale.id, name=scale.name, score=scale.score, description=scale.description)


class DisciplinaryActionDto(ApiModel):
    id: str | None = None
    name: str = Field(min_length=1, max_length=150)
    description: str | None = None
    severity_scale_id: str | None = None
    severity_scale: SeverityScaleDto | None = None

    @classmethod
    def from_entity(cls, action: DisciplinaryAction) -> "DisciplinaryActionDto":
        scale = loaded(action, "severity_scale")
        return cls(
            id=action.id,
            name=action.name,
            description=action.description,
            severity_scale_id=action.severity_scale_id,
            severity_scale=SeverityScaleDto.from_entity(scale) if scale is not None else None,
        )


class DisciplinaryIncidentDto(ApiModel):
    """A recorded incident for one learner.

    Attributes:
        incident_date: Day the incident happened.
        severity_score: Score copied from the action's scale when omitted. An explicit 0 is kept.
        action_name: Name of the applied action, read only.
    """

    id: str | None = None
    incident_date: date
    description: str | None = None
    learner_id: str
    disciplinary_action_id: str | None = None
    severity_score: int | None = None
    action_name: str | None = None

    @classmethod
    def from_entity(cls, incident: DisciplinaryIncident) -> "DisciplinaryIncidentDto":
        action = loaded(incident, "disciplinary_action")
        return cls(
            id=incident.id,
            incident_date=incident.incident_date,
            description=incident.description,
            learner_id=incident.learner_id,
            disciplinary_action_id=incident.disciplinary_action_id,
            severity_score=incident.severity_score,
            action_name=action.name if action is not None else None,
        )
