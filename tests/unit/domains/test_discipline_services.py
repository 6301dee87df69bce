# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the discipline services."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.domains.discipline import DisciplinaryActionService, DisciplinaryIncidentService
from src.infrastructure.database.models import (
    DisciplinaryAction,
    DisciplinaryIncident,
    LearnerParent,
    SeverityScale,
)
from src.models.common import Result
from src.models.discipline import (
    DisciplinaryActionDto,
    DisciplinaryIncidentDto,
    SeverityScaleDto,
)


@pytest.fixture
def actions(schools: MagicMock) -> DisciplinaryActionService:
    """Create the action service under test."""
    return DisciplinaryActionService(schools)


@pytest.fixture
def incidents(schools: MagicMock, sender: MagicMock) -> DisciplinaryIncidentService:
    """Create the incident service under test."""
    return DisciplinaryIncidentService(schools, sender)


@pytest.fixture
def incident_dto() -> DisciplinaryIncidentDto:
    """Create an incident request."""
    return DisciplinaryIncidentDto(
        incident_date=date(2025, 3, 14),
        description="Late for class",
        learner_id="l1",
        disciplinary_action_id="a1",
    )


class TestSeverityScales:
    """Tests for severity scale CRUD."""

    @pytest.mark.asyncio
    async def test_create_scale(self, actions: DisciplinaryActionService, schools: MagicMock) -> None:
        """Test that a scale is created and saved."""
        result = await actions.create_scale(SeverityScaleDto(name="Minor", score=1))

        assert result.messages == ["Scale created"]
        assert result.data.score == 1
        schools.severity_scales.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_scale(self, actions: DisciplinaryActionService, schools: MagicMock) -> None:
        """Test that a scale is updated in place."""
        scale = SeverityScale(id="s1", name="Minor", score=1)
        schools.severity_scales.first_or_default.return_value = Result.success(scale)

        result = await actions.update_scale(SeverityScaleDto(id="s1", name="Major", score=5))

        assert result.messages == ["Scale updated"]
        assert (scale.name, scale.score) == ("Major", 5)

    @pytest.mark.asyncio
    async def test_get_missing_scale(self, actions: DisciplinaryActionService) -> None:
        """Test the not found message."""
        assert (await actions.get_scale("s404")).messages == ["Scale not found"]

    @pytest.mark.asyncio
    async def test_delete_scale_missing(
        self, actions: DisciplinaryActionService, schools: MagicMock
    ) -> None:
        """Test that the repository failure is reported verbatim."""
        schools.severity_scales.delete.return_value = Result.fail(
            "No SeverityScale with id 's404' was found"
        )

        result = await actions.delete_scale("s404")

        assert result.messages == ["No SeverityScale with id 's404' was found"]
        schools.severity_scales.save.assert_not_called()


class TestDisciplinaryActions:
    """Tests for disciplinary action CRUD."""

    @pytest.mark.asyncio
    async def test_all_actions_include_scale(
        self, actions: DisciplinaryActionService, schools: MagicMock
    ) -> None:
        """Test that the loaded scale is mapped onto the DTO."""
        action = DisciplinaryAction(id="a1", name="Detention", severity_scale_id="s1")
        action.severity_scale = SeverityScale(id="s1", name="Minor", score=2)
        schools.disciplinary_actions.list.return_value = Result.success([action])

        result = await actions.all_actions()

        assert result.data[0].severity_scale.score == 2

    @pytest.mark.asyncio
    async def test_update_missing_action(self, actions: DisciplinaryActionService) -> None:
        """Test the not found message on update."""
        result = await actions.update_action(DisciplinaryActionDto(id="a404", name="Detention"))

        assert result.messages == ["Action not found"]

    @pytest.mark.asyncio
    async def test_delete_action(self, actions: DisciplinaryActionService, schools: MagicMock) -> None:
        """Test that delete saves the unit of work."""
        result = await actions.delete_action("a1")

        assert result.messages == ["Action deleted"]
        schools.disciplinary_actions.save.assert_awaited_once()


class TestDisciplinaryIncidents:
    """Tests for incident recording and notification."""

    @pytest.mark.asyncio
    async def test_create_requires_details(self, incidents: DisciplinaryIncidentService) -> None:
        """Test that a missing body is rejected."""
        result = await incidents.create(None)

        assert result.succeeded is False
        assert result.messages == ["Incident details must be provided"]

    @pytest.mark.asyncio
    async def test_create_copies_scale_score(
        self,
        incidents: DisciplinaryIncidentService,
        schools: MagicMock,
        incident_dto: DisciplinaryIncidentDto,
    ) -> None:
        """Test that the score comes from the action's severity scale."""
        action = DisciplinaryAction(id="a1", name="Detention")
        action.severity_scale = SeverityScale(id="s1", name="Major", score=4)
        schools.disciplinary_actions.first_or_default.return_value = Result.success(action)

        result = await incidents.create(incident_dto)

        incident: DisciplinaryIncident = schools.disciplinary_incidents.create.await_args.args[0]
        assert incident.severity_score == 4
        assert result.data.severity_score == 4
        assert result.data.id == incident.id

    @pytest.mark.asyncio
    async def test_create_keeps_explicit_zero_score(
        self,
        incidents: DisciplinaryIncidentService,
        schools: MagicMock,
        incident_dto: DisciplinaryIncidentDto,
    ) -> None:
        """Test that an explicit score of 0 is not replaced by the scale score."""
        action = DisciplinaryAction(id="a1", name="Detention")
        action.severity_scale = SeverityScale(id="s1", name="Major", score=4)
        schools.disciplinary_actions.first_or_default.return_value = Result.success(action)

        result = await incidents.create(incident_dto.model_copy(update={"severity_score": 0}))

        incident: DisciplinaryIncident = schools.disciplinary_incidents.create.await_args.args[0]
        assert incident.severity_score == 0
        assert result.data.severity_score == 0
        schools.disciplinary_actions.first_or_default.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_without_action_scores_zero(
        self,
        incidents: DisciplinaryIncidentService,
        schools: MagicMock,
        incident_dto: DisciplinaryIncidentDto,
    ) -> None:
        """Test that an incident without an action gets a score of 0."""
        result = await incidents.create(
            incident_dto.model_copy(update={"disciplinary_action_id": None})
        )

        assert result.data.severity_score == 0
        schools.disciplinary_actions.first_or_default.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_notifies_each_parent_once(
        self,
        incidents: DisciplinaryIncidentService,
        schools: MagicMock,
        sender: MagicMock,
        incident_dto: DisciplinaryIncidentDto,
        parent_factory,
        learner_factory,
    ) -> None:
        """Test that parents are notified once with their preferences."""
        mother = parent_factory(id="p1", emails=["mom@example.com"])
        father = parent_factory(id="p2", receive_notifications=False)
        learner = learner_factory(mother, father, id="l1", first_name="Sam", last_name="Doe")
        learner.parents.append(LearnerParent(learner_id="l1", parent_id="p1", parent=mother))
        schools.learners.first_or_default.return_value = Result.success(learner)

        result = await incidents.create(incident_dto)

        assert result.succeeded is True
        recipients, notification = sender.enqueue_notifications.await_args.args
        assert [r.id for r in recipients] == ["p1", "p2"]
        assert recipients[0].emails == ["mom@example.com"]
        assert recipients[1].receive_notifications is False
        assert notification.title == "Disciplinary incident for Sam Doe"
        assert notification.entity_id == "l1"

    @pytest.mark.asyncio
    async def test_learner_without_parents_is_not_notified(
        self,
        incidents: DisciplinaryIncidentService,
        schools: MagicMock,
        sender: MagicMock,
        incident_dto: DisciplinaryIncidentDto,
        learner_factory,
    ) -> None:
        """Test that the incident is recorded without a notification."""
        schools.learners.first_or_default.return_value = Result.success(learner_factory(id="l1"))

        result = await incidents.create(incident_dto)

        assert result.succeeded is True
        sender.enqueue_notifications.assert_not_called()

    @pytest.mark.asyncio
    async def test_notification_failure_keeps_incident(
        self,
        incidents: DisciplinaryIncidentService,
        schools: MagicMock,
        sender: MagicMock,
        incident_dto: DisciplinaryIncidentDto,
        parent_factory,
        learner_factory,
    ) -> None:
        """Test that a failed fan-out does not fail the create."""
        schools.learners.first_or_default.return_value = Result.success(
            learner_factory(parent_factory(id="p1"), id="l1")
        )
        sender.enqueue_notifications.side_effect = None
        sender.enqueue_notifications.return_value = Result.fail("queue unavailable")

        result = await incidents.create(incident_dto)

        assert result.succeeded is True
        schools.disciplinary_incidents.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_missing(
        self, incidents: DisciplinaryIncidentService, incident_dto: DisciplinaryIncidentDto
    ) -> None:
        """Test the not found message on update."""
        result = await incidents.update(incident_dto.model_copy(update={"id": "i404"}))

        assert result.messages == ["Incident not found"]

    @pytest.mark.asyncio
    async def test_delete(self, incidents: DisciplinaryIncidentService) -> None:
        """Test the delete message."""
        assert (await incidents.delete("i1")).messages == ["Incident removed"]
