# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the activity group services."""

from unittest.mock import MagicMock

import pytest

from src.domains.activity_group import ActivityGroupCommandService, ActivityGroupQueryService
from src.infrastructure.database.models import (
    ActivityGroup,
    ActivityGroupTeamMember,
    AgeGroup,
    Learner,
    MessageType,
    Teacher,
)
from src.models.activity import ActivityGroupDto
from src.models.common import Result
from src.models.paging import ActivityGroupPageParameters, LearnerPageParameters
from src.models.school import LearnerSummaryDto


@pytest.fixture
def queries(schools: MagicMock) -> ActivityGroupQueryService:
    """Create the query service under test."""
    return ActivityGroupQueryService(schools)


@pytest.fixture
def commands(schools: MagicMock, cleaner: MagicMock) -> ActivityGroupCommandService:
    """Create the command service under test."""
    return ActivityGroupCommandService(schools, cleaner)


def group_with_members(*learners: Learner, **overrides) -> ActivityGroup:
    """Build a transient group whose members are ``learners``."""
    values = {"id": "a1", "name": "Chess"}
    values.update(overrides)
    group = ActivityGroup(**values)
    group.team_members = [
        ActivityGroupTeamMember(
            id=f"m-{learner.id}",
            activity_group_id=group.id,
            learner_id=learner.id,
            learner=learner,
        )
        for learner in learners
    ]
    return group


class TestQueries:
    """Tests for ActivityGroupQueryService."""

    @pytest.mark.asyncio
    async def test_get_maps_members_and_coach(
        self, queries: ActivityGroupQueryService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that the loaded age group, coach and members reach the DTO."""
        group = group_with_members(learner_factory(id="l1", first_name="Ann"))
        group.age_group = AgeGroup(id="ag1", name="U9", min_age=7, max_age=9)
        group.teacher = Teacher(id="t1", name="Tom", surname="Smith")
        schools.activity_groups.first_or_default.return_value = Result.success(group)

        result = await queries.get("a1")

        assert result.data.age_group_name == "U9"
        assert result.data.teacher_name == "Tom Smith"
        assert [(m.id, m.first_name) for m in result.data.team_members] == [("l1", "Ann")]

    @pytest.mark.asyncio
    async def test_get_missing(self, queries: ActivityGroupQueryService) -> None:
        """Test the not found message."""
        result = await queries.get("a404")

        assert result.messages == ["No activity group found with the provided ID."]

    @pytest.mark.asyncio
    async def test_paged_reports_total(
        self, queries: ActivityGroupQueryService, schools: MagicMock
    ) -> None:
        """Test that a filtered page reports the total across pages."""
        schools.activity_groups.list.return_value = Result.success([group_with_members()])
        schools.activity_groups.count.return_value = Result.success(3)

        page = await queries.paged(ActivityGroupPageParameters(teacher_id="t1", page_size=1))

        assert page.total_count == 3
        assert page.data[0].name == "Chess"

    @pytest.mark.asyncio
    async def test_team_members_require_group(self, queries: ActivityGroupQueryService) -> None:
        """Test that paging members needs a group id."""
        page = await queries.team_members(LearnerPageParameters())

        assert page.succeeded is False
        assert page.messages == ["ActivityGroupId must be provided."]

    @pytest.mark.asyncio
    async def test_team_members_page_learners(
        self, queries: ActivityGroupQueryService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that members are paged through the learner query."""
        schools.learners.list.return_value = Result.success([learner_factory(id="l1")])
        schools.learners.count.return_value = Result.success(1)

        page = await queries.team_members(LearnerPageParameters(activity_group_id="a1"))

        assert page.succeeded is True
        assert [learner.id for learner in page.data] == ["l1"]
        schools.learners.list.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_notification_list(
        self,
        queries: ActivityGroupQueryService,
        schools: MagicMock,
        parent_factory,
        learner_factory,
    ) -> None:
        """Test members with their parents first and the coach last, each once."""
        parent = parent_factory(id="p1", receive_emails=False)
        group = group_with_members(
            learner_factory(parent, id="l1"),
            learner_factory(parent, id="l2"),
        )
        group.teacher = Teacher(id="t1", name="Tom", surname="Smith", email="tom@school.org")
        schools.activity_groups.first_or_default.return_value = Result.success(group)

        result = await queries.notification_list("a1")

        assert [r.id for r in result.data] == ["l1", "p1", "l2", "t1"]
        assert result.data[1].receive_emails is False
        assert result.data[3].message_type == MessageType.TEACHER

    @pytest.mark.asyncio
    async def test_notification_list_missing(self, queries: ActivityGroupQueryService) -> None:
        """Test the not found message."""
        result = await queries.notification_list("a404")

        assert result.messages == ["Activity group not found."]


class TestCommands:
    """Tests for ActivityGroupCommandService."""

    @pytest.mark.asyncio
    async def test_create_requires_data(self, commands: ActivityGroupCommandService) -> None:
        """Test that a missing body is rejected."""
        result = await commands.create(None)

        assert result.messages == ["Activity group data must be provided."]

    @pytest.mark.asyncio
    async def test_create_with_members(
        self, commands: ActivityGroupCommandService, schools: MagicMock
    ) -> None:
        """Test that repeated learners become a single member."""
        dto = ActivityGroupDto(
            name="Chess",
            teacher_id="t1",
            team_members=[
                LearnerSummaryDto(id="l1"),
                LearnerSummaryDto(id="l2"),
                LearnerSummaryDto(id="l1"),
            ],
        )

        result = await commands.create(dto)

        group: ActivityGroup = schools.activity_groups.create.await_args.args[0]
        assert [m.learner_id for m in group.team_members] == ["l1", "l2"]
        assert result.data.id == group.id
        assert [m.id for m in result.data.team_members] == ["l1", "l2"]
        schools.activity_groups.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_syncs_members(
        self, commands: ActivityGroupCommandService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that missing members are added and extra members removed."""
        group = group_with_members(learner_factory(id="l1"), learner_factory(id="l2"))
        leaving = group.team_members[0]
        schools.activity_groups.first_or_default.return_value = Result.success(group)

        result = await commands.update(
            ActivityGroupDto(
                id="a1",
                name="Chess club",
                age_group_id="ag1",
                team_members=[LearnerSummaryDto(id="l2"), LearnerSummaryDto(id="l3")],
            )
        )

        assert result.messages == ["Activity group updated successfully"]
        assert (group.name, group.age_group_id) == ("Chess club", "ag1")
        added: ActivityGroupTeamMember = (
            schools.activity_group_team_members.create.await_args.args[0]
        )
        assert (added.activity_group_id, added.learner_id) == ("a1", "l3")
        schools.activity_group_team_members.remove.assert_awaited_once_with(leaving)
        schools.activity_groups.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_rolls_back_when_sync_fails(
        self, commands: ActivityGroupCommandService, schools: MagicMock
    ) -> None:
        """Test that a failed member change leaves nothing saved."""
        schools.activity_groups.first_or_default.return_value = Result.success(group_with_members())
        schools.activity_group_team_members.create.side_effect = None
        schools.activity_group_team_members.create.return_value = Result.fail("duplicate key")

        result = await commands.update(
            ActivityGroupDto(id="a1", name="Chess", team_members=[LearnerSummaryDto(id="l1")])
        )

        assert result.messages == ["duplicate key"]
        schools.activity_groups.rollback.assert_awaited_once()
        schools.activity_groups.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_missing(self, commands: ActivityGroupCommandService) -> None:
        """Test the not found message on update."""
        result = await commands.update(ActivityGroupDto(id="a404", name="Chess"))

        assert result.messages == ["Activity group not found."]

    @pytest.mark.asyncio
    async def test_delete_removes_event_participation_first(
        self, commands: ActivityGroupCommandService, schools: MagicMock, cleaner: MagicMock
    ) -> None:
        """Test that participation rows are staged for removal before the group."""
        result = await commands.delete("a1")

        assert result.messages == ["Activity Group deleted successfully."]
        schools.participating_activity_groups.delete_where.assert_awaited_once()
        cleaner.delete_aggregate.assert_awaited_once_with(
            schools.activity_groups, "a1", "Activity Group deleted successfully."
        )

    @pytest.mark.asyncio
    async def test_delete_stops_when_participation_fails(
        self, commands: ActivityGroupCommandService, schools: MagicMock, cleaner: MagicMock
    ) -> None:
        """Test that the group is kept when its participation rows cannot be removed."""
        schools.participating_activity_groups.delete_where.return_value = Result.fail("locked")

        result = await commands.delete("a1")

        assert result.messages == ["locked"]
        cleaner.delete_aggregate.assert_not_called()
        schools.activity_groups.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_team_member(
        self, commands: ActivityGroupCommandService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that a learner is added and saved."""
        schools.activity_groups.first_or_default.return_value = Result.success(group_with_members())
        schools.learners.first_or_default.return_value = Result.success(learner_factory(id="l1"))

        result = await commands.add_team_member("a1", "l1")

        assert result.messages == ["Team Member successfully added"]
        member: ActivityGroupTeamMember = (
            schools.activity_group_team_members.create.await_args.args[0]
        )
        assert (member.activity_group_id, member.learner_id) == ("a1", "l1")
        schools.activity_group_team_members.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_existing_member_changes_nothing(
        self, commands: ActivityGroupCommandService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that adding a learner twice does not stage a second row."""
        schools.activity_groups.first_or_default.return_value = Result.success(group_with_members())
        schools.learners.first_or_default.return_value = Result.success(learner_factory(id="l1"))
        schools.activity_group_team_members.first_or_default.return_value = Result.success(
            ActivityGroupTeamMember(id="m1", activity_group_id="a1", learner_id="l1")
        )

        result = await commands.add_team_member("a1", "l1")

        assert result.succeeded is True
        schools.activity_group_team_members.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_unknown_learner(
        self, commands: ActivityGroupCommandService, schools: MagicMock
    ) -> None:
        """Test that an unknown learner is reported."""
        schools.activity_groups.first_or_default.return_value = Result.success(group_with_members())

        result = await commands.add_team_member("a1", "l404")

        assert result.messages == ["No learner matching id 'l404' found in the datastore"]

    @pytest.mark.asyncio
    async def test_remove_missing_member(self, commands: ActivityGroupCommandService) -> None:
        """Test the message for a learner that is not a member."""
        result = await commands.remove_team_member("a1", "l9")

        assert result.messages == ["Team member with learner id 'l9' does not exist in the database"]

    @pytest.mark.asyncio
    async def test_remove_team_member(
        self, commands: ActivityGroupCommandService, schools: MagicMock
    ) -> None:
        """Test that the member row is removed and saved."""
        member = ActivityGroupTeamMember(id="m1", activity_group_id="a1", learner_id="l1")
        schools.activity_group_team_members.first_or_default.return_value = Result.success(member)

        result = await commands.remove_team_member("a1", "l1")

        assert result.messages == ["Team Member removed successfully"]
        schools.activity_group_team_members.remove.assert_awaited_once_with(member)
