# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the learner query and command services."""

from unittest.mock import MagicMock

import pytest

from src.domains.learner import LearnerCommandService, LearnerQueryService
from src.infrastructure.database.models import Learner, LearnerParent
from src.models.common import Result
from src.models.paging import LearnerPageParameters
from src.models.school import LearnerDto, ParentSummaryDto


@pytest.fixture
def queries(schools: MagicMock) -> LearnerQueryService:
    """Create the query service under test."""
    return LearnerQueryService(schools)


@pytest.fixture
def commands(schools: MagicMock, cleaner: MagicMock) -> LearnerCommandService:
    """Create the command service under test."""
    return LearnerCommandService(schools, cleaner)


class TestLearnerQueries:
    """Tests for LearnerQueryService."""

    @pytest.mark.asyncio
    async def test_paged_uses_database_count(
        self, queries: LearnerQueryService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that an open age range pages in the database."""
        schools.learners.list.return_value = Result.success([learner_factory(id="l1")])
        schools.learners.count.return_value = Result.success(40)

        page = await queries.paged(LearnerPageParameters(page_nr=2, page_size=10))

        assert page.total_count == 40
        assert page.data[0].id == "l1"
        spec = schools.learners.list.await_args.args[0]
        assert (spec.skip, spec.take) == (10, 10)

    @pytest.mark.asyncio
    async def test_paged_by_age_filters_in_memory(
        self, queries: LearnerQueryService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that a narrowed age range loads all rows and slices the matches."""
        schools.learners.list.return_value = Result.success(
            [
                learner_factory(id="young", id_number="1501015800086"),
                learner_factory(id="adult", id_number="9001015800085"),
                learner_factory(id="unknown", id_number=None),
                learner_factory(id="young2", id_number="1602025800086"),
            ]
        )

        page = await queries.paged(
            LearnerPageParameters(page_nr=2, page_size=1, min_age=5, max_age=20)
        )

        assert page.total_count == 2
        assert [learner.id for learner in page.data] == ["young2"]
        schools.learners.count.assert_not_called()
        spec = schools.learners.list.await_args.args[0]
        assert spec.skip is None
        assert spec.take is None

    @pytest.mark.asyncio
    async def test_get_missing(self, queries: LearnerQueryService) -> None:
        """Test the not found message."""
        result = await queries.get("l404")

        assert result.messages == ["No learner matching id 'l404' found in the datastore"]

    @pytest.mark.asyncio
    async def test_get_maps_parents(
        self, queries: LearnerQueryService, schools: MagicMock, parent_factory, learner_factory
    ) -> None:
        """Test that linked parents are included in the DTO."""
        learner = learner_factory(parent_factory(id="p1"), id="l1", emails=["sam@example.com"])
        schools.learners.first_or_default.return_value = Result.success(learner)

        result = await queries.get("l1")

        assert result.data.email_address == "sam@example.com"
        assert [p.id for p in result.data.parents] == ["p1"]

    @pytest.mark.asyncio
    async def test_by_email_not_found(self, queries: LearnerQueryService) -> None:
        """Test that an unknown email fails."""
        result = await queries.by_email("nobody@example.com")

        assert result.messages == ["No learner found."]

    @pytest.mark.asyncio
    async def test_exist(
        self, queries: LearnerQueryService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that exist returns the id of the matching learner."""
        schools.learners.first_or_default.return_value = Result.success(learner_factory(id="l1"))

        result = await queries.exist("SAM@example.com")

        assert result.succeeded is True
        assert result.data == "l1"

    @pytest.mark.asyncio
    async def test_exist_without_match(self, queries: LearnerQueryService) -> None:
        """Test that a free email succeeds without data."""
        result = await queries.exist("free@example.com")

        assert result.succeeded is True
        assert result.data is None

    @pytest.mark.asyncio
    async def test_learner_parents(
        self, queries: LearnerQueryService, schools: MagicMock, parent_factory
    ) -> None:
        """Test that the parents of a learner are returned."""
        schools.learner_parents.list.return_value = Result.success(
            [LearnerParent(learner_id="l1", parent_id="p1", parent=parent_factory(id="p1"))]
        )

        result = await queries.learner_parents("l1")

        assert [p.id for p in result.data] == ["p1"]


class TestLearnerCommands:
    """Tests for LearnerCommandService."""

    @pytest.mark.asyncio
    async def test_create_seeds_contact_details(
        self, commands: LearnerCommandService, schools: MagicMock
    ) -> None:
        """Test that create seeds the default number and email."""
        dto = LearnerDto(
            first_name="Ann",
            last_name="Lee",
            contact_number="0821234567",
            email_address="ann@example.com",
        )

        result = await commands.create(dto)

        learner: Learner = schools.learners.create.await_args.args[0]
        assert result.succeeded is True
        assert learner.child_guid == learner.id == result.data.id
        assert learner.contact_numbers[0].international_code == "27"
        assert learner.contact_numbers[0].is_default is True
        assert learner.email_addresses[0].email == "ann@example.com"
        schools.learner_parents.create_range.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_flushes_before_linking_parents(
        self, commands: LearnerCommandService, schools: MagicMock
    ) -> None:
        """Test that the learner row is flushed before the links are staged."""
        calls: list[str] = []
        schools.learners.flush.side_effect = lambda: calls.append("flush") or Result.success()
        schools.learner_parents.create_range.side_effect = (
            lambda links: calls.append("links") or Result.success(list(links))
        )
        dto = LearnerDto(
            first_name="Ann",
            last_name="Lee",
            parents=[
                ParentSummaryDto(id="p1", require_consent=True),
                ParentSummaryDto(id="p1"),
                ParentSummaryDto(id="p2"),
            ],
        )

        await commands.create(dto)

        links = schools.learner_parents.create_range.await_args.args[0]
        assert calls == ["flush", "links"]
        assert [(link.parent_id, link.parent_consent_required) for link in links] == [
            ("p1", True),
            ("p2", False),
        ]

    @pytest.mark.asyncio
    async def test_create_flush_failure(
        self, commands: LearnerCommandService, schools: MagicMock
    ) -> None:
        """Test that a flush failure stops the create."""
        schools.learners.flush.return_value = Result.fail("null value in column")

        result = await commands.create(LearnerDto(first_name="Ann", last_name="Lee"))

        assert result.messages == ["null value in column"]
        schools.learners.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_reconciles_parents(
        self,
        commands: LearnerCommandService,
        schools: MagicMock,
        parent_factory,
        learner_factory,
    ) -> None:
        """Test that new parents are linked and dropped parents unlinked."""
        kept = parent_factory(id="p1")
        dropped = parent_factory(id="p2")
        learner = learner_factory(kept, dropped, id="l1")
        dropped_link = learner.parents[1]
        added = parent_factory(id="p3", require_consent=True)
        schools.learners.first_or_default.return_value = Result.success(learner)
        schools.parents.first_or_default.return_value = Result.success(added)

        result = await commands.update(
            LearnerDto(
                id="l1",
                first_name="Samuel",
                last_name="Doe",
                parents=[ParentSummaryDto(id="p1"), ParentSummaryDto(id="p3")],
            )
        )

        assert result.messages == ["Learner updated successfully"]
        assert learner.first_name == "Samuel"
        created = schools.learner_parents.create.await_args.args[0]
        assert (created.parent_id, created.parent_consent_required) == ("p3", True)
        schools.learner_parents.remove.assert_awaited_once_with(dropped_link)

    @pytest.mark.asyncio
    async def test_update_skips_unknown_parents(
        self, commands: LearnerCommandService, schools: MagicMock, learner_factory
    ) -> None:
        """Test that a parent id with no row is ignored."""
        schools.learners.first_or_default.return_value = Result.success(learner_factory(id="l1"))

        result = await commands.update(
            LearnerDto(id="l1", first_name="Sam", last_name="Doe", parents=[ParentSummaryDto(id="p404")])
        )

        assert result.succeeded is True
        schools.learner_parents.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_missing(self, commands: LearnerCommandService) -> None:
        """Test the not found message on update."""
        result = await commands.update(LearnerDto(id="l404", first_name="A", last_name="B"))

        assert result.messages == ["No learner matching id 'l404' found in the datastore"]

    @pytest.mark.asyncio
    async def test_update_learner_parents(
        self, commands: LearnerCommandService, schools: MagicMock
    ) -> None:
        """Test that links are replaced with the requested set."""
        link = LearnerParent(learner_id="l1", parent_id="p1", parent_consent_required=False)
        schools.learner_parents.list.return_value = Result.success([link])

        result = await commands.update_learner_parents("l1", [])

        assert result.messages == ["Learner parents updated successfully"]
        schools.learner_parents.remove.assert_awaited_once_with(link)
        schools.learner_parents.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete(
        self, commands: LearnerCommandService, schools: MagicMock, cleaner: MagicMock
    ) -> None:
        """Test that delete cascades through the cleaner."""
        result = await commands.delete("l1")

        assert result.messages == ["Learner removed successfully"]
        cleaner.delete_aggregate.assert_awaited_once_with(
            schools.learners, "l1", "Learner removed successfully"
        )
