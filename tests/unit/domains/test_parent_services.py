# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the parent query and command services."""

from unittest.mock import MagicMock

import pytest

from src.domains.parent import ParentCommandService, ParentQueryService
from src.infrastructure.database.models import LearnerParent, Parent
from src.models.common import Result
from src.models.paging import ParentPageParameters
from src.models.school import (
    ContactNumberDto,
    EmailAddressDto,
    LearnerSummaryDto,
    ParentDto,
)


@pytest.fixture
def queries(schools: MagicMock) -> ParentQueryService:
    """Create the query service under test."""
    return ParentQueryService(schools)


@pytest.fixture
def commands(schools: MagicMock, cleaner: MagicMock) -> ParentCommandService:
    """Create the command service under test."""
    return ParentCommandService(schools, cleaner)


def linked_parent(parent_factory, *learner_ids: str, require_consent: bool = False) -> Parent:
    """Create a parent linked to ``learner_ids``."""
    parent = parent_factory(id="p1", require_consent=require_consent)
    parent.learners = [
        LearnerParent(learner_id=learner_id, parent_id="p1", parent_consent_required=require_consent)
        for learner_id in learner_ids
    ]
    return parent


class TestParentQueries:
    """Tests for ParentQueryService."""

    @pytest.mark.asyncio
    async def test_paged(self, queries: ParentQueryService, schools: MagicMock, parent_factory) -> None:
        """Test that a page of parents carries the database total."""
        schools.parents.list.return_value = Result.success(
            [parent_factory(id="p1", emails=["jane@example.com"])]
        )
        schools.parents.count.return_value = Result.success(3)

        page = await queries.paged(ParentPageParameters(learner_id="l1"))

        assert page.total_count == 3
        assert page.data[0].email_addresses[0].email == "jane@example.com"

    @pytest.mark.asyncio
    async def test_count_failure(self, queries: ParentQueryService, schools: MagicMock) -> None:
        """Test that a failing count fails the page."""
        schools.parents.count.return_value = Result.fail("timeout")

        page = await queries.paged(ParentPageParameters())

        assert page.succeeded is False
        assert page.messages == ["timeout"]

    @pytest.mark.asyncio
    async def test_get_missing(self, queries: ParentQueryService) -> None:
        """Test the not found message."""
        result = await queries.get("p404")

        assert result.messages == ["No parent with id 'p404' was found in the database"]

    @pytest.mark.asyncio
    async def test_by_email_missing(self, queries: ParentQueryService) -> None:
        """Test that an unknown email fails."""
        result = await queries.by_email("nobody@example.com")

        assert result.messages == ["No parent found."]

    @pytest.mark.asyncio
    async def test_exist(self, queries: ParentQueryService, schools: MagicMock, parent_factory) -> None:
        """Test that exist reports the matching parent id."""
        schools.parents.first_or_default.return_value = Result.success(parent_factory(id="p7"))

        result = await queries.exist("jane@example.com")

        assert result.data == "p7"


class TestParentCommands:
    """Tests for ParentCommandService."""

    @pytest.mark.asyncio
    async def test_create_with_details_and_links(
        self, commands: ParentCommandService, schools: MagicMock
    ) -> None:
        """Test that create stages contact details and deduplicated learner links."""
        dto = ParentDto(
            first_name="Jane",
            last_name="Doe",
            require_consent=True,
            contact_numbers=[ContactNumberDto(number="0820000000", is_default=True)],
            email_addresses=[EmailAddressDto(email="jane@example.com")],
            learners=[LearnerSummaryDto(id="l1"), LearnerSummaryDto(id="l1"), LearnerSummaryDto(id="l2")],
        )

        result = await commands.create(dto)

        parent: Parent = schools.parents.create.await_args.args[0]
        assert result.data.id == parent.id
        assert parent.contact_numbers[0].international_code == "27"
        assert [link.learner_id for link in parent.learners] == ["l1", "l2"]
        assert all(link.parent_consent_required for link in parent.learners)

    @pytest.mark.asyncio
    async def test_update_reconciles_learners(
        self, commands: ParentCommandService, schools: MagicMock, parent_factory
    ) -> None:
        """Test that update adds, removes and re-flags learner links."""
        parent = linked_parent(parent_factory, "l1", "l2")
        kept, dropped = parent.learners
        schools.parents.first_or_default.return_value = Result.success(parent)

        result = await commands.update(
            ParentDto(
                id="p1",
                first_name="Janet",
                last_name="Doe",
                require_consent=True,
                learners=[LearnerSummaryDto(id="l1"), LearnerSummaryDto(id="l3")],
            )
        )

        assert result.messages == ["Parent updated successfully."]
        assert parent.first_name == "Janet"
        assert kept.parent_consent_required is True
        created = schools.learner_parents.create.await_args.args[0]
        assert (created.learner_id, created.parent_consent_required) == ("l3", True)
        schools.learner_parents.remove.assert_awaited_once_with(dropped)
        schools.parents.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_rolls_back_on_link_failure(
        self, commands: ParentCommandService, schools: MagicMock, parent_factory
    ) -> None:
        """Test that a failed link change discards the whole update."""
        schools.parents.first_or_default.return_value = Result.success(linked_parent(parent_factory))
        schools.learner_parents.create.side_effect = None
        schools.learner_parents.create.return_value = Result.fail("foreign key violation")

        result = await commands.update(
            ParentDto(id="p1", first_name="Jane", last_name="Doe", learners=[LearnerSummaryDto(id="l9")])
        )

        assert result.messages == ["foreign key violation"]
        schools.parents.rollback.assert_awaited_once()
        schools.parents.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_profile_keeps_links(
        self, commands: ParentCommandService, schools: MagicMock, parent_factory
    ) -> None:
        """Test that a profile update only pushes the consent flag to links."""
        parent = linked_parent(parent_factory, "l1")
        schools.parents.first_or_default.return_value = Result.success(parent)

        result = await commands.update_profile(
            ParentDto(id="p1", first_name="Jane", last_name="Doe", require_consent=True)
        )

        assert result.messages == ["Parent Updated successfully"]
        assert parent.learners[0].parent_consent_required is True
        schools.learner_parents.remove.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_missing(self, commands: ParentCommandService) -> None:
        """Test the not found message on update."""
        result = await commands.update(ParentDto(id="p404", first_name="A", last_name="B"))

        assert result.messages == ["No parent with id 'p404' was found in the database"]

    @pytest.mark.asyncio
    async def test_link_learner(
        self, commands: ParentCommandService, schools: MagicMock, parent_factory
    ) -> None:
        """Test that a new link carries the parent's consent flag."""
        schools.parents.first_or_default.return_value = Result.success(
            linked_parent(parent_factory, require_consent=True)
        )

        result = await commands.link_learner("p1", "l1")

        assert result.messages == ["Learner linked successfully"]
        created = schools.learner_parents.create.await_args.args[0]
        assert created.parent_consent_required is True

    @pytest.mark.asyncio
    async def test_link_learner_already_linked(
        self, commands: ParentCommandService, schools: MagicMock, parent_factory
    ) -> None:
        """Test that linking twice is a no-op success."""
        schools.parents.first_or_default.return_value = Result.success(
            linked_parent(parent_factory, "l1")
        )

        result = await commands.link_learner("p1", "l1")

        assert result.succeeded is True
        assert result.messages == ["Learner already linked"]
        schools.learner_parents.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlink_missing_link(self, commands: ParentCommandService) -> None:
        """Test that unlinking an unknown pair fails."""
        result = await commands.unlink_learner("p1", "l1")

        assert result.messages == ["Learner 'l1' is not linked to parent 'p1'"]

    @pytest.mark.asyncio
    async def test_unlink(self, commands: ParentCommandService, schools: MagicMock) -> None:
        """Test that an existing link is removed and saved."""
        link = LearnerParent(learner_id="l1", parent_id="p1", parent_consent_required=False)
        schools.learner_parents.first_or_default.return_value = Result.success(link)

        result = await commands.unlink_learner("p1", "l1")

        assert result.messages == ["Learner unlinked successfully"]
        schools.learner_parents.remove.assert_awaited_once_with(link)

    @pytest.mark.asyncio
    async def test_delete(
        self, commands: ParentCommandService, schools: MagicMock, cleaner: MagicMock
    ) -> None:
        """Test that delete cascades through the cleaner."""
        result = await commands.delete("p1")

        assert result.messages == ["Parent Removed successfully"]
        cleaner.delete_aggregate.assert_awaited_once_with(
            schools.parents, "p1", "Parent Removed successfully"
        )
