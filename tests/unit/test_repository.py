# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the generic repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.infrastructure.database.models import SchoolGrade
from src.infrastructure.database.repository import Repository
from src.infrastructure.database.specification import Specification


def rows_result(rows: list) -> MagicMock:
    """Create an execute() result yielding ``rows``."""
    result = MagicMock()
    result.scalars.return_value.unique.return_value.all.return_value = rows
    result.scalars.return_value.first.return_value = rows[0] if rows else None
    return result


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock(return_value=rows_result([]))
    db.scalar = AsyncMock(return_value=0)
    db.get = AsyncMock(return_value=None)
    return db


@pytest.fixture
def grades(mock_db: AsyncMock) -> Repository[SchoolGrade]:
    """Create a school grade repository on the mock session."""
    return Repository(mock_db, SchoolGrade)


class TestQueries:
    """Tests for repository queries."""

    @pytest.mark.asyncio
    async def test_list_returns_rows(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that list returns the selected rows."""
        grade = SchoolGrade(id="g1", name="Grade 1")
        mock_db.execute.return_value = rows_result([grade])

        result = await grades.list(Specification(SchoolGrade))

        assert result.succeeded is True
        assert result.data == [grade]

    @pytest.mark.asyncio
    async def test_list_reports_database_errors(
        self, grades: Repository, mock_db: AsyncMock
    ) -> None:
        """Test that a database error becomes a failed result."""
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        result = await grades.list_all()

        assert result.succeeded is False
        assert "connection lost" in result.messages[0]

    @pytest.mark.asyncio
    async def test_first_or_default_without_match(self, grades: Repository) -> None:
        """Test that no match is a success without data."""
        result = await grades.first_or_default(Specification.by_id(SchoolGrade, "missing"))

        assert result.succeeded is True
        assert result.data is None

    @pytest.mark.asyncio
    async def test_count(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that count returns the scalar total."""
        mock_db.scalar.return_value = 7

        result = await grades.count()

        assert result.data == 7

    @pytest.mark.asyncio
    async def test_count_treats_null_as_zero(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that a NULL count is reported as zero."""
        mock_db.scalar.return_value = None

        assert (await grades.count()).data == 0


class TestStaging:
    """Tests for staging operations."""

    @pytest.mark.asyncio
    async def test_create_adds_to_session(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that create stages the entity without committing."""
        grade = SchoolGrade(name="Grade 1")

        result = await grades.create(grade)

        assert result.data is grade
        mock_db.add.assert_called_once_with(grade)
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_range(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that create_range stages every entity."""
        items = [SchoolGrade(name="A"), SchoolGrade(name="B")]

        result = await grades.create_range(iter(items))

        assert result.data == items
        mock_db.add_all.assert_called_once_with(items)

    @pytest.mark.asyncio
    async def test_update_is_awaitable_like_create(
        self, grades: Repository, mock_db: AsyncMock
    ) -> None:
        """Test that update stages the entity and is awaited like the other staging calls."""
        grade = SchoolGrade(id="g1", name="Renamed")

        result = await grades.update(grade)

        assert result.succeeded is True
        assert result.data is grade
        mock_db.add.assert_called_once_with(grade)
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_missing_row(self, grades: Repository) -> None:
        """Test that deleting an unknown id fails with the entity name."""
        result = await grades.delete("g404")

        assert result.succeeded is False
        assert result.messages == ["No SchoolGrade with id 'g404' was found"]

    @pytest.mark.asyncio
    async def test_delete_existing_row(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that an existing row is staged for deletion."""
        grade = SchoolGrade(id="g1", name="Grade 1")
        mock_db.get.return_value = grade

        result = await grades.delete("g1")

        assert result.succeeded is True
        mock_db.delete.assert_awaited_once_with(grade)

    @pytest.mark.asyncio
    async def test_delete_where_counts_removed_rows(
        self, grades: Repository, mock_db: AsyncMock
    ) -> None:
        """Test that delete_where removes every match and reports the count."""
        rows = [SchoolGrade(id="g1", name="A"), SchoolGrade(id="g2", name="B")]
        mock_db.execute.return_value = rows_result(rows)

        result = await grades.delete_where(Specification(SchoolGrade))

        assert result.data == 2
        assert mock_db.delete.await_count == 2


class TestUnitOfWork:
    """Tests for flush and save."""

    @pytest.mark.asyncio
    async def test_save_commits(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that save commits the session."""
        result = await grades.save()

        assert result.succeeded is True
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_rolls_back_on_error(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that a commit failure is rolled back and reported verbatim."""
        mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        result = await grades.save()

        assert result.succeeded is False
        assert "duplicate key" in result.messages[0]
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_flush_rolls_back_on_error(self, grades: Repository, mock_db: AsyncMock) -> None:
        """Test that a flush failure is rolled back."""
        mock_db.flush.side_effect = IntegrityError("INSERT", {}, Exception("not null"))

        result = await grades.flush()

        assert result.succeeded is False
        mock_db.rollback.assert_awaited_once()
