# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for query specifications."""

from sqlalchemy.dialects import postgresql

from src.infrastructure.database.models import Learner, SchoolGrade
from src.infrastructure.database.specification import (
    PagedSpecification,
    Specification,
    parse_order_by,
    sortable_columns,
)
from src.models.paging import PageParameters


def compiled(statement) -> str:
    """Render a statement for the PostgreSQL dialect."""
    return str(statement.compile(dialect=postgresql.dialect()))


class TestParseOrderBy:
    """Tests for parse_order_by."""

    def test_field_names_are_normalized(self) -> None:
        """Test that PascalCase and snake_case resolve to one column."""
        columns = sortable_columns(Learner)

        pascal = parse_order_by("FirstName desc", columns)
        snake = parse_order_by("first_name desc", columns)

        assert len(pascal) == 1
        assert str(pascal[0]) == str(snake[0])
        assert "DESC" in str(pascal[0])

    def test_direction_defaults_to_ascending(self) -> None:
        """Test that a clause without direction sorts ascending."""
        clauses = parse_order_by("LastName", sortable_columns(Learner))

        assert "ASC" in str(clauses[0])

    def test_multiple_clauses_keep_order(self) -> None:
        """Test that clauses are returned in request order."""
        clauses = parse_order_by("LastName asc, FirstName desc", sortable_columns(Learner))

        assert [str(c) for c in clauses] == [
            "learners.last_name ASC",
            "learners.first_name DESC",
        ]

    def test_unknown_clauses_are_skipped(self) -> None:
        """Test that unknown fields and directions are ignored."""
        clauses = parse_order_by(
            "Nickname asc, FirstName sideways, LastName desc",
            sortable_columns(Learner),
        )

        assert [str(c) for c in clauses] == ["learners.last_name DESC"]

    def test_empty_order_by(self) -> None:
        """Test that no OrderBy means no ordering."""
        assert parse_order_by(None, sortable_columns(Learner)) == []
        assert parse_order_by("", sortable_columns(Learner)) == []


class TestSpecification:
    """Tests for Specification."""

    def test_by_id(self) -> None:
        """Test that by_id filters on the primary key."""
        sql = compiled(Specification.by_id(SchoolGrade, "g1").to_select())

        assert "WHERE school_grades.id = " in sql

    def test_paging_applies_offset_and_limit(self) -> None:
        """Test that a page window becomes OFFSET and LIMIT."""
        sql = compiled(Specification(SchoolGrade).apply_paging(20, 10).to_select())

        assert "LIMIT" in sql
        assert "OFFSET" in sql

    def test_count_ignores_paging_and_ordering(self) -> None:
        """Test that the count query only keeps the criteria."""
        spec = Specification(SchoolGrade, SchoolGrade.name == "Grade 1")
        spec.add_order_by(SchoolGrade.name.asc()).apply_paging(10, 10)

        sql = compiled(spec.to_count())

        assert "count(*)" in sql
        assert "school_grades.name = " in sql
        assert "LIMIT" not in sql
        assert "ORDER BY" not in sql


class TestPagedSpecification:
    """Tests for PagedSpecification."""

    def test_search_text_filters_case_insensitively(self) -> None:
        """Test that search text becomes ILIKE over the search columns."""
        spec = PagedSpecification(
            Learner,
            PageParameters(search_text="  sam "),
            search_columns=[Learner.first_name, Learner.last_name],
        )

        sql = compiled(spec.to_select())

        assert "learners.first_name ILIKE" in sql
        assert "learners.last_name ILIKE" in sql
        assert " OR " in sql

    def test_blank_search_text_is_ignored(self) -> None:
        """Test that whitespace search text adds no filter."""
        spec = PagedSpecification(
            Learner, PageParameters(search_text="   "), search_columns=[Learner.first_name]
        )

        assert spec.criteria == []

    def test_order_and_window(self) -> None:
        """Test that OrderBy and the page window are applied."""
        spec = PagedSpecification(
            SchoolGrade, PageParameters(page_nr=3, page_size=10, order_by="Name desc")
        )

        assert spec.skip == 20
        assert spec.take == 10
        assert "ORDER BY school_grades.name DESC" in compiled(spec.to_select())

    def test_invalid_sort_leaves_page_unsorted(self) -> None:
        """Test that an unknown sort field does not fail the query."""
        spec = PagedSpecification(SchoolGrade, PageParameters(order_by="Colour asc"))

        assert spec.ordering == []
        assert "ORDER BY" not in compiled(spec.to_select())
