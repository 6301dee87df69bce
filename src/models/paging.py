# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Page parameter models accepted by the paged endpoints."""

from enum import Enum

from pydantic import Field

from src.models.common import ApiModel


class SortDirection(str, Enum):
    """Direction reported by a data table header click."""

    NONE = "none"
    ASCENDING = "ascending"
    DESCENDING = "descending"


def order_by_from_table_state(sort_label: str | None, direction: SortDirection) -> str | None:
    """Build an ``OrderBy`` string from a data table's sort state.

    Table clients send the column label and the direction of the header
    click. An ascending click is sent to the API as ``"<label> desc"`` and a
    descending click as ``"<label> asc"``. This inversion is the convention
    the existing table clients rely on and is kept as is.

    Args:
        sort_label: Column label, for example ``"FirstName"``.
        direction: Direction of the header click.

    Returns:
        The ``OrderBy`` string, or None when no sort is requested.

    Example:
        >>> order_by_from_table_state("Name", SortDirection.ASCENDING)
        'Name desc'
    """
    if not sort_label or direction == SortDirection.NONE:
        return None
    if direction == SortDirection.ASCENDING:
        return f"{sort_label} desc"
    return f"{sort_label} asc"


class PageParameters(ApiModel):
    """Paging, sorting and free-text filter for a list query.

    Attributes:
        page_nr: 1-based page number.
        page_size: Maximum number of items per page.
        order_by: Comma separated ``"field asc|desc"`` clauses.
        search_text: Case-insensitive substring filter.
    """

    page_nr: int = Field(default=1, ge=1)
    page_size: int = Field(default=25, gt=0)
    order_by: str | None = None
    search_text: str | None = None

    @property
    def skip(self) -> int:
        return (self.page_nr - 1) * self.page_size


class LearnerPageParameters(PageParameters):
    """Learner query filters. Ages are derived from the identity number."""

    grade_id: str | None = None
    class_id: str | None = None
    parent_id: str | None = None
    activity_group_id: str | None = None
    min_age: int = Field(default=0, ge=0)
    max_age: int = Field(default=100, ge=0)


class ParentPageParameters(PageParameters):
    learner_id: str | None = None


class SchoolEventPageParameters(PageParameters):
    published_only: bool = False


class BusinessListingPageParameters(PageParameters):
    status: str | None = None
    tier_id: str | None = None
    user_id: str | None = None


class TeacherPageParameters(PageParameters):
    grade_id: str | None = None
    class_id: str | None = None


class SchoolClassPageParameters(PageParameters):
    grade_id: str | None = None


class ActivityGroupPageParameters(PageParameters):
    age_group_id: str | None = None
    teacher_id: str | None = None
    learner_id: str | None = None
