# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Query specifications.

A specification describes *what* to load: filter criteria, eager-load
options, ordering and an optional page window. ``Repository`` turns it into
a ``SELECT`` for the rows and a ``SELECT count(*)`` for the total.

Example:
    spec = Specification(Learner, Learner.school_grade_id == grade_id)
    spec.add_include(selectinload(Learner.parents).selectinload(LearnerParent.parent))

    paged = PagedSpecification(
        SchoolGrade,
        PageParameters(page_nr=2, page_size=10, order_by="Name desc"),
        search_columns=[SchoolGrade.name],
    )
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, Self, TypeVar

from sqlalchemy import ColumnElement, Select, func, inspect, or_, select
from sqlalchemy.orm.interfaces import ORMOption

from src.models.paging import PageParameters

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

_DIRECTIONS = {"asc": "asc", "ascending": "asc", "desc": "desc", "descending": "desc"}


def _normalize(field: str) -> str:
    return field.replace("_", "").replace(".", "").lower()


def sortable_columns(model: type) -> dict[str, Any]:
    """Map every column attribute of ``model`` by its normalized name.

    ``first_name``, ``FirstName`` and ``firstname`` all resolve to the same
    column.
    """
    return {_normalize(attr.key): getattr(model, attr.key) for attr in inspect(model).column_attrs}


def parse_order_by(order_by: str | None, columns: Mapping[str, Any]) -> list[ColumnElement[Any]]:
    """Translate an ``OrderBy`` string into ORDER BY clauses.

    Clauses naming an unknown field or an unknown direction are skipped, so
    a malformed sort leaves the query unsorted rather than failing it.

    Args:
        order_by: Comma separated ``"field [asc|desc]"`` clauses.
        columns: Normalized field name to column mapping.

    Returns:
        ORDER BY clauses in request order.
    """
    if not order_by:
        return []

    clauses: list[ColumnElement[Any]] = []
    for raw in order_by.split(","):
        parts = raw.split()
        if not parts or len(parts) > 2:
            continue

        column = columns.get(_normalize(parts[0]))
        direction = _DIRECTIONS.get(parts[1].lower()) if len(parts) == 2 else "asc"
        if column is None or direction is None:
            logger.debug("Ignoring unsortable clause %r", raw.strip())
            continue

        clauses.append(column.desc() if direction == "desc" else column.asc())
    return clauses


class Specification(Generic[ModelT]):
    """Composable predicate, include and ordering description for one model.

    Attributes:
        model: Mapped class queried.
        criteria: WHERE clauses, combined with AND.
        includes: Loader options such as ``selectinload(...)``.
        ordering: ORDER BY clauses.
        skip: OFFSET, None for no offset.
        take: LIMIT, None for no limit.
    """

    def __init__(self, model: type[ModelT], *criteria: ColumnElement[bool]) -> None:
        self.model = model
        self.criteria: list[ColumnElement[bool]] = list(criteria)
        self.includes: list[ORMOption] = []
        self.ordering: list[ColumnElement[Any]] = []
        self.skip: int | None = None
        self.take: int | None = None

    @classmethod
    def by_id(cls, model: type[ModelT], entity_id: str) -> "Specification[ModelT]":
        return cls(model, model.id == entity_id)  # type: ignore[attr-defined]

    def where(self, *criteria: ColumnElement[bool]) -> Self:
        self.criteria.extend(criteria)
        return self

    def add_include(self, *options: ORMOption) -> Self:
        self.includes.extend(options)
        return self

    def add_order_by(self, *clauses: ColumnElement[Any]) -> Self:
        self.ordering.extend(clauses)
        return self

    def apply_paging(self, skip: int, take: int) -> Self:
        self.skip = skip
        self.take = take
        return self

    def to_select(self) -> Select[Any]:
        """Build the row query."""
        stmt = select(self.model)
        if self.criteria:
            stmt = stmt.where(*self.criteria)
        if self.includes:
            stmt = stmt.options(*self.includes)
        if self.ordering:
            stmt = stmt.order_by(*self.ordering)
        if self.skip:
            stmt = stmt.offset(self.skip)
        if self.take is not None:
            stmt = stmt.limit(self.take)
        return stmt

    def to_count(self) -> Select[Any]:
        """Build the total count query. Paging and ordering are ignored."""
        inner = select(self.model)
        if self.criteria:
            inner = inner.where(*self.criteria)
        return select(func.count()).select_from(inner.subquery())


class PagedSpecification(Specification[ModelT]):
    """Specification driven by ``PageParameters``.

    Applies the free-text filter over ``search_columns``, the parsed
    ``OrderBy`` over ``sortable`` (all model columns by default) and the
    page window. Without a valid sort the page is returned unsorted.
    """

    def __init__(
        self,
        model: type[ModelT],
        parameters: PageParameters,
        *criteria: ColumnElement[bool],
        search_columns: Sequence[Any] = (),
        sortable: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(model, *criteria)
        self.parameters = parameters

        search_text = (parameters.search_text or "").strip()
        if search_text and search_columns:
            pattern = f"%{search_text}%"
            self.where(or_(*(column.ilike(pattern) for column in search_columns)))

        columns = sortable if sortable is not None else sortable_columns(model)
        self.add_order_by(*parse_order_by(parameters.order_by, columns))

        self.apply_paging(parameters.skip, parameters.page_size)
