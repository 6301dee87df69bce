# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result envelopes shared by every service and endpoint.

Services never raise for expected failures (not found, validation,
persistence). They return a ``Result`` whose ``succeeded`` flag is
authoritative and whose ``messages`` carry the reason verbatim from the
layer that produced it. Endpoints return the envelope with HTTP 200.

Wire format uses PascalCase keys:

    {"Succeeded": true, "Messages": [], "Data": {...}}
    {"Succeeded": true, "Messages": [], "Data": [...], "TotalCount": 42, "PageNr": 1, "PageSize": 25}

Example:
    >>> result = Result[int].success(5, "Counted")
    >>> result.succeeded, result.data, result.messages
    (True, 5, ['Counted'])
    >>> Result[int].fail("Nope").data is None
    True
"""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal
from sqlalchemy import inspect

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for wire models: PascalCase aliases, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        from_attributes=True,
    )


def _as_messages(messages: str | Iterable[str] | None) -> list[str]:
    if messages is None:
        return []
    if isinstance(messages, str):
        return [messages]
    return [message for message in messages if message]


class Result(ApiModel, Generic[T]):
    """Tagged success/failure envelope.

    Attributes:
        succeeded: Whether the operation succeeded.
        messages: Human readable messages, failure reasons on failure.
        data: Payload, always None on failure.
    """

    succeeded: bool = False
    messages: list[str] = Field(default_factory=list)
    data: T | None = None

    @classmethod
    def success(
        cls,
        data: T | None = None,
        messages: str | Iterable[str] | None = None,
    ) -> "Result[T]":
        return cls(succeeded=True, data=data, messages=_as_messages(messages))

    @classmethod
    def fail(cls, messages: str | Iterable[str] | None = None) -> "Result[T]":
        return cls(succeeded=False, data=None, messages=_as_messages(messages))


class PaginatedResult(ApiModel, Generic[T]):
    """Envelope for one page of a query.

    Attributes:
        data: Items on this page, at most ``page_size`` entries.
        total_count: Number of items matching the query across all pages.
        page_nr: 1-based page number.
        page_size: Requested page size.
    """

    succeeded: bool = False
    messages: list[str] = Field(default_factory=list)
    data: list[T] = Field(default_factory=list)
    total_count: int = 0
    page_nr: int = 1
    page_size: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @classmethod
    def success(
        cls,
        data: list[T],
        total_count: int,
        page_nr: int,
        page_size: int,
    ) -> "PaginatedResult[T]":
        return cls(
            succeeded=True,
            data=data,
            total_count=total_count,
            page_nr=page_nr,
            page_size=page_size,
        )

    @classmethod
    def fail(cls, messages: str | Iterable[str] | None = None) -> "PaginatedResult[T]":
        return cls(succeeded=False, messages=_as_messages(messages))


def loaded(entity: Any, attribute: str, default: Any = None) -> Any:
    """Read ``attribute`` only if it is already loaded on ``entity``.

    Async sessions cannot lazy load, so DTO builders use this for
    relationships that a query may or may not have eagerly loaded.
    """
    state = inspect(entity, raiseerr=False)
    if state is not None and attribute in state.unloaded:
        return default
    value = getattr(entity, attribute, default)
    return default if value is None else value
