# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests

Entity factories build transient ORM instances with every non-nullable
flag set, since column defaults only apply on insert.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.infrastructure.database.models import (
    Learner,
    LearnerEmailAddress,
    LearnerParent,
    Parent,
    ParentEmailAddress,
    new_id,
)
from src.models.common import Result


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_environment() -> dict[str, str]:
    """Provide test environment variables.

    Returns:
        Dictionary of environment variables for testing.
    """
    return {
        "ENVIRONMENT": "test",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "DB_HOST": "localhost",
        "DB_NAME": "schoolshub_test",
        "JWT_SECRET_KEY": "test-secret-key-for-testing-only",
        "JWT_ALGORITHM": "HS256",
        "MEDIA_ROOT": "/tmp/schoolshub-media",
    }


# =============================================================================
# Repository Fixtures
# =============================================================================


def mock_repository(model: type | None = None) -> MagicMock:
    """Create a repository double whose methods succeed by default.

    Args:
        model: Mapped class reported by ``model`` and ``entity_name``.

    Returns:
        MagicMock with async repository methods returning ``Result``.
    """
    repository = MagicMock()
    repository.model = model
    repository.entity_name = model.__name__ if model else "Entity"
    repository.list = AsyncMock(return_value=Result.success([]))
    repository.list_all = AsyncMock(return_value=Result.success([]))
    repository.first_or_default = AsyncMock(return_value=Result.success(None))
    repository.count = AsyncMock(return_value=Result.success(0))
    repository.create = AsyncMock(side_effect=lambda entity: Result.success(entity))
    repository.create_range = AsyncMock(side_effect=lambda items: Result.success(list(items)))
    repository.update = AsyncMock(side_effect=lambda entity: Result.success(entity))
    repository.delete = AsyncMock(return_value=Result.success())
    repository.remove = AsyncMock(return_value=Result.success())
    repository.delete_where = AsyncMock(return_value=Result.success(0))
    repository.flush = AsyncMock(return_value=Result.success())
    repository.save = AsyncMock(return_value=Result.success())
    repository.rollback = AsyncMock()
    return repository


# =============================================================================
# Entity Factories
# =============================================================================


def make_parent(**overrides: Any) -> Parent:
    """Build a transient parent with notification flags set."""
    values: dict[str, Any] = {
        "id": new_id(),
        "first_name": "Jane",
        "last_name": "Doe",
        "receive_notifications": True,
        "receive_messages": True,
        "receive_emails": True,
        "require_consent": False,
    }
    emails = overrides.pop("emails", [])
    values.update(overrides)
    parent = Parent(**values)
    parent.email_addresses = [
        ParentEmailAddress(email=email, is_default=index == 0) for index, email in enumerate(emails)
    ]
    return parent


def make_learner(*parents: Parent, **overrides: Any) -> Learner:
    """Build a transient learner linked to ``parents``."""
    values: dict[str, Any] = {
        "id": new_id(),
        "first_name": "Sam",
        "last_name": "Doe",
        "receive_notifications": True,
        "receive_messages": True,
        "receive_emails": True,
    }
    emails = overrides.pop("emails", [])
    values.update(overrides)
    learner = Learner(**values)
    learner.email_addresses = [
        LearnerEmailAddress(email=email, is_default=index == 0) for index, email in enumerate(emails)
    ]
    learner.parents = [
        LearnerParent(
            learner_id=learner.id,
            parent_id=parent.id,
            parent=parent,
            parent_consent_required=False,
        )
        for parent in parents
    ]
    return learner


@pytest.fixture
def repository_factory():
    """Provide ``mock_repository`` to tests."""
    return mock_repository


@pytest.fixture
def parent_factory():
    """Provide ``make_parent`` to tests."""
    return make_parent


@pytest.fixture
def learner_factory():
    """Provide ``make_learner`` to tests."""
    return make_learner
