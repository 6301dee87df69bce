# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures shared by the domain service tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.infrastructure.database.models import (
    ActivityGroup,
    ActivityGroupTeamMember,
    AgeGroup,
    BusinessListing,
    DisciplinaryAction,
    DisciplinaryIncident,
    Learner,
    LearnerParent,
    ListingImage,
    ListingProduct,
    ListingService,
    ListingTier,
    Parent,
    ParentPermission,
    ParticipatingActivityGroup,
    SchoolClass,
    SchoolEvent,
    SchoolGrade,
    SeverityScale,
    Teacher,
)
from src.models.common import Result


@pytest.fixture
def schools(repository_factory) -> MagicMock:
    """Create a schools repository manager double."""
    manager = MagicMock()
    manager.school_grades = repository_factory(SchoolGrade)
    manager.school_classes = repository_factory(SchoolClass)
    manager.age_groups = repository_factory(AgeGroup)
    manager.teachers = repository_factory(Teacher)
    manager.learners = repository_factory(Learner)
    manager.learner_parents = repository_factory(LearnerParent)
    manager.parents = repository_factory(Parent)
    manager.parent_permissions = repository_factory(ParentPermission)
    manager.severity_scales = repository_factory(SeverityScale)
    manager.disciplinary_actions = repository_factory(DisciplinaryAction)
    manager.disciplinary_incidents = repository_factory(DisciplinaryIncident)
    manager.school_events = repository_factory(SchoolEvent)
    manager.activity_groups = repository_factory(ActivityGroup)
    manager.activity_group_team_members = repository_factory(ActivityGroupTeamMember)
    manager.participating_activity_groups = repository_factory(ParticipatingActivityGroup)
    return manager


@pytest.fixture
def business(repository_factory) -> MagicMock:
    """Create a business repository manager double."""
    manager = MagicMock()
    manager.listing_tiers = repository_factory(ListingTier)
    manager.listings = repository_factory(BusinessListing)
    manager.listing_products = repository_factory(ListingProduct)
    manager.listing_services = repository_factory(ListingService)
    manager.listing_images = repository_factory(ListingImage)
    return manager


@pytest.fixture
def cleaner() -> MagicMock:
    """Create a reference cleaner double that echoes the success message."""
    mock = MagicMock()
    mock.delete_aggregate = AsyncMock(
        side_effect=lambda root, entity_id, message: Result.success(messages=message)
    )
    mock.remove_references = AsyncMock(return_value=Result.success(0))
    return mock


@pytest.fixture
def sender() -> MagicMock:
    """Create a notification sender double."""
    mock = MagicMock()
    mock.enqueue_notifications = AsyncMock(
        side_effect=lambda recipients, notification: Result.success(len(recipients))
    )
    return mock
