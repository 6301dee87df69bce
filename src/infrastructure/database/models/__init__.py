# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from src.infrastructure.database.models.base import Base, EntityMixin, TimestampMixin, new_id
from src.infrastructure.database.models.business import (
    BusinessListing,
    ListingImage,
    ListingProduct,
    ListingService,
    ListingTier,
    ReviewStatus,
)
from src.infrastructure.database.models.messaging import Message, MessageType, Notification
from src.infrastructure.database.models.school import (
    ActivityGroup,
    ActivityGroupTeamMember,
    AgeGroup,
    DisciplinaryAction,
    DisciplinaryIncident,
    EmergencyContact,
    Learner,
    LearnerContactNumber,
    LearnerEmailAddress,
    LearnerParent,
    Parent,
    ParentAddress,
    ParentContactNumber,
    ParentEmailAddress,
    ParentPermission,
    ParticipatingActivityGroup,
    SchoolClass,
    SchoolEvent,
    SchoolGrade,
    SeverityScale,
    Teacher,
)

__all__ = [
    "Base",
    "EntityMixin",
    "TimestampMixin",
    "new_id",
    # Schools
    "SchoolGrade",
    "SchoolClass",
    "AgeGroup",
    "Teacher",
    "ActivityGroup",
    "ActivityGroupTeamMember",
    "Parent",
    "ParentAddress",
    "ParentContactNumber",
    "ParentEmailAddress",
    "EmergencyContact",
    "Learner",
    "LearnerContactNumber",
    "LearnerEmailAddress",
    "LearnerParent",
    "SeverityScale",
    "DisciplinaryAction",
    "DisciplinaryIncident",
    "SchoolEvent",
    "ParticipatingActivityGroup",
    "ParentPermission",
    # Messaging
    "Notification",
    "Message",
    "MessageType",
    # Business
    "ListingTier",
    "BusinessListing",
    "ListingProduct",
    "ListingService",
    "ListingImage",
    "ReviewStatus",
]
