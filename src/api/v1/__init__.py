# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    school_grades: School grade endpoints (CRUD, notification recipients).
    school_classes: School class endpoints (CRUD, notification recipients).
    teachers: Teacher endpoints (CRUD, email lookup, notification recipients).
    age_groups: Age group endpoints.
    activity_groups: Activity group endpoints (CRUD, team members, recipients).
    learners: Learner endpoints (CRUD, parent links, email lookup).
    parents: Parent endpoints (CRUD, profile, learner links).
    disciplinary_actions: Severity scale and disciplinary action endpoints.
    disciplinary_incidents: Incident endpoints with parent notification.
    school_events: School event and parent consent endpoints.
    listing_tiers: Listing tier endpoints.
    business_directory: Business listing endpoints (moderation, items, images).
"""

from fastapi import APIRouter

from src.api.v1 import (
    activity_groups,
    age_groups,
    business_directory,
    disciplinary_actions,
    disciplinary_incidents,
    learners,
    listing_tiers,
    parents,
    school_events,
    school_classes,
    school_grades,
    teachers,
)

# Create the main API router
router = APIRouter(prefix="/api")

# Include domain routers
router.include_router(school_grades.router, prefix="/schoolGrades", tags=["School Grades"])
router.include_router(school_classes.router, prefix="/schoolclasses", tags=["School Classes"])
router.include_router(teachers.router, prefix="/teachers", tags=["Teachers"])
router.include_router(age_groups.router, prefix="/agegroups", tags=["Age Groups"])
router.include_router(
    activity_groups.router, prefix="/activitygroups", tags=["Activity Groups"]
)
router.include_router(learners.router, prefix="/learners", tags=["Learners"])
router.include_router(parents.router, prefix="/parents", tags=["Parents"])
router.include_router(
    disciplinary_actions.router, prefix="/discipline/actions", tags=["Discipline"]
)
router.include_router(
    disciplinary_incidents.router, prefix="/discipline/incidents", tags=["Discipline"]
)
router.include_router(school_events.router, prefix="/schoolevents", tags=["School Events"])
router.include_router(listing_tiers.router, prefix="/listingtiers", tags=["Listing Tiers"])
router.include_router(
    business_directory.router, prefix="/businessdirectory", tags=["Business Directory"]
)

__all__ = ["router"]
