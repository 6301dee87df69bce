# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for SchoolsHub.

This package contains domain services that encapsulate business logic.
Each domain module provides query and command services that work through
the repository managers and return result envelopes.

Domains:
    auth: JWT tokens and permission names.
    messaging: Removal of notifications and messages tied to an entity.
    school_grade: Grades and grade broadcast recipients.
    learner: Learners and their parent links.
    parent: Parents, profiles and learner links.
    discipline: Severity scales, actions and incidents.
    school_event: Events, participating groups and parent consent.
    business: Listing tiers, listings, items and images.
"""
