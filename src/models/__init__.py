# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API models: result envelopes, page parameters and per-module DTOs.

Modules:
    common: Result and PaginatedResult envelopes.
    paging: PageParameters and module specific filters.
    messaging: Recipients and notification content.
    school: Grades, classes, teachers, learners and parents.
    activity: Age groups and activity groups with their members.
    discipline: Severity scales, actions and incidents.
    events: School events and parent consent.
    business: Listing tiers and business listings.
"""
