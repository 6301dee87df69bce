# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity group domain package.

This package provides:
- ActivityGroupQueryService: listing, paging, team members, notification list
- ActivityGroupCommandService: create, update, delete, team member changes
"""

from src.domains.activity_group.command import ActivityGroupCommandService
from src.domains.activity_group.query import ActivityGroupQueryService

__all__ = [
    "ActivityGroupCommandService",
    "ActivityGroupQueryService",
]
