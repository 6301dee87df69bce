# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School event domain package.

This package provides:
- SchoolEventQueryService: event paging and lookup
- SchoolEventCommandService: event create, update and cascading delete
- ParentPermissionService: parent consent for event participation
"""

from src.domains.school_event.command import SchoolEventCommandService
from src.domains.school_event.permissions import ParentPermissionService
from src.domains.school_event.query import SchoolEventQueryService

__all__ = [
    "ParentPermissionService",
    "SchoolEventCommandService",
    "SchoolEventQueryService",
]
