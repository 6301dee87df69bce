# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent domain package.

This package provides:
- ParentQueryService: paging, lookup by id or email, existence checks
- ParentCommandService: create, update, profile update, learner links, delete
"""

from src.domains.parent.command import ParentCommandService
from src.domains.parent.query import ParentQueryService

__all__ = [
    "ParentCommandService",
    "ParentQueryService",
]
