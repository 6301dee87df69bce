# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learner domain package.

This package provides:
- LearnerQueryService: paging, lookup by id or email, parent listing
- LearnerCommandService: create, update, parent reconciliation, delete
"""

from src.domains.learner.command import LearnerCommandService
from src.domains.learner.query import LearnerQueryService

__all__ = [
    "LearnerCommandService",
    "LearnerQueryService",
]
