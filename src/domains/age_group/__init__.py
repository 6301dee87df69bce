# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Age group domain package."""

from src.domains.age_group.service import AgeGroupService

__all__ = ["AgeGroupService"]
