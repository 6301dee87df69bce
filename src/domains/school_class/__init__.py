# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School class domain package."""

from src.domains.school_class.service import SchoolClassService

__all__ = ["SchoolClassService"]
