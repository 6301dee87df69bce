# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School grade domain package."""

from src.domains.school_grade.service import SchoolGradeService

__all__ = ["SchoolGradeService"]
