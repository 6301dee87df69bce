# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher domain package."""

from src.domains.teacher.service import TeacherService, teacher_recipient

__all__ = ["TeacherService", "teacher_recipient"]
