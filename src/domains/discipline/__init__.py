# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Discipline domain package.

This package provides:
- DisciplinaryActionService: severity scales and disciplinary actions
- DisciplinaryIncidentService: incidents with parent notification fan-out
"""

from src.domains.discipline.actions import DisciplinaryActionService
from src.domains.discipline.incidents import (
    DisciplinaryIncidentService,
    incident_notification,
    parent_recipients,
)

__all__ = [
    "DisciplinaryActionService",
    "DisciplinaryIncidentService",
    "incident_notification",
    "parent_recipients",
]
