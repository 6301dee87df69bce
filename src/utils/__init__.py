# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for SchoolsHub.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations and identity-number dates
"""

from src.utils.datetime import (
    age_from_id_number,
    date_of_birth_from_id_number,
    days_from_now,
    ensure_utc,
    utc_now,
    utc_today,
)
from src.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "utc_today",
    "ensure_utc",
    "days_from_now",
    "date_of_birth_from_id_number",
    "age_from_id_number",
]
