# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for SchoolsHub.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.cascade.atomic_deletes
    True
"""

from src.core.config.settings import (
    APISettings,
    CascadeSettings,
    CORSSettings,
    DatabaseSettings,
    JWTSettings,
    ListingSettings,
    MediaSettings,
    RateLimitSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "JWTSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
    "CascadeSettings",
    "MediaSettings",
    "ListingSettings",
]
