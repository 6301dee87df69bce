# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Messaging domain package.

This package provides the cleanup of notifications and messages that
refer to a deleted aggregate.
"""

from src.domains.messaging.cleaner import EntityReferenceCleaner

__all__ = ["EntityReferenceCleaner"]
