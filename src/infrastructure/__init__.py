# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Infrastructure layer.

This package contains:
- Database connections, repositories and specifications (PostgreSQL)
- In-app notification delivery
- Media storage for uploaded files
"""
