# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain.

Token validation and the permission codes checked by the API.
"""

from src.domains.auth.jwt import (
    InvalidTokenError,
    JWTError,
    JWTManager,
    TokenExpiredError,
    TokenPayload,
)
from src.domains.auth.permissions import Permissions

__all__ = [
    "InvalidTokenError",
    "JWTError",
    "JWTManager",
    "Permissions",
    "TokenExpiredError",
    "TokenPayload",
]
