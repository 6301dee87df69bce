# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for JWT token utilities.

Tests the JWTManager class and token operations.
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from jose import jwt
from pydantic import SecretStr

from src.domains.auth.jwt import (
    InvalidTokenError,
    JWTManager,
    TokenExpiredError,
    TokenPayload,
)


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    return settings


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


class TestJWTManager:
    """Tests for JWTManager class."""

    def test_access_token_round_trip(self, jwt_manager: JWTManager) -> None:
        """Test that the claims of an access token are decoded."""
        token = jwt_manager.create_access_token(
            user_id="user-1",
            email="admin@school.org",
            roles=["Administrator"],
            permissions=["Permissions.Learner.View"],
        )

        payload = jwt_manager.decode_token(token, expected_type="access")

        assert isinstance(payload, TokenPayload)
        assert payload.sub == "user-1"
        assert payload.email == "admin@school.org"
        assert payload.roles == ["Administrator"]
        assert payload.permissions == ["Permissions.Learner.View"]
        assert payload.exp - payload.iat == 30 * 60

    def test_expired_token(self, jwt_manager: JWTManager) -> None:
        """Test that an expired token raises TokenExpiredError."""
        token = jwt_manager.create_access_token(user_id="user-1", expires_in=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError):
            jwt_manager.decode_token(token)

    def test_wrong_secret(self, jwt_manager: JWTManager, jwt_settings: MagicMock) -> None:
        """Test that a token signed with another key is rejected."""
        other = MagicMock()
        other.secret_key = SecretStr("another-secret")
        other.algorithm = jwt_settings.algorithm
        other.access_token_expire_minutes = 30
        token = JWTManager(other).create_access_token(user_id="user-1")

        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token(token)

    def test_wrong_token_type(self, jwt_manager: JWTManager, jwt_settings: MagicMock) -> None:
        """Test that a refresh token is not accepted as an access token."""
        token = jwt.encode(
            {"sub": "user-1", "type": "refresh", "exp": 4102444800, "iat": 0, "jti": "x"},
            jwt_settings.secret_key.get_secret_value(),
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="Expected access token"):
            jwt_manager.decode_token(token, expected_type="access")

    def test_missing_claims(self, jwt_manager: JWTManager, jwt_settings: MagicMock) -> None:
        """Test that a token without a subject is invalid."""
        token = jwt.encode(
            {"exp": 4102444800, "iat": 0, "jti": "x"},
            jwt_settings.secret_key.get_secret_value(),
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token(token)

    def test_verify_token(self, jwt_manager: JWTManager) -> None:
        """Test verify_token for valid and malformed tokens."""
        assert jwt_manager.verify_token(jwt_manager.create_access_token(user_id="u")) is True
        assert jwt_manager.verify_token("not-a-token") is False
