"""Unit tests for auth backend (JWT, passwords and portal tokens)."""

from datetime import timedelta
from uuid import uuid4

import pytest

from costumetrack.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_portal_token,
    hash_password,
    verify_password,
)


pytestmark = pytest.mark.unit


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_bcrypt_hash(self):
        """hash_password should return a bcrypt hash."""
        hashed = hash_password("mysecretpassword")

        assert hashed != "mysecretpassword"
        assert hashed.startswith("$2b$")

    def test_verify_password(self):
        """verify_password should accept the right password only."""
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_access_token_round_trip(self):
        """decode_token should recover the user and type of an access token."""
        user_id = uuid4()

        data = decode_token(create_access_token(user_id))

        assert data is not None
        assert data.user_id == user_id
        assert data.type == "access"

    def test_refresh_token_type(self):
        """Refresh tokens should be distinguishable from access tokens."""
        data = decode_token(create_refresh_token(uuid4()))

        assert data is not None
        assert data.type == "refresh"

    def test_tokens_unique(self):
        """Two tokens for the same user should differ."""
        user_id = uuid4()

        assert create_refresh_token(user_id) != create_refresh_token(user_id)

    def test_decode_token_invalid(self):
        """decode_token should return None for a malformed token."""
        assert decode_token("invalid.token.here") is None

    def test_decode_token_expired(self):
        """decode_token should return None for an expired token."""
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None


class TestPortalTokens:
    def test_portal_token_is_long_hex(self):
        token = generate_portal_token()

        assert len(token) == 48
        int(token, 16)

    def test_portal_tokens_unique(self):
        assert generate_portal_token() != generate_portal_token()
