"""
Unit tests for token to user resolution.
"""

from unittest.mock import patch

import pytest
from fastapi import HTTPException

from migration_api.core import auth
from migration_api.core.auth import CurrentUser, get_current_admin_user

AUTH = "migration_api.core.auth"


class TestDevTokens:
    """Tests for development token parsing."""

    @pytest.mark.parametrize(
        ("token", "role", "user_id"),
        [("admin-1", "admin", 1), ("member-7", "member", 7), ("agent-3", "agent", 3)],
    )
    def test_parses_role_and_id(self, token, role, user_id):
        """Dev tokens carry the role and numeric id."""
        user = auth._parse_dev_token(token)

        assert user.role == role
        assert user.id == user_id

    @pytest.mark.parametrize("token", ["student-1", "admin-", "member-x", "eyJhbGciOi"])
    def test_rejects_other_tokens(self, token):
        """Anything outside role-id form is not a dev token."""
        assert auth._parse_dev_token(token) is None


class TestJwtValidation:
    """Tests for JWT claim validation."""

    @pytest.mark.asyncio
    async def test_valid_claims(self):
        """Valid access claims resolve to a CurrentUser with a lowercased role."""
        payload = {"sub": "7", "role": "Member", "email": "ada@example.com", "type": "access"}

        with (
            patch(f"{AUTH}._DEVELOPMENT_MODE", False),
            patch(f"{AUTH}.decode_token", return_value=payload),
        ):
            user = await auth._validate_jwt_token("token")

        assert user == CurrentUser(id=7, email="ada@example.com", role="member")

    @pytest.mark.asyncio
    async def test_invalid_token(self):
        """An undecodable token gives 401."""
        with (
            patch(f"{AUTH}._DEVELOPMENT_MODE", False),
            patch(f"{AUTH}.decode_token", return_value=None),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await auth._validate_jwt_token("token")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"role": "admin"},
            {"sub": "abc", "role": "admin"},
            {"sub": "1", "role": "superuser"},
        ],
    )
    async def test_bad_claims(self, payload):
        """Missing or malformed subject and unknown roles are rejected."""
        with (
            patch(f"{AUTH}._DEVELOPMENT_MODE", False),
            patch(f"{AUTH}.decode_token", return_value=payload),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await auth._validate_jwt_token("token")

        assert exc_info.value.detail["error"] == "INVALID_TOKEN_CLAIMS"

    @pytest.mark.asyncio
    async def test_refresh_token_rejected(self):
        """Refresh tokens cannot be used as access tokens."""
        payload = {"sub": "1", "role": "admin", "type": "refresh"}

        with (
            patch(f"{AUTH}._DEVELOPMENT_MODE", False),
            patch(f"{AUTH}.decode_token", return_value=payload),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await auth._validate_jwt_token("token")

        assert exc_info.value.detail["error"] == "INVALID_TOKEN_TYPE"


class TestRoleGuards:
    """Tests for role-specific dependencies."""

    @pytest.mark.asyncio
    async def test_member_cannot_use_admin_endpoints(self):
        """Members get 403 from the admin guard."""
        member = CurrentUser(id=7, email="ada@example.com", role="member")

        with pytest.raises(HTTPException) as exc_info:
            await get_current_admin_user(member)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail["error"] == "ADMIN_ACCESS_REQUIRED"
