"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
Tokens are verified with decode_token from security.py and mapped to a
CurrentUser carrying one of the platform roles: admin, member or agent.

SECURITY NOTE:
- Development mode test tokens are ONLY accepted when PYTHON_ENV=development
- Production environments MUST set PYTHON_ENV=production to disable test tokens
"""

import logging
import os
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from migration_api.core.config import settings
from migration_api.core.security import decode_token

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
ROLE_AGENT = "agent"
VALID_ROLES = {ROLE_ADMIN, ROLE_MEMBER, ROLE_AGENT}

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token for authentication",
)


@dataclass
class CurrentUser:
    """
    Represents an authenticated platform user.

    Attributes:
        id: Integer id of the admin, member or agent record
        email: User's email address
        role: One of admin, member, agent
        name: Display name (optional)
    """

    id: int
    email: str
    role: str
    name: str | None = None

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, email={self.email}, role={self.role})"


def _is_dev_mode_safe() -> bool:
    """
    Check if development test tokens may be accepted.

    Requires settings.is_development, not settings.is_production, and a
    PYTHON_ENV variable that is neither production nor staging.
    """
    env_var = os.getenv("PYTHON_ENV", "").lower()

    is_safe = (
        settings.is_development
        and not settings.is_production
        and env_var != "production"
        and env_var != "staging"
    )

    if is_safe:
        logger.warning(
            "SECURITY: Development auth mode is ENABLED. This MUST NOT be used in production!"
        )

    return is_safe


_DEVELOPMENT_MODE = _is_dev_mode_safe()


def _parse_dev_token(token: str) -> CurrentUser | None:
    """Accept ``<role>-<id>`` test tokens such as ``admin-1`` or ``member-7``."""
    role, _, raw_id = token.partition("-")
    if role not in VALID_ROLES or not raw_id.isdigit():
        return None

    user_id = int(raw_id)
    return CurrentUser(
        id=user_id,
        email=f"{role}-{user_id}@collegemigration.dev",
        role=role,
        name=f"Test {role.title()}",
    )


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _validate_jwt_token(token: str) -> CurrentUser:
    """
    Validate JWT token and extract user claims.

    Raises:
        HTTPException 401: If token is invalid, expired or has bad claims
    """
    if _DEVELOPMENT_MODE:
        dev_user = _parse_dev_token(token)
        if dev_user is not None:
            logger.debug(f"Development mode: Using test token for {dev_user}")
            return dev_user

    payload = decode_token(token)

    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    try:
        raw_id = payload.get("sub")
        if raw_id is None:
            raise ValueError("Missing 'sub' claim in token")

        user_id = int(raw_id)
        role = str(payload.get("role", "")).lower()
        if role not in VALID_ROLES:
            raise ValueError(f"Unknown role '{role}'")

        token_type = payload.get("type", "access")
        if token_type != "access":
            logger.warning(f"Invalid token type: {token_type}")
            raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

        return CurrentUser(
            id=user_id,
            email=payload.get("email", ""),
            role=role,
            name=payload.get("name"),
        )

    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid token claims: {e}")
        raise _unauthorized(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e


def _require_role(user: CurrentUser, role: str) -> CurrentUser:
    if user.role != role:
        logger.warning(
            f"Access denied: User {user.id} ({user.email}) has role '{user.role}', "
            f"but '{role}' is required"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": f"{role.upper()}_ACCESS_REQUIRED",
                "message": f"{role.title()} access is required for this endpoint.",
            },
        )
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """FastAPI dependency returning any authenticated user."""
    return await _validate_jwt_token(credentials.credentials)


async def get_current_admin_user(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    FastAPI dependency for admin-only endpoints.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired
        HTTPException 403: If user is not an admin
    """
    return _require_role(user, ROLE_ADMIN)


async def get_current_member(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """FastAPI dependency for member endpoints."""
    return _require_role(user, ROLE_MEMBER)


async def get_current_agent(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """FastAPI dependency for agent endpoints."""
    return _require_role(user, ROLE_AGENT)


__all__ = [
    "CurrentUser",
    "ROLE_ADMIN",
    "ROLE_AGENT",
    "ROLE_MEMBER",
    "get_current_admin_user",
    "get_current_agent",
    "get_current_member",
    "get_current_user",
]
