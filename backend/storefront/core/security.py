"""
Security utilities: admin session resolution, shared-secret guard, legacy password hashes.
"""

import hmac
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import bcrypt
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from storefront.core.config import get_settings
from storefront.services.supabase_service import SupabaseService, get_supabase_service

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
AUDIENCE = "authenticated"

security = HTTPBearer(auto_error=False)


class AdminSession(BaseModel):
    """The signed-in admin behind a request. Passed explicitly to handlers."""
    user_id: str
    email: str | None = None
    access_token: str
    expires_at: datetime | None = None


def decode_token(token: str, secret: str) -> Optional[dict[str, Any]]:
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM], audience=AUDIENCE)
    except JWTError:
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    supabase: SupabaseService = Depends(get_supabase_service),
) -> AdminSession:
    """Dependency: require a signed-in admin. Raises 401 if missing or invalid."""
    if not credentials:
        raise _unauthorized("Not authenticated")
    token = credentials.credentials
    secret = get_settings().SUPABASE_JWT_SECRET

    if secret:
        payload = decode_token(token, secret)
        if not payload or not payload.get("sub"):
            raise _unauthorized("Invalid or expired token")
        exp = payload.get("exp")
        return AdminSession(
            user_id=str(payload["sub"]),
            email=payload.get("email"),
            access_token=token,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
        )

    try:
        user = await supabase.verify_token(token)
    except HTTPException as e:
        raise _unauthorized(e.detail) from e
    return AdminSession(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=token,
    )


async def require_admin_secret(
    x_admin_secret: Optional[str] = Header(default=None, alias="x-admin-secret"),
) -> None:
    """Dependency: shared-secret header for the privileged insert endpoint."""
    settings = get_settings()
    if not settings.has_service_role:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfigured: missing Supabase keys",
        )
    expected = settings.ADMIN_API_SECRET
    if not expected or not x_admin_secret or not hmac.compare_digest(x_admin_secret, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Malformed password hash in admin_users")
        return False
