"""
Legacy admin endpoints kept at their original paths (outside /api/v1).

/api/admin-login checks a bcrypt hash in admin_users and only answers ok/not ok;
it does not create a session. Admin pages authenticate through /api/v1/auth.
/api/admin/accounts inserts a listing with service-role privileges behind a
shared secret header.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from storefront.core.config import get_settings
from storefront.core.security import require_admin_secret, verify_password
from storefront.models.admin_user import AdminUserInDB
from storefront.schemas.account import (
    AccountCreate,
    LegacyAccountInsertRequest,
    LegacyAccountInsertResponse,
)
from storefront.schemas.auth import LegacyLoginRequest, LegacyLoginResponse
from storefront.services.supabase_service import SupabaseService, get_supabase_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["legacy"])

INVALID_CREDENTIALS = "Invalid credentials"


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={**extra, "error": message})


@router.post("/admin-login", response_model=LegacyLoginResponse)
async def admin_login(
    body: LegacyLoginRequest,
    supabase: SupabaseService = Depends(get_supabase_service),
):
    settings = get_settings()
    if not settings.has_service_role:
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server misconfigured. Set SUPABASE_SERVICE_KEY and SUPABASE_URL.",
        )
    if not body.email or not body.password:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing email or password")

    try:
        row = await supabase.get_admin_user(body.email)
        if not row:
            return _error(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS, ok=False)
        admin = AdminUserInDB.model_validate(row)
        if not verify_password(body.password, admin.password_hash):
            return _error(status.HTTP_401_UNAUTHORIZED, INVALID_CREDENTIALS, ok=False)
    except Exception as e:
        logger.exception("admin-login error: %s", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return LegacyLoginResponse(ok=True)


@router.post(
    "/admin/accounts",
    response_model=LegacyAccountInsertResponse,
    dependencies=[Depends(require_admin_secret)],
)
async def admin_insert_account(
    body: LegacyAccountInsertRequest,
    supabase: SupabaseService = Depends(get_supabase_service),
):
    if not body.account:
        return _error(status.HTTP_400_BAD_REQUEST, "Missing account payload")
    items = body.account if isinstance(body.account, list) else [body.account]
    try:
        rows = [AccountCreate.model_validate(item).model_dump() for item in items]
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"])
        return _error(status.HTTP_400_BAD_REQUEST, f"Invalid account payload: {field}: {first['msg']}")
    try:
        data = await supabase.insert_account(rows if isinstance(body.account, list) else rows[0])
    except HTTPException as e:
        logger.error("Service insert error: %s", e.detail)
        return _error(e.status_code, str(e.detail))
    return LegacyAccountInsertResponse(ok=True, data=data)
