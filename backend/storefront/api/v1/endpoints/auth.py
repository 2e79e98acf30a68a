"""
Auth API: admin sign in, sign out, current session, password update.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.core.security import AdminSession, get_current_session
from storefront.schemas.auth import (
    AuthResponse,
    PasswordUpdateRequest,
    SessionResponse,
    SessionUser,
    SignInRequest,
)
from storefront.schemas.common import MessageResponse
from storefront.services.supabase_service import SupabaseService, get_supabase_service

logger = logging.getLogger(__name__)
router = APIRouter()

MIN_PASSWORD_LENGTH = 6


@router.post("/signin", response_model=AuthResponse)
async def signin(
    request: SignInRequest,
    supabase: SupabaseService = Depends(get_supabase_service),
):
    """
    Sign in an admin.

    - **email**: Registered email address (trimmed, lower-cased)
    - **password**: Admin password
    """
    result = await supabase.sign_in(
        email=request.email,
        password=request.password,
    )

    session = result["session"]
    user = result["user"]
    logger.info("Login successful, user: %s", user.email)

    return AuthResponse(
        access_token=session.access_token,
        token_type="bearer",
        expires_in=session.expires_in,
        expires_at=session.expires_at,
        refresh_token=session.refresh_token,
        user=SessionUser(
            id=str(user.id),
            email=user.email,
            created_at=user.created_at,
        ),
    )


@router.post("/signout", response_model=MessageResponse)
async def signout(
    session: AdminSession = Depends(get_current_session),
    supabase: SupabaseService = Depends(get_supabase_service),
):
    """
    Sign out the current admin.
    Requires authentication.
    """
    await supabase.sign_out(access_token=session.access_token)

    return MessageResponse(
        message="Successfully signed out",
        success=True,
    )


@router.get("/me", response_model=SessionResponse)
async def get_current_admin(
    session: AdminSession = Depends(get_current_session),
):
    """Current admin session. Used by admin pages to gate on mount."""
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        expires_at=session.expires_at,
    )


@router.post("/password-update", response_model=MessageResponse)
async def update_password(
    request: PasswordUpdateRequest,
    session: AdminSession = Depends(get_current_session),
    supabase: SupabaseService = Depends(get_supabase_service),
):
    """
    Change the admin password.
    Requires authentication.

    - **current_password**: Re-verified against the auth service
    - **new_password** / **confirm_password**: Must match, minimum 6 characters
    """
    if not request.current_password or not request.new_password or not request.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please fill in all fields")
    if request.new_password != request.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New passwords do not match")
    if len(request.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    if not session.email or not await supabase.check_password(session.email, request.current_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid current password")

    await supabase.update_password(
        user_id=session.user_id,
        new_password=request.new_password,
    )

    return MessageResponse(
        message="Password updated successfully!",
        success=True,
    )
