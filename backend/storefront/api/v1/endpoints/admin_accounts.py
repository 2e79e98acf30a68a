"""
Admin account endpoints.
CRUD, image upload/replace/remove, and the deletion grace period:
mark for deletion, restore, delete now, cleanup expired.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from storefront.core.config import get_settings
from storefront.core.security import AdminSession, get_current_session
from storefront.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AdminAccountResponse,
    ImageUploadResponse,
)
from storefront.schemas.common import PaginatedResponse
from storefront.services.account_lifecycle import (
    CleanupSummary,
    ListingState,
    PurgeResult,
    listing_state,
    time_remaining,
)
from storefront.services.account_service import AccountService, get_account_service
from storefront.services.image_service import ImageFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/accounts", tags=["admin-accounts"])


def _admin_row(row: dict[str, Any], accounts: AccountService) -> AdminAccountResponse:
    """Attach lifecycle state and countdown to a stored row."""
    state = listing_state(row)
    remaining = None
    if state == ListingState.PENDING_DELETION:
        remaining = time_remaining(row.get("deleted_at"), accounts.clock(), accounts.grace)
    return AdminAccountResponse.model_validate(
        {**row, "state": state, "time_remaining": remaining}
    )


async def _read_images(files: list[UploadFile], accounts: AccountService) -> list[ImageFile]:
    return [await ImageFile.from_upload(f, accounts.max_image_bytes) for f in files]


@router.get(
    "",
    response_model=PaginatedResponse[AdminAccountResponse],
    summary="List accounts (admin)",
)
async def list_accounts(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    page_size: int | None = Query(None, ge=1, le=100, description="Items per page"),
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> PaginatedResponse[AdminAccountResponse]:
    size = page_size or get_settings().admin_page_size
    rows, total = await accounts.list_accounts(page=page, page_size=size)
    return PaginatedResponse[AdminAccountResponse](
        items=[_admin_row(r, accounts) for r in rows],
        total=total,
        page=page,
        page_size=size,
    )


@router.post(
    "",
    response_model=AdminAccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create account",
)
async def create_account(
    body: AccountCreate,
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    row = await accounts.create(body.model_dump())
    return _admin_row(row, accounts)


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload images for the account form",
    description="Every file must be an image of at most 5MB; one bad file rejects the batch.",
)
async def upload_images(
    files: list[UploadFile] = File(...),
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> ImageUploadResponse:
    images = await _read_images(files, accounts)
    urls = accounts.upload_images(images)
    return ImageUploadResponse(urls=urls)


@router.post(
    "/cleanup",
    response_model=CleanupSummary,
    summary="Purge expired accounts",
    description="Deletes listings marked for deletion more than 24 hours ago, with their images.",
)
async def cleanup_expired(
    accounts: AccountService = Depends(get_account_service),
    session: AdminSession = Depends(get_current_session),
) -> CleanupSummary:
    logger.info("Cleanup triggered by %s", session.email or session.user_id)
    return await accounts.cleanup_expired()


@router.put("/{account_id}", response_model=AdminAccountResponse, summary="Update account")
async def update_account(
    account_id: str,
    body: AccountUpdate,
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    row = await accounts.update(account_id, body.to_row())
    return _admin_row(row, accounts)


@router.post(
    "/{account_id}/mark-for-deletion",
    response_model=AdminAccountResponse,
    summary="Mark account for deletion",
    description="Shows the account as sold out; it can be restored for 24 hours.",
)
async def mark_for_deletion(
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    row = await accounts.mark_for_deletion(account_id)
    return _admin_row(row, accounts)


@router.post("/{account_id}/restore", response_model=AdminAccountResponse, summary="Restore account")
async def restore_account(
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    row = await accounts.restore(account_id)
    return _admin_row(row, accounts)


@router.delete(
    "/{account_id}",
    response_model=PurgeResult,
    summary="Delete account permanently",
    description="Removes stored images (best effort) and the row. Cannot be undone.",
)
async def delete_account_now(
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> PurgeResult:
    return await accounts.delete_now(account_id)


@router.post(
    "/{account_id}/images",
    response_model=AdminAccountResponse,
    summary="Append images to an account",
)
async def add_images(
    account_id: str,
    files: list[UploadFile] = File(...),
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    images = await _read_images(files, accounts)
    row = await accounts.add_images(account_id, images)
    return _admin_row(row, accounts)


@router.put(
    "/{account_id}/images/{index}",
    response_model=AdminAccountResponse,
    summary="Replace one image of an account",
)
async def replace_image(
    account_id: str,
    index: int,
    file: UploadFile = File(...),
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    image = await ImageFile.from_upload(file, accounts.max_image_bytes)
    row = await accounts.replace_image(account_id, index, image)
    return _admin_row(row, accounts)


@router.delete(
    "/{account_id}/images/{index}",
    response_model=AdminAccountResponse,
    summary="Remove one image from an account",
    description="Only edits the image list; the stored file is removed when the account is purged.",
)
async def remove_image(
    account_id: str,
    index: int,
    accounts: AccountService = Depends(get_account_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdminAccountResponse:
    row = await accounts.remove_image(account_id, index)
    return _admin_row(row, accounts)
