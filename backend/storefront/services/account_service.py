"""
Account listings: CRUD, image array edits and the deletion grace-period workflow.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status

from storefront.core.config import get_settings
from storefront.services.account_lifecycle import (
    CleanupSummary,
    PurgeOutcome,
    PurgeResult,
    cleanup_cutoff,
    is_expired,
    mark_for_deletion_fields,
    restore_fields,
    to_iso,
    utcnow,
)
from storefront.services.image_service import (
    ImageFile,
    filenames_from_urls,
    make_object_key,
    upload_all,
    validate_image,
    validate_images,
)
from storefront.services.supabase_service import (
    StorageRemovalError,
    SupabaseService,
    get_supabase_service,
)

logger = logging.getLogger(__name__)

LOCKED_DETAIL = "Cannot edit an account that is marked for deletion"


class AccountService:
    """
    Listing workflow on top of SupabaseService.
    ``clock`` returns the current aware UTC time; tests pass a fixed one.
    """

    def __init__(
        self,
        supabase: SupabaseService,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        settings = get_settings()
        self.supabase = supabase
        self.clock = clock or utcnow
        self.bucket = settings.accounts_bucket
        self.grace = timedelta(hours=settings.deletion_grace_hours)
        self.max_image_bytes = settings.max_image_bytes

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_accounts(
        self,
        page: int,
        page_size: int,
        category: Optional[str] = None,
        collector_level: Optional[str] = None,
    ) -> tuple[list[Dict[str, Any]], int]:
        offset = (page - 1) * page_size
        return await self.supabase.list_accounts(
            limit=page_size,
            offset=offset,
            category=category,
            collector_level=collector_level,
        )

    async def get_account(self, account_id: str) -> Dict[str, Any]:
        row = await self.supabase.get_account(account_id)
        if not row:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Account not found",
            )
        return row

    async def search(self, query: str) -> list[Dict[str, Any]]:
        query = query.strip()
        if not query:
            return []
        return await self.supabase.search_accounts(query)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def _get_editable(self, account_id: str) -> Dict[str, Any]:
        row = await self.get_account(account_id)
        if row.get("deleted_at"):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=LOCKED_DETAIL,
            )
        return row

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        row = await self.supabase.insert_account(data)
        logger.info("Account created id=%s", row.get("id"))
        return row

    async def update(self, account_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        await self._get_editable(account_id)
        payload = dict(data)
        payload["updated_at"] = to_iso(self.clock())
        return await self.supabase.update_account(account_id, payload)

    async def mark_for_deletion(self, account_id: str) -> Dict[str, Any]:
        row = await self.supabase.update_account(
            account_id, mark_for_deletion_fields(self.clock())
        )
        logger.info("Account %s marked for deletion", account_id)
        return row

    async def restore(self, account_id: str) -> Dict[str, Any]:
        row = await self.supabase.update_account(account_id, restore_fields())
        logger.info("Account %s restored", account_id)
        return row

    # -------------------------------------------------------------------------
    # Purge
    # -------------------------------------------------------------------------

    def _remove_images(self, result: PurgeResult, images: list[str] | None) -> None:
        """Best-effort removal of a listing's stored images; failures land on result."""
        names = filenames_from_urls(images)
        if not names:
            return
        try:
            result.images_deleted = self.supabase.remove_objects(self.bucket, names)
            logger.info("Deleted %d images for account %s", len(names), result.account_id)
        except StorageRemovalError as e:
            logger.warning(
                "Failed to delete some images for account %s: %s",
                result.account_id,
                e.message,
            )
            result.image_errors.append(e.message)

    async def delete_now(self, account_id: str) -> PurgeResult:
        """Purge a listing immediately, whatever its state. Images go first."""
        row = await self.get_account(account_id)
        result = PurgeResult(account_id=account_id, outcome=PurgeOutcome.PURGED)
        self._remove_images(result, row.get("images"))
        deleted = await self.supabase.delete_account(account_id)
        if not deleted:
            result.outcome = PurgeOutcome.SKIPPED
        logger.info("Account %s permanently deleted", account_id)
        return result

    async def cleanup_expired(self) -> CleanupSummary:
        """
        Purge every listing marked for deletion more than the grace period ago.

        Each row is deleted with the expiry filter re-applied, so a listing restored
        after the scan is reported as skipped and keeps its images. Images of a
        purged row are removed afterwards, best effort. One failing listing does not
        stop the others.
        """
        now = self.clock()
        cutoff = cleanup_cutoff(now, self.grace)
        cutoff_iso = to_iso(cutoff)
        summary = CleanupSummary(cutoff=cutoff)
        expired = await self.supabase.list_expired_accounts(cutoff_iso)
        if not expired:
            logger.info("No expired accounts to clean up")
            return summary

        for account in expired:
            account_id = str(account.get("id"))
            result = PurgeResult(account_id=account_id, outcome=PurgeOutcome.PURGED)
            # The scan filter runs in the database; re-check against this clock
            if not is_expired(account, now, self.grace):
                result.outcome = PurgeOutcome.SKIPPED
                summary.results.append(result)
                continue
            try:
                deleted = await self.supabase.delete_account_if_expired(account_id, cutoff_iso)
                if deleted is None:
                    result.outcome = PurgeOutcome.SKIPPED
                    logger.info("Account %s no longer expired, skipping", account_id)
                else:
                    self._remove_images(result, deleted.get("images") or account.get("images"))
            except Exception as e:
                logger.error("Error processing account %s: %s", account_id, str(e))
                result.outcome = PurgeOutcome.FAILED
                result.error = str(e)
            summary.results.append(result)

        logger.info(
            "Cleaned up %d accounts and %d images (%d failed)",
            summary.accounts_deleted,
            summary.images_deleted,
            summary.failed,
        )
        return summary

    # -------------------------------------------------------------------------
    # Images
    # -------------------------------------------------------------------------

    def _upload_one(self, image: ImageFile) -> str:
        key = make_object_key(image.filename)
        return self.supabase.upload_object(self.bucket, key, image.data, image.content_type)

    def upload_images(self, images: list[ImageFile]) -> list[str]:
        """Validate every file, then upload them all. Returns public URLs."""
        validate_images(images, self.max_image_bytes)
        return upload_all(images, self._upload_one)

    async def add_images(self, account_id: str, images: list[ImageFile]) -> Dict[str, Any]:
        row = await self._get_editable(account_id)
        urls = self.upload_images(images)
        current = list(row.get("images") or [])
        return await self.supabase.update_account(account_id, {"images": current + urls})

    async def replace_image(
        self, account_id: str, index: int, image: ImageFile
    ) -> Dict[str, Any]:
        row = await self._get_editable(account_id)
        current = list(row.get("images") or [])
        if index < 0 or index >= len(current):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Image not found",
            )
        validate_image(image, self.max_image_bytes)
        current[index] = self._upload_one(image)
        return await self.supabase.update_account(account_id, {"images": current})

    async def remove_image(self, account_id: str, index: int) -> Dict[str, Any]:
        """Drop an image from the listing. The stored object stays until the listing is purged."""
        row = await self._get_editable(account_id)
        current = list(row.get("images") or [])
        if index < 0 or index >= len(current):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Image not found",
            )
        current.pop(index)
        return await self.supabase.update_account(account_id, {"images": current})


def get_account_service(
    supabase: SupabaseService = Depends(get_supabase_service),
) -> AccountService:
    """Dependency for FastAPI."""
    return AccountService(supabase)
