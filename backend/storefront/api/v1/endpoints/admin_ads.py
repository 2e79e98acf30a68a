"""
Admin ad banner endpoints. Create/update take multipart form data so the banner
image can be uploaded in the same request.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from storefront.core.config import get_settings
from storefront.core.security import AdminSession, get_current_session
from storefront.schemas.ad import AdListResponse, AdResponse
from storefront.schemas.common import MessageResponse
from storefront.services.image_service import (
    ImageFile,
    filename_from_url,
    make_ad_object_key,
    validate_image,
)
from storefront.services.supabase_service import (
    StorageRemovalError,
    SupabaseService,
    get_supabase_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/ads", tags=["admin-ads"])


async def _ad_payload(
    supabase: SupabaseService,
    title: str,
    link: Optional[str],
    order_index: Optional[str],
    image: Optional[UploadFile],
    image_url: Optional[str],
) -> dict[str, Any]:
    """Validate the ad form and upload a new banner if one was sent."""
    if not order_index or not order_index.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter an order index")
    try:
        order = int(order_index.strip())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Order index must be a number")

    has_file = image is not None and bool(image.filename)
    if not has_file and not image_url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please select an image")

    url = image_url or ""
    if has_file:
        banner = await ImageFile.from_upload(image)
        validate_image(banner)
        bucket = get_settings().ads_bucket
        url = supabase.upload_object(
            bucket, make_ad_object_key(banner.filename), banner.data, banner.content_type
        )
        logger.info("Image uploaded successfully: %s", url)

    return {
        "title": title,
        "image_url": url,
        "link": link or None,
        "order_index": order,
        "is_active": True,
    }


@router.get("", response_model=AdListResponse, summary="List all ads")
async def list_ads(
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdListResponse:
    ads = await supabase.list_ads()
    return AdListResponse(ads=[AdResponse.model_validate(a) for a in ads])


@router.post("", response_model=AdResponse, status_code=status.HTTP_201_CREATED, summary="Create ad")
async def create_ad(
    title: str = Form(...),
    order_index: Optional[str] = Form(None),
    link: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdResponse:
    payload = await _ad_payload(supabase, title, link, order_index, image, image_url)
    row = await supabase.insert_ad(payload)
    return AdResponse.model_validate(row)


@router.put("/{ad_id}", response_model=AdResponse, summary="Update ad")
async def update_ad(
    ad_id: str,
    title: str = Form(...),
    order_index: Optional[str] = Form(None),
    link: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> AdResponse:
    payload = await _ad_payload(supabase, title, link, order_index, image, image_url)
    row = await supabase.update_ad(ad_id, payload)
    return AdResponse.model_validate(row)


@router.delete("/{ad_id}", response_model=MessageResponse, summary="Delete ad")
async def delete_ad(
    ad_id: str,
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> MessageResponse:
    """Remove the banner from storage (best effort), then the row."""
    ad = await supabase.get_ad(ad_id)
    if not ad:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ad not found")

    name = filename_from_url(ad.get("image_url") or "")
    if name:
        try:
            supabase.remove_objects(get_settings().ads_bucket, [name])
        except StorageRemovalError as e:
            # Row deletion proceeds; an orphaned banner is acceptable
            logger.warning("Failed to delete image from storage for ad %s: %s", ad_id, e.message)

    await supabase.delete_ad(ad_id)
    return MessageResponse(message="Ad deleted successfully", success=True)
