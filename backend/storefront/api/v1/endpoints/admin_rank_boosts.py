"""
Admin rank boost endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront.core.config import get_settings
from storefront.core.security import AdminSession, get_current_session
from storefront.schemas.common import MessageResponse, PaginatedResponse
from storefront.schemas.rank_boost import RankBoostCreate, RankBoostResponse
from storefront.services.supabase_service import SupabaseService, get_supabase_service

router = APIRouter(prefix="/admin/rank-boosts", tags=["admin-rank-boosts"])


@router.get(
    "",
    response_model=PaginatedResponse[RankBoostResponse],
    summary="List rank boosts (admin)",
)
async def list_rank_boosts(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    page_size: int | None = Query(None, ge=1, le=100, description="Items per page"),
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> PaginatedResponse[RankBoostResponse]:
    size = page_size or get_settings().admin_page_size
    rows, total = await supabase.list_rank_boosts(limit=size, offset=(page - 1) * size)
    return PaginatedResponse[RankBoostResponse](
        items=[RankBoostResponse.model_validate(r) for r in rows],
        total=total,
        page=page,
        page_size=size,
    )


@router.post(
    "",
    response_model=RankBoostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create rank boost",
)
async def create_rank_boost(
    body: RankBoostCreate,
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> RankBoostResponse:
    row = await supabase.insert_rank_boost(body.model_dump())
    return RankBoostResponse.model_validate(row)


@router.put("/{boost_id}", response_model=RankBoostResponse, summary="Update rank boost")
async def update_rank_boost(
    boost_id: str,
    body: RankBoostCreate,
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> RankBoostResponse:
    row = await supabase.update_rank_boost(boost_id, body.model_dump())
    return RankBoostResponse.model_validate(row)


@router.delete("/{boost_id}", response_model=MessageResponse, summary="Delete rank boost")
async def delete_rank_boost(
    boost_id: str,
    supabase: SupabaseService = Depends(get_supabase_service),
    _session: AdminSession = Depends(get_current_session),
) -> MessageResponse:
    if not await supabase.delete_rank_boost(boost_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rank boost not found")
    return MessageResponse(message="Rank boost deleted successfully", success=True)
