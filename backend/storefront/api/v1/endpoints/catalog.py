"""
Public storefront endpoints: home page, account listings, offer detail, search,
ads and rank-boost prices. No authentication.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from storefront.core.config import get_settings
from storefront.core.constants import CATEGORIES, COLLECTOR_LEVELS, CONTACT_LINKS, DEFAULT_CATEGORY
from storefront.schemas.account import AccountResponse
from storefront.schemas.ad import AdListResponse, AdResponse
from storefront.schemas.catalog import CatalogConstantsResponse, HomeResponse
from storefront.schemas.common import PaginatedResponse
from storefront.schemas.rank_boost import RankBoostListResponse, RankBoostResponse
from storefront.services.account_service import AccountService, get_account_service
from storefront.services.supabase_service import SupabaseService, get_supabase_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])

HOME_ACCOUNTS_LIMIT = 6


def _accounts(rows: list[dict[str, Any]]) -> list[AccountResponse]:
    return [AccountResponse.model_validate(r) for r in rows]


@router.get("/home", response_model=HomeResponse, summary="Home page data")
async def home(
    supabase: SupabaseService = Depends(get_supabase_service),
) -> HomeResponse:
    """GET /api/v1/home: active ads and the latest Mobile Legend accounts."""
    ads = await supabase.list_ads(active_only=True)
    accounts = await supabase.latest_accounts(DEFAULT_CATEGORY, HOME_ACCOUNTS_LIMIT)
    return HomeResponse(
        ads=[AdResponse.model_validate(a) for a in ads],
        accounts=_accounts(accounts),
    )


@router.get(
    "/accounts",
    response_model=PaginatedResponse[AccountResponse],
    summary="List accounts",
    description="Newest first. Sold listings are included and shown as sold out.",
)
async def list_accounts(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    page_size: int | None = Query(None, ge=1, le=100, description="Items per page"),
    category: str | None = Query(None, description="mobile_legend or pubg"),
    collector_level: str | None = Query(None, description="Collector level; 'all' for no filter"),
    accounts: AccountService = Depends(get_account_service),
) -> PaginatedResponse[AccountResponse]:
    size = page_size or get_settings().catalog_page_size
    rows, total = await accounts.list_accounts(
        page=page,
        page_size=size,
        category=category if category in CATEGORIES else None,
        collector_level=collector_level if collector_level and collector_level != "all" else None,
    )
    return PaginatedResponse[AccountResponse](
        items=_accounts(rows),
        total=total,
        page=page,
        page_size=size,
    )


@router.get("/accounts/search", response_model=list[AccountResponse], summary="Search accounts")
async def search_accounts(
    q: str = Query("", description="Title fragment"),
    accounts: AccountService = Depends(get_account_service),
) -> list[AccountResponse]:
    """GET /api/v1/accounts/search?q=: unsold listings whose title contains q."""
    return _accounts(await accounts.search(q))


@router.get("/accounts/{account_id}", response_model=AccountResponse, summary="Offer detail")
async def get_account(
    account_id: str,
    accounts: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return AccountResponse.model_validate(await accounts.get_account(account_id))


@router.get("/ads", response_model=AdListResponse, summary="Active ads")
async def list_active_ads(
    supabase: SupabaseService = Depends(get_supabase_service),
) -> AdListResponse:
    ads = await supabase.list_ads(active_only=True)
    return AdListResponse(ads=[AdResponse.model_validate(a) for a in ads])


@router.get("/rank-boosts", response_model=RankBoostListResponse, summary="Rank boost prices")
async def list_rank_boosts(
    supabase: SupabaseService = Depends(get_supabase_service),
) -> RankBoostListResponse:
    rows, _ = await supabase.list_rank_boosts()
    return RankBoostListResponse(rank_boosts=[RankBoostResponse.model_validate(r) for r in rows])


@router.get("/catalog/constants", response_model=CatalogConstantsResponse)
def catalog_constants() -> CatalogConstantsResponse:
    return CatalogConstantsResponse(
        collector_levels=list(COLLECTOR_LEVELS),
        categories=dict(CATEGORIES),
        contact_links=dict(CONTACT_LINKS),
    )
