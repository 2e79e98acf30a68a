"""
Aggregate v1 API routes.

Convention: Use "" (not "/") for the root path of a segment (e.g. @router.get(""), @router.post(""))
so the route is /api/v1/admin/ads not /api/v1/admin/ads/. This avoids 307 redirects when the
request arrives without a trailing slash (e.g. after Next.js rewrite).
"""

from fastapi import APIRouter

from storefront.api.v1.endpoints import admin_accounts, admin_ads, admin_rank_boosts, catalog

api_router = APIRouter()

api_router.include_router(catalog.router, prefix="")
api_router.include_router(admin_accounts.router, prefix="")
api_router.include_router(admin_ads.router, prefix="")
api_router.include_router(admin_rank_boosts.router, prefix="")
