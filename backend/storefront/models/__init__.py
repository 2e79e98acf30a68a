# Row models for the Supabase tables

from storefront.models.account import (
    Account,
    AccountBase,
    AccountInDB,
    Category,
)
from storefront.models.ad import Ad, AdBase, AdInDB
from storefront.models.admin_user import AdminUser, AdminUserBase, AdminUserInDB
from storefront.models.rank_boost import RankBoost, RankBoostBase, RankBoostInDB

__all__ = [
    "Account",
    "AccountBase",
    "AccountInDB",
    "Category",
    "Ad",
    "AdBase",
    "AdInDB",
    "AdminUser",
    "AdminUserBase",
    "AdminUserInDB",
    "RankBoost",
    "RankBoostBase",
    "RankBoostInDB",
]
