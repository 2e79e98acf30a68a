# Pydantic request/response schemas (API contract). Kept in sync with frontend types.

from storefront.schemas.common import MessageResponse, PaginatedResponse
from storefront.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    AdminAccountResponse,
    ImageUploadResponse,
    LegacyAccountInsertRequest,
    LegacyAccountInsertResponse,
)
from storefront.schemas.ad import AdListResponse, AdResponse
from storefront.schemas.auth import (
    AuthResponse,
    LegacyLoginRequest,
    LegacyLoginResponse,
    PasswordUpdateRequest,
    SessionResponse,
    SessionUser,
    SignInRequest,
)
from storefront.schemas.catalog import CatalogConstantsResponse, HomeResponse
from storefront.schemas.rank_boost import (
    RankBoostCreate,
    RankBoostListResponse,
    RankBoostResponse,
)

__all__ = [
    "MessageResponse",
    "PaginatedResponse",
    "AccountCreate",
    "AccountResponse",
    "AccountUpdate",
    "AdminAccountResponse",
    "ImageUploadResponse",
    "LegacyAccountInsertRequest",
    "LegacyAccountInsertResponse",
    "AdListResponse",
    "AdResponse",
    "AuthResponse",
    "LegacyLoginRequest",
    "LegacyLoginResponse",
    "PasswordUpdateRequest",
    "SessionResponse",
    "SessionUser",
    "SignInRequest",
    "CatalogConstantsResponse",
    "HomeResponse",
    "RankBoostCreate",
    "RankBoostListResponse",
    "RankBoostResponse",
]
