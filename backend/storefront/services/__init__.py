# Services: Supabase gateway, account listing workflow, image helpers

from storefront.services.account_service import (
    AccountService,
    get_account_service,
)
from storefront.services.image_service import (
    ImageFile,
    ImageValidationError,
)
from storefront.services.supabase_service import (
    StorageRemovalError,
    SupabaseService,
    get_supabase_service,
)

__all__ = [
    "AccountService",
    "get_account_service",
    "ImageFile",
    "ImageValidationError",
    "StorageRemovalError",
    "SupabaseService",
    "get_supabase_service",
]
